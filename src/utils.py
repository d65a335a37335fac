"""Utility functions for the studio"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit

from .vocabulary import Platform


def now_iso() -> str:
    """
    Current UTC time as ISO 8601 with millisecond precision and a Z suffix.

    Examples:
        >>> now_iso()
        '2025-03-01T08:15:30.123Z'
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def random_id(prefix: str) -> str:
    """
    Random record id with a readable prefix.

    Examples:
        >>> random_id("mat")
        'mat_3f0c1e7a-9a55-4c5e-9e0b-2d6f1c8b7a10'
    """
    return f"{prefix}_{uuid.uuid4()}"


def safe_host(url: str) -> Optional[str]:
    """Lowercased host (with port) of an absolute URL, or None if unparseable."""
    try:
        host = urlsplit((url or "").strip()).netloc
    except ValueError:
        return None
    if not host:
        return None
    # Drop credentials if present
    return host.rsplit("@", 1)[-1].lower()


def infer_platform(url: str) -> Optional[Platform]:
    """
    Guess the social platform a hot-topic URL belongs to.

    Examples:
        >>> infer_platform("https://weibo.com/1234/abcd")
        'weibo'

        >>> infer_platform("https://xhslink.com/a/xyz")
        'xiaohongshu'

        >>> infer_platform("https://example.com") is None
        True
    """
    host = safe_host(url)
    if not host:
        return None
    if "weibo.com" in host:
        return "weibo"
    if "douyin.com" in host:
        return "douyin"
    if "mp.weixin.qq.com" in host:
        return "wechat"
    if "xiaohongshu.com" in host or "xhslink.com" in host:
        return "xiaohongshu"
    if "bilibili.com" in host:
        return "bilibili"
    return None
