"""
Narration script assembly.

A draft follows a fixed six-segment template (about 12.5 minutes in total).
A comparison card, when given, prefills the title, the background (card
timeline) and the history segment (core conflict), and its sources become
the citations of the background and history segments.
"""

import logging
from typing import List, Mapping, Optional, Tuple

from ..models import CompareCard, ScriptDraft, ScriptSegment, SegmentKey

logger = logging.getLogger(__name__)

# (key, heading, target seconds)
SEGMENT_TEMPLATE: Tuple[Tuple[SegmentKey, str, int], ...] = (
    ("hook", "开场钩子", 30),
    ("hot", "热点概述", 120),
    ("background", "历史背景", 120),
    ("history", "核心史事", 300),
    ("mapping", "映射到当下", 120),
    ("closing", "结尾观点", 60),
)

CITED_SEGMENTS = frozenset({"background", "history"})

PLACEHOLDER_TEXT = "（待补充）"


class ScriptAssemblyError(ValueError):
    """Raised when a draft cannot be assembled from the given input"""


def base_segments() -> List[ScriptSegment]:
    """Empty segments in template order."""
    return [
        ScriptSegment(key=key, title=title, target_seconds=seconds)
        for key, title, seconds in SEGMENT_TEMPLATE
    ]


def total_seconds(segments: List[ScriptSegment]) -> int:
    return sum(s.target_seconds for s in segments)


def format_seconds(total: int) -> str:
    """
    Format seconds as m:ss.

    Examples:
        >>> format_seconds(750)
        '12:30'
        >>> format_seconds(30)
        '0:30'
    """
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}"


def build_draft(
    topic_title: str = "",
    title: str = "",
    texts: Optional[Mapping[str, str]] = None,
    angle: str = "",
    card: Optional[CompareCard] = None,
) -> ScriptDraft:
    """
    Assemble a script draft.

    Args:
        topic_title: Hot topic the script is about (falls back to the card's)
        title: Script title (default: derived from the card, else the topic)
        texts: Segment text by segment key; missing keys are empty
        angle: Optional angle hint appended to the mapping segment
        card: Optional comparison card to prefill from

    Returns:
        New draft with a fresh id and timestamp

    Raises:
        ScriptAssemblyError: If no topic title is available
    """
    texts = dict(texts or {})

    topic = (topic_title or (card.topic_title if card else "")).strip()
    if not topic:
        raise ScriptAssemblyError("Topic title is required to assemble a script")

    if not title.strip() and card is not None:
        title = f"{card.topic_title}：从{card.event_title}看今天"
    draft_title = (title or topic).strip()

    if card is not None:
        if not texts.get("background") and card.timeline:
            texts["background"] = card.timeline
        if not texts.get("history") and card.core_conflict:
            texts["history"] = f"核心矛盾：{card.core_conflict}\n\n（补充史事细节）"

    citations = list(card.sources) if card is not None else []
    angle = angle.strip()

    segments = []
    for seg in base_segments():
        text = (texts.get(seg.key) or "").strip()
        if seg.key == "mapping" and angle:
            text += f"\n\n角度提示：{angle}"
        segments.append(seg.model_copy(update={
            "text": text,
            "citations": citations if seg.key in CITED_SEGMENTS else [],
        }))

    draft = ScriptDraft(
        title=draft_title,
        topic_id=card.topic_id if card is not None else None,
        topic_title=topic,
        segments=segments,
    )
    logger.info(f"Assembled script draft {draft.id}: {draft_title!r} ({len(citations)} citations)")
    return draft


def draft_to_markdown(draft: ScriptDraft) -> str:
    """Render a draft as a Markdown document for export."""
    lines = [
        f"# {draft.title}",
        "",
        f"- 热点：{draft.topic_title}",
        f"- 目标时长：{format_seconds(total_seconds(draft.segments))}（约 10–12 分钟）",
        "",
    ]
    for seg in draft.segments:
        lines.append(f"## {seg.title}（{format_seconds(seg.target_seconds)}）")
        lines.append("")
        lines.append(seg.text or PLACEHOLDER_TEXT)
        lines.append("")
        if seg.citations:
            lines.append("引用：")
            for c in seg.citations:
                lines.append(f"- [{c.title}]({c.url})" if c.url else f"- {c.title}")
            lines.append("")
    return "\n".join(lines)
