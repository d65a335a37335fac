"""
Fixed vocabulary shared by the matcher and the record models.

All tables are read-only and built once at import:
- DYNASTIES: six era labels used to tag records and detected in queries
- DIMENSIONS: eight thematic "similarity dimensions"
- DIMENSION_HINTS: per-dimension keyword lists that imply a dimension
  even when its label is absent from the text

The hint lists and their order are hand-tuned. Detection output depends on
the order, so keep it stable.
"""

from types import MappingProxyType
from typing import Literal, Mapping, Tuple

Dynasty = Literal["先秦", "秦汉", "魏晋南北朝", "隋唐", "宋元", "明清"]

SimilarityDimension = Literal["权力", "财政", "战争", "外交", "民生", "舆论", "制度", "技术"]

SourceType = Literal["史料", "研究", "解读", "新闻"]

Credibility = Literal["高", "中", "低"]

Platform = Literal["weibo", "douyin", "wechat", "xiaohongshu", "bilibili"]

DYNASTIES: Tuple[Dynasty, ...] = ("先秦", "秦汉", "魏晋南北朝", "隋唐", "宋元", "明清")

DIMENSIONS: Tuple[SimilarityDimension, ...] = (
    "权力",
    "财政",
    "战争",
    "外交",
    "民生",
    "舆论",
    "制度",
    "技术",
)

SOURCE_TYPES: Tuple[SourceType, ...] = ("史料", "研究", "解读", "新闻")

CREDIBILITY_LEVELS: Tuple[Credibility, ...] = ("高", "中", "低")

PLATFORM_LABELS: Mapping[Platform, str] = MappingProxyType({
    "weibo": "微博",
    "douyin": "抖音",
    "wechat": "微信",
    "xiaohongshu": "小红书",
    "bilibili": "B站",
})

# Order matters: hint hits are appended in this order after label hits
DIMENSION_HINTS: Mapping[SimilarityDimension, Tuple[str, ...]] = MappingProxyType({
    "财政": ("税", "财政", "预算", "债", "债务", "货币", "银", "金", "通胀", "物价"),
    "权力": ("权力", "官员", "官场", "领导", "权斗", "反腐", "巡视"),
    "制度": ("制度", "改革", "政策", "立法", "条例", "监管", "规则", "机制"),
    "舆论": ("舆论", "热搜", "媒体", "网民", "流量", "公关", "辟谣"),
    "民生": ("民生", "就业", "工资", "社保", "教育", "医疗", "房价", "租房", "消费"),
    "战争": ("战争", "军", "兵", "冲突", "战场", "导弹", "武器", "入侵"),
    "外交": ("外交", "谈判", "条约", "制裁", "签证", "峰会", "使馆", "大使"),
    "技术": ("技术", "ai", "芯片", "算法", "开源", "网络安全", "数据", "隐私"),
})
