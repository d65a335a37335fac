"""
Record models for the studio.

Records are produced by the browser store (camelCase JSON) and consumed
read-only by the matcher, so every model:
- accepts and emits camelCase aliases (sourceType, createdAt, ...)
- also accepts snake_case field names when built from Python
- is frozen

Queries are a tagged union on `kind`: RawText ("text") or HotTopic
("hot_topic"). Stored hot topics without `kind` are recognised by their
`title`. Anywhere a query is accepted, a bare string works as well and is
treated as RawText.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator
from pydantic.alias_generators import to_camel

from .utils import infer_platform, now_iso, random_id
from .vocabulary import Credibility, Dynasty, Platform, SimilarityDimension, SourceType


class StudioModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Citation(StudioModel):
    work: str
    locator: Optional[str] = None
    canonical_url: Optional[str] = None


class SourceRef(StudioModel):
    title: str
    url: Optional[str] = None


class RawText(StudioModel):
    """Free-text query (search box input)"""
    kind: Literal["text"] = "text"
    text: str = ""


class HotTopic(StudioModel):
    """Trending item collected from a social platform"""
    kind: Literal["hot_topic"] = "hot_topic"
    id: str = Field(default_factory=lambda: random_id("hot"))
    title: str
    url: Optional[str] = None
    platform: Optional[Platform] = None
    summary: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    created_at: str = Field(default_factory=now_iso)

    @model_validator(mode="before")
    @classmethod
    def _infer_platform(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("platform") and data.get("url"):
            platform = infer_platform(data["url"])
            if platform:
                data = {**data, "platform": platform}
        return data


def _query_kind(value: Any) -> Optional[str]:
    """
    Tag of a query payload.

    Hot topics exported from the browser store carry no `kind`; a payload
    with a `title` and no `kind` is a hot topic, one with only `text` is
    free text.
    """
    if isinstance(value, dict):
        kind = value.get("kind")
        if kind is not None:
            return kind
        if "title" in value:
            return "hot_topic"
        if "text" in value:
            return "text"
        return None
    return getattr(value, "kind", None)


Query = Annotated[
    Union[Annotated[RawText, Tag("text")], Annotated[HotTopic, Tag("hot_topic")]],
    Discriminator(_query_kind),
]

QueryInput = Union[str, Query]


class Material(StudioModel):
    """Curated reference record in the library"""
    id: str
    title: str
    url: Optional[str] = None
    citation: Optional[Citation] = None
    source_type: SourceType
    credibility: Credibility
    dynasties: List[Dynasty] = Field(default_factory=list)
    people: List[str] = Field(default_factory=list)
    events: List[str] = Field(default_factory=list)
    dimensions: List[SimilarityDimension] = Field(default_factory=list)
    excerpt: Optional[str] = None
    notes: Optional[str] = None
    created_at: str = Field(default_factory=now_iso)


class CompareCard(StudioModel):
    """Mapping from a hot topic to an analogous historical event"""
    id: str
    topic_id: Optional[str] = None
    topic_title: str
    dynasties: List[Dynasty] = Field(default_factory=list)
    event_title: str
    timeline: Optional[str] = None
    core_conflict: Optional[str] = None
    key_people: List[str] = Field(default_factory=list)
    outcome: Optional[str] = None
    controversies: Optional[str] = None
    sources: List[SourceRef] = Field(default_factory=list)
    created_at: str = Field(default_factory=now_iso)


class MatchReason(StudioModel):
    tokens: List[str] = Field(default_factory=list)
    dimensions: List[SimilarityDimension] = Field(default_factory=list)
    dynasties: List[Dynasty] = Field(default_factory=list)


class MaterialMatch(StudioModel):
    material: Material
    score: float
    reason: MatchReason


class CompareMatch(StudioModel):
    card: CompareCard
    score: float
    reason: MatchReason


SegmentKey = Literal["hook", "hot", "background", "history", "mapping", "closing"]


class ScriptSegment(StudioModel):
    key: SegmentKey
    title: str
    target_seconds: int
    text: str = ""
    citations: List[SourceRef] = Field(default_factory=list)


class ScriptDraft(StudioModel):
    id: str = Field(default_factory=lambda: random_id("script"))
    title: str
    topic_id: Optional[str] = None
    topic_title: str
    segments: List[ScriptSegment]
    created_at: str = Field(default_factory=now_iso)
