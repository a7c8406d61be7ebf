from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _LooseEnum(str, Enum):
    """Accepts values case-insensitively and by member name ("FIRST_MEETING")."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key or member.name.lower() == key:
                    return member
        return None


class DepthTier(_LooseEnum):
    ICE = "ice"
    CASUAL = "casual"
    DEEP = "deep"

    @property
    def rank(self) -> int:
        return _DEPTH_ORDER[self]


_DEPTH_ORDER = {DepthTier.ICE: 0, DepthTier.CASUAL: 1, DepthTier.DEEP: 2}


class SituationTag(_LooseEnum):
    FIRST_MEETING = "first_meeting"
    GROUP = "group"
    NETWORKING = "networking"
    CASUAL_CHAT = "casual_chat"


class Bucket(str, Enum):
    COMMON = "common"
    THEIR = "their"
    CROSS = "cross"
    SITUATION = "situation"


class InterestCategory(str, Enum):
    HOBBY = "hobby"
    MUSIC = "music"
    SPORTS = "sports"
    FOOD = "food"
    TRAVEL = "travel"
    TECH = "tech"
    CULTURE = "culture"
    LIFESTYLE = "lifestyle"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class _CamelFrozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Interest(_Frozen):
    id: str
    label: str
    emoji: str = ""
    category: InterestCategory


class QuestionTemplate(_CamelFrozen):
    id: str
    text: str
    depth: Optional[DepthTier] = None
    situation: Optional[SituationTag] = None
    interest_ids: List[str] = Field(default_factory=list, max_length=2)
    follow_ups: List[str] = Field(default_factory=list)

    @property
    def is_single_interest(self) -> bool:
        return len(self.interest_ids) == 1

    @property
    def is_cross(self) -> bool:
        return len(self.interest_ids) == 2


class GeneratedQuestion(_CamelFrozen):
    id: str
    text: str
    source: Bucket
    depth: Optional[DepthTier] = None
    situation: Optional[SituationTag] = None
    interest_ids: List[str] = Field(default_factory=list)
    follow_ups: List[str] = Field(default_factory=list)

    @classmethod
    def from_template(cls, template: QuestionTemplate, source: Bucket) -> "GeneratedQuestion":
        return cls(
            id=template.id,
            text=template.text,
            source=source,
            depth=template.depth,
            situation=template.situation,
            interest_ids=list(template.interest_ids),
            follow_ups=list(template.follow_ups),
        )


class BucketLimits(_CamelFrozen):
    """Per-bucket caps; None surfaces every eligible question.

    `per_interest` caps how many questions one interest may contribute to
    the shared and counterpart-only buckets.
    """

    common: Optional[int] = Field(default=None, ge=0)
    their: Optional[int] = Field(default=None, ge=0)
    cross: Optional[int] = Field(default=None, ge=0)
    situation: Optional[int] = Field(default=None, ge=0)
    per_interest: Optional[int] = Field(default=None, ge=0)

    def for_bucket(self, bucket: Bucket) -> Optional[int]:
        return getattr(self, bucket.value)


class QuestionRequest(_CamelFrozen):
    my_interests: List[str] = Field(default_factory=list)
    their_interests: List[str] = Field(default_factory=list)
    depth_filter: Optional[DepthTier] = None
    situation_filter: Optional[SituationTag] = None
    refresh_token: Optional[str] = Field(default=None, description="seeds sampling; omit for catalog order")
    seen_ids: List[str] = Field(default_factory=list, description="question ids already shown to the caller")
    limits: BucketLimits = Field(default_factory=BucketLimits)


class RecommendationResult(_CamelFrozen):
    common_questions: List[GeneratedQuestion] = Field(default_factory=list)
    their_questions: List[GeneratedQuestion] = Field(default_factory=list)
    cross_questions: List[GeneratedQuestion] = Field(default_factory=list)
    situation_questions: List[GeneratedQuestion] = Field(default_factory=list)
    total_count: int = 0

    def bucket(self, bucket: Bucket) -> List[GeneratedQuestion]:
        return {
            Bucket.COMMON: self.common_questions,
            Bucket.THEIR: self.their_questions,
            Bucket.CROSS: self.cross_questions,
            Bucket.SITUATION: self.situation_questions,
        }[bucket]

    def all_questions(self) -> List[GeneratedQuestion]:
        """Every question, shared first, then cross, counterpart-only, situation."""
        return self.common_questions + self.cross_questions + self.their_questions + self.situation_questions

    def by_depth(self) -> Dict[DepthTier, List[GeneratedQuestion]]:
        grouped: Dict[DepthTier, List[GeneratedQuestion]] = {d: [] for d in DepthTier}
        for q in self.all_questions():
            if q.depth is not None:
                grouped[q.depth].append(q)
        return grouped
