"""Display metadata for generated questions.

Resolves the label and emoji a client shows next to a question: the two
interests of a cross question ("Coffee × Reading", "☕📚"), the single
interest of a shared or counterpart question, or the situation of a
situation question.
"""

from typing import Dict, Optional, Tuple

from .models import DepthTier, GeneratedQuestion, SituationTag
from .storage import Catalog

DEPTH_LABELS: Dict[DepthTier, Dict[str, str]] = {
    DepthTier.ICE: {"label": "Icebreaker", "emoji": "🧊", "color": "#60A5FA"},
    DepthTier.CASUAL: {"label": "Easy chat", "emoji": "☕", "color": "#34D399"},
    DepthTier.DEEP: {"label": "Deep talk", "emoji": "💎", "color": "#A78BFA"},
}

SITUATION_LABELS: Dict[SituationTag, Dict[str, str]] = {
    SituationTag.FIRST_MEETING: {"label": "First meeting", "emoji": "👋", "description": "Light questions to break the ice"},
    SituationTag.GROUP: {"label": "Group hangout", "emoji": "👥", "description": "For a table of several people"},
    SituationTag.NETWORKING: {"label": "Networking", "emoji": "🤝", "description": "Building professional connections"},
    SituationTag.CASUAL_CHAT: {"label": "Casual chat", "emoji": "💬", "description": "Everyday small talk"},
}

CROSS_SEPARATOR = " × "


def question_label(question: GeneratedQuestion, catalog: Catalog) -> Tuple[Optional[str], Optional[str]]:
    interests = [catalog.interest(i) for i in question.interest_ids]
    interests = [i for i in interests if i is not None]
    if len(interests) > 1:
        return (
            CROSS_SEPARATOR.join(i.label for i in interests),
            "".join(i.emoji for i in interests),
        )
    if interests:
        return interests[0].label, interests[0].emoji
    if question.situation is not None:
        meta = SITUATION_LABELS[question.situation]
        return meta["label"], meta["emoji"]
    return None, None


def labelled(question: GeneratedQuestion, catalog: Catalog) -> Dict[str, object]:
    """Serialize a question with its display label, emoji and depth badge."""
    label, emoji = question_label(question, catalog)
    data = question.model_dump(by_alias=True, mode="json")
    data["label"] = label
    data["emoji"] = emoji
    data["depthLabel"] = DEPTH_LABELS[question.depth]["label"] if question.depth is not None else None
    return data
