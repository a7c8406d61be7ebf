"""Shared fixtures for the question engine tests."""

import pytest

from common_ground.models import Interest, QuestionTemplate
from common_ground.storage import Catalog, get_catalog


# ============================================================================
# Catalogs
# ============================================================================

def _interest(id, label, emoji, category):
    return Interest(id=id, label=label, emoji=emoji, category=category)


def _question(id, text, depth=None, situation=None, interest_ids=(), follow_ups=()):
    return QuestionTemplate(
        id=id,
        text=text,
        depth=depth,
        situation=situation,
        interest_ids=list(interest_ids),
        follow_ups=list(follow_ups),
    )


@pytest.fixture
def small_catalog() -> Catalog:
    """A hand-sized catalog whose bucket contents are easy to enumerate."""
    interests = [
        _interest("coffee", "Coffee", "☕", "food"),
        _interest("hiking", "Hiking", "🥾", "sports"),
        _interest("movies", "Movies", "🎬", "culture"),
        _interest("reading", "Reading", "📚", "hobby"),
    ]
    templates = [
        _question("coffee-1", "How do you take your coffee?", "ice", interest_ids=["coffee"],
                  follow_ups=["Iced or hot?"]),
        _question("coffee-2", "Do you have a regular cafe?", "casual", interest_ids=["coffee"]),
        _question("coffee-3", "What would your day be like without coffee?", "deep", interest_ids=["coffee"]),
        _question("hiking-1", "Which trail did you hike last?", "ice", interest_ids=["hiking"]),
        _question("hiking-2", "What's the best moment on a mountain?", "deep", interest_ids=["hiking"]),
        _question("movies-1", "Is there a film that changed your life?", "deep", interest_ids=["movies"]),
        _question("movies-2", "Seen any good movies recently?", "ice", interest_ids=["movies"]),
        _question("movies-3", "What's your favourite genre?", "casual", interest_ids=["movies"]),
        _question("cross-coffee-hiking", "Do you pack coffee for hikes?", "casual",
                  interest_ids=["coffee", "hiking"]),
        _question("cross-movies-reading", "Book or film adaptation?", "casual",
                  interest_ids=["movies", "reading"]),
        _question("cross-coffee-movies", "Coffee or popcorn at the cinema?", "casual",
                  interest_ids=["coffee", "movies"]),
        _question("first-1", "How did you end up here today?", "ice", situation="first_meeting"),
        _question("first-2", "Do you come here often?", "ice", situation="first_meeting"),
        _question("group-1", "How do you all know each other?", "ice", situation="group"),
        _question("networking-1", "What field do you work in?", situation="networking"),
        _question("general-1", "What are you into these days?"),
    ]
    return Catalog(interests, templates)


@pytest.fixture
def catalog() -> Catalog:
    """The catalog shipped with the package."""
    return get_catalog()

