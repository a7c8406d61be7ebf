import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from .config import get_settings
from .models import Interest, InterestCategory, QuestionTemplate

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
INTERESTS_FILE = "interests.json"
QUESTIONS_FILE = "questions.json"


class CatalogError(Exception):
    """Raised when the interest or question catalog cannot be loaded."""


class Catalog:
    """Read-only interest and question catalog with id-indexed lookups."""

    def __init__(self, interests: List[Interest], templates: List[QuestionTemplate]):
        self.interests: Tuple[Interest, ...] = tuple(interests)
        self.templates: Tuple[QuestionTemplate, ...] = tuple(templates)
        self._interests_by_id: Dict[str, Interest] = {}
        self._templates_by_id: Dict[str, QuestionTemplate] = {}

        for interest in self.interests:
            if interest.id in self._interests_by_id:
                raise CatalogError(f"Duplicate interest id: {interest.id}")
            self._interests_by_id[interest.id] = interest
        for template in self.templates:
            if template.id in self._templates_by_id:
                raise CatalogError(f"Duplicate question id: {template.id}")
            unknown = [i for i in template.interest_ids if i not in self._interests_by_id]
            if unknown:
                raise CatalogError(f"Question {template.id} references unknown interests: {unknown}")
            if template.is_cross and template.interest_ids[0] == template.interest_ids[1]:
                raise CatalogError(f"Cross question {template.id} pairs an interest with itself")
            self._templates_by_id[template.id] = template

    def has_interest(self, interest_id: str) -> bool:
        return interest_id in self._interests_by_id

    def interest(self, interest_id: str) -> Optional[Interest]:
        return self._interests_by_id.get(interest_id)

    def template(self, question_id: str) -> Optional[QuestionTemplate]:
        return self._templates_by_id.get(question_id)

    def categories(self) -> List[InterestCategory]:
        seen: List[InterestCategory] = []
        for interest in self.interests:
            if interest.category not in seen:
                seen.append(interest.category)
        return seen

    def interests_by_category(self, category: InterestCategory) -> List[Interest]:
        return [i for i in self.interests if i.category == category]


def load_json(path: Path) -> list:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e
    if not isinstance(data, list):
        raise CatalogError(f"Catalog file {path} must hold a JSON array")
    return data


def load_catalog(data_dir: Optional[Path] = None) -> Catalog:
    data_dir = Path(data_dir) if data_dir else DATA_DIR
    try:
        interests = [Interest(**i) for i in load_json(data_dir / INTERESTS_FILE)]
        templates = [QuestionTemplate(**q) for q in load_json(data_dir / QUESTIONS_FILE)]
    except (TypeError, ValidationError) as e:
        raise CatalogError(f"Invalid catalog entry in {data_dir}: {e}") from e
    catalog = Catalog(interests, templates)
    logger.info("Loaded catalog from %s: %d interests, %d questions",
                data_dir, len(catalog.interests), len(catalog.templates))
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    catalog_dir = get_settings().catalog_dir
    return load_catalog(Path(catalog_dir) if catalog_dir else None)
