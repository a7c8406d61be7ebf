import logging
import random
import uuid
from itertools import zip_longest
from typing import Dict, Iterable, List, Optional, Sequence, Set, Union

from .models import (
    Bucket,
    DepthTier,
    GeneratedQuestion,
    QuestionRequest,
    QuestionTemplate,
    RecommendationResult,
)
from .storage import Catalog, get_catalog

logger = logging.getLogger(__name__)

# An id matching several buckets is emitted only in the first one listed here.
BUCKET_PRIORITY = (Bucket.COMMON, Bucket.CROSS, Bucket.THEIR, Bucket.SITUATION)

# single-interest buckets, capped by taking turns between interests
SPREAD_BUCKETS = frozenset({Bucket.COMMON, Bucket.THEIR})


def normalize_interests(interest_ids: Iterable[str], catalog: Catalog) -> List[str]:
    """De-duplicate interest ids in order, dropping ids missing from the catalog."""
    kept: List[str] = []
    seen: Set[str] = set()
    for interest_id in interest_ids:
        if interest_id in seen:
            continue
        seen.add(interest_id)
        if not catalog.has_interest(interest_id):
            logger.debug("Ignoring unknown interest id %r", interest_id)
            continue
        kept.append(interest_id)
    return kept


def _depth_rank(template: QuestionTemplate) -> int:
    return template.depth.rank if template.depth is not None else len(DepthTier)


def eligible_questions(request: QuestionRequest, catalog: Catalog) -> Dict[Bucket, List[QuestionTemplate]]:
    """Every template each bucket may draw from, before de-duplication and sampling.

    Deterministic: shared, cross and situation keep catalog order, the
    counterpart-only bucket is ordered lighter depth first.
    """
    mine = set(normalize_interests(request.my_interests, catalog))
    theirs = set(normalize_interests(request.their_interests, catalog))
    shared = mine & theirs
    their_only = theirs - mine
    union = mine | theirs

    templates = [
        t for t in catalog.templates
        if request.depth_filter is None or t.depth == request.depth_filter
    ]

    common = [t for t in templates if t.is_single_interest and t.interest_ids[0] in shared]
    their = [t for t in templates if t.is_single_interest and t.interest_ids[0] in their_only]
    # sorted() is stable, so catalog order holds within a depth tier
    their = sorted(their, key=_depth_rank)
    cross = [
        t for t in templates
        if t.is_cross
        and t.interest_ids[0] != t.interest_ids[1]
        and all(i in union for i in t.interest_ids)
    ]
    if request.situation_filter is None and not union:
        # nothing to talk about and no situation asked for: the empty result
        situation = []
    else:
        situation = [
            t for t in templates
            if t.situation is not None
            and (request.situation_filter is None or t.situation == request.situation_filter)
        ]
    return {
        Bucket.COMMON: common,
        Bucket.THEIR: their,
        Bucket.CROSS: cross,
        Bucket.SITUATION: situation,
    }


def spread_by_interest(
    templates: List[QuestionTemplate],
    limit: Optional[int],
    per_interest: Optional[int] = None,
    interest_order: Sequence[str] = (),
) -> List[QuestionTemplate]:
    """Choose up to `limit` single-interest templates, taking turns between interests.

    Interests are visited in `interest_order`, then in order of first
    appearance. Each interest contributes at most `per_interest` templates.
    The chosen templates keep their relative order from `templates`.
    """
    groups: Dict[str, List[QuestionTemplate]] = {}
    for t in templates:
        groups.setdefault(t.interest_ids[0], []).append(t)
    order = [i for i in interest_order if i in groups]
    order += [i for i in groups if i not in order]
    queues = [groups[i][:per_interest] if per_interest is not None else groups[i] for i in order]

    chosen: Set[str] = set()
    for turn in zip_longest(*queues):
        for t in turn:
            if t is not None and (limit is None or len(chosen) < limit):
                chosen.add(t.id)
    return [t for t in templates if t.id in chosen]


def sample_bucket(
    templates: List[QuestionTemplate],
    bucket: Bucket,
    limit: Optional[int],
    refresh_token: Optional[str],
    per_interest: Optional[int] = None,
    interest_order: Sequence[str] = (),
) -> List[QuestionTemplate]:
    """Take up to `limit` templates; a refresh token shuffles them first with a seeded RNG.

    Shared and counterpart-only buckets are spread across interests so a
    cap never hands every slot to one interest.
    """
    picked = list(templates)
    if refresh_token is not None:
        random.Random(f"{refresh_token}:{bucket.value}").shuffle(picked)
    if bucket in SPREAD_BUCKETS:
        return spread_by_interest(picked, limit, per_interest, interest_order)
    if limit is not None:
        picked = picked[:limit]
    return picked


def generate_questions(
    request: Union[QuestionRequest, dict],
    catalog: Optional[Catalog] = None,
) -> RecommendationResult:
    if not isinstance(request, QuestionRequest):
        request = QuestionRequest.model_validate(request)
    if catalog is None:
        catalog = get_catalog()

    eligible = eligible_questions(request, catalog)
    # shared interests are a subset of theirs, so one ordering serves both buckets
    interest_order = normalize_interests(request.their_interests, catalog)
    emitted: Set[str] = set(request.seen_ids)
    buckets: Dict[Bucket, List[GeneratedQuestion]] = {}
    for bucket in BUCKET_PRIORITY:
        fresh = [t for t in eligible[bucket] if t.id not in emitted]
        picked = sample_bucket(
            fresh,
            bucket,
            request.limits.for_bucket(bucket),
            request.refresh_token,
            per_interest=request.limits.per_interest,
            interest_order=interest_order,
        )
        emitted.update(t.id for t in picked)
        buckets[bucket] = [GeneratedQuestion.from_template(t, bucket) for t in picked]

    total = sum(len(qs) for qs in buckets.values())
    logger.debug(
        "Generated %d questions",
        total,
        extra={"bucket_sizes": {b.value: len(qs) for b, qs in buckets.items()}},
    )
    return RecommendationResult(
        common_questions=buckets[Bucket.COMMON],
        their_questions=buckets[Bucket.THEIR],
        cross_questions=buckets[Bucket.CROSS],
        situation_questions=buckets[Bucket.SITUATION],
        total_count=total,
    )


def refresh_questions(
    request: Union[QuestionRequest, dict],
    catalog: Optional[Catalog] = None,
) -> RecommendationResult:
    """Like generate_questions, but samples a new subset when no refresh token is given."""
    if not isinstance(request, QuestionRequest):
        request = QuestionRequest.model_validate(request)
    if request.refresh_token is None:
        request = request.model_copy(update={"refresh_token": uuid.uuid4().hex})
    return generate_questions(request, catalog)
