from fastapi import FastAPI, HTTPException, Query
from typing import List, Optional
import logging
from dotenv import load_dotenv

from .models import (
    Bucket,
    DepthTier,
    Interest,
    InterestCategory,
    QuestionRequest,
    QuestionTemplate,
    RecommendationResult,
    SituationTag,
)
from .engine import BUCKET_PRIORITY, generate_questions, refresh_questions
from .labels import DEPTH_LABELS, SITUATION_LABELS, labelled
from .storage import get_catalog
from .config import get_settings
from .logging import configure_logging

load_dotenv()
settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Common Ground Question API", version="0.3.0")


@app.on_event("startup")
async def on_startup():
    configure_logging(settings.log_level.upper())
    catalog = get_catalog()
    logger.info("Question API ready with %d questions", len(catalog.templates))


@app.get("/health")
async def health():
    catalog = get_catalog()
    return {
        "status": "ok",
        "interests": len(catalog.interests),
        "questions": len(catalog.templates),
    }


@app.get("/interests", response_model=List[Interest])
async def list_interests(category: Optional[InterestCategory] = Query(default=None)):
    catalog = get_catalog()
    if category is not None:
        return catalog.interests_by_category(category)
    return list(catalog.interests)


@app.get("/interests/{interest_id}", response_model=Interest)
async def get_interest(interest_id: str):
    interest = get_catalog().interest(interest_id)
    if not interest:
        raise HTTPException(status_code=404, detail="Interest not found")
    return interest


@app.get("/catalog/meta")
async def catalog_meta():
    catalog = get_catalog()
    return {
        "categories": [c.value for c in catalog.categories()],
        "depths": [{"id": d.value, **DEPTH_LABELS[d]} for d in DepthTier],
        "situations": [{"id": s.value, **SITUATION_LABELS[s]} for s in SituationTag],
    }


@app.get("/questions/{question_id}", response_model=QuestionTemplate)
async def get_question(question_id: str):
    template = get_catalog().template(question_id)
    if not template:
        raise HTTPException(status_code=404, detail="Question not found")
    return template


def with_default_limits(request: QuestionRequest) -> QuestionRequest:
    default = settings.default_bucket_limit
    if default is None:
        return request
    current = request.limits
    limits = current.model_copy(update={
        b.value: default for b in Bucket if current.for_bucket(b) is None
    })
    return request.model_copy(update={"limits": limits})


def render(result: RecommendationResult, details: bool):
    if not details:
        return result.model_dump(by_alias=True, mode="json")
    catalog = get_catalog()
    payload = {
        f"{b.value}Questions": [labelled(q, catalog) for q in result.bucket(b)]
        for b in BUCKET_PRIORITY
    }
    payload["totalCount"] = result.total_count
    payload["depthCounts"] = {d.value: len(qs) for d, qs in result.by_depth().items()}
    return payload


@app.post("/questions")
async def recommend_questions(
    payload: QuestionRequest,
    details: bool = Query(default=False, description="Attach display labels and emoji if true"),
):
    result = generate_questions(with_default_limits(payload), get_catalog())
    return render(result, details)


@app.post("/questions/refresh")
async def refresh(
    payload: QuestionRequest,
    details: bool = Query(default=False, description="Attach display labels and emoji if true"),
):
    result = refresh_questions(with_default_limits(payload), get_catalog())
    return render(result, details)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("common_ground.main:app", host="0.0.0.0", port=8000, reload=True)
