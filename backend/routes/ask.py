"""Ask API route: one free-text question in, one answer out."""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from pqa.config import get_settings
from pqa.pipeline import QueryPipeline, build_pipeline
from pqa.schemas.models import Answer

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


class AskRequest(BaseModel):
    query: str | None = None


@lru_cache(maxsize=1)
def get_pipeline() -> QueryPipeline:
    return build_pipeline(settings)


@router.post("/ask", response_model=Answer)
async def ask(request: AskRequest, pipeline: QueryPipeline = Depends(get_pipeline)):
    """Resolve the question to a (product, attribute) pair and return the stored value."""
    query = (request.query or "").strip()
    if not query or len(query) > settings.max_query_length:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid input")

    answer = await pipeline.answer(query)
    logger.info("ask: status=%s product=%r attribute=%r", answer.status.value, answer.product, answer.attribute)
    return answer
