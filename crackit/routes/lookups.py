"""University, class and tag listings plus quick search."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session as DbSession

from crackit.database import get_db
from crackit.models import LookupItem, TestSummary
from crackit.services import lookup_service, search_service, test_service

router = APIRouter(prefix="/api", tags=["lookups"])


@router.get("/universities", response_model=list[LookupItem])
def list_universities(db: Annotated[DbSession, Depends(get_db)]) -> list[LookupItem]:
    return [LookupItem.model_validate(row) for row in lookup_service.list_universities(db)]


@router.get("/classes", response_model=list[LookupItem])
def list_classes(
    db: Annotated[DbSession, Depends(get_db)],
    university_id: int | None = Query(None),
) -> list[LookupItem]:
    rows = lookup_service.list_classes(db, university_id)
    return [LookupItem.model_validate(row) for row in rows]


@router.get("/tags", response_model=list[LookupItem])
def list_tags(db: Annotated[DbSession, Depends(get_db)]) -> list[LookupItem]:
    return [LookupItem.model_validate(row) for row in lookup_service.list_tags(db)]


@router.get("/search", response_model=list[TestSummary])
def search(
    db: Annotated[DbSession, Depends(get_db)],
    q: str = Query("", max_length=200),
    name: bool = Query(True),
    tags: bool = Query(True),
) -> list[TestSummary]:
    """Search-bar lookup by test name and/or tag name."""
    tests = search_service.quick_search(db, q, by_name=name, by_tags=tags)
    return test_service.serialize_summaries(db, tests)
