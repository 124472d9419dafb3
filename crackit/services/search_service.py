"""Browsing and searching of published tests."""
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession, joinedload

from crackit.config import SEARCH_MIN_TERM_LENGTH
from crackit.models.db.test import Test
from crackit.models.tests import SortOrder
from crackit.services import lookup_service


def _matches_term(test: Test, term: str, tag_map: dict[int, str]) -> bool:
    """Case-insensitive match on name, university, class or any tag name."""
    term = term.lower()
    if term in test.name.lower():
        return True
    if test.university and term in test.university.name.lower():
        return True
    if test.class_ and term in test.class_.name.lower():
        return True
    return any(term in tag_map.get(tag_id, "").lower() for tag_id in test.tag_ids)


def browse_tests(
    db: DbSession,
    term: str | None = None,
    university_id: int | None = None,
    class_id: int | None = None,
    tag_id: int | None = None,
    sort: SortOrder = SortOrder.NEWEST,
) -> list[Test]:
    """List tests filtered by university, class, tag and a free-text term.

    University and class filters and ordering run in SQL; tag and term
    filters run over the fetched rows because tags are stored as JSON text.
    """
    order = Test.created_at.asc() if sort == SortOrder.OLDEST else Test.created_at.desc()
    id_order = Test.id.asc() if sort == SortOrder.OLDEST else Test.id.desc()
    stmt = (
        select(Test)
        .options(joinedload(Test.university), joinedload(Test.class_))
        .order_by(order, id_order)
    )
    if university_id is not None:
        stmt = stmt.where(Test.university_id == university_id)
    if class_id is not None:
        stmt = stmt.where(Test.class_id == class_id)

    tests = list(db.execute(stmt).scalars().all())

    if tag_id is not None:
        tests = [test for test in tests if tag_id in test.tag_ids]

    term = (term or "").strip()
    if term:
        tag_map = lookup_service.get_tag_map(db)
        tests = [test for test in tests if _matches_term(test, term, tag_map)]

    return tests


def quick_search(
    db: DbSession,
    term: str,
    by_name: bool = True,
    by_tags: bool = True,
) -> list[Test]:
    """Search-bar lookup: match the term against test names and/or tag names.

    Terms shorter than the minimum length, or a search with neither field
    selected, return no results.
    """
    if len(term) < SEARCH_MIN_TERM_LENGTH or not (by_name or by_tags):
        return []

    lowered = term.strip().lower()
    if not lowered:
        return []

    tag_map = lookup_service.get_tag_map(db)
    stmt = (
        select(Test)
        .options(joinedload(Test.university), joinedload(Test.class_))
        .order_by(Test.created_at.desc(), Test.id.desc())
    )

    results = []
    for test in db.execute(stmt).scalars().all():
        if by_name and lowered in test.name.lower():
            results.append(test)
        elif by_tags and any(
            lowered in tag_map.get(tag_id, "").lower() for tag_id in test.tag_ids
        ):
            results.append(test)
    return results
