"""Bookmarking of tests by users."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DbSession, joinedload

from crackit.models.db.saved_test import SavedTest
from crackit.models.db.test import Test


def get_saved(db: DbSession, user_id: int, test_id: int) -> SavedTest | None:
    stmt = select(SavedTest).where(
        SavedTest.user_id == user_id,
        SavedTest.test_id == test_id,
    )
    return db.execute(stmt).scalar_one_or_none()


def is_saved(db: DbSession, user_id: int, test_id: int) -> bool:
    return get_saved(db, user_id, test_id) is not None


def save_test(db: DbSession, user_id: int, test_id: int) -> SavedTest:
    """Bookmark a test; saving twice returns the existing bookmark."""
    existing = get_saved(db, user_id, test_id)
    if existing:
        return existing

    saved = SavedTest(user_id=user_id, test_id=test_id)
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request saved it first
        db.rollback()
        existing = get_saved(db, user_id, test_id)
        if existing is None:
            raise
        return existing
    db.refresh(saved)
    return saved


def unsave_test(db: DbSession, user_id: int, test_id: int) -> bool:
    """Remove a bookmark. Returns False if there was none."""
    saved = get_saved(db, user_id, test_id)
    if not saved:
        return False

    db.delete(saved)
    db.commit()
    return True


def list_saved_tests(db: DbSession, user_id: int) -> list[Test]:
    """Tests bookmarked by the user, most recently saved first."""
    stmt = (
        select(Test)
        .join(SavedTest, SavedTest.test_id == Test.id)
        .options(joinedload(Test.university), joinedload(Test.class_))
        .where(SavedTest.user_id == user_id)
        .order_by(SavedTest.saved_at.desc(), SavedTest.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
