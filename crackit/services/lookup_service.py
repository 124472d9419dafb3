"""Find-or-create and listing for universities, classes and tags."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DbSession

from crackit.models.db.lookup import Class, Tag, University

log = logging.getLogger(__name__)


def _find_university(db: DbSession, name: str) -> University | None:
    stmt = select(University).where(func.lower(University.name) == name.lower())
    return db.execute(stmt).scalars().first()


def _find_class(db: DbSession, name: str, university_id: int) -> Class | None:
    stmt = select(Class).where(
        func.lower(Class.name) == name.lower(),
        Class.university_id == university_id,
    )
    return db.execute(stmt).scalars().first()


def _find_tag(db: DbSession, name: str) -> Tag | None:
    stmt = select(Tag).where(func.lower(Tag.name) == name.lower())
    return db.execute(stmt).scalars().first()


def _insert_or_refind(db: DbSession, row, refind):
    """Insert a lookup row; if a concurrent insert won, return that row instead."""
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = refind()
        if existing is None:
            raise
        return existing
    db.refresh(row)
    return row


def find_or_create_university(db: DbSession, name: str) -> University:
    """Get university by case-insensitive name, creating it if absent."""
    name = name.strip()
    university = _find_university(db, name)
    if university:
        return university

    log.info("Creating university %r", name)
    return _insert_or_refind(
        db, University(name=name), lambda: _find_university(db, name)
    )


def find_or_create_class(db: DbSession, name: str, university_id: int) -> Class:
    """Get class by case-insensitive name within a university, creating it if absent."""
    name = name.strip()
    klass = _find_class(db, name, university_id)
    if klass:
        return klass

    log.info("Creating class %r for university %d", name, university_id)
    return _insert_or_refind(
        db,
        Class(name=name, university_id=university_id),
        lambda: _find_class(db, name, university_id),
    )


def find_or_create_tag(db: DbSession, name: str) -> Tag:
    """Get tag by case-insensitive name, creating it if absent."""
    name = name.strip()
    tag = _find_tag(db, name)
    if tag:
        return tag

    log.info("Creating tag %r", name)
    return _insert_or_refind(db, Tag(name=name), lambda: _find_tag(db, name))


def normalize_tag_names(names: list[str]) -> list[str]:
    """Strip tag names, dropping blanks and case-insensitive duplicates."""
    result: list[str] = []
    seen: set[str] = set()
    for name in names:
        cleaned = name.strip()
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        result.append(cleaned)
    return result


def find_or_create_tags(db: DbSession, names: list[str]) -> list[Tag]:
    """Resolve tag names to rows, preserving order."""
    return [find_or_create_tag(db, name) for name in normalize_tag_names(names)]


def list_universities(db: DbSession) -> list[University]:
    stmt = select(University).order_by(University.name)
    return list(db.execute(stmt).scalars().all())


def list_classes(db: DbSession, university_id: int | None = None) -> list[Class]:
    stmt = select(Class).order_by(Class.name)
    if university_id is not None:
        stmt = stmt.where(Class.university_id == university_id)
    return list(db.execute(stmt).scalars().all())


def list_tags(db: DbSession) -> list[Tag]:
    stmt = select(Tag).order_by(Tag.name)
    return list(db.execute(stmt).scalars().all())


def get_tag_map(db: DbSession) -> dict[int, str]:
    """Map of tag id to tag name."""
    return {tag.id: tag.name for tag in list_tags(db)}
