import crackit.models.db as orm
from crackit.services import auth_service, lookup_service, search_service

from conftest import SAMPLE_QUESTIONS


def _make_test(db, user, name: str, tags: list[str]) -> orm.Test:
    university = lookup_service.find_or_create_university(db, "State University")
    klass = lookup_service.find_or_create_class(db, "General", university.id)
    test = orm.Test(
        name=name,
        user_id=user.id,
        university_id=university.id,
        class_id=klass.id,
    )
    test.questions = SAMPLE_QUESTIONS
    test.tag_ids = [tag.id for tag in lookup_service.find_or_create_tags(db, tags)]
    db.add(test)
    db.commit()
    return test


def _user(db):
    return auth_service.create_user(db, "ana@example.com", "secret123", "Ana", "Lopez", "State")


def test_quick_search_by_name_and_tags(db) -> None:
    user = _user(db)
    algebra = _make_test(db, user, "Algebra Midterm", ["math"])
    calculus = _make_test(db, user, "Calculus", ["math", "limits"])

    both = search_service.quick_search(db, "math")
    assert [t.id for t in both] == [calculus.id, algebra.id]

    names_only = search_service.quick_search(db, "math", by_tags=False)
    assert names_only == []

    tags_only = search_service.quick_search(db, "algebra", by_name=False)
    assert tags_only == []

    assert [t.id for t in search_service.quick_search(db, "ALGEBRA")] == [algebra.id]


def test_quick_search_needs_minimum_term(db) -> None:
    user = _user(db)
    _make_test(db, user, "A", ["a"])
    assert search_service.quick_search(db, "a") == []
    assert search_service.quick_search(db, "  ") == []


def test_quick_search_without_fields_returns_nothing(db) -> None:
    user = _user(db)
    _make_test(db, user, "Algebra", [])
    assert search_service.quick_search(db, "algebra", by_name=False, by_tags=False) == []


def test_browse_skips_unparsable_tags(db) -> None:
    user = _user(db)
    test = _make_test(db, user, "Legacy", ["old"])
    test.tags = "not json"
    db.commit()

    tag_id = lookup_service.find_or_create_tag(db, "old").id
    assert search_service.browse_tests(db, tag_id=tag_id) == []
    assert [t.id for t in search_service.browse_tests(db)] == [test.id]


def test_quick_search_checks_length_before_trimming(db) -> None:
    user = _user(db)
    algebra = _make_test(db, user, "Algebra", [])
    # Two raw characters pass the length check, the match uses the trimmed term
    assert [t.id for t in search_service.quick_search(db, " a")] == [algebra.id]
    assert search_service.quick_search(db, "a") == []
