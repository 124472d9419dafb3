import pytest

from crackit.utils.tags import dump_tag_ids, parse_tag_ids


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, []),
        ("", []),
        ("   ", []),
        ("[1, 2, 3]", [1, 2, 3]),
        ('["4", "5"]', [4, 5]),
        ([6, "7"], [6, 7]),
        ("not json", []),
        ('{"a": 1}', []),
        ("[true, 8, null, \"x\"]", [8]),
    ],
)
def test_parse_tag_ids(raw: object, expected: list[int]) -> None:
    assert parse_tag_ids(raw) == expected


def test_dump_tag_ids_is_json_text() -> None:
    assert dump_tag_ids([3, 1]) == "[3, 1]"
    assert parse_tag_ids(dump_tag_ids([])) == []
