"""Tag id list (de)serialization."""
import json
import logging

log = logging.getLogger(__name__)


def parse_tag_ids(raw: object) -> list[int]:
    """Parse a stored tag list into tag ids.

    Rows written by different revisions hold either a JSON-encoded string
    or an actual list, so both are accepted. Anything unparsable yields
    an empty list.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            log.warning("Error parsing tags %r: %s", raw, exc)
            return []
    else:
        parsed = raw

    if not isinstance(parsed, list):
        return []

    tag_ids = []
    for value in parsed:
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            tag_ids.append(value)
        elif isinstance(value, str) and value.strip().isdigit():
            tag_ids.append(int(value))
    return tag_ids


def dump_tag_ids(tag_ids: list[int]) -> str:
    """Serialize tag ids to the JSON string stored on a test row."""
    return json.dumps([int(tag_id) for tag_id in tag_ids])
