"""Utility modules."""
from crackit.utils.json_utils import json_dump, write_json_file
from crackit.utils.tags import dump_tag_ids, parse_tag_ids

__all__ = [
    "dump_tag_ids",
    "json_dump",
    "parse_tag_ids",
    "write_json_file",
]
