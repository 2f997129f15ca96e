"""Request path construction and payload codecs for the repository REST protocol.

Subject listings and entry listings are JSON arrays. Older servers answer
with newline separated text instead (one subject name per line, or one
``id<TAB>schema`` pair per line); both forms are accepted when decoding.
"""

import json
from typing import Any, Iterable

from .exceptions import InvalidNameError
from .models import SchemaEntry

SCHEMA_REGISTRY_MEDIA_TYPE = "application/vnd.schemaregistry.v1+json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

FORBIDDEN_PATH_CHARACTERS = frozenset("/\\?#%")


def validate_schema_or_subject(value: str | None) -> str:
    """Check that a schema, subject name or id is present and non-blank.

    Raises:
        InvalidNameError: If the value is None, empty or whitespace only
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidNameError(f"Provided string is null or empty: {value!r}")
    return value


def validate_path_segment(value: str | None) -> str:
    """Check that a value can be used verbatim as a single URL path segment.

    Raises:
        InvalidNameError: If the value is blank or contains characters that
            would change the meaning of the request path
    """
    validate_schema_or_subject(value)
    if value in (".", ".."):
        raise InvalidNameError(f"Invalid path segment: {value!r}")
    for char in value:
        if char in FORBIDDEN_PATH_CHARACTERS or char.isspace() or not char.isprintable():
            raise InvalidNameError(f"Invalid character {char!r} in {value!r}")
    return value


def subject_path(subject: str, *parts: str) -> str:
    """Build the request path, relative to the repository root, for ``subject``.

    An empty trailing part is kept, so ``subject_path("s", "register_if_latest", "")``
    gives ``"/s/register_if_latest/"``.
    """
    return "/" + "/".join((subject, *parts))


def _entry_from_mapping(data: Any) -> SchemaEntry:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a schema entry object, got {type(data).__name__}")
    try:
        entry_id = data["id"]
        schema = data["schema"]
    except KeyError as e:
        raise ValueError(f"Schema entry is missing field {e}") from e
    if isinstance(entry_id, bool) or not isinstance(entry_id, (str, int)):
        raise ValueError(f"Invalid schema entry id: {entry_id!r}")
    if not isinstance(schema, str):
        raise ValueError("Schema entry 'schema' must be a string")
    return SchemaEntry(id=str(entry_id), schema=schema)


def _is_json_array(text: str) -> bool:
    return text.lstrip().startswith("[")


def decode_schema_entry(text: str) -> SchemaEntry:
    """Decode a single ``{"id": ..., "schema": ...}`` document.

    Raises:
        ValueError: If the document is not valid JSON or lacks either field
    """
    return _entry_from_mapping(json.loads(text))


def decode_schema_entries(text: str) -> list[SchemaEntry]:
    """Decode an entry listing, preserving the order the server sent."""
    if _is_json_array(text):
        data = json.loads(text)
        return [_entry_from_mapping(item) for item in data]

    entries = []
    for line in text.splitlines():
        if not line.strip():
            continue
        entry_id, sep, schema = line.partition("\t")
        if not sep:
            raise ValueError(f"Malformed schema entry line: {line!r}")
        entries.append(SchemaEntry(id=entry_id, schema=schema))
    return entries


def decode_subject_names(text: str) -> list[str]:
    """Decode a subject listing into names."""
    if _is_json_array(text):
        data = json.loads(text)
        if not all(isinstance(name, str) for name in data):
            raise ValueError("Subject listing must contain only strings")
        return data
    return [line.strip() for line in text.splitlines() if line.strip()]


def encode_schema_entry(entry: SchemaEntry) -> str:
    return json.dumps({"id": entry.id, "schema": entry.schema})


def encode_schema_entries(entries: Iterable[SchemaEntry]) -> str:
    return json.dumps([{"id": entry.id, "schema": entry.schema} for entry in entries])


def encode_subject_names(names: Iterable[str]) -> str:
    return json.dumps(list(names))
