"""Schema validation policies selected by validator class name."""

import json
from typing import Iterable, Protocol

import fastavro
from fastavro.schema import SchemaParseException

from .exceptions import RepositoryError, SchemaValidationError
from .models import SchemaEntry


class Validator(Protocol):
    """Checks a schema before it is added to a subject."""

    def validate(self, schema: str, entries: Iterable[SchemaEntry]) -> None:
        """
        Raise ``SchemaValidationError`` if ``schema`` may not be registered.

        Args:
            schema: Candidate schema text
            entries: Entries already registered under the subject, newest first

        """
        ...


class NoopValidator:
    """Accepts every schema."""

    def validate(self, schema: str, entries: Iterable[SchemaEntry]) -> None:
        return None


class AvroSchemaValidator:
    """Accepts schemas that parse as Avro."""

    def validate(self, schema: str, entries: Iterable[SchemaEntry]) -> None:
        try:
            fastavro.parse_schema(json.loads(schema))
        except (ValueError, TypeError, KeyError, SchemaParseException) as e:
            raise SchemaValidationError(schema, f"Invalid schema: {schema} ({e})") from e


_AVRO_ALIASES = ("avro", "AvroSchemaValidator", "ValidateSchemaParses")


def resolve_validator(validator_class: str) -> Validator:
    """Map a validator class name to a validator.

    Dotted names are matched on their last component, so Java-style names
    such as ``org.example.ValidateSchemaParses`` are accepted.

    Raises:
        RepositoryError: If the name is unknown
    """
    name = (validator_class or "").strip()
    if name in ("", "none"):
        return NoopValidator()
    if name.rsplit(".", 1)[-1] in _AVRO_ALIASES:
        return AvroSchemaValidator()
    raise RepositoryError(f"Unknown validator class: {validator_class}")
