"""In-memory schema repository for testing and development."""

import threading
from typing import Optional

from .exceptions import SubjectNotFoundError
from .models import SchemaEntry
from .validation import Validator, resolve_validator
from .wire import validate_path_segment, validate_schema_or_subject


class InMemorySubject:
    """
    A subject stored in an ``InMemoryRepository``.

    Ids are assigned per subject as sequential strings starting at ``"0"``.
    Registering text identical to an existing entry returns that entry.
    """

    def __init__(self, name: str, validator: Validator, lock: threading.Lock) -> None:
        self.name = name
        self.validator = validator
        self._lock = lock
        self._entries: list[SchemaEntry] = []  # oldest first

    def __repr__(self) -> str:
        return f"InMemorySubject(name={self.name!r})"

    def _register(self, schema: str) -> SchemaEntry:
        for entry in self._entries:
            if entry.schema == schema:
                return entry
        self.validator.validate(schema, list(reversed(self._entries)))
        entry = SchemaEntry(id=str(len(self._entries)), schema=schema)
        self._entries.append(entry)
        return entry

    def register(self, schema: str) -> SchemaEntry:
        """
        Register a schema.

        Raises:
            SchemaValidationError: If the subject's validator rejects the schema

        """
        validate_schema_or_subject(schema)
        with self._lock:
            return self._register(schema)

    def register_if_latest(
        self, schema: str, expected_latest: Optional[SchemaEntry]
    ) -> Optional[SchemaEntry]:
        """
        Register a schema if ``expected_latest`` is the current latest entry.

        Returns:
            The new entry, or None if the expectation is stale

        Raises:
            SchemaValidationError: If the subject's validator rejects the schema

        """
        validate_schema_or_subject(schema)
        with self._lock:
            current_id = self._entries[-1].id if self._entries else None
            expected_id = expected_latest.id if expected_latest is not None else None
            if current_id != expected_id:
                return None
            return self._register(schema)

    def lookup_by_schema(self, schema: str) -> Optional[SchemaEntry]:
        validate_schema_or_subject(schema)
        with self._lock:
            for entry in self._entries:
                if entry.schema == schema:
                    return entry
        return None

    def lookup_by_id(self, schema_id: str) -> Optional[SchemaEntry]:
        validate_path_segment(schema_id)
        with self._lock:
            for entry in self._entries:
                if entry.id == schema_id:
                    return entry
        return None

    def latest(self) -> Optional[SchemaEntry]:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def all_entries(self) -> list[SchemaEntry]:
        """All entries, newest first."""
        with self._lock:
            return list(reversed(self._entries))


class InMemoryRepository:
    """
    In-memory implementation of the repository operations.

    Offers the same interface as ``RepositoryClient`` without any network
    access, which makes it useful for unit tests and local development.
    All state is guarded by a single lock shared with the subjects.
    """

    def __init__(self) -> None:
        self._subjects: dict[str, InMemorySubject] = {}
        self._lock = threading.Lock()

    def register(self, subject: str, validator_class: str = "") -> InMemorySubject:
        """
        Create a subject, or return the existing one unchanged.

        Raises:
            InvalidNameError: If the subject name is not a valid path segment
            RepositoryError: If the validator class is unknown

        """
        validate_path_segment(subject)
        with self._lock:
            existing = self._subjects.get(subject)
            if existing is not None:
                return existing
            created = InMemorySubject(subject, resolve_validator(validator_class), self._lock)
            self._subjects[subject] = created
            return created

    def lookup(self, subject: str) -> Optional[InMemorySubject]:
        validate_path_segment(subject)
        with self._lock:
            return self._subjects.get(subject)

    def subjects(self) -> list[InMemorySubject]:
        with self._lock:
            return list(self._subjects.values())

    # Helper methods for testing

    def get(self, subject: str) -> InMemorySubject:
        """
        Return an existing subject.

        Raises:
            SubjectNotFoundError: If the subject does not exist

        """
        found = self.lookup(subject)
        if found is None:
            raise SubjectNotFoundError(f"Subject {subject} not found")
        return found

    def reset(self) -> None:
        """Remove all subjects and their entries."""
        with self._lock:
            self._subjects.clear()
