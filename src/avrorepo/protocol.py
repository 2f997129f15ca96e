"""Protocol definitions for avrorepo."""

from typing import Iterable, Optional, Protocol

from .models import SchemaEntry


class SubjectHandle(Protocol):
    """
    Protocol for the schema-version operations of one subject.

    Both ``Subject`` (HTTP) and ``InMemorySubject`` implement this protocol.
    Lookups report a missing entry as None rather than raising.
    """

    name: str

    def register(self, schema: str) -> Optional[SchemaEntry]:
        """
        Register a schema under the subject.

        Raises:
            SchemaValidationError: If the schema is rejected

        """
        ...

    def register_if_latest(
        self, schema: str, expected_latest: Optional[SchemaEntry]
    ) -> Optional[SchemaEntry]:
        """
        Register a schema only if ``expected_latest`` is the current latest entry.

        Raises:
            SchemaValidationError: If the schema is rejected

        """
        ...

    def lookup_by_schema(self, schema: str) -> Optional[SchemaEntry]:
        """Find an existing entry with the given schema text."""
        ...

    def lookup_by_id(self, schema_id: str) -> Optional[SchemaEntry]:
        """Find an entry by id."""
        ...

    def latest(self) -> Optional[SchemaEntry]:
        """Return the most recently registered entry."""
        ...

    def all_entries(self) -> Iterable[SchemaEntry]:
        """Return every entry of the subject."""
        ...


class Repository(Protocol):
    """
    Protocol for a collection of subjects.

    Implemented by ``RepositoryClient`` and ``InMemoryRepository`` so that
    code written against a remote repository can be exercised locally.
    """

    def register(self, subject: str, validator_class: str = "") -> SubjectHandle:
        """
        Create a subject, or return the existing one.

        Args:
            subject: Subject name
            validator_class: Name of the validation policy for the subject

        """
        ...

    def lookup(self, subject: str) -> Optional[SubjectHandle]:
        """Return the subject, or None if it does not exist."""
        ...

    def subjects(self) -> Iterable[SubjectHandle]:
        """Return all subjects."""
        ...
