"""Value types shared by the repository implementations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SchemaEntry:
    """One registered schema version.

    The id is assigned by the repository; clients only interpret it.
    """

    id: str
    schema: str
