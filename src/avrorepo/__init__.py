"""avrorepo: client for schema repositories served over HTTP."""

from .config import RepositoryConfig
from .exceptions import (
    InvalidNameError,
    RepositoryError,
    SchemaValidationError,
    SubjectNotFoundError,
)
from .inmemory import InMemoryRepository, InMemorySubject
from .models import SchemaEntry
from .protocol import Repository, SubjectHandle
from .repository_client import RepositoryClient, Subject

__all__ = [
    "RepositoryClient",
    "Subject",
    "SchemaEntry",
    "RepositoryConfig",
    "Repository",
    "SubjectHandle",
    "InMemoryRepository",
    "InMemorySubject",
    "RepositoryError",
    "InvalidNameError",
    "SchemaValidationError",
    "SubjectNotFoundError",
    "create_repository",
]

__version__ = "0.1.0"


def create_repository(config: RepositoryConfig | None = None) -> RepositoryClient:
    """Convenience function to create a RepositoryClient.

    Args:
        config: Repository configuration; read from the environment when omitted

    Returns:
        Configured RepositoryClient instance

    Note:
        The returned client owns an HTTP connection pool and should be closed
        when done. Consider using it as a context manager.
    """
    if config is None:
        config = RepositoryConfig.from_env()
    return RepositoryClient(config)
