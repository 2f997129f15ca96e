"""Configuration classes for avrorepo library."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "http://localhost:2876/schema-repo"

URL_ENV_VAR = "AVRO_REPO_URL"
TIMEOUT_ENV_VAR = "AVRO_REPO_TIMEOUT"


@dataclass
class RepositoryConfig:
    """Configuration for a remote schema repository.

    Args:
        base_url: Base URL of the repository service
        timeout: HTTP request timeout in seconds, None to keep the httpx default
        auth: Optional basic authentication tuple (username, password)
    """
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    auth: Optional[tuple[str, str]] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RepositoryConfig":
        """Build a configuration from ``AVRO_REPO_URL`` and ``AVRO_REPO_TIMEOUT``."""
        if environ is None:
            environ = os.environ
        config = cls()
        url = environ.get(URL_ENV_VAR)
        if url:
            config.base_url = url
        timeout = environ.get(TIMEOUT_ENV_VAR)
        if timeout:
            config.timeout = float(timeout)
        return config
