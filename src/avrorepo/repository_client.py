"""Synchronous HTTP client for a remote schema repository."""

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Optional, Self

import httpx

from .config import RepositoryConfig
from .exceptions import InvalidNameError, RepositoryError, SchemaValidationError
from .models import SchemaEntry
from .wire import (
    SCHEMA_REGISTRY_MEDIA_TYPE,
    decode_schema_entries,
    decode_schema_entry,
    decode_subject_names,
    subject_path,
    validate_path_segment,
    validate_schema_or_subject,
)

logger = logging.getLogger(__name__)

ROOT_PATH = "/"


def _log_soft_failure(operation: str, subject: Optional[str], path: str, error: Exception) -> None:
    status_code = None
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
    logger.warning(
        "%s failed for %s: %s",
        operation,
        path,
        error,
        extra={"subject": subject, "path": path, "status_code": status_code},
    )


class RepositoryClient:
    """Client for a schema repository served over HTTP.

    Every operation is forwarded to the remote service as a single blocking
    request; nothing is cached locally. One ``httpx.Client`` is created per
    repository client and shared by all ``Subject`` handles obtained from it.
    """

    def __init__(
        self,
        config: RepositoryConfig | str | None = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the repository client.

        Args:
            config: Repository configuration, or just the base URL
            transport: Optional httpx transport for the internally created client
            http_client: Optional externally managed httpx client. It must be
                created with ``base_url`` set to the repository root, and
                should send ``Accept: application/vnd.schemaregistry.v1+json``;
                it is not closed by ``close()``
        """
        if config is None:
            config = RepositoryConfig()
        elif isinstance(config, str):
            config = RepositoryConfig(base_url=config)
        self.config = config

        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            options = {}
            if config.timeout is not None:
                options["timeout"] = config.timeout
            auth = None
            if config.auth:
                auth = httpx.BasicAuth(config.auth[0], config.auth[1])
            self._client = httpx.Client(
                base_url=config.base_url,
                auth=auth,
                transport=transport,
                headers={"Accept": SCHEMA_REGISTRY_MEDIA_TYPE},
                **options,
            )
            self._owns_client = True

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this repository created it."""
        if self._owns_client:
            self._client.close()

    def _get(self, path: str) -> httpx.Response:
        response = self._client.get(path)
        response.raise_for_status()
        return response

    def _post_schema(self, path: str, schema: str) -> httpx.Response:
        response = self._client.post(
            path,
            content=schema,
            headers={"Content-Type": SCHEMA_REGISTRY_MEDIA_TYPE},
        )
        response.raise_for_status()
        return response

    def register(self, subject: str, validator_class: str = "") -> "Subject":
        """Create a subject, or return it if it already exists.

        Args:
            subject: Subject name, used verbatim as a path segment
            validator_class: Name of the validation policy for future schemas

        Returns:
            Subject named by the canonical name the server returned

        Raises:
            InvalidNameError: If the subject name is not a valid path segment
            RepositoryError: If the server answers with an error status or
                with a name that is not a valid path segment
            httpx.RequestError: If the repository cannot be reached
        """
        validate_path_segment(subject)
        response = self._client.post(
            subject_path(subject), data={"validator_class": validator_class}
        )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RepositoryError(f"HTTP error {e.response.status_code}: {e.response.text}") from e
        name = response.text.strip()
        try:
            return Subject(name, self)
        except InvalidNameError as e:
            raise RepositoryError(f"Server returned an invalid subject name: {name!r}") from e

    def lookup(self, subject: str) -> Optional["Subject"]:
        """Return the subject if the repository knows it.

        Args:
            subject: Subject name

        Returns:
            The subject, or None if it does not exist or the repository could
            not answer

        Raises:
            InvalidNameError: If the subject name is not a valid path segment
        """
        validate_path_segment(subject)
        path = subject_path(subject)
        try:
            self._get(path)
        except httpx.HTTPError as e:
            _log_soft_failure("Subject lookup", subject, path, e)
            return None
        return Subject(subject, self)

    def subjects(self) -> list["Subject"]:
        """List all subjects, or an empty list if the listing is unavailable.

        Listed names that are not valid path segments are skipped.
        """
        try:
            names = decode_subject_names(self._get(ROOT_PATH).text)
        except (httpx.HTTPError, ValueError) as e:
            _log_soft_failure("Subject listing", None, ROOT_PATH, e)
            return []
        subjects = []
        for name in names:
            try:
                subjects.append(Subject(name, self))
            except InvalidNameError:
                logger.warning(
                    "Skipping invalid subject name %r in listing",
                    name,
                    extra={"subject": name, "path": ROOT_PATH, "status_code": None},
                )
        return subjects

    def subject(self, name: str) -> "Subject":
        """Handle for ``name`` without checking that the subject exists."""
        return Subject(name, self)


@dataclass(frozen=True)
class Subject:
    """A named subject of a remote repository.

    Holds the subject name and the repository client whose transport it uses.
    Two handles are equal when their names are equal. The name must be a
    valid path segment; ``InvalidNameError`` is raised otherwise.
    """

    name: str
    repository: RepositoryClient = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        validate_path_segment(self.name)

    def register(self, schema: str) -> Optional[SchemaEntry]:
        """Register a schema under this subject.

        Args:
            schema: Schema text, sent as the request body

        Returns:
            Entry with the server-assigned id, or None if the server refused
            for any reason other than validation

        Raises:
            SchemaValidationError: If the server rejects the schema (HTTP 403)
            httpx.RequestError: If the repository cannot be reached
        """
        validate_schema_or_subject(schema)
        return self._register(subject_path(self.name, "register"), schema)

    def register_if_latest(
        self, schema: str, expected_latest: Optional[SchemaEntry]
    ) -> Optional[SchemaEntry]:
        """Register a schema only if ``expected_latest`` is still the latest entry.

        Pass None as ``expected_latest`` to require that the subject has no
        entries yet. Errors are mapped as in ``register``; a stale expectation
        is refused by the server and yields None.
        """
        validate_schema_or_subject(schema)
        expected_id = ""
        if expected_latest is not None:
            expected_id = validate_path_segment(expected_latest.id)
        path = subject_path(self.name, "register_if_latest", expected_id)
        return self._register(path, schema)

    def _register(self, path: str, schema: str) -> Optional[SchemaEntry]:
        try:
            response = self.repository._post_schema(path, schema)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == httpx.codes.FORBIDDEN:
                raise SchemaValidationError(schema) from e
            # TODO: surface unexpected statuses once callers can tell them from "no entry"
            _log_soft_failure("Schema registration", self.name, path, e)
            return None
        return SchemaEntry(id=response.text.strip(), schema=schema)

    def lookup_by_schema(self, schema: str) -> Optional[SchemaEntry]:
        """Find the entry whose schema text equals ``schema``."""
        validate_schema_or_subject(schema)
        path = subject_path(self.name, "schema")
        try:
            response = self.repository._post_schema(path, schema)
        except httpx.HTTPError as e:
            _log_soft_failure("Schema lookup", self.name, path, e)
            return None
        return SchemaEntry(id=response.text.strip(), schema=schema)

    def lookup_by_id(self, schema_id: str) -> Optional[SchemaEntry]:
        """Fetch the entry with the given id, or None."""
        validate_path_segment(schema_id)
        path = subject_path(self.name, "id", schema_id)
        try:
            response = self.repository._get(path)
        except httpx.HTTPError as e:
            _log_soft_failure("Schema id lookup", self.name, path, e)
            return None
        return SchemaEntry(id=schema_id, schema=response.text)

    def latest(self) -> Optional[SchemaEntry]:
        """Fetch the most recently registered entry, or None."""
        path = subject_path(self.name, "latest")
        try:
            return decode_schema_entry(self.repository._get(path).text)
        except (httpx.HTTPError, ValueError) as e:
            _log_soft_failure("Latest schema lookup", self.name, path, e)
            return None

    def all_entries(self) -> list[SchemaEntry]:
        """All entries in the order the server lists them; empty on failure."""
        path = subject_path(self.name, "all")
        try:
            return decode_schema_entries(self.repository._get(path).text)
        except (httpx.HTTPError, ValueError) as e:
            _log_soft_failure("Schema listing", self.name, path, e)
            return []
