"""Shared fixtures: a fake repository service served through httpx.MockTransport."""

from urllib.parse import parse_qs

import httpx
import pytest

from avrorepo import InMemoryRepository, RepositoryClient, RepositoryConfig
from avrorepo.exceptions import InvalidNameError, RepositoryError, SchemaValidationError
from avrorepo.wire import encode_schema_entries, encode_schema_entry, encode_subject_names

BASE_URL = "http://test-registry:2876/schema-repo"


class FakeRepositoryServer:
    """Answers repository REST requests from an InMemoryRepository.

    Every request is recorded in ``requests`` so tests can assert on the
    method, path, headers and body the client produced.
    """

    prefix = "/schema-repo/"

    def __init__(self, repository: InMemoryRepository):
        self.repository = repository
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if not path.startswith(self.prefix):
            return httpx.Response(404)
        parts = path[len(self.prefix):].split("/")

        if parts == [""]:
            names = [subject.name for subject in self.repository.subjects()]
            return httpx.Response(200, text=encode_subject_names(names))

        name = parts[0]
        if len(parts) == 1 and request.method == "POST":
            form = parse_qs(request.content.decode())
            validator_class = form.get("validator_class", [""])[0]
            try:
                registered = self.repository.register(name, validator_class)
            except RepositoryError as e:
                return httpx.Response(400, text=str(e))
            return httpx.Response(200, text=registered.name)

        try:
            subject = self.repository.lookup(name)
        except InvalidNameError:
            return httpx.Response(400)
        if subject is None:
            return httpx.Response(404, text=f"Subject {name} not found")

        operation = parts[1] if len(parts) > 1 else ""
        schema = request.content.decode()

        if len(parts) == 1:
            return httpx.Response(200, text=subject.name)
        if operation == "register" and len(parts) == 2:
            try:
                return httpx.Response(200, text=subject.register(schema).id)
            except SchemaValidationError as e:
                return httpx.Response(403, text=str(e))
        if operation == "register_if_latest" and len(parts) == 3:
            expected = None
            if parts[2]:
                expected = subject.lookup_by_id(parts[2])
                if expected is None:
                    return httpx.Response(409)
            try:
                entry = subject.register_if_latest(schema, expected)
            except SchemaValidationError as e:
                return httpx.Response(403, text=str(e))
            if entry is None:
                return httpx.Response(409)
            return httpx.Response(200, text=entry.id)
        if operation == "schema" and len(parts) == 2:
            entry = subject.lookup_by_schema(schema)
            if entry is None:
                return httpx.Response(404)
            return httpx.Response(200, text=entry.id)
        if operation == "id" and len(parts) == 3:
            entry = subject.lookup_by_id(parts[2])
            if entry is None:
                return httpx.Response(404)
            return httpx.Response(200, text=entry.schema)
        if operation == "latest" and len(parts) == 2:
            entry = subject.latest()
            if entry is None:
                return httpx.Response(404)
            return httpx.Response(200, text=encode_schema_entry(entry))
        if operation == "all" and len(parts) == 2:
            return httpx.Response(200, text=encode_schema_entries(subject.all_entries()))
        return httpx.Response(404)


@pytest.fixture
def config() -> RepositoryConfig:
    """Test configuration."""
    return RepositoryConfig(base_url=BASE_URL)


@pytest.fixture
def backing_repository() -> InMemoryRepository:
    """State behind the fake server."""
    return InMemoryRepository()


@pytest.fixture
def server(backing_repository: InMemoryRepository) -> FakeRepositoryServer:
    return FakeRepositoryServer(backing_repository)


@pytest.fixture
def client(config: RepositoryConfig, server: FakeRepositoryServer):
    """RepositoryClient talking to the fake server."""
    with RepositoryClient(config, transport=httpx.MockTransport(server)) as repository_client:
        yield repository_client


@pytest.fixture
def make_client(config: RepositoryConfig):
    """Factory for RepositoryClients whose every request is answered by ``handler``."""
    created = []

    def factory(handler) -> RepositoryClient:
        repository_client = RepositoryClient(config, transport=httpx.MockTransport(handler))
        created.append(repository_client)
        return repository_client

    yield factory
    for repository_client in created:
        repository_client.close()
