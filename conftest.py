from datetime import datetime, timedelta, timezone

import pytest

from catalog.repository import InMemoryBookRepository
from catalog.service import BookService
from catalog.unit_of_work import InMemoryUnitOfWork


class FakeClock:
    """Deterministic UTC clock; advance it with ``tick``."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: float = 1) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    # Keep tests away from ~/.library-cli and reset the output mode each test
    monkeypatch.setenv("LIBRARY_CLI_CONFIG_DIR", str(tmp_path / "cli-config"))
    monkeypatch.setenv("LIB_CLI_OUTPUT", "plain")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 9, 30, 0, tzinfo=timezone.utc))


@pytest.fixture
def repo():
    return InMemoryBookRepository()


@pytest.fixture
def uow(repo):
    return InMemoryUnitOfWork(repo)


@pytest.fixture
def service(uow, clock):
    return BookService(uow, clock=clock)
