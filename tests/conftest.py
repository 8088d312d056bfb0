"""Test configuration."""
import json
import os
from datetime import datetime
from decimal import Decimal
from uuid import uuid4
from collections.abc import AsyncIterator, Callable, Iterator
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config
import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# --- Config env par défaut
os.environ.setdefault("DATABASE_URL", "sqlite:///./openpayments_test.db")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("OPEN_PAYMENTS_BASE", "https://wallet.example")
os.environ.setdefault("OPEN_PAYMENTS_API_KEY", "test-token")

from app.main import app  # noqa: E402
from app.db import get_db  # noqa: E402
from app.models import PaymentRecord  # noqa: E402
from app.services.open_payments import OpenPaymentsClient, get_gateway  # noqa: E402
from app.services.record_store import PaymentRecordStore  # noqa: E402

DB_PATH = Path("./openpayments_test.db")
WALLET = "https://wallet.example/merchant"


def _run_migrations() -> None:
    cfg = Config(str(Path(__file__).resolve().parents[1] / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", os.environ["DATABASE_URL"])
    command.upgrade(cfg, "head")


# --- (1) Reset DB fichier au début de la session
if DB_PATH.exists():
    DB_PATH.unlink()

engine = create_engine(
    os.environ["DATABASE_URL"],
    connect_args={"check_same_thread": False},
    future=True,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False,
                                   future=True, expire_on_commit=False)

# --- (2) Construire le schéma via Alembic uniquement
_run_migrations()


class FakeWallet:
    """Stands in for the payee's wallet behind ``httpx.MockTransport``.

    Queued answers are served in order; once the queue is empty the last
    answer keeps being replayed. Every request is kept for assertions.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._answers: list[tuple[int, dict[str, Any]] | Exception] = []
        self._last: tuple[int, dict[str, Any]] | Exception = (404, {"json": {"error": "not found"}})

    def respond(self, status_code: int, **kwargs: Any) -> "FakeWallet":
        self._answers.append((status_code, kwargs))
        return self

    def fail(self, exc: Exception) -> "FakeWallet":
        self._answers.append(exc)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._answers:
            self._last = self._answers.pop(0)
        answer = self._last
        if isinstance(answer, Exception):
            raise answer
        status_code, kwargs = answer
        return httpx.Response(status_code, **kwargs)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def db_session() -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def store(db_session: Session) -> PaymentRecordStore:
    return PaymentRecordStore(db_session)


@pytest.fixture
def wallet() -> FakeWallet:
    return FakeWallet()


@pytest.fixture
def gateway(wallet: FakeWallet) -> Iterator[OpenPaymentsClient]:
    client = OpenPaymentsClient(api_key="test-token", transport=httpx.MockTransport(wallet))
    try:
        yield client
    finally:
        client.close()


@pytest.fixture(autouse=True)
def override_dependencies(db_session: Session, gateway: OpenPaymentsClient) -> Iterator[None]:
    def _get_db() -> Iterator[Session]:
        yield db_session

    def _get_gateway() -> Iterator[OpenPaymentsClient]:
        yield gateway

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_gateway] = _get_gateway
    yield
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_gateway, None)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_record(store: PaymentRecordStore) -> Callable[..., Any]:
    """Factory inserting a payment record directly through the store."""

    def _factory(
        *,
        local_id: str | None = None,
        status: str = "created",
        resource_url: str | None = None,
        amount: str = "5.00",
        created_at: datetime | None = None,
    ) -> PaymentRecord:
        record = PaymentRecord(
            id=str(uuid4()),
            local_id=local_id or str(uuid4()),
            amount=Decimal(amount),
            currency="MXN",
            payee=WALLET,
            status=status,
            resource_url=resource_url,
            remote_response={"status": 201, "headers": {}, "json": {}},
        )
        if created_at is not None:
            record.created_at = created_at
        return store.insert(record)

    return _factory
