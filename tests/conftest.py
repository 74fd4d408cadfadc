"""Pytest fixtures for async SQLite test database and API client."""
from datetime import datetime

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from sales_api.app import app
from sales_api.database.database import Base, get_db
from sales_api.endpoints.transactions import get_http_client
from sales_api.models.transaction import Transaction


@pytest_asyncio.fixture
async def db_session():
    """Create an in-memory SQLite async session for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def sample_transactions(db_session):
    """Create transactions spread over several months and years.

    March (any year) holds four transactions worth 1300.49 in total,
    two sold and two unsold.
    """
    transactions = [
        Transaction(
            id=1,
            title="Widget",
            description="Plain widget",
            price=50.0,
            category="A",
            sold=True,
            date_of_sale=datetime(2023, 3, 5),
        ),
        Transaction(
            id=2,
            title="Gadget",
            description="Useful gadget",
            price=150.0,
            category="B",
            sold=False,
            date_of_sale=datetime(2023, 3, 10),
        ),
        Transaction(
            id=3,
            title="Blue WIDGET stand",
            description="Stand for widgets",
            price=100.5,
            category="A",
            sold=True,
            date_of_sale=datetime(2021, 3, 20, 18, 30),
        ),
        Transaction(
            id=4,
            title="Laptop",
            description="Widget-free laptop",
            price=999.99,
            category="electronics",
            sold=False,
            date_of_sale=datetime(2022, 3, 1),
        ),
        Transaction(
            id=5,
            title="Widget Pro",
            description="Better widget",
            price=300.0,
            category="A",
            sold=True,
            date_of_sale=datetime(2023, 4, 1),
        ),
        Transaction(
            id=6,
            title="100% cotton shirt",
            description=None,
            price=20.0,
            category="clothing",
            sold=False,
            date_of_sale=datetime(2022, 5, 12),
        ),
    ]
    db_session.add_all(transactions)
    await db_session.commit()
    return transactions


@pytest_asyncio.fixture
async def api_client(db_session):
    """HTTP client bound to the ASGI app, using the test database session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def seed_payload():
    """Two records shaped like the remote seed dataset."""
    return [
        {
            "id": 1,
            "title": "Fjallraven Foldsack No. 1 Backpack",
            "price": 329.85,
            "description": "Your perfect pack for everyday use",
            "category": "men's clothing",
            "image": "https://seed.test/images/1.jpg",
            "sold": False,
            "dateOfSale": "2021-11-27T20:29:54+05:30",
        },
        {
            "id": 2,
            "title": "Mens Casual Premium Slim Fit T-Shirts",
            "price": 44.6,
            "description": "Slim-fitting style",
            "category": "men's clothing",
            "image": "https://seed.test/images/2.jpg",
            "sold": True,
            "dateOfSale": "2022-01-31T22:00:00-05:00",
        },
    ]


@pytest.fixture
def make_seed_client():
    """Factory for AsyncClients answering every request with a fixed body.

    Bytes are sent as-is, anything else is encoded as JSON.
    """

    def _make(payload=None, status_code=200) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if isinstance(payload, bytes):
                return httpx.Response(status_code, content=payload)
            return httpx.Response(status_code, json=payload)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def serve_seed(make_seed_client):
    """Make /api/initialize fetch the given body instead of the real URL."""

    def _serve(payload=None, status_code=200) -> None:
        async def override_get_http_client():
            async with make_seed_client(payload, status_code) as client:
                yield client

        app.dependency_overrides[get_http_client] = override_get_http_client

    yield _serve
    app.dependency_overrides.pop(get_http_client, None)


@pytest.fixture
def fail_on_execute(monkeypatch):
    """Make the n-th ``execute`` call of a session raise SQLAlchemyError."""

    def _fail(session, call_number: int) -> None:
        original = session.execute
        calls = {"count": 0}

        async def execute(*args, **kwargs):
            calls["count"] += 1
            if calls["count"] == call_number:
                raise SQLAlchemyError("insert failed")
            return await original(*args, **kwargs)

        monkeypatch.setattr(session, "execute", execute)

    return _fail
