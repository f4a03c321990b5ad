from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from invoice_dashboard.db import get_db
from invoice_dashboard.dependencies import get_page_cache
from invoice_dashboard.main import app
from invoice_dashboard.models import Base, Customer, Invoice, Revenue
from invoice_dashboard.services.cache import CacheInvalidator, PageCache
from invoice_dashboard.services.navigation import Navigator


class RecordingInvalidator(CacheInvalidator):
    def __init__(self) -> None:
        self.paths: list[str] = []

    def invalidate(self, path: str) -> None:
        self.paths.append(path)


class RecordingNavigator(Navigator):
    def __init__(self) -> None:
        self.urls: list[str] = []

    def redirect(self, url: str) -> None:
        self.urls.append(url)


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def page_cache():
    return PageCache()


@pytest.fixture()
def client(SessionLocal, page_cache):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_page_cache] = lambda: page_cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def invalidator():
    return RecordingInvalidator()


@pytest.fixture()
def navigator():
    return RecordingNavigator()


@pytest.fixture()
def customers(db_session):
    evil = Customer(
        id="cust-evil",
        name="Evil Rabbit",
        email="evil@rabbit.com",
        image_url="/customers/evil-rabbit.png",
    )
    lee = Customer(
        id="cust-lee",
        name="Lee Robinson",
        email="lee@robinson.com",
        image_url="/customers/lee-robinson.png",
    )
    db_session.add_all([evil, lee])
    db_session.commit()
    return {"evil": evil, "lee": lee}


@pytest.fixture()
def invoices(db_session, customers):
    rows = [
        Invoice(
            id="inv-1",
            customer_id="cust-evil",
            amount=15795,
            status="pending",
            date=date(2022, 12, 6),
        ),
        Invoice(
            id="inv-2",
            customer_id="cust-lee",
            amount=44800,
            status="paid",
            date=date(2023, 9, 10),
        ),
        Invoice(
            id="inv-3",
            customer_id="cust-lee",
            amount=666,
            status="pending",
            date=date(2023, 6, 27),
        ),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture()
def revenue(db_session):
    rows = [
        Revenue(month="Jan", revenue=2000, position=0),
        Revenue(month="Feb", revenue=1800, position=1),
        Revenue(month="Mar", revenue=4800, position=2),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows
