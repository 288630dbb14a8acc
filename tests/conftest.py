# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database.database import Base
from src.database import models


@pytest.fixture
def db_session():
    """테스트마다 새 인메모리 SQLite DB와 세션을 제공합니다."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def customers(db_session):
    """기본 고객 두 개(acme, globex)를 생성합니다."""
    acme = models.Customer(id=7, name="acme")
    globex = models.Customer(id=8, name="globex")
    db_session.add_all([acme, globex])
    db_session.commit()
    return acme, globex
