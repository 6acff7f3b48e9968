from __future__ import annotations

import sys
from pathlib import Path
from typing import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shopdb.bootstrap import bootstrap
from shopdb.session import make_engine, make_session_factory


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    # Fresh in-memory database per test, already seeded
    eng = make_engine("sqlite:///:memory:")
    bootstrap(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return make_session_factory(engine)


@pytest.fixture
def session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    s = session_factory()
    try:
        yield s
    finally:
        s.close()
