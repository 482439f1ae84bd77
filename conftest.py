# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Shared fixtures. The service database points at a throwaway SQLite file."""

import os
import tempfile

os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{os.path.join(tempfile.mkdtemp(), 'treating_test.db')}"
)
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from treating_calendar.core import database  # noqa: E402
from treating_calendar.core.database import build_engine, init_db, metadata  # noqa: E402
from treating_calendar.repositories.personnel_repository import PersonnelRepository  # noqa: E402
from treating_calendar.repositories.schedule_repository import ScheduleRepository  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh tables for the application engine before each test."""
    metadata.drop_all(bind=database.engine)
    init_db(database.engine)
    yield


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'scheduler.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def personnel_repo(engine):
    return PersonnelRepository(engine)


@pytest.fixture
def schedule_repo(engine):
    return ScheduleRepository(engine)
