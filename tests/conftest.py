"""Test configuration and fixtures"""

import os
import shutil
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from issuetrac.domain import Issue, Label, Status
from issuetrac.models import Base
from issuetrac.storage import InMemoryIssueRepository, SqlIssueRepository
from issuetrac.storage.database import reset_database_globals

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_issue(
    index: int = 0,
    title: str = None,
    description: str = "Test description",
    status: Status = Status.OPEN,
    is_archived: bool = False,
    labels=(),
    created_at: datetime = None,
) -> Issue:
    """Build an issue whose created_at grows with ``index``"""
    created_at = created_at or BASE_TIME + timedelta(minutes=index)
    return Issue(
        id=f"issue-{index:04d}",
        title=title or f"Issue number {index}",
        description=description,
        status=status,
        created_at=created_at,
        updated_at=created_at,
        labels=tuple(labels),
        is_archived=is_archived,
        archived_by="seed" if is_archived else None,
        archived_at=created_at if is_archived else None,
    )


@pytest.fixture
def temp_dir(monkeypatch):
    """Create a temporary directory for test isolation"""
    temp_dir = tempfile.mkdtemp()
    original_cwd = os.getcwd()
    os.chdir(temp_dir)
    monkeypatch.delenv("ISSUETRAC_DATABASE_URL", raising=False)
    reset_database_globals()

    yield Path(temp_dir)

    reset_database_globals()
    os.chdir(original_cwd)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def repository():
    """Fresh in-memory repository"""
    return InMemoryIssueRepository()


@pytest.fixture
def test_engine(temp_dir):
    """Create a test database engine"""
    issuetrac_dir = temp_dir / ".issuetrac"
    issuetrac_dir.mkdir(exist_ok=True)

    db_url = f"sqlite:///{issuetrac_dir}/database.db"
    engine = create_engine(db_url, connect_args={"check_same_thread": False})

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to a fresh schema"""
    Base.metadata.create_all(bind=test_engine)

    yield sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def sql_repository(session_factory):
    """SQL repository over a temporary SQLite database"""
    return SqlIssueRepository(session_factory)


@pytest.fixture
def labelled_issue():
    return make_issue(
        index=1,
        labels=[Label("bug", "#ff0000"), Label("ui"), Label("bug", "#ff0000")],
    )
