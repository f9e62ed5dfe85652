"""Tests for the SQLAlchemy issue repository"""

import asyncio
from datetime import timezone

import pytest
from sqlalchemy.orm import sessionmaker

from issuetrac.domain import (
    Conflict,
    CreateIssueCommand,
    DeleteIssueCommand,
    ListIssuesQuery,
    Status,
    StorageUnavailable,
    UpdateIssueCommand,
    UpdateIssueStatusCommand,
)
from issuetrac.handlers import (
    CreateIssueHandler,
    DeleteIssueHandler,
    ListIssuesHandler,
    UpdateIssueHandler,
    UpdateIssueStatusHandler,
)
from issuetrac.models import IssueRecord, LabelRecord
from issuetrac.storage import SqlIssueRepository

from conftest import make_issue


@pytest.mark.asyncio
async def test_create_and_get_roundtrip(sql_repository, labelled_issue):
    """Stored issues come back equal, labels in order with duplicates"""
    created = await sql_repository.create(labelled_issue)
    fetched = await sql_repository.get_by_id(labelled_issue.id)

    assert created == labelled_issue
    assert fetched == labelled_issue
    assert [label.name for label in fetched.labels] == ["bug", "ui", "bug"]
    assert fetched.labels[1].color == "#000000"


@pytest.mark.asyncio
async def test_timestamps_come_back_utc(sql_repository):
    """Naive database values are returned as aware UTC datetimes"""
    await sql_repository.create(make_issue(1))

    fetched = await sql_repository.get_by_id("issue-0001")

    assert fetched.created_at.tzinfo == timezone.utc
    assert fetched.updated_at.tzinfo == timezone.utc


@pytest.mark.asyncio
async def test_get_missing_returns_none(sql_repository):
    assert await sql_repository.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_update_replaces_snapshot(sql_repository, labelled_issue):
    """Update overwrites the stored fields, labels included"""
    await sql_repository.create(labelled_issue)
    changed = labelled_issue.update("Renamed issue", None).update_status(Status.CLOSED)

    stored = await sql_repository.update(changed)

    assert stored == changed
    assert (await sql_repository.get_by_id(labelled_issue.id)).status == Status.CLOSED


@pytest.mark.asyncio
async def test_update_missing_returns_none(sql_repository):
    """Updating an absent issue reports no target"""
    assert await sql_repository.update(make_issue(9)) is None
    assert await sql_repository.count() == 0


@pytest.mark.asyncio
async def test_archive(sql_repository):
    """Archive flips the flag, records the actor and keeps the row"""
    original = make_issue(1, status=Status.IN_PROGRESS)
    await sql_repository.create(original)

    assert await sql_repository.archive("issue-0001", archived_by="bob") is True

    stored = await sql_repository.get_by_id("issue-0001")
    assert stored.is_archived is True
    assert stored.archived_by == "bob"
    assert stored.archived_at == stored.updated_at
    assert stored.updated_at > original.updated_at
    assert stored.status == Status.IN_PROGRESS
    assert await sql_repository.count() == 1


@pytest.mark.asyncio
async def test_archive_missing_returns_false(sql_repository):
    assert await sql_repository.archive("missing") is False


@pytest.mark.asyncio
async def test_paged_listing(sql_repository):
    """Paging filters archived rows and sorts newest first"""
    for index in range(7):
        await sql_repository.create(make_issue(index, is_archived=index in (2, 5)))

    first, total = await sql_repository.get_all_paged(1, 3)
    second, _ = await sql_repository.get_all_paged(2, 3)
    beyond, beyond_total = await sql_repository.get_all_paged(5, 3)

    assert total == 5
    assert [issue.id for issue in first] == ["issue-0006", "issue-0004", "issue-0003"]
    assert [issue.id for issue in second] == ["issue-0001", "issue-0000"]
    assert beyond == []
    assert beyond_total == 5


@pytest.mark.asyncio
async def test_get_all_and_count_include_archived(sql_repository):
    for index in range(4):
        await sql_repository.create(make_issue(index, is_archived=index == 0))

    issues = await sql_repository.get_all()

    assert [issue.id for issue in issues] == ["issue-0003", "issue-0002", "issue-0001", "issue-0000"]
    assert await sql_repository.count() == 4


@pytest.mark.asyncio
async def test_labels_are_stored_per_issue(sql_repository, session_factory, labelled_issue):
    """Label rows carry their position and owning issue"""
    await sql_repository.create(labelled_issue)

    session = session_factory()
    try:
        rows = session.query(LabelRecord).order_by(LabelRecord.position).all()
        assert [(row.issue_id, row.position, row.name) for row in rows] == [
            ("issue-0001", 0, "bug"),
            ("issue-0001", 1, "ui"),
            ("issue-0001", 2, "bug"),
        ]
        assert session.query(IssueRecord).count() == 1
    finally:
        session.close()


@pytest.mark.asyncio
async def test_missing_schema_is_storage_unavailable(test_engine):
    """Driver errors surface as StorageUnavailable"""
    repository = SqlIssueRepository(sessionmaker(bind=test_engine))

    with pytest.raises(StorageUnavailable):
        await repository.get_by_id("issue-0001")
    with pytest.raises(StorageUnavailable):
        await repository.create(make_issue(1))


@pytest.mark.asyncio
async def test_handlers_over_sql(sql_repository):
    """The full lifecycle works against the SQL repository"""
    created = await CreateIssueHandler(sql_repository).handle(
        CreateIssueCommand(title="Database backed", labels=["db"])
    )
    await UpdateIssueStatusHandler(sql_repository).handle(
        UpdateIssueStatusCommand(issue_id=created.id, status=Status.IN_PROGRESS)
    )
    updated = await UpdateIssueHandler(sql_repository).handle(
        UpdateIssueCommand(id=created.id, title="Database backed issue", description="edited")
    )

    assert updated.status == Status.IN_PROGRESS
    assert updated.labels == created.labels

    deleter = DeleteIssueHandler(sql_repository)
    assert await deleter.handle(DeleteIssueCommand(id=created.id))
    archived = await sql_repository.get_by_id(created.id)
    assert await deleter.handle(DeleteIssueCommand(id=created.id))
    assert (await sql_repository.get_by_id(created.id)).updated_at == archived.updated_at

    with pytest.raises(Conflict):
        await UpdateIssueHandler(sql_repository).handle(UpdateIssueCommand(id=created.id, title="Too late"))

    listing = await ListIssuesHandler(sql_repository).handle(ListIssuesQuery())
    assert listing.total == 0
    assert listing.items == []


@pytest.mark.asyncio
async def test_archive_twice_keeps_first_audit_fields(sql_repository):
    """A second archive leaves updated_at, archived_at and archived_by alone"""
    await sql_repository.create(make_issue(1))

    assert await sql_repository.archive("issue-0001", archived_by="a") is True
    first = await sql_repository.get_by_id("issue-0001")
    assert await sql_repository.archive("issue-0001", archived_by="b") is True
    second = await sql_repository.get_by_id("issue-0001")

    assert second.updated_at == first.updated_at
    assert second.archived_at == first.archived_at
    assert second.archived_by == "a"


@pytest.mark.asyncio
async def test_stale_update_after_archive_conflicts(sql_repository, labelled_issue):
    """An edit built from a pre-archive read cannot clear the archival flag"""
    await sql_repository.create(labelled_issue)
    stale = await sql_repository.get_by_id(labelled_issue.id)
    await sql_repository.archive(labelled_issue.id, archived_by="alice")

    with pytest.raises(Conflict):
        await sql_repository.update(stale.update("Racing edit", None))

    stored = await sql_repository.get_by_id(labelled_issue.id)
    assert stored.is_archived is True
    assert stored.archived_by == "alice"
    assert stored.title == labelled_issue.title
    assert stored.labels == labelled_issue.labels


@pytest.mark.asyncio
async def test_update_never_writes_archive_columns(sql_repository):
    """Archive fields on the incoming snapshot are ignored by update"""
    original = make_issue(1)
    await sql_repository.create(original)

    stored = await sql_repository.update(original.archive("mallory"))

    assert stored.is_archived is False
    assert stored.archived_by is None
    assert stored.archived_at is None


@pytest.mark.asyncio
async def test_update_racing_delete_over_sql(sql_repository):
    """Concurrent delete and edit leave the issue archived"""
    await sql_repository.create(make_issue(1, title="Original title"))

    archived, edited = await asyncio.gather(
        DeleteIssueHandler(sql_repository).handle(DeleteIssueCommand(id="issue-0001")),
        UpdateIssueHandler(sql_repository).handle(UpdateIssueCommand(id="issue-0001", title="Racing edit")),
        return_exceptions=True,
    )

    stored = await sql_repository.get_by_id("issue-0001")
    assert archived is True
    assert stored.is_archived is True
    # Either the edit landed before the archive or it was refused
    if isinstance(edited, Exception):
        assert isinstance(edited, Conflict)
        assert stored.title == "Original title"
    else:
        assert stored.title == "Racing edit"
