"""Tests for command validators"""

import pytest

from issuetrac.domain import (
    CreateIssueCommand,
    CreateIssueValidator,
    DeleteIssueCommand,
    DeleteIssueValidator,
    ListIssuesQuery,
    ListIssuesQueryValidator,
    Status,
    UpdateIssueCommand,
    UpdateIssueStatusCommand,
    UpdateIssueStatusValidator,
    UpdateIssueValidator,
    ValidationFailed,
)


def _fields(result):
    return [error.field for error in result.errors]


def test_create_valid_command_passes():
    """A well-formed create command has no errors"""
    result = CreateIssueValidator().validate(
        CreateIssueCommand(title="Fix the build", description="CI is red", labels=["ci", "urgent"])
    )
    assert result.is_valid
    assert result.errors == []


def test_create_title_too_short():
    """Two-character titles are rejected with a length message"""
    result = CreateIssueValidator().validate(CreateIssueCommand(title="AB"))

    assert not result.is_valid
    assert _fields(result) == ["title"]
    assert result.errors[0].message == "Title must be at least 3 characters long."


@pytest.mark.parametrize("title", ["", "   ", None])
def test_create_title_required(title):
    """Missing or blank titles report a single 'required' error"""
    result = CreateIssueValidator().validate(CreateIssueCommand(title=title))

    assert _fields(result) == ["title"]
    assert result.errors[0].message == "Title is required."


def test_create_title_bounds():
    """Titles of exactly 3 and 200 characters are accepted, 201 is not"""
    validator = CreateIssueValidator()
    assert validator.validate(CreateIssueCommand(title="abc")).is_valid
    assert validator.validate(CreateIssueCommand(title="a" * 200)).is_valid

    result = validator.validate(CreateIssueCommand(title="a" * 201))
    assert result.errors[0].message == "Title cannot exceed 200 characters."


def test_create_description_limit():
    """Descriptions are optional but capped at 5000 characters"""
    validator = CreateIssueValidator()
    assert validator.validate(CreateIssueCommand(title="Valid", description=None)).is_valid
    assert validator.validate(CreateIssueCommand(title="Valid", description="")).is_valid
    assert validator.validate(CreateIssueCommand(title="Valid", description="d" * 5000)).is_valid

    result = validator.validate(CreateIssueCommand(title="Valid", description="d" * 5001))
    assert _fields(result) == ["description"]


def test_create_label_rules():
    """Each label name is required and at most 50 characters"""
    result = CreateIssueValidator().validate(
        CreateIssueCommand(title="Valid", labels=["ok", "", "x" * 51])
    )

    assert _fields(result) == ["labels[1]", "labels[2]"]
    assert result.errors[0].message == "Label name is required."
    assert result.errors[1].message == "Label name cannot exceed 50 characters."


def test_create_collects_every_error():
    """All violations are reported, not just the first"""
    result = CreateIssueValidator().validate(
        CreateIssueCommand(title="AB", description="d" * 6000, labels=[" "])
    )
    assert sorted(_fields(result)) == ["description", "labels[0]", "title"]


def test_update_rules():
    """Update allows longer titles but shorter descriptions than create"""
    validator = UpdateIssueValidator()
    assert validator.validate(UpdateIssueCommand(id="abc", title="t" * 256)).is_valid

    result = validator.validate(UpdateIssueCommand(id="", title="t" * 257, description="d" * 4097))
    assert sorted(_fields(result)) == ["description", "id", "title"]


def test_delete_requires_id():
    """Delete needs an id"""
    assert DeleteIssueValidator().validate(DeleteIssueCommand(id="abc")).is_valid

    result = DeleteIssueValidator().validate(DeleteIssueCommand(id=" "))
    assert result.errors[0].message == "Issue ID is required."


@pytest.mark.parametrize(
    "page, page_size, fields",
    [
        (1, 1, []),
        (1, 100, []),
        (0, 20, ["page"]),
        (-3, 20, ["page"]),
        (1, 0, ["page_size"]),
        (1, 101, ["page_size"]),
        (0, 0, ["page", "page_size"]),
    ],
)
def test_list_query_bounds(page, page_size, fields):
    """page >= 1 and 1 <= page_size <= 100"""
    result = ListIssuesQueryValidator().validate(ListIssuesQuery(page=page, page_size=page_size))
    assert _fields(result) == fields


@pytest.mark.parametrize("status", [Status.OPEN, Status.CLOSED, "in_progress"])
def test_status_accepts_members_and_values(status):
    """Status may be given as an enum member or its value"""
    result = UpdateIssueStatusValidator().validate(UpdateIssueStatusCommand(issue_id="abc", status=status))
    assert result.is_valid


def test_status_rejects_unknown_values():
    """Anything outside the three statuses is rejected"""
    result = UpdateIssueStatusValidator().validate(UpdateIssueStatusCommand(issue_id="", status="done"))

    assert sorted(_fields(result)) == ["issue_id", "status"]
    status_error = next(error for error in result.errors if error.field == "status")
    assert status_error.message == "Status must be one of: open, in_progress, closed."


def test_validate_or_raise_carries_all_errors():
    """validate_or_raise raises ValidationFailed with every error"""
    with pytest.raises(ValidationFailed) as exc_info:
        UpdateIssueValidator().validate_or_raise(UpdateIssueCommand(id="", title="x"))

    assert sorted(exc_info.value.fields) == ["id", "title"]
