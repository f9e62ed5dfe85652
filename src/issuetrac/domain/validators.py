"""Command validators.

Each validator checks the shape of one command type against a pydantic rule
model and reports every violated rule as a :class:`FieldError`. Validators
never touch the repository.
"""

import dataclasses
from typing import Annotated, Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints, ValidationError
from pydantic_core import PydanticCustomError

from .errors import FieldError, ValidationFailed
from .issue import Status


def _require(value: Any) -> Any:
    """Treat None and whitespace-only strings as missing"""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", "field is required")
    return value


RequiredId = Annotated[str, BeforeValidator(_require)]
LabelName = Annotated[str, StringConstraints(max_length=50), BeforeValidator(_require)]


class _Rules(BaseModel):
    """Base rule model; ``field_names`` gives the name used in messages"""

    model_config = ConfigDict(extra="ignore")

    field_names: ClassVar[Dict[str, str]] = {}


class _CreateIssueRules(_Rules):
    field_names: ClassVar[Dict[str, str]] = {
        "title": "Title",
        "description": "Description",
        "labels": "Label name",
    }

    title: Annotated[str, StringConstraints(min_length=3, max_length=200), BeforeValidator(_require)]
    description: Optional[Annotated[str, StringConstraints(max_length=5000)]] = None
    labels: Optional[List[LabelName]] = None


class _UpdateIssueRules(_Rules):
    field_names: ClassVar[Dict[str, str]] = {
        "id": "Issue ID",
        "title": "Title",
        "description": "Description",
    }

    id: RequiredId
    title: Annotated[str, StringConstraints(min_length=3, max_length=256), BeforeValidator(_require)]
    description: Optional[Annotated[str, StringConstraints(max_length=4096)]] = None


class _DeleteIssueRules(_Rules):
    field_names: ClassVar[Dict[str, str]] = {"id": "Issue ID"}

    id: RequiredId


class _ListIssuesRules(_Rules):
    field_names: ClassVar[Dict[str, str]] = {"page": "Page", "page_size": "Page size"}

    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=100)


class _UpdateIssueStatusRules(_Rules):
    field_names: ClassVar[Dict[str, str]] = {"issue_id": "Issue ID", "status": "Status"}

    issue_id: RequiredId
    status: Annotated[Status, BeforeValidator(_require)]


@dataclasses.dataclass
class ValidationResult:
    """Outcome of validating one command"""

    errors: List[FieldError] = dataclasses.field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _describe(error: Dict[str, Any], field_names: Dict[str, str]) -> FieldError:
    """Translate one pydantic error into a stable field-scoped message"""
    loc = error.get("loc") or ("__root__",)
    field = str(loc[0])
    path = field + "".join(f"[{part}]" for part in loc[1:])
    name = field_names.get(field, field)
    ctx = error.get("ctx") or {}
    kind = error.get("type")

    if kind in ("required", "missing"):
        message = f"{name} is required."
    elif kind == "string_too_short":
        message = f"{name} must be at least {ctx['min_length']} characters long."
    elif kind == "string_too_long":
        message = f"{name} cannot exceed {ctx['max_length']} characters."
    elif kind == "greater_than_equal":
        message = f"{name} must be greater than or equal to {ctx['ge']}."
    elif kind == "less_than_equal":
        message = f"{name} must be less than or equal to {ctx['le']}."
    elif kind == "enum":
        allowed = ", ".join(status.value for status in Status)
        message = f"{name} must be one of: {allowed}."
    elif kind in ("int_parsing", "int_type", "int_from_float"):
        message = f"{name} must be an integer."
    elif kind == "string_type":
        message = f"{name} must be a string."
    else:
        message = f"{name}: {error.get('msg')}"
    return FieldError(field=path, message=message)


class Validator:
    """Validates one command type against its rule model"""

    rules: ClassVar[type] = _Rules

    def validate(self, command: Any) -> ValidationResult:
        if dataclasses.is_dataclass(command):
            data = dataclasses.asdict(command)
        else:
            data = dict(command)
        try:
            self.rules.model_validate(data)
        except ValidationError as exc:
            return ValidationResult(
                errors=[_describe(error, self.rules.field_names) for error in exc.errors()]
            )
        return ValidationResult()

    def validate_or_raise(self, command: Any) -> None:
        """Raise :class:`ValidationFailed` carrying every collected error"""
        result = self.validate(command)
        if not result.is_valid:
            raise ValidationFailed(result.errors)


class CreateIssueValidator(Validator):
    rules = _CreateIssueRules


class UpdateIssueValidator(Validator):
    rules = _UpdateIssueRules


class DeleteIssueValidator(Validator):
    rules = _DeleteIssueRules


class ListIssuesQueryValidator(Validator):
    rules = _ListIssuesRules


class UpdateIssueStatusValidator(Validator):
    rules = _UpdateIssueStatusRules
