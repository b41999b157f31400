"""Core domain models."""

import datetime as dt
from datetime import date, datetime
from enum import StrEnum

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)


class Task(BaseModel):
    """Task model representing one unit of work inside a project.

    Tasks are stored as an embedded array on their project document, using the
    camelCase field names (``dueDate``, ``assigneeId``, ``parentId``). Both the
    camelCase aliases and the snake_case attribute names are accepted on input.

    Attributes:
        id: Identifier, unique within the owning project's task list
        name: Task name (empty string when missing from stored data)
        completed: Completion status
        due_date: Optional calendar due date
        assignee_id: Optional user ID the task is assigned to
        parent_id: Optional ID of the parent task; absent or dangling means root
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    completed: bool = False
    due_date: date | None = Field(default=None, alias="dueDate")
    assignee_id: str | None = Field(default=None, alias="assigneeId")
    parent_id: str | None = Field(default=None, alias="parentId")

    def to_document(self) -> dict:
        """Serialize to the stored document shape (camelCase, absent fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskCreate(BaseModel):
    """Model for a submitted "new task" or "new subtask" form.

    Attributes:
        name: Task name (required, surrounding whitespace stripped)
        due_date: Optional due date (defaults to today when the task is built)
        assignee_id: Optional assignee user ID
        parent_id: Parent task ID for subtasks
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    due_date: date | None = Field(default=None, alias="dueDate")
    assignee_id: str | None = Field(default=None, alias="assigneeId")
    parent_id: str | None = Field(default=None, alias="parentId")


class TaskPatch(BaseModel):
    """Partial update for a task.

    Only fields explicitly set are applied, so ``assignee_id=None`` unassigns
    while an omitted ``assignee_id`` leaves the assignee untouched.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    completed: bool | None = None
    due_date: date | None = Field(default=None, alias="dueDate")
    assignee_id: str | None = Field(default=None, alias="assigneeId")
    parent_id: str | None = Field(default=None, alias="parentId")

    @field_validator("name", "completed")
    @classmethod
    def reject_null(cls, value, info):
        # Task.name and Task.completed are never null
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class Expense(BaseModel):
    """Budget expense recorded against a project."""

    id: str
    item: str
    amount: float = Field(ge=0)
    date: dt.date


class ExpenseCreate(BaseModel):
    """Model for recording a new expense."""

    model_config = ConfigDict(str_strip_whitespace=True)

    item: str = Field(min_length=1)
    amount: float = Field(gt=0)
    date: dt.date = Field(default_factory=dt.date.today)


class ProjectStatus(StrEnum):
    """Project lifecycle status."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class Project(BaseModel):
    """Project document.

    Attributes:
        id: Unique identifier for the project
        company_id: Owning company (tenant)
        name: Project name
        description: Free-text description
        goals: Free-text goals
        budget: Total budget
        start_date: Planned start date
        end_date: Planned end date
        status: Lifecycle status
        tasks: Embedded task array, always read and written as a whole
        expenses: Embedded expense array
        version: Document version used for compare-and-swap writes
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    company_id: str
    name: str
    description: str = ""
    goals: str = ""
    budget: float = 0.0
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus = ProjectStatus.NOT_STARTED
    tasks: list[Task] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    version: int = 1
    created_at: datetime
    updated_at: datetime


class ProjectCreate(BaseModel):
    """Model for the "new project" form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    description: str = ""
    goals: str = ""
    budget: float = Field(default=0.0, ge=0)
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus = ProjectStatus.NOT_STARTED

    @model_validator(mode="after")
    def check_dates(self) -> "ProjectCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectUpdate(BaseModel):
    """Model for updating an existing project.

    All fields are optional - only provided fields will be updated.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    goals: str | None = None
    budget: float | None = Field(default=None, ge=0)
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus | None = None


class Role(StrEnum):
    """User roles within a company."""

    ADMIN = "admin"
    SCRUM_MASTER = "scrum-master"
    EMPLOYEE = "employee"


class Company(BaseModel):
    """Company (tenant) model.

    Attributes:
        id: Unique identifier for the company
        name: Company name
        creation_year: Year the company was founded
        country: Country of registration
        currency: Currency used for budgets and expenses
        language: Preferred language
        created_at: Creation timestamp
    """

    id: str
    name: str
    creation_year: int | None = None
    country: str | None = None
    currency: str | None = None
    language: str | None = None
    created_at: datetime


class CompanyUpdate(BaseModel):
    """Model for the company profile form; only provided fields change."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    creation_year: int | None = Field(default=None, ge=1900)
    country: str | None = Field(default=None, min_length=1)
    currency: str | None = Field(default=None, min_length=1)
    language: str | None = Field(default=None, min_length=1)


class UserProfile(BaseModel):
    """User profile model.

    Attributes:
        id: Unique identifier for the user
        email: Email address, unique across companies
        display_name: Name shown in listings
        company_id: Company the user belongs to
        roles: Roles granted within the company
        created_at: Creation timestamp
    """

    id: str
    email: EmailStr
    display_name: str
    company_id: str
    roles: list[Role] = Field(default_factory=lambda: [Role.EMPLOYEE])
    created_at: datetime


class UserCreate(BaseModel):
    """Model for inviting a new user into a company."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    display_name: str = Field(min_length=1)
    role: Role = Role.EMPLOYEE


class TimesheetStatus(StrEnum):
    """Approval status of a timesheet entry."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TimesheetEntry(BaseModel):
    """Time logged by a user against a project."""

    id: str
    company_id: str
    user_id: str
    project_id: str
    date: dt.date
    duration: float = Field(gt=0, description="Duration in hours")
    task_type: str
    description: str
    deliverable_id: str | None = None
    billable: bool = False
    status: TimesheetStatus = TimesheetStatus.PENDING
    created_at: datetime


class TimesheetEntryCreate(BaseModel):
    """Model for the timesheet form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project_id: str = Field(min_length=1)
    date: dt.date = Field(default_factory=dt.date.today)
    duration: float = Field(gt=0)
    task_type: str = Field(min_length=1)
    description: str = Field(min_length=1)
    deliverable_id: str | None = None
    billable: bool = False


class Deliverable(BaseModel):
    """Project deliverable."""

    id: str
    company_id: str
    project_id: str
    name: str
    status: str = "todo"
    type: str | None = None
    sprint_number: int | None = None
    project_phase: str | None = None
    acceptance_criteria: str | None = None
    validation_status: str | None = None
    created_at: datetime
    updated_at: datetime


class DeliverableCreate(BaseModel):
    """Model for creating a deliverable."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    status: str = Field(default="todo", min_length=1)
    type: str | None = None
    sprint_number: int | None = Field(default=None, ge=0)
    project_phase: str | None = None
    acceptance_criteria: str | None = None
    validation_status: str | None = None


class DeliverableUpdate(BaseModel):
    """Model for updating a deliverable; only provided fields change."""

    name: str | None = Field(default=None, min_length=1)
    status: str | None = Field(default=None, min_length=1)
    type: str | None = None
    sprint_number: int | None = Field(default=None, ge=0)
    project_phase: str | None = None
    acceptance_criteria: str | None = None
    validation_status: str | None = None


IMPACT_MIN_DESCRIPTION_LENGTH = 50


class ImpactRequest(BaseModel):
    """Input of the impact indicator generator."""

    project_description: str

    @field_validator("project_description")
    @classmethod
    def check_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < IMPACT_MIN_DESCRIPTION_LENGTH:
            raise ValueError(
                f"The description must contain at least "
                f"{IMPACT_MIN_DESCRIPTION_LENGTH} characters."
            )
        return value


class ImpactIndicators(BaseModel):
    """Generated socio-economic impact indicators."""

    indicators: str
