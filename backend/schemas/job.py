from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

EQUITY_REGEX = r"^(0(\.\d+)?|1(\.0+)?|\.\d+)$"
EQUITY = Annotated[str, StringConstraints(pattern=EQUITY_REGEX)]
HANDLE = Annotated[str, StringConstraints(min_length=1, max_length=25)]


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: EQUITY | None = None
    company_handle: HANDLE


class JobUpdate(BaseModel):
    """Fields a caller may change on an existing job; the company is fixed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: EQUITY | None = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("title cannot be null")
        return value

    def to_update_data(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class JobSearch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    min_salary: int | None = Field(default=None, ge=0)
    has_equity: bool | None = None

    def to_filters(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
