"""Configuration models for minikanban.yml."""

from pydantic import BaseModel, Field, field_validator

from .task import STATUSES, Status

DEFAULT_PLACEHOLDER_TITLE = "Untitled (review)"


class ColumnConfig(BaseModel):
    """Display configuration for a single board column."""

    id: Status
    title: str = Field(..., min_length=1)


class BoardConfig(BaseModel):
    """Board display and behavior configuration."""

    columns: list[ColumnConfig] = Field(
        default_factory=lambda: BoardConfig.default_columns(),
    )
    seed_demo: bool = Field(
        default=True,
        description="Load demo tasks when the stored board is empty",
    )
    placeholder_title: str = Field(
        default=DEFAULT_PLACEHOLDER_TITLE,
        min_length=3,
        description="Title written by the integrity autofix for too-short titles",
    )

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        """Every status must have exactly one column."""
        ids = [col.id for col in v]
        if sorted(ids) != sorted(STATUSES):
            raise ValueError(
                f"Columns must be exactly {', '.join(STATUSES)} (got: {', '.join(ids) or 'none'})"
            )
        return v

    @staticmethod
    def default_columns() -> list[ColumnConfig]:
        """Default column titles in workflow order."""
        return [
            ColumnConfig(id="todo", title="To Do"),
            ColumnConfig(id="doing", title="Doing"),
            ColumnConfig(id="done", title="Done"),
        ]

    @property
    def column_ids(self) -> list[Status]:
        """Column ids in display order."""
        return [col.id for col in self.columns]

    def column_title(self, status: str) -> str:
        """Title for a status, falling back to the id."""
        for col in self.columns:
            if col.id == status:
                return col.title
        return status

    @classmethod
    def default(cls) -> "BoardConfig":
        """Return default configuration."""
        return cls()


class MinikanbanConfig(BaseModel):
    """Root configuration from minikanban.yml."""

    version: int = 1
    board: BoardConfig = Field(default_factory=BoardConfig.default)

    @classmethod
    def default(cls) -> "MinikanbanConfig":
        """Return default configuration."""
        return cls(board=BoardConfig.default())
