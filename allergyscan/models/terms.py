"""Term store data models."""

from pydantic import BaseModel, Field, field_validator


class TermSnapshot(BaseModel):
    """Model for the persisted term set."""

    terms: list[str] = Field(default_factory=list, description="Terms in display order")
    saved_at: float

    @field_validator("terms", mode="before")
    @classmethod
    def ensure_list(cls, v: object) -> list[str]:
        """Accept any iterable of strings (sets come back from older saves)."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(item) for item in v]  # type: ignore[attr-defined]
