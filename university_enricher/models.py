"""Data models for university records and lookup results."""

from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel

UniversityType = Literal["public", "private"]

# Fields filled by the LLM lookups (tech_stack is filled separately)
ENRICHMENT_FIELDS = (
    "linkedin_url",
    "student_population",
    "university_type",
    "language_centre",
)


class University(BaseModel):
    """A university record.

    ``domain`` is the effective unique key. Enrichment fields are None until
    a lookup produces a validated value for them.
    """

    domain: str
    name: str
    city: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    linkedin_url: Optional[str] = None
    student_population: Optional[int] = None
    university_type: Optional[UniversityType] = None
    language_centre: Optional[bool] = None
    tech_stack: Optional[list[str]] = None

    def to_dict(self) -> dict:
        """Serialize, omitting unknown (None) fields."""
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class LookupOutcome:
    """Result of one structured query.

    ``ok=True`` with ``value=None`` means the model said it doesn't know,
    which is a valid answer and not a failure.
    """

    ok: bool
    value: Any = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.ok and self.error is not None:
            raise ValueError("A successful outcome cannot carry an error")
        if not self.ok and self.value is not None:
            raise ValueError("A failed outcome cannot carry a value")

    @classmethod
    def success(cls, value: Any) -> "LookupOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "LookupOutcome":
        return cls(ok=False, error=error or "Unknown error occurred")
