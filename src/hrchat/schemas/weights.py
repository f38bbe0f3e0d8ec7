"""Priority weight record used to gate scoring requests."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_TOTAL = 100.0


class WeightConfig(BaseModel):
    """User-editable scoring priorities.

    Each weight must stay within ``[0, 100]``; assignments are validated too, so
    a presentation layer can bind input fields straight onto the attributes.
    The four values are only required to sum to 100 at the moment scoring is
    requested (see :meth:`is_balanced`). They are never normalized.
    """

    skills: float = Field(default=50, ge=0, le=100)
    education: float = Field(default=20, ge=0, le=100)
    experience: float = Field(default=20, ge=0, le=100)
    certifications: float = Field(default=10, ge=0, le=100)

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    def total(self) -> float:
        # fsum keeps decimal inputs such as 33.3/33.3/33.4 at exactly 100.
        return math.fsum(
            (self.skills, self.education, self.experience, self.certifications)
        )

    def is_balanced(self) -> bool:
        return self.total() == REQUIRED_TOTAL
