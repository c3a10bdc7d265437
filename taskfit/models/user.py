"""User profile model for taskFit."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class MobilityLevel(str, Enum):
    """Mobility level enumeration."""
    INDEPENDENT = "independent"
    NEEDS_ASSISTANCE = "needs-assistance"
    WHEELCHAIR = "wheelchair"
    LIMITED_MOBILITY = "limited-mobility"


class UserProfile(BaseModel):
    """Profile attributes that shape how a schedule is judged."""

    user_id: str = Field(..., description="User ID this profile belongs to")
    age: Optional[int] = Field(None, ge=13, le=120, description="Age in years")
    mobility_level: MobilityLevel = Field(MobilityLevel.INDEPENDENT, description="Mobility level")
    health_conditions: List[str] = Field(default_factory=list, description="Health conditions (unique)")
    has_senior_id: bool = Field(False, description="Holds a senior citizen ID")
    has_pwd_id: bool = Field(False, description="Holds a PWD ID")
    preferred_transport: Optional[str] = Field(None, description="Preferred mode of transport")

    @field_validator("health_conditions")
    @classmethod
    def _dedupe_conditions(cls, value: List[str]) -> List[str]:
        seen = []
        for condition in value:
            condition = condition.strip()
            if condition and condition not in seen:
                seen.append(condition)
        return seen

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        frozen = True
