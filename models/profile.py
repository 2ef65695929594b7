from typing import Any, Dict, List
from dataclasses import dataclass, field, replace
from enum import Enum


class Sensitivity(Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class CommuteMode(Enum):
    CAR = "car"
    BIKE = "bike"
    PUBLIC_TRANSPORT = "public_transport"
    WALK = "walk"


@dataclass
class UserProfile:
    """Long-term memory: who the user is and how they are exposed to air."""
    name: str = ""
    city: str = ""
    sensitivity: Sensitivity = Sensitivity.MODERATE
    commute_mode: CommuteMode = CommuteMode.PUBLIC_TRANSPORT
    health_conditions: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Name and city are the only fields the onboarding flow requires."""
        return bool(self.name.strip()) and bool(self.city.strip())

    def with_condition_added(self, condition: str) -> "UserProfile":
        condition = condition.strip()
        if not condition:
            return self
        return replace(self, health_conditions=[*self.health_conditions, condition])

    def to_dict(self) -> Dict[str, Any]:
        # camelCase keys match the stored record and the prompt vocabulary
        return {
            "name": self.name,
            "city": self.city,
            "sensitivity": self.sensitivity.value,
            "commuteMode": self.commute_mode.value,
            "healthConditions": list(self.health_conditions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """Rebuild a stored profile.

        Raises:
            KeyError: name or city is missing.
            TypeError: a field has the wrong JSON type.
            ValueError: sensitivity or commute mode is not a known value.
        """
        name, city = data["name"], data["city"]
        if not isinstance(name, str) or not isinstance(city, str):
            raise TypeError("name and city must be strings")
        conditions = data.get("healthConditions", [])
        if not isinstance(conditions, list) or not all(isinstance(c, str) for c in conditions):
            raise TypeError("healthConditions must be a list of strings")
        return cls(
            name=name,
            city=city,
            sensitivity=Sensitivity(data.get("sensitivity", "moderate")),
            commute_mode=CommuteMode(data.get("commuteMode", "public_transport")),
            health_conditions=list(conditions),
        )
