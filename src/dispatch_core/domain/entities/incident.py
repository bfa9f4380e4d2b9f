# domain/entities/incident.py
from dataclasses import dataclass, replace
from enum import Enum, IntEnum

from dispatch_core.domain.errors import InvalidSeverityError


class Severity(IntEnum):
    LOW = 1
    MEDIUM = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value) -> "Severity":
        """Accept 1/2/3 (int or numeric string) or a label such as "Critical"."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidSeverityError(value)
        if isinstance(value, str):
            v = value.strip()
            if v.upper() in cls.__members__:
                return cls[v.upper()]
            try:
                value = int(v)
            except ValueError:
                raise InvalidSeverityError(value) from None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidSeverityError(value) from None


class IncidentStatus(Enum):
    PENDING = "pending"
    RESPONDING = "responding"


@dataclass(frozen=True)
class Incident:
    id: int
    responding_station_id: int
    severity: Severity
    latitude: float
    longitude: float
    status: IncidentStatus = IncidentStatus.PENDING

    def responding(self) -> "Incident":
        return replace(self, status=IncidentStatus.RESPONDING)
