# dispatch_core/domain/state.py
from collections import Counter
from dataclasses import dataclass, field

from dispatch_core.domain.entities.geography import Station
from dispatch_core.domain.entities.incident import Incident, Severity
from dispatch_core.domain.errors import ConfigurationError


@dataclass
class DispatchState:
    """Station registry (fixed at startup) plus the session's append-only incident log."""

    stations: tuple[Station, ...] = ()
    incidents: list[Incident] = field(default_factory=list)

    def __post_init__(self):
        self.stations = tuple(self.stations)
        for i, s in enumerate(self.stations):
            if s.id != i:
                raise ConfigurationError(f"station ids must be dense and ordered: index {i} has id {s.id}")

    def station(self, station_id: int) -> Station | None:
        if 0 <= station_id < len(self.stations):
            return self.stations[station_id]
        return None

    def next_incident_id(self) -> int:
        return len(self.incidents) + 1

    def append(self, incident: Incident) -> None:
        self.incidents.append(incident)

    def severity_counts(self) -> dict[Severity, int]:
        c = Counter(i.severity for i in self.incidents)
        return {s: c.get(s, 0) for s in Severity}
