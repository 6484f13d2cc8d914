"""Service alert domain model."""

from dataclasses import dataclass, field
from typing import Literal

AlertSeverity = Literal["info", "warning", "severe"]


@dataclass(frozen=True)
class ServiceAlert:
    """A service alert. Empty ``affected_routes`` means the alert applies network-wide."""

    id: str
    title: str
    description: str
    severity: AlertSeverity
    affected_routes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_system_wide(self) -> bool:
        """Whether the alert declares no scope and therefore applies to every route."""
        return not self.affected_routes
