"""Domain models."""

from .departure import (
    SOURCE_REALTIME,
    SOURCE_SCHEDULE,
    STATUS_CANCELLED,
    STATUS_DELAYED,
    STATUS_ON_TIME,
    Departure,
    DepartureSource,
    DepartureStatus,
    VehicleType,
)
from .error_details import ErrorDetails
from .journey_result import JourneyResult
from .line import Line, LineTopology
from .real_time_entry import RealTimeEntry
from .service_alert import AlertSeverity, ServiceAlert
from .station import Station
from .trip_detail import StopTime, TripDetail

__all__ = [
    "SOURCE_REALTIME",
    "SOURCE_SCHEDULE",
    "STATUS_CANCELLED",
    "STATUS_DELAYED",
    "STATUS_ON_TIME",
    "AlertSeverity",
    "Departure",
    "DepartureSource",
    "DepartureStatus",
    "ErrorDetails",
    "JourneyResult",
    "Line",
    "LineTopology",
    "RealTimeEntry",
    "ServiceAlert",
    "Station",
    "StopTime",
    "TripDetail",
    "VehicleType",
]
