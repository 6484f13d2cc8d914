"""GO Transit departures: schedule and real-time aggregation for station pairs."""

__version__ = "0.1.0"
