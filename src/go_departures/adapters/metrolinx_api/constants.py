"""Constants for the Metrolinx OpenData API adapter.

API Documentation: http://api.openmetrolinx.com/OpenDataAPI/Help/Index/en
All endpoints require a registered key passed as the ``key`` query parameter.
"""

METROLINX_BASE_URL = "https://api.openmetrolinx.com/OpenDataAPI"

# Endpoint paths (relative to the base URL)
ALL_STOPS_ENDPOINT = "/api/V1/Stop/All"
NEXT_SERVICE_ENDPOINT = "/api/V1/Stop/NextService/{stop_code}"
JOURNEY_ENDPOINT = "/api/V1/Schedule/Journey/{date}/{origin}/{destination}/{time}/{max_results}"
SERVICE_ALERTS_ENDPOINT = "/api/V1/ServiceUpdate/ServiceAlert/All"

API_KEY_PARAM = "key"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# Location types kept by the station directory
STATION_LOCATION_TYPE_MARKERS = ("GO", "Train", "Rail", "Station")

# Stops returned when the feed reports no recognizable station types
STATION_FALLBACK_LIMIT = 200
