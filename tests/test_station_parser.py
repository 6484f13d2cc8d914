"""Tests for the station directory parser."""

from go_departures.adapters.metrolinx_api.station_parser import StationParser


def test_keeps_only_rail_stations_when_types_present() -> None:
    """Given stops of mixed type, when parsing, then only station-like types are kept."""
    data = {
        "Stations": {
            "Station": [
                {
                    "LocationCode": "BU",
                    "LocationName": "Burlington GO",
                    "LocationType": "Train Station",
                    "Latitude": "43.3406",
                    "Longitude": "-79.8092",
                },
                {"LocationCode": "02300", "LocationName": "Some Bus Stop", "LocationType": "Bus Stop"},
            ]
        }
    }

    stations = StationParser.parse_stations(data)

    assert [s.code for s in stations] == ["BU"]
    station = stations[0]
    assert station.name == "Burlington GO"
    assert station.location_type == "Train Station"
    assert station.latitude == 43.3406
    assert station.longitude == -79.8092


def test_falls_back_to_first_stops_without_station_types() -> None:
    """Given no recognizable station types, when parsing, then stops are returned as-is."""
    data = {"Stops": [{"StopCode": "A", "StopName": "Alpha"}, {"Code": "B"}]}

    stations = StationParser.parse_stations(data)

    assert [(s.code, s.name) for s in stations] == [("A", "Alpha"), ("B", "B")]


def test_fallback_is_capped() -> None:
    """Given many untyped stops, when parsing, then at most 200 are returned."""
    data = {"Stops": [{"Code": str(i)} for i in range(250)]}

    assert len(StationParser.parse_stations(data)) == 200


def test_skips_stops_without_code_and_bad_coordinates() -> None:
    """Given a stop missing its code and one with invalid coordinates, then parsing tolerates both."""
    data = {
        "Stops": [
            {"LocationType": "GO Station"},
            {"Code": "UN", "LocationType": "GO Station", "Latitude": "n/a"},
        ]
    }

    stations = StationParser.parse_stations(data)

    assert [s.code for s in stations] == ["UN"]
    assert stations[0].latitude is None


def test_empty_payload_returns_no_stations() -> None:
    """Given an empty payload, when parsing, then the directory is empty."""
    assert StationParser.parse_stations({}) == []
