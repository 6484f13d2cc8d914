"""Static GO Transit rail topology.

Station lists run outward from Union Station. The table is loaded once at import
and never mutated.
"""

from types import MappingProxyType

from go_departures.domain.models.departure import VehicleType
from go_departures.domain.models.line import Line, LineTopology

UNION_STATION = "UN"

GO_LINES: tuple[Line, ...] = (
    Line(
        id="LW",
        name="Lakeshore West",
        color="#98002E",
        station_codes=(
            "UN", "EX", "MI", "LO", "PO", "CL", "OA", "BO",
            "AP", "BU", "AL", "HA", "WR", "SCTH", "NI",
        ),
    ),
    Line(
        id="LE",
        name="Lakeshore East",
        color="#98002E",
        station_codes=("UN", "DA", "SC", "EG", "GU", "RO", "PIN", "AJ", "WH", "OS"),
    ),
    Line(
        id="ML",
        name="Milton",
        color="#F47B20",
        station_codes=("UN", "KP", "DI", "CO", "ER", "SR", "ME", "LS", "ML"),
    ),
    Line(
        id="GT",
        name="Kitchener",
        color="#00853E",
        station_codes=(
            "UN", "BL", "WE", "ET", "MA", "BE", "BR", "MO", "GE", "AC", "GL", "KI",
        ),
    ),
    Line(
        id="BA",
        name="Barrie",
        color="#003768",
        station_codes=("UN", "DW", "RU", "MP", "KC", "AU", "NE", "EA", "BD", "AD", "BA"),
    ),
    Line(
        id="RH",
        name="Richmond Hill",
        color="#009ADD",
        station_codes=("UN", "OR", "OL", "LA", "GO", "BM", "RI"),
    ),
    Line(
        id="ST",
        name="Stouffville",
        color="#794500",
        station_codes=("UN", "KE", "AG", "MK", "UI", "CE", "MR", "MJ", "ST", "LI"),
    ),
)

STATION_NAMES = MappingProxyType(
    {
        "UN": "Union Station",
        # Lakeshore West
        "EX": "Exhibition",
        "MI": "Mimico",
        "LO": "Long Branch",
        "PO": "Port Credit",
        "CL": "Clarkson",
        "OA": "Oakville",
        "BO": "Bronte",
        "AP": "Appleby",
        "BU": "Burlington",
        "AL": "Aldershot",
        "HA": "Hamilton",
        "WR": "West Harbour",
        "SCTH": "St. Catharines",
        "NI": "Niagara Falls",
        # Lakeshore East
        "DA": "Danforth",
        "SC": "Scarborough",
        "EG": "Eglinton",
        "GU": "Guildwood",
        "RO": "Rouge Hill",
        "PIN": "Pickering",
        "AJ": "Ajax",
        "WH": "Whitby",
        "OS": "Oshawa",
        # Milton
        "KP": "Kipling",
        "DI": "Dixie",
        "CO": "Cooksville",
        "ER": "Erindale",
        "SR": "Streetsville",
        "ME": "Meadowvale",
        "LS": "Lisgar",
        "ML": "Milton",
        # Kitchener
        "BL": "Bloor",
        "WE": "Weston",
        "ET": "Etobicoke North",
        "MA": "Malton",
        "BE": "Bramalea",
        "BR": "Brampton",
        "MO": "Mount Pleasant",
        "GE": "Georgetown",
        "AC": "Acton",
        "GL": "Guelph Central",
        "KI": "Kitchener",
        # Barrie
        "DW": "Downsview Park",
        "RU": "Rutherford",
        "MP": "Maple",
        "KC": "King City",
        "AU": "Aurora",
        "NE": "Newmarket",
        "EA": "East Gwillimbury",
        "BD": "Bradford",
        "AD": "Barrie South",
        "BA": "Allandale Waterfront",
        # Richmond Hill
        "OR": "Oriole",
        "OL": "Old Cummer",
        "LA": "Langstaff",
        "GO": "Gormley",
        "BM": "Bloomington",
        "RI": "Richmond Hill",
        # Stouffville
        "KE": "Kennedy",
        "AG": "Agincourt",
        "MK": "Milliken",
        "UI": "Unionville",
        "CE": "Centennial",
        "MR": "Markham",
        "MJ": "Mount Joy",
        "ST": "Stouffville",
        "LI": "Old Elm",
    }
)

# Line codes the upstream uses for rail service (KI is the legacy Kitchener code)
TRAIN_LINE_CODES = frozenset({"LW", "LE", "ML", "GT", "BA", "RH", "ST", "KI"})

GO_TOPOLOGY = LineTopology(
    lines=GO_LINES,
    station_names=STATION_NAMES,
    central_terminal=UNION_STATION,
    central_terminal_keyword="Union",
)


def infer_vehicle_type(
    line_code: str | None, line_name: str | None, type_flag: str | None = None
) -> VehicleType:
    """Classify a service as train or bus.

    The explicit upstream flag ("T" train, "B" bus) wins. Without it, known rail
    line codes are trains, then the line name is checked for "bus"/"train", and
    finally bus route codes are recognized by shape (leading "B" or longer than
    two characters).
    """
    if type_flag == "T":
        return "train"
    if type_flag == "B":
        return "bus"

    code = line_code or ""
    name = (line_name or "").lower()
    if code in TRAIN_LINE_CODES:
        return "train"
    if "bus" in name:
        return "bus"
    if "train" in name:
        return "train"
    if code.startswith("B") or len(code) > 2:
        return "bus"
    return "train"
