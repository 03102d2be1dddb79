"""Metrorail station codes and the name/alias directory used to resolve them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from metrohero.data.errors import InvalidStationError

UNKNOWN_NAME = "UNKNOWN"


class StationCode(str, Enum):
    """WMATA RTU code for a Metrorail station.

    Unrecognized codes coming back from the API collapse to ``UNKNOWN``; use
    ``resolve_code`` for user input, which rejects them instead.
    """

    A01 = "A01"
    A02 = "A02"
    A03 = "A03"
    A04 = "A04"
    A05 = "A05"
    A06 = "A06"
    A07 = "A07"
    A08 = "A08"
    A09 = "A09"
    A10 = "A10"
    A11 = "A11"
    A12 = "A12"
    A13 = "A13"
    A14 = "A14"
    A15 = "A15"
    B01 = "B01"
    B02 = "B02"
    B03 = "B03"
    B04 = "B04"
    B05 = "B05"
    B06 = "B06"
    B07 = "B07"
    B08 = "B08"
    B09 = "B09"
    B10 = "B10"
    B11 = "B11"
    B35 = "B35"
    C01 = "C01"
    C02 = "C02"
    C03 = "C03"
    C04 = "C04"
    C05 = "C05"
    C06 = "C06"
    C07 = "C07"
    C08 = "C08"
    C09 = "C09"
    C10 = "C10"
    C11 = "C11"
    C12 = "C12"
    C13 = "C13"
    C14 = "C14"
    C15 = "C15"
    D01 = "D01"
    D02 = "D02"
    D03 = "D03"
    D04 = "D04"
    D05 = "D05"
    D06 = "D06"
    D07 = "D07"
    D08 = "D08"
    D09 = "D09"
    D10 = "D10"
    D11 = "D11"
    D12 = "D12"
    D13 = "D13"
    E01 = "E01"
    E02 = "E02"
    E03 = "E03"
    E04 = "E04"
    E05 = "E05"
    E06 = "E06"
    E07 = "E07"
    E08 = "E08"
    E09 = "E09"
    E10 = "E10"
    F01 = "F01"
    F02 = "F02"
    F03 = "F03"
    F04 = "F04"
    F05 = "F05"
    F06 = "F06"
    F07 = "F07"
    F08 = "F08"
    F09 = "F09"
    F10 = "F10"
    F11 = "F11"
    G01 = "G01"
    G02 = "G02"
    G03 = "G03"
    G04 = "G04"
    G05 = "G05"
    J02 = "J02"
    J03 = "J03"
    K01 = "K01"
    K02 = "K02"
    K03 = "K03"
    K04 = "K04"
    K05 = "K05"
    K06 = "K06"
    K07 = "K07"
    K08 = "K08"
    N01 = "N01"
    N02 = "N02"
    N03 = "N03"
    N04 = "N04"
    N06 = "N06"
    N07 = "N07"
    N08 = "N08"
    N09 = "N09"
    N10 = "N10"
    N11 = "N11"
    N12 = "N12"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> StationCode | None:
        if isinstance(value, str):
            return cls.UNKNOWN
        return None

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Human-readable station name."""
        return display_name(self)


STATION_NAMES: tuple[tuple[StationCode, str], ...] = (
    (StationCode.A01, "Metro Center"),
    (StationCode.A02, "Farragut North"),
    (StationCode.A03, "Dupont Circle"),
    (StationCode.A04, "Woodley Park-Zoo/Adams Morgan"),
    (StationCode.A05, "Cleveland Park"),
    (StationCode.A06, "Van Ness-UDC"),
    (StationCode.A07, "Tenleytown-AU"),
    (StationCode.A08, "Friendship Heights"),
    (StationCode.A09, "Bethesda"),
    (StationCode.A10, "Medical Center"),
    (StationCode.A11, "Grosvenor-Strathmore"),
    (StationCode.A12, "White Flint"),
    (StationCode.A13, "Twinbrook"),
    (StationCode.A14, "Rockville"),
    (StationCode.A15, "Shady Grove"),
    (StationCode.B01, "Gallery Pl-Chinatown"),
    (StationCode.B02, "Judiciary Square"),
    (StationCode.B03, "Union Station"),
    (StationCode.B04, "Rhode Island Ave-Brentwood"),
    (StationCode.B05, "Brookland-CUA"),
    (StationCode.B06, "Fort Totten"),
    (StationCode.B07, "Takoma"),
    (StationCode.B08, "Silver Spring"),
    (StationCode.B09, "Forest Glen"),
    (StationCode.B10, "Wheaton"),
    (StationCode.B11, "Glenmont"),
    (StationCode.B35, "NoMa-Gallaudet U"),
    (StationCode.C01, "Metro Center"),
    (StationCode.C02, "McPherson Square"),
    (StationCode.C03, "Farragut West"),
    (StationCode.C04, "Foggy Bottom-GWU"),
    (StationCode.C05, "Rosslyn"),
    (StationCode.C06, "Arlington Cemetery"),
    (StationCode.C07, "Pentagon"),
    (StationCode.C08, "Pentagon City"),
    (StationCode.C09, "Crystal City"),
    (StationCode.C10, "Ronald Reagan Washington National Airport"),
    (StationCode.C11, "Potomac Yard"),
    (StationCode.C12, "Braddock Road"),
    (StationCode.C13, "King St-Old Town"),
    (StationCode.C14, "Eisenhower Avenue"),
    (StationCode.C15, "Huntington"),
    (StationCode.D01, "Federal Triangle"),
    (StationCode.D02, "Smithsonian"),
    (StationCode.D03, "L'Enfant Plaza"),
    (StationCode.D04, "Federal Center SW"),
    (StationCode.D05, "Capitol South"),
    (StationCode.D06, "Eastern Market"),
    (StationCode.D07, "Potomac Ave"),
    (StationCode.D08, "Stadium-Armory"),
    (StationCode.D09, "Minnesota Ave"),
    (StationCode.D10, "Deanwood"),
    (StationCode.D11, "Cheverly"),
    (StationCode.D12, "Landover"),
    (StationCode.D13, "New Carrollton"),
    (StationCode.E01, "Mt Vernon Sq 7th St-Convention Center"),
    (StationCode.E02, "Shaw-Howard U"),
    (StationCode.E03, "U Street/African-Amer Civil War Memorial/Cardozo"),
    (StationCode.E04, "Columbia Heights"),
    (StationCode.E05, "Georgia Ave-Petworth"),
    (StationCode.E06, "Fort Totten"),
    (StationCode.E07, "West Hyattsville"),
    (StationCode.E08, "Prince George's Plaza"),
    (StationCode.E09, "College Park-U of Md"),
    (StationCode.E10, "Greenbelt"),
    (StationCode.F01, "Gallery Pl-Chinatown"),
    (StationCode.F02, "Archives-Navy Memorial-Penn Quarter"),
    (StationCode.F03, "L'Enfant Plaza"),
    (StationCode.F04, "Waterfront"),
    (StationCode.F05, "Navy Yard-Ballpark"),
    (StationCode.F06, "Anacostia"),
    (StationCode.F07, "Congress Heights"),
    (StationCode.F08, "Southern Avenue"),
    (StationCode.F09, "Naylor Road"),
    (StationCode.F10, "Suitland"),
    (StationCode.F11, "Branch Ave"),
    (StationCode.G01, "Benning Road"),
    (StationCode.G02, "Capitol Heights"),
    (StationCode.G03, "Addison Road-Seat Pleasant"),
    (StationCode.G04, "Morgan Boulevard"),
    (StationCode.G05, "Largo Town Center"),
    (StationCode.J02, "Van Dorn Street"),
    (StationCode.J03, "Franconia-Springfield"),
    (StationCode.K01, "Court House"),
    (StationCode.K02, "Clarendon"),
    (StationCode.K03, "Virginia Square-GMU"),
    (StationCode.K04, "Ballston-MU"),
    (StationCode.K05, "East Falls Church"),
    (StationCode.K06, "West Falls Church-VT/UVA"),
    (StationCode.K07, "Dunn Loring-Merrifield"),
    (StationCode.K08, "Vienna/Fairfax-GMU"),
    (StationCode.N01, "McLean"),
    (StationCode.N02, "Tysons Corner"),
    (StationCode.N03, "Greensboro"),
    (StationCode.N04, "Spring Hill"),
    (StationCode.N06, "Wiehle-Reston East"),
    (StationCode.N07, "Reston Town Center"),
    (StationCode.N08, "Herndon"),
    (StationCode.N09, "Innovation Center"),
    (StationCode.N10, "Dulles International Airport"),
    (StationCode.N11, "Loudoun Gateway"),
    (StationCode.N12, "Ashburn"),
    (StationCode.UNKNOWN, UNKNOWN_NAME),
)

# Names riders use beyond the display names. Order matters: on a shared name
# the first entry wins, so upper-level platforms come first.
STATION_ALIASES: tuple[tuple[str, StationCode], ...] = (
    ("Metro Center", StationCode.A01),
    ("Metro Center (RD)", StationCode.A01),
    ("Metro Center (BL/OR/SV)", StationCode.C01),
    ("Dupont", StationCode.A03),
    ("Adams Morgan", StationCode.A04),
    ("Zoo", StationCode.A04),
    ("Woodley Park", StationCode.A04),
    ("Gallery Pl-Chinatown", StationCode.B01),
    ("Gallery Pl-Chinatown (RD)", StationCode.B01),
    ("Gallery Pl-Chinatown (GR/YL)", StationCode.F01),
    ("Chinatown", StationCode.B01),
    ("Gallery Pl", StationCode.B01),
    ("Fort Totten", StationCode.B06),
    ("Fort Totten (RD)", StationCode.B06),
    ("Fort Totten (GR/YL)", StationCode.E06),
    ("GWU", StationCode.C04),
    ("Foggy Bottom", StationCode.C04),
    ("DCA", StationCode.C10),
    ("National Airport", StationCode.C10),
    ("L'Enfant Plaza", StationCode.D03),
    ("L'Enfant Plaza (BL/OR/SV)", StationCode.D03),
    ("L'Enfant Plaza (GR/YL)", StationCode.F03),
    ("Convention Center", StationCode.E01),
    ("African-Amer Civil War Memorial", StationCode.E03),
    ("U Street", StationCode.E03),
    ("Cardozo", StationCode.E03),
    ("Georgia Ave", StationCode.E05),
    ("Petworth", StationCode.E05),
    ("UMD", StationCode.E09),
    ("College Park", StationCode.E09),
    ("Ballpark", StationCode.F05),
    ("Navy Yard", StationCode.F05),
    ("GMU", StationCode.K03),
    ("Virginia Square", StationCode.K03),
    ("MU", StationCode.K04),
    ("Ballston", StationCode.K04),
    ("Vienna", StationCode.K08),
    ("Wiehle", StationCode.N06),
    ("Reston", StationCode.N07),
    ("IAD", StationCode.N10),
    ("Dulles", StationCode.N10),
    ("Loudoun", StationCode.N11),
)


@dataclass(frozen=True)
class StationDirectory:
    """Read-only lookup tables between station codes and names."""

    names_by_code: Mapping[StationCode, str]
    codes_by_name: Mapping[str, StationCode]
    codes_by_value: Mapping[str, StationCode]

    def resolve_code(self, value: str) -> StationCode:
        """Resolve a station code or name; codes take precedence over names."""
        code = self.codes_by_value.get(value)
        if code is not None:
            return code
        code = self.codes_by_name.get(value)
        if code is not None:
            return code
        raise InvalidStationError()

    def display_name(self, code: StationCode) -> str:
        return self.names_by_code.get(code, UNKNOWN_NAME)

    def stations(self) -> list[StationCode]:
        """Every real station code, in code order."""
        return [code for code in self.names_by_code if code is not StationCode.UNKNOWN]

    def codes_for_name(self, name: str) -> tuple[StationCode, ...]:
        """All codes sharing a display name (co-located platforms)."""
        return tuple(code for code, station_name in self.names_by_code.items() if station_name == name)


def build_directory(
    station_names: tuple[tuple[StationCode, str], ...] = STATION_NAMES,
    aliases: tuple[tuple[str, StationCode], ...] = STATION_ALIASES,
) -> StationDirectory:
    """Build the lookup tables. Aliases are consulted before display names."""
    names_by_code: dict[StationCode, str] = {}
    codes_by_name: dict[str, StationCode] = {}

    for alias, code in aliases:
        codes_by_name.setdefault(alias, code)
    for code, name in station_names:
        names_by_code[code] = name
        codes_by_name.setdefault(name, code)

    codes_by_value = {code.value: code for code in names_by_code}
    return StationDirectory(
        names_by_code=MappingProxyType(names_by_code),
        codes_by_name=MappingProxyType(codes_by_name),
        codes_by_value=MappingProxyType(codes_by_value),
    )


@lru_cache(maxsize=None)
def get_directory() -> StationDirectory:
    """Process-wide directory, built on first use."""
    return build_directory()


def resolve_code(value: str) -> StationCode:
    """Resolve user input (a code such as ``K03`` or a name such as ``GMU``)."""
    return get_directory().resolve_code(value)


def display_name(code: StationCode) -> str:
    """Display name for a code; ``UNKNOWN`` for the sentinel."""
    return get_directory().display_name(code)


__all__ = [
    "UNKNOWN_NAME",
    "StationCode",
    "STATION_NAMES",
    "STATION_ALIASES",
    "StationDirectory",
    "build_directory",
    "get_directory",
    "resolve_code",
    "display_name",
]
