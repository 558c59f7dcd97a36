"""
Region hierarchy: countries (regions) grouped into continents (super-regions).

Each continent has its own continental record type.
Country codes are ISO 3166-1 alpha-2.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import RecordType


@dataclass(frozen=True)
class Continent:
    code: str
    name: str
    record_type: RecordType


CONTINENTS: list[Continent] = [
    Continent("AFRICA", "Africa", RecordType.AFR),
    Continent("ASIA", "Asia", RecordType.ASR),
    Continent("EUROPE", "Europe", RecordType.ER),
    Continent("NORTH_AMERICA", "North America", RecordType.NAR),
    Continent("OCEANIA", "Oceania", RecordType.OCR),
    Continent("SOUTH_AMERICA", "South America", RecordType.SAR),
]

_COUNTRIES_BY_CONTINENT: dict[str, str] = {
    "AFRICA": (
        "AO BF BI BJ BW CD CF CG CI CM CV DJ DZ EG EH ER ET GA GH GM GN GQ GW KE KM LR LS LY "
        "MA MG ML MR MU MW MZ NA NE NG RW SC SD SL SN SO SS ST SZ TD TG TN TZ UG ZA ZM ZW"
    ),
    "ASIA": (
        "AE AF AM AZ BD BH BN BT CN GE HK ID IL IN IQ IR JO JP KG KH KP KR KW KZ LA LB LK MM "
        "MN MO MV MY NP OM PH PK PS QA SA SG SY TH TJ TL TM TW UZ VN YE"
    ),
    "EUROPE": (
        "AD AL AT BA BE BG BY CH CY CZ DE DK EE ES FI FO FR GB GI GR HR HU IE IS IT LI LT LU "
        "LV MC MD ME MK MT NL NO PL PT RO RS RU SE SI SK SM TR UA VA XK"
    ),
    "NORTH_AMERICA": (
        "AG BB BS BZ CA CR CU DM DO GD GT HN HT JM KN LC MX NI PA PR SV TT US VC"
    ),
    "OCEANIA": "AU FJ FM KI MH NR NZ PG PW SB TO TV VU WS",
    "SOUTH_AMERICA": "AR BO BR CL CO EC GY PE PY SR UY VE",
}

# country code -> continent code
COUNTRY_SUPER_REGIONS: dict[str, str] = {
    country: continent
    for continent, countries in _COUNTRIES_BY_CONTINENT.items()
    for country in countries.split()
}


def get_continent(code: Optional[str]) -> Optional[Continent]:
    return next((c for c in CONTINENTS if c.code == code), None)


def get_super_region(region_code: Optional[str]) -> Optional[str]:
    """Continent code of a country, or None if the country is unknown."""
    if not region_code:
        return None
    return COUNTRY_SUPER_REGIONS.get(region_code)


def get_continental_record_type(super_region_code: str) -> RecordType:
    continent = get_continent(super_region_code)
    if continent is None:
        raise ValueError(f"Unknown super-region: {super_region_code}")
    return continent.record_type


def get_continent_for_record_type(record_type: RecordType | str) -> Optional[Continent]:
    """Continent of a continental record type; None for WR and NR."""
    return next((c for c in CONTINENTS if c.record_type == record_type), None)


def get_shared_regions(region_codes: Iterable[Optional[str]]) -> tuple[Optional[str], Optional[str]]:
    """
    Get (region_code, super_region_code) shared by all participants of a result.

    region_code is only set if everyone is from the same country,
    super_region_code if everyone is from the same continent.
    """
    codes = list(region_codes)
    if not codes:
        return None, None

    first_region = codes[0]
    same_region = all(code == first_region for code in codes)

    first_super_region = get_super_region(first_region)
    same_super_region = same_region or all(
        get_super_region(code) == first_super_region for code in codes[1:]
    )

    region_code = first_region if same_region else None
    super_region_code = first_super_region if same_super_region else None
    return region_code, super_region_code
