"""Read-only country code table used by the author profile parser."""

from collections.abc import Mapping
from types import MappingProxyType

UNKNOWN_COUNTRY_CODE = "XX"

COUNTRY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "AE": "United Arab Emirates",
        "AR": "Argentina",
        "AT": "Austria",
        "AU": "Australia",
        "AZ": "Azerbaijan",
        "BD": "Bangladesh",
        "BE": "Belgium",
        "BG": "Bulgaria",
        "BR": "Brazil",
        "BY": "Belarus",
        "CA": "Canada",
        "CH": "Switzerland",
        "CL": "Chile",
        "CN": "China",
        "CO": "Colombia",
        "CZ": "Czech Republic",
        "DE": "Germany",
        "DK": "Denmark",
        "DZ": "Algeria",
        "EE": "Estonia",
        "EG": "Egypt",
        "ES": "Spain",
        "FI": "Finland",
        "FR": "France",
        "GB": "United Kingdom",
        "GR": "Greece",
        "HK": "Hong Kong",
        "HU": "Hungary",
        "ID": "Indonesia",
        "IE": "Ireland",
        "IL": "Israel",
        "IN": "India",
        "IQ": "Iraq",
        "IR": "Iran",
        "IT": "Italy",
        "JO": "Jordan",
        "JP": "Japan",
        "KR": "South Korea",
        "KW": "Kuwait",
        "KZ": "Kazakhstan",
        "LT": "Lithuania",
        "LV": "Latvia",
        "MA": "Morocco",
        "MX": "Mexico",
        "MY": "Malaysia",
        "NG": "Nigeria",
        "NL": "Netherlands",
        "NO": "Norway",
        "NZ": "New Zealand",
        "PE": "Peru",
        "PH": "Philippines",
        "PK": "Pakistan",
        "PL": "Poland",
        "PS": "Palestine",
        "PT": "Portugal",
        "RO": "Romania",
        "RS": "Serbia",
        "RU": "Russia",
        "SA": "Saudi Arabia",
        "SE": "Sweden",
        "SG": "Singapore",
        "SK": "Slovakia",
        "SY": "Syria",
        "TH": "Thailand",
        "TN": "Tunisia",
        "TR": "Turkey",
        "TW": "Taiwan",
        "UA": "Ukraine",
        "US": "United States",
        "UY": "Uruguay",
        "VE": "Venezuela",
        "VN": "Vietnam",
        "ZA": "South Africa",
    }
)


def country_name(code: str, table: Mapping[str, str] = COUNTRY_NAMES) -> str:
    """Resolve a two-letter code; unknown codes resolve to themselves."""
    code = (code or "").strip().upper()
    if not code:
        return ""
    if code == UNKNOWN_COUNTRY_CODE:
        return "Unknown"
    return table.get(code, code)
