"""Normalization utilities for countries and web domains.

All functions handle None and blank strings gracefully by returning None
instead of raising exceptions.
"""

import re
import unicodedata
from typing import Optional

from rapidfuzz import fuzz, process

# Supported countries with their ISO codes and known name variations
COUNTRY_MAPPING: dict[str, dict] = {
    "AR": {"name": "Argentina", "variations": ["Argentina", "Argentine Republic"]},
    "BO": {"name": "Bolivia", "variations": ["Bolivia", "Plurinational State of Bolivia"]},
    "BR": {"name": "Brazil", "variations": ["Brazil", "Brasil", "Federative Republic of Brazil"]},
    "CL": {"name": "Chile", "variations": ["Chile", "Republic of Chile"]},
    "CO": {"name": "Colombia", "variations": ["Colombia", "Republic of Colombia"]},
    "CR": {"name": "Costa Rica", "variations": ["Costa Rica", "Republic of Costa Rica"]},
    "CU": {"name": "Cuba", "variations": ["Cuba", "Republic of Cuba"]},
    "DO": {"name": "Dominican Republic", "variations": ["Dominican Republic", "República Dominicana"]},
    "EC": {"name": "Ecuador", "variations": ["Ecuador", "Republic of Ecuador"]},
    "SV": {"name": "El Salvador", "variations": ["El Salvador", "Republic of El Salvador"]},
    "GT": {"name": "Guatemala", "variations": ["Guatemala", "Republic of Guatemala"]},
    "HN": {"name": "Honduras", "variations": ["Honduras", "Republic of Honduras"]},
    "MX": {"name": "Mexico", "variations": ["Mexico", "México", "United Mexican States"]},
    "PA": {"name": "Panama", "variations": ["Panama", "Republic of Panama", "Panamá"]},
    "PY": {"name": "Paraguay", "variations": ["Paraguay", "Republic of Paraguay"]},
    "PE": {"name": "Peru", "variations": ["Peru", "Perú", "Republic of Peru"]},
    "UY": {"name": "Uruguay", "variations": ["Uruguay", "Oriental Republic of Uruguay"]},
    "ES": {"name": "Spain", "variations": ["Spain", "España", "Kingdom of Spain"]},
    "TR": {"name": "Turkey", "variations": ["Turkey", "Türkiye", "Republic of Turkey", "Turkiye"]},
}

FUZZY_COUNTRY_THRESHOLD = 85


def _fold(text: str) -> str:
    """Lowercase and strip diacritics: 'México' -> 'mexico'."""
    text = unicodedata.normalize("NFKD", text.strip().lower())
    return text.encode("ascii", "ignore").decode("ascii")


# Folded variation -> ISO code
_VARIATIONS_TO_ISO: dict[str, str] = {
    _fold(variation): code
    for code, data in COUNTRY_MAPPING.items()
    for variation in data["variations"]
}


def get_country_code(value: Optional[str]) -> Optional[str]:
    """Return the ISO code if ``value`` is a supported code, else None."""
    if not value:
        return None
    code = value.strip().upper()
    return code if code in COUNTRY_MAPPING else None


def get_standard_country_name(value: Optional[str]) -> Optional[str]:
    """Return the canonical country name for a supported ISO code."""
    code = get_country_code(value)
    return COUNTRY_MAPPING[code]["name"] if code else None


def resolve_country(value: Optional[str]) -> Optional[str]:
    """Resolve a country code or name to a supported ISO code.

    Tries, in order: exact ISO code, exact name variation (case and accent
    insensitive), then a fuzzy match over all variations.

    Examples:
        "mx" -> "MX", "México" -> "MX", "Turkiye" -> "TR", "Brasill" -> "BR"
    """
    if not value or not value.strip():
        return None

    code = get_country_code(value)
    if code:
        return code

    folded = _fold(value)
    if folded in _VARIATIONS_TO_ISO:
        return _VARIATIONS_TO_ISO[folded]

    match = process.extractOne(
        folded,
        list(_VARIATIONS_TO_ISO.keys()),
        scorer=fuzz.ratio,
        score_cutoff=FUZZY_COUNTRY_THRESHOLD,
    )
    if match:
        return _VARIATIONS_TO_ISO[match[0]]
    return None


def normalize_domain(website: Optional[str]) -> Optional[str]:
    """Strip the scheme and trailing slash from a website URL.

    "https://www.uba.ar/" -> "www.uba.ar"
    """
    if not website:
        return None
    domain = re.sub(r"^https?://", "", website.strip(), flags=re.IGNORECASE)
    domain = domain.rstrip("/")
    return domain or None
