"""
State/province lookup and county name normalization.

Single source of truth:
- STATE_NAMES: abbreviation -> full name (e.g. "OR" -> "Oregon")

The table is read-only and built once at import time. Unknown codes pass
through unchanged so that unexpected values still render.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

from indiebookshop.slugs import slugify


STATE_NAMES: Mapping[str, str] = MappingProxyType({
    'AL': 'Alabama',
    'AK': 'Alaska',
    'AZ': 'Arizona',
    'AR': 'Arkansas',
    'CA': 'California',
    'CO': 'Colorado',
    'CT': 'Connecticut',
    'DE': 'Delaware',
    'DC': 'District of Columbia',
    'FL': 'Florida',
    'GA': 'Georgia',
    'HI': 'Hawaii',
    'ID': 'Idaho',
    'IL': 'Illinois',
    'IN': 'Indiana',
    'IA': 'Iowa',
    'KS': 'Kansas',
    'KY': 'Kentucky',
    'LA': 'Louisiana',
    'ME': 'Maine',
    'MD': 'Maryland',
    'MA': 'Massachusetts',
    'MI': 'Michigan',
    'MN': 'Minnesota',
    'MS': 'Mississippi',
    'MO': 'Missouri',
    'MT': 'Montana',
    'NE': 'Nebraska',
    'NV': 'Nevada',
    'NH': 'New Hampshire',
    'NJ': 'New Jersey',
    'NM': 'New Mexico',
    'NY': 'New York',
    'NC': 'North Carolina',
    'ND': 'North Dakota',
    'OH': 'Ohio',
    'OK': 'Oklahoma',
    'OR': 'Oregon',
    'PA': 'Pennsylvania',
    'RI': 'Rhode Island',
    'SC': 'South Carolina',
    'SD': 'South Dakota',
    'TN': 'Tennessee',
    'TX': 'Texas',
    'UT': 'Utah',
    'VT': 'Vermont',
    'VA': 'Virginia',
    'WA': 'Washington',
    'WV': 'West Virginia',
    'WI': 'Wisconsin',
    'WY': 'Wyoming',
    # Canadian provinces
    'BC': 'British Columbia',
    'ON': 'Ontario',
    'QC': 'Quebec',
    'AB': 'Alberta',
    'MB': 'Manitoba',
    'NS': 'Nova Scotia',
    'NB': 'New Brunswick',
    'SK': 'Saskatchewan',
    # Territories
    'HM': 'Heard and McDonald Islands',
    'VI': 'Virgin Islands',
    'PR': 'Puerto Rico',
    'GU': 'Guam',
    'AS': 'American Samoa',
    'MP': 'Northern Mariana Islands',
})


def _name_key(name: str) -> str:
    # "New-York", "new york" and " NEW  YORK " share one key
    return " ".join(name.replace("-", " ").split()).lower()


# Reverse mapping, keyed on the normalized full name.
_ABBREVIATIONS_BY_NAME: Mapping[str, str] = MappingProxyType({
    _name_key(full_name): code for code, full_name in STATE_NAMES.items()
})

if len(_ABBREVIATIONS_BY_NAME) != len(STATE_NAMES):
    raise ValueError("State name collision detected; full names must be unique.")

_COUNTY_SUFFIX = re.compile(r"\s*\bcounty$")


def abbreviation_to_full_name(code: Optional[str]) -> str:
    """
    Get the full state/province name for an abbreviation.

    Args:
        code: Abbreviation in any case (e.g. 'or', 'OR')

    Returns:
        str: Full name (e.g. 'Oregon'), or the input unchanged if unknown
    """
    if not code:
        return ""
    return STATE_NAMES.get(code.strip().upper(), code)


def full_name_to_abbreviation(name: Optional[str]) -> Optional[str]:
    """
    Get the abbreviation for a full state/province name.

    Hyphens are treated as spaces, so slugs such as 'new-york' resolve too.

    Args:
        name: Full name in any case (e.g. 'Oregon', 'new york')

    Returns:
        str or None: Abbreviation (e.g. 'OR'), or None if the name is unknown
    """
    if not name:
        return None
    return _ABBREVIATIONS_BY_NAME.get(_name_key(name))


def normalize_state(value: Optional[str]) -> str:
    """
    Normalize a state value to its uppercase abbreviation where the table knows it.

    Upstream data holds both 'OR' and 'Oregon'; anything outside the table is
    returned stripped but otherwise unchanged.
    """
    if not value:
        return ""
    stripped = value.strip()
    if stripped.upper() in STATE_NAMES:
        return stripped.upper()
    return full_name_to_abbreviation(stripped) or stripped


def state_slug(code: Optional[str]) -> str:
    """Slug of the full state name (e.g. 'NY' -> 'new-york')."""
    return slugify(abbreviation_to_full_name(code))


def state_matches(entity_state: Optional[str], state_segment: str) -> bool:
    """
    Check a URL state segment against a bookshop's state.

    Historical links used both the slugified full name ('oregon') and the
    lowercase abbreviation ('or'), so either form is accepted.
    """
    if not entity_state or not state_segment:
        return False
    segment = state_segment.lower()
    return state_slug(entity_state) == segment or entity_state.lower() == segment


def normalize_county_name(raw: Optional[str]) -> str:
    """
    Normalize a county name for comparison.

    Hyphens become spaces, whitespace is collapsed, case is folded and a
    trailing 'County' is removed, so 'Sussex County', 'sussex-county' and
    'Sussex' all normalize to 'sussex'.

    Args:
        raw: County name as entered, or a county URL segment

    Returns:
        str: Normalized county name ('' for empty input)
    """
    if not raw:
        return ""
    s = " ".join(raw.replace("-", " ").split()).lower()
    return _COUNTY_SUFFIX.sub("", s)


def counties_match(a: Optional[str], b: Optional[str]) -> bool:
    """
    Fuzzy county comparison.

    Two counties match when their normalized names are equal or one contains
    the other. This tolerates data-entry variance but also lets short names
    match longer ones ('York' matches 'New York'). An empty side never matches.
    """
    left = normalize_county_name(a)
    right = normalize_county_name(b)
    if not left or not right:
        return False
    return left == right or left in right or right in left


def county_slug(county: Optional[str]) -> str:
    """Slug of a county name without its 'County' suffix (e.g. 'Sussex County' -> 'sussex')."""
    return slugify(normalize_county_name(county))
