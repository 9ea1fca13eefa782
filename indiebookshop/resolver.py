"""
Resolve parsed URL shapes to bookshops.

All functions here are pure: they read an already-fetched bookshop
collection and never raise for unmatched or malformed input. "No match"
and "ambiguous" are ordinary results, not errors.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from indiebookshop.locations import (
    counties_match,
    normalize_county_name,
    normalize_state,
    state_matches,
)
from indiebookshop.models import Bookshop
from indiebookshop.slugs import slugify
from indiebookshop.url_parser import (
    BookshopPath,
    NameOnly,
    NumericId,
    StateCityName,
    StateCountyCityName,
    Unrecognized,
)

logger = logging.getLogger(__name__)


class ResolutionStatus(Enum):
    MATCH = 'match'
    NO_MATCH = 'no_match'
    AMBIGUOUS = 'ambiguous'


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a bookshop URL."""
    status: ResolutionStatus
    matches: tuple[Bookshop, ...] = ()

    @classmethod
    def from_matches(cls, matches: Sequence[Bookshop]) -> "Resolution":
        if not matches:
            return cls(ResolutionStatus.NO_MATCH)
        if len(matches) == 1:
            return cls(ResolutionStatus.MATCH, (matches[0],))
        return cls(ResolutionStatus.AMBIGUOUS, tuple(matches))

    @property
    def bookshop(self) -> Optional[Bookshop]:
        """The single matched bookshop, or None unless status is MATCH."""
        if self.status is ResolutionStatus.MATCH:
            return self.matches[0]
        return None


@dataclass(frozen=True)
class CountyResolution:
    """
    Outcome of a county directory lookup.

    ``states`` lists the distinct state abbreviations among the matches; more
    than one means the county name exists in several states and the caller
    must offer a state-qualified link for each.
    """
    status: ResolutionStatus
    matches: tuple[Bookshop, ...] = ()
    states: tuple[str, ...] = ()
    by_state: tuple[tuple[str, tuple[Bookshop, ...]], ...] = ()

    def in_state(self, state: str) -> tuple[Bookshop, ...]:
        """Matches in one state, by abbreviation."""
        return dict(self.by_state).get(state, ())


def _name_matches(bookshop: Bookshop, name_segment: str) -> bool:
    return slugify(bookshop.name) == name_segment


def _location_matches(bookshop: Bookshop, state: str, city: str, name: str) -> bool:
    return (
        _name_matches(bookshop, name)
        and slugify(bookshop.city) == city
        and state_matches(bookshop.state, state)
    )


def _county_constraint(bookshop: Bookshop, county_segment: str) -> bool:
    # Bookshops without county data are not excluded
    if not bookshop.county:
        return True
    return counties_match(bookshop.county, county_segment)


def resolve(parsed: BookshopPath, bookshops: Iterable[Bookshop]) -> Resolution:
    """
    Find the bookshop(s) a parsed detail URL refers to.

    Args:
        parsed: Result of parse_bookshop_path
        bookshops: Bookshop collection (may be empty)

    Returns:
        Resolution: MATCH with one bookshop, AMBIGUOUS with all candidates,
        or NO_MATCH

    Raises:
        TypeError: If ``parsed`` is not a known route shape
    """
    shops = list(bookshops)

    if isinstance(parsed, NumericId):
        matches = [b for b in shops if b.id == parsed.bookshop_id]
        if not matches:
            # A shop whose name is all digits has a numeric canonical slug
            matches = [b for b in shops if _name_matches(b, parsed.name)]
    elif isinstance(parsed, NameOnly):
        matches = [b for b in shops if _name_matches(b, parsed.name)]
    elif isinstance(parsed, StateCityName):
        matches = [
            b for b in shops
            if _location_matches(b, parsed.state, parsed.city, parsed.name)
        ]
    elif isinstance(parsed, StateCountyCityName):
        matches = [
            b for b in shops
            if _location_matches(b, parsed.state, parsed.city, parsed.name)
            and _county_constraint(b, parsed.county)
        ]
    elif isinstance(parsed, Unrecognized):
        matches = []
    else:
        raise TypeError(f"Unhandled bookshop path shape: {type(parsed).__name__}")

    resolution = Resolution.from_matches(matches)
    if resolution.status is ResolutionStatus.AMBIGUOUS:
        logger.debug(
            f"Ambiguous bookshop path {parsed}: "
            f"{[b.id for b in resolution.matches]}"
        )
    return resolution


def resolve_county(
    county_segment: str,
    bookshops: Iterable[Bookshop],
    state_segment: Optional[str] = None,
) -> CountyResolution:
    """
    Find the bookshops listed on a county directory page.

    Without a state, a county name found in more than one state is reported
    as AMBIGUOUS rather than picking one of the states.

    Args:
        county_segment: County URL segment (e.g. 'washington', 'sussex-county')
        bookshops: Bookshop collection
        state_segment: Optional state URL segment ('or' or 'oregon')

    Returns:
        CountyResolution
    """
    by_state: dict[str, list[Bookshop]] = defaultdict(list)
    for bookshop in bookshops:
        if not bookshop.county or not counties_match(bookshop.county, county_segment):
            continue
        if state_segment and not state_matches(bookshop.state, state_segment):
            continue
        by_state[normalize_state(bookshop.state)].append(bookshop)

    if not by_state:
        return CountyResolution(ResolutionStatus.NO_MATCH)

    states = tuple(sorted(by_state))
    matches = tuple(b for state in states for b in by_state[state])
    status = ResolutionStatus.MATCH if len(states) == 1 else ResolutionStatus.AMBIGUOUS
    return CountyResolution(
        status=status,
        matches=matches,
        states=states,
        by_state=tuple((state, tuple(by_state[state])) for state in states),
    )


def find_slug_collisions(bookshops: Iterable[Bookshop]) -> dict[str, list[Bookshop]]:
    """
    Group bookshops whose names produce the same slug.

    Returns:
        dict: slug -> bookshops, only for slugs shared by two or more bookshops
    """
    by_slug: dict[str, list[Bookshop]] = defaultdict(list)
    for bookshop in bookshops:
        slug = slugify(bookshop.name)
        if slug:
            by_slug[slug].append(bookshop)
    return {slug: shops for slug, shops in by_slug.items() if len(shops) > 1}


def filter_bookshops(
    bookshops: Iterable[Bookshop],
    state: Optional[str] = None,
    city: Optional[str] = None,
    county: Optional[str] = None,
) -> list[Bookshop]:
    """
    Directory filter over state, city and county.

    State is compared on normalized abbreviations, city on slugs and county
    with counties_match. Empty filters are ignored.
    """
    state_code = normalize_state(state).upper() if state else None
    city_slug = slugify(city) if city else None

    results = []
    for bookshop in bookshops:
        if state_code and normalize_state(bookshop.state).upper() != state_code:
            continue
        if city_slug and slugify(bookshop.city) != city_slug:
            continue
        if county and not counties_match(bookshop.county, county):
            continue
        results.append(bookshop)
    return results


def counties_for_state(bookshops: Iterable[Bookshop], state: str) -> list[str]:
    """
    Distinct county names for a state, sorted.

    Variants of the same county ('Sussex' and 'Sussex County') are listed once,
    using the first spelling seen.
    """
    state_code = normalize_state(state).upper()
    seen: dict[str, str] = {}
    for bookshop in bookshops:
        if not bookshop.county or normalize_state(bookshop.state).upper() != state_code:
            continue
        seen.setdefault(normalize_county_name(bookshop.county), bookshop.county)
    return sorted(seen.values(), key=str.lower)
