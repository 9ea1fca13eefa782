"""
Parse incoming request paths into typed route shapes.

Bookshop detail URLs come in several historical shapes:
    /bookshop/:id                          (legacy numeric id)
    /bookshop/:name
    /bookshop/:state/:city/:name
    /bookshop/:state/:county/:city/:name

Each shape is a frozen dataclass so the resolver can dispatch on type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

BOOKSHOP_PREFIX = 'bookshop'
COUNTY_PREFIX = ('directory', 'county')

_NUMERIC = re.compile(r'[0-9]+')


@dataclass(frozen=True)
class NumericId:
    bookshop_id: int
    # The raw segment, kept so a shop named e.g. "1984" can still be found by slug
    name: str


@dataclass(frozen=True)
class NameOnly:
    name: str


@dataclass(frozen=True)
class StateCityName:
    state: str
    city: str
    name: str


@dataclass(frozen=True)
class StateCountyCityName:
    state: str
    county: str
    city: str
    name: str


@dataclass(frozen=True)
class Unrecognized:
    segments: tuple[str, ...]


BookshopPath = Union[NumericId, NameOnly, StateCityName, StateCountyCityName, Unrecognized]


@dataclass(frozen=True)
class CountyPath:
    county: str
    state: Optional[str] = None


def split_path(path: str) -> list[str]:
    """Split a URL path into lowercase, non-empty segments."""
    if not path:
        return []
    return [segment.lower() for segment in path.split('/') if segment]


def parse_bookshop_path(path: str) -> BookshopPath:
    """
    Parse a bookshop detail path.

    Args:
        path: Request path, e.g. '/bookshop/or/portland/powells-books'

    Returns:
        BookshopPath: One of NumericId, NameOnly, StateCityName,
        StateCountyCityName, or Unrecognized for any other shape
    """
    segments = split_path(path)
    if not segments or segments[0] != BOOKSHOP_PREFIX:
        return Unrecognized(tuple(segments))

    rest = segments[1:]
    if len(rest) == 1:
        segment = rest[0]
        if _NUMERIC.fullmatch(segment):
            return NumericId(bookshop_id=int(segment), name=segment)
        return NameOnly(name=segment)
    if len(rest) == 3:
        state, city, name = rest
        return StateCityName(state=state, city=city, name=name)
    if len(rest) == 4:
        state, county, city, name = rest
        return StateCountyCityName(state=state, county=county, city=city, name=name)
    return Unrecognized(tuple(segments))


def parse_county_path(path: str) -> Optional[CountyPath]:
    """
    Parse a county directory path.

    Accepts '/directory/county/:county' and '/directory/county/:state/:county'.

    Returns:
        CountyPath or None if the path is not a county directory path
    """
    segments = split_path(path)
    if tuple(segments[:2]) != COUNTY_PREFIX:
        return None
    rest = segments[2:]
    if len(rest) == 1:
        return CountyPath(county=rest[0])
    if len(rest) == 2:
        return CountyPath(county=rest[1], state=rest[0])
    return None
