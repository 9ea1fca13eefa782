"""
Redirect decisions for bookshop detail URLs and legacy directory URLs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import unquote, urlencode, urlsplit

from indiebookshop.locations import county_slug, normalize_state
from indiebookshop.models import Bookshop
from indiebookshop.resolver import Resolution, ResolutionStatus
from indiebookshop.slugs import slugify

PERMANENT_REDIRECT = 301


class RedirectAction(Enum):
    SERVE = 'serve'
    REDIRECT = 'redirect'
    NOT_FOUND = 'not_found'
    DISAMBIGUATE = 'disambiguate'


@dataclass(frozen=True)
class RedirectDecision:
    action: RedirectAction
    target: Optional[str] = None
    status_code: Optional[int] = None
    candidates: tuple[Bookshop, ...] = ()


def decide_redirect(
    requested_path: str,
    resolution: Resolution,
    canonical_url: Optional[str] = None,
) -> RedirectDecision:
    """
    Decide how to answer a bookshop detail request.

    Args:
        requested_path: Path as requested, e.g. '/bookshop/42'
        resolution: Result of resolver.resolve
        canonical_url: Canonical URL of the matched bookshop (required for MATCH)

    Returns:
        RedirectDecision: SERVE when the request is already canonical,
        REDIRECT (301) to the canonical URL otherwise, DISAMBIGUATE with the
        candidates for ambiguous matches, NOT_FOUND when nothing matched
    """
    if resolution.status is ResolutionStatus.NO_MATCH:
        return RedirectDecision(RedirectAction.NOT_FOUND)

    if resolution.status is ResolutionStatus.AMBIGUOUS:
        return RedirectDecision(RedirectAction.DISAMBIGUATE, candidates=resolution.matches)

    if not canonical_url:
        raise ValueError("canonical_url is required for a matched bookshop")

    if requested_path == urlsplit(canonical_url).path:
        return RedirectDecision(RedirectAction.SERVE)

    return RedirectDecision(
        RedirectAction.REDIRECT,
        target=canonical_url,
        status_code=PERMANENT_REDIRECT,
    )


# Old list pages that now live on the unified directory page
_DIRECTORY_ALIASES = frozenset({
    '/directory/browse',
    '/directory/states',
    '/directory/cities',
    '/directory/counties',
    '/directory/state',
    '/directory/city',
})

_STATE_PAGE = re.compile(r'^/(?:directory/)?state/([^/]+)$')
_CITY_STATE_PAGE = re.compile(r'^/directory/city/([^/]+)/([^/]+)$')
_CITY_PAGE = re.compile(r'^/directory/city/([^/]+)$')
_CITY_STATE_COMBINED = re.compile(r'^/directory/city-state/([^/]+)$')
_COUNTY_STATE_COMBINED = re.compile(r'^/directory/county-state/([^/]+)$')
_LEGACY_BOOKSTORE = re.compile(r'^/bookstore/(\d+)$')


def _decode_slug(slug: str) -> str:
    # "new-york" -> "New York"
    return ' '.join(word.capitalize() for word in slug.split('-') if word)


def _directory_url(**params: str) -> str:
    return f"/directory?{urlencode(params)}"


def _split_combined(combined: str) -> Optional[tuple[str, str]]:
    # "portland-or" -> ("portland", "or"); the last part is always the state
    parts = combined.split('-')
    if len(parts) < 2:
        return None
    return '-'.join(parts[:-1]), parts[-1]


def legacy_redirect_target(path: str) -> Optional[str]:
    """
    Map a legacy location URL to its current form.

    Args:
        path: Request path (percent-encoded or decoded)

    Returns:
        str or None: Redirect target (to be answered with a 301), or None
        when the path needs no redirect
    """
    if not path or path.startswith('/static/') or '.' in path:
        return None

    path = unquote(path)
    if path in _DIRECTORY_ALIASES:
        return '/directory'

    match = _STATE_PAGE.match(path)
    if match:
        return _directory_url(state=normalize_state(match.group(1)))

    match = _CITY_STATE_PAGE.match(path)
    if match:
        state, city = match.groups()
        return _directory_url(state=normalize_state(state), city=_decode_slug(city))

    match = _CITY_PAGE.match(path)
    if match:
        return _directory_url(city=_decode_slug(match.group(1)))

    match = _CITY_STATE_COMBINED.match(path)
    if match:
        parts = _split_combined(match.group(1))
        if parts:
            city, state = parts
            return _directory_url(state=normalize_state(state), city=_decode_slug(city))

    match = _COUNTY_STATE_COMBINED.match(path)
    if match:
        parts = _split_combined(match.group(1))
        if parts:
            county, state = parts
            return f"/directory/county/{slugify(normalize_state(state))}/{county_slug(county)}"

    match = _LEGACY_BOOKSTORE.match(path)
    if match:
        return f"/bookshop/{match.group(1)}"

    return None
