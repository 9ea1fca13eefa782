"""
Canonical URL building.

Many URL shapes are accepted on input; links, canonical tags and redirect
targets always use the shortest one: /bookshop/{name-slug}.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from indiebookshop.locations import county_slug, normalize_state
from indiebookshop.models import Bookshop
from indiebookshop.slugs import slugify


def canonical_path(bookshop: Bookshop) -> str:
    """
    Canonical path for a bookshop.

    Falls back to the numeric id when the name slugifies to nothing
    (e.g. a name written entirely in non-Latin script).
    """
    slug = slugify(bookshop.name)
    return f"/bookshop/{slug or bookshop.id}"


def build_canonical_url(bookshop: Bookshop, base_url: str) -> str:
    """
    Absolute canonical URL for a bookshop.

    Args:
        bookshop: Resolved bookshop
        base_url: Site origin, e.g. 'https://www.indiebookshop.com'

    Returns:
        str: e.g. 'https://www.indiebookshop.com/bookshop/powells-books'
    """
    return f"{(base_url or '').rstrip('/')}{canonical_path(bookshop)}"


def build_county_url(county: str, state: str, base_url: str = '') -> str:
    """
    State-qualified county directory URL.

    Used for county canonical tags and for the links offered when a county
    name exists in several states.

    Args:
        county: County name as stored (e.g. 'Washington County')
        state: State abbreviation or full name
        base_url: Optional site origin; relative path when empty

    Returns:
        str: e.g. '/directory/county/or/washington'
    """
    state_code = slugify(normalize_state(state))
    return f"{(base_url or '').rstrip('/')}/directory/county/{state_code}/{county_slug(county)}"


def build_collection_canonical_url(bookshop: Bookshop, bookshops: Iterable[Bookshop], base_url: str) -> str:
    """
    Canonical URL that is guaranteed to resolve back to ``bookshop``.

    Same as build_canonical_url unless the slug URL would resolve elsewhere:
    another bookshop shares the name slug, or the slug is all digits and
    equals another bookshop's id. The id form is used instead.
    """
    slug = slugify(bookshop.name)
    numeric_slug = int(slug) if slug.isdigit() else None
    shared = slug and any(
        other.id != bookshop.id
        and (slugify(other.name) == slug or other.id == numeric_slug)
        for other in bookshops
    )
    if shared:
        return f"{(base_url or '').rstrip('/')}/bookshop/{bookshop.id}"
    return build_canonical_url(bookshop, base_url)


def build_canonical_paths(bookshops: Iterable[Bookshop]) -> dict[int, str]:
    """
    Relative canonical path for every bookshop in a collection, keyed by id.

    Gives the same answer as build_collection_canonical_url for each bookshop
    but scans the collection once, so listing pages can link every entry.

    Args:
        bookshops: Bookshop collection

    Returns:
        dict: bookshop id -> '/bookshop/{slug}' or '/bookshop/{id}'
    """
    bookshops = list(bookshops)
    slugs = {b.id: slugify(b.name) for b in bookshops}
    slug_counts = Counter(slugs[b.id] for b in bookshops)
    ids = {b.id for b in bookshops}

    paths = {}
    for bookshop in bookshops:
        slug = slugs[bookshop.id]
        shadowed = slug.isdigit() and int(slug) != bookshop.id and int(slug) in ids
        if slug and (slug_counts[slug] > 1 or shadowed):
            paths[bookshop.id] = f"/bookshop/{bookshop.id}"
        else:
            paths[bookshop.id] = canonical_path(bookshop)
    return paths
