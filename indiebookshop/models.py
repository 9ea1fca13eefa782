"""
Bookshop record as consumed by the slug resolver and the web layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from indiebookshop.locations import normalize_state


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _feature_ids(value: Any) -> tuple[int, ...]:
    """Feature ids as ints; accepts a list or a comma-separated string and drops unparseable entries."""
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(',')
    elif not isinstance(value, (list, tuple)):
        value = [value]
    ids = []
    for item in value:
        try:
            ids.append(int(str(item).strip()))
        except ValueError:
            continue
    return tuple(ids)


@dataclass(frozen=True)
class Bookshop:
    id: int
    name: str
    city: str
    state: str
    county: Optional[str] = None
    street: Optional[str] = None
    zip: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    live: bool = True
    feature_ids: tuple[int, ...] = field(default_factory=tuple)

    @classmethod
    def from_record(cls, record: dict) -> "Bookshop":
        """
        Build a Bookshop from an upstream JSON record.

        The state is normalized to its abbreviation when the lookup table
        knows it; multi-word fields are accepted in snake or camel case.

        Args:
            record: Dictionary as returned by the bookshops API or data file

        Returns:
            Bookshop: Parsed record

        Raises:
            ValueError: If the record has no usable id or name
        """
        try:
            bookshop_id = int(record.get('id'))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Bookshop record has invalid id: {record.get('id')!r}") from e

        name = _clean(record.get('name'))
        if not name:
            raise ValueError(f"Bookshop record {bookshop_id} has no name")

        feature_ids = _feature_ids(record.get('feature_ids', record.get('featureIds')))
        live = record.get('live')

        return cls(
            id=bookshop_id,
            name=name,
            city=_clean(record.get('city')) or '',
            state=normalize_state(_clean(record.get('state'))),
            county=_clean(record.get('county')),
            street=_clean(record.get('street')),
            zip=_clean(record.get('zip')),
            description=_clean(record.get('description')),
            website=_clean(record.get('website')),
            phone=_clean(record.get('phone')),
            latitude=_clean(record.get('latitude', record.get('lat_numeric'))),
            longitude=_clean(record.get('longitude', record.get('lng_numeric'))),
            live=live is not False,
            feature_ids=feature_ids,
        )
