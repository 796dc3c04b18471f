"""Tag decision activity — map a match to ExifTool field assignments.

| tier   | fields written                                              |
|--------|-------------------------------------------------------------|
| Exact  | location name, city, state, country, country code, new IDs  |
| Nearby | city, state, country, country code                          |
| None   | nothing                                                     |

A field is emitted only when its final value is non-empty, so a run
never blanks an existing tag.  A region override replaces city / state /
country / country code before the table is applied, but only with the
override's non-empty values.

Identifiers are append-only: any identifier already on the file is
excluded, which makes repeated runs idempotent.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from photo_geotag.core.constants import (
    TAG_CITY,
    TAG_COUNTRY,
    TAG_COUNTRY_CODE,
    TAG_LOCATION_IDENTIFIERS,
    TAG_LOCATION_NAME,
    TAG_STATE,
)
from photo_geotag.models.match import MatchTier

if TYPE_CHECKING:
    from photo_geotag.models.match import MatchResult


@dataclass(frozen=True, slots=True)
class TagAssignments:
    """Concrete writes planned for one file.

    Attributes:
        fields: Scalar tags to overwrite, tag name → value.
        append_identifiers: Identifiers to append to the list tag.
    """

    fields: dict[str, str] = field(default_factory=dict)
    append_identifiers: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.fields and not self.append_identifiers

    def as_dict(self) -> dict[str, object]:
        """Flatten into one mapping, identifiers under their list tag."""
        flat: dict[str, object] = dict(self.fields)
        if self.append_identifiers:
            flat[TAG_LOCATION_IDENTIFIERS] = list(self.append_identifiers)
        return flat


def build_tag_assignments(
    match: MatchResult,
    existing_identifiers: Iterable[str] = (),
) -> TagAssignments:
    """Decide which tags to write for a resolved match.

    Args:
        match: The resolver's result for the file.
        existing_identifiers: Identifiers already present on the file.

    Returns:
        The scalar fields and identifiers to append.  Empty for tier None.
    """
    if match.tier is MatchTier.NONE:
        return TagAssignments()

    record = match.record
    city = record.city
    state = record.state_province
    country = record.country
    country_code = record.country_code

    region = match.region_override
    if region is not None:
        city = region.city or city
        state = region.state_province or state
        country = region.country or country
        country_code = region.country_code or country_code

    candidates: list[tuple[str, str]] = []
    if match.tier is MatchTier.EXACT:
        candidates.append((TAG_LOCATION_NAME, record.name))
    candidates.extend(
        [
            (TAG_CITY, city),
            (TAG_STATE, state),
            (TAG_COUNTRY, country),
            (TAG_COUNTRY_CODE, country_code),
        ]
    )
    fields = {tag: value for tag, value in candidates if value}

    identifiers: tuple[str, ...] = ()
    if match.tier is MatchTier.EXACT:
        identifiers = new_identifiers(record.identifiers, existing_identifiers)

    return TagAssignments(fields=fields, append_identifiers=identifiers)


def new_identifiers(candidates: Iterable[str], existing: Iterable[str]) -> tuple[str, ...]:
    """Return candidates not already present, first occurrence order, no repeats."""
    seen = set(existing)
    fresh: list[str] = []
    for identifier in candidates:
        if identifier and identifier not in seen:
            seen.add(identifier)
            fresh.append(identifier)
    return tuple(fresh)
