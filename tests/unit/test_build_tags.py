"""Tests for the build_tags activity.

Covers:
- Per-tier field selection (Exact / Nearby / None)
- Empty values never emitted
- Region override of city / state / country / country code
- Identifier deduplication and idempotence
"""

from __future__ import annotations

from photo_geotag.activities.build_tags import (
    TagAssignments,
    build_tag_assignments,
    new_identifiers,
)
from photo_geotag.core.constants import (
    TAG_CITY,
    TAG_COUNTRY,
    TAG_COUNTRY_CODE,
    TAG_LOCATION_IDENTIFIERS,
    TAG_LOCATION_NAME,
    TAG_STATE,
)
from photo_geotag.models.location import GeometryType, LocationRecord
from photo_geotag.models.match import MatchResult, MatchTier

LOUVRE = LocationRecord(
    name="Louvre Museum",
    latitude=48.8606,
    longitude=2.3376,
    city="Paris",
    state_province="Île-de-France",
    country="France",
    country_code="FR",
    radius=100.0,
    identifiers=("Q19675", "https://www.wikidata.org/wiki/Q19675"),
)


def _match(
    record: LocationRecord = LOUVRE,
    tier: MatchTier = MatchTier.EXACT,
    region: LocationRecord | None = None,
) -> MatchResult:
    return MatchResult(record=record, distance_m=12.0, tier=tier, region_override=region)


def _region(**fields: object) -> LocationRecord:
    return LocationRecord(
        name="Region",
        latitude=0.0,
        longitude=0.0,
        geometry_type=GeometryType.POLYGON,
        polygon_ring=((0.0, 0.0), (1.0, 0.0), (1.0, 1.0)),
        region_type="city",
        **fields,  # type: ignore[arg-type]
    )


# ===========================================================================
# Tiers
# ===========================================================================


class TestTierFields:
    """Which tags each tier writes."""

    def test_exact_writes_everything(self) -> None:
        tags = build_tag_assignments(_match())
        assert tags.fields == {
            TAG_LOCATION_NAME: "Louvre Museum",
            TAG_CITY: "Paris",
            TAG_STATE: "Île-de-France",
            TAG_COUNTRY: "France",
            TAG_COUNTRY_CODE: "FR",
        }
        assert tags.append_identifiers == LOUVRE.identifiers

    def test_nearby_omits_name_and_identifiers(self) -> None:
        tags = build_tag_assignments(_match(tier=MatchTier.NEARBY))
        assert TAG_LOCATION_NAME not in tags.fields
        assert tags.fields[TAG_CITY] == "Paris"
        assert tags.fields[TAG_COUNTRY_CODE] == "FR"
        assert tags.append_identifiers == ()

    def test_none_writes_nothing(self) -> None:
        tags = build_tag_assignments(_match(tier=MatchTier.NONE))
        assert tags.is_empty
        assert tags.as_dict() == {}

    def test_empty_values_omitted(self) -> None:
        sparse = LocationRecord(name="Trailhead", latitude=0.0, longitude=0.0, country="Chile")
        tags = build_tag_assignments(_match(record=sparse))
        assert tags.fields == {TAG_LOCATION_NAME: "Trailhead", TAG_COUNTRY: "Chile"}

    def test_unnamed_exact_match_has_no_location_tag(self) -> None:
        unnamed = LocationRecord(name="", latitude=0.0, longitude=0.0, city="Lyon")
        tags = build_tag_assignments(_match(record=unnamed))
        assert tags.fields == {TAG_CITY: "Lyon"}


# ===========================================================================
# Region override
# ===========================================================================


class TestRegionOverride:
    """Override values replace the record's, but only when non-empty."""

    def test_override_replaces_admin_fields(self) -> None:
        region = _region(city="Paris 1er", state_province="IDF", country="FR-X", country_code="FX")
        tags = build_tag_assignments(_match(region=region))
        assert tags.fields[TAG_LOCATION_NAME] == "Louvre Museum"
        assert tags.fields[TAG_CITY] == "Paris 1er"
        assert tags.fields[TAG_STATE] == "IDF"
        assert tags.fields[TAG_COUNTRY] == "FR-X"
        assert tags.fields[TAG_COUNTRY_CODE] == "FX"

    def test_empty_override_values_keep_record_values(self) -> None:
        region = _region(city="Arrondissement")
        tags = build_tag_assignments(_match(region=region))
        assert tags.fields[TAG_CITY] == "Arrondissement"
        assert tags.fields[TAG_STATE] == "Île-de-France"
        assert tags.fields[TAG_COUNTRY] == "France"

    def test_override_applies_to_nearby(self) -> None:
        region = _region(city="Override City")
        tags = build_tag_assignments(_match(tier=MatchTier.NEARBY, region=region))
        assert tags.fields[TAG_CITY] == "Override City"
        assert TAG_LOCATION_NAME not in tags.fields

    def test_override_does_not_supply_identifiers(self) -> None:
        region = _region(identifiers=("REGION-ID",))
        tags = build_tag_assignments(_match(region=region))
        assert "REGION-ID" not in tags.append_identifiers


# ===========================================================================
# Identifiers
# ===========================================================================


class TestIdentifiers:
    """Identifiers are appended only when not already present."""

    def test_existing_identifiers_excluded(self) -> None:
        tags = build_tag_assignments(_match(), existing_identifiers=["Q19675"])
        assert tags.append_identifiers == ("https://www.wikidata.org/wiki/Q19675",)

    def test_second_run_is_idempotent(self) -> None:
        first = build_tag_assignments(_match())
        second = build_tag_assignments(_match(), existing_identifiers=first.append_identifiers)
        assert second.append_identifiers == ()
        assert second.fields == first.fields

    def test_duplicates_within_record_collapsed(self) -> None:
        assert new_identifiers(["a", "b", "a", ""], []) == ("a", "b")

    def test_order_preserved(self) -> None:
        assert new_identifiers(["c", "a", "b"], ["a"]) == ("c", "b")


class TestTagAssignments:
    def test_as_dict_places_identifiers_under_list_tag(self) -> None:
        tags = TagAssignments(fields={TAG_CITY: "Paris"}, append_identifiers=("Q90",))
        assert tags.as_dict() == {TAG_CITY: "Paris", TAG_LOCATION_IDENTIFIERS: ["Q90"]}

    def test_identifiers_alone_are_not_empty(self) -> None:
        assert TagAssignments(append_identifiers=("Q90",)).is_empty is False
