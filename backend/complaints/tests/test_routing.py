"""
Unit tests for ``complaints.routing`` - no database involved.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from complaints.routing import (
    LocationRecord,
    jurisdiction_matches,
    matching_tier,
    normalize,
    select_administrator,
)


@dataclass
class FakeAdmin:
    pk: int
    state: str = ""
    district: str = ""
    sub_district: str = ""
    city: str = ""
    area: str = ""
    is_active: bool = True


TX_AUSTIN_DOWNTOWN = LocationRecord(
    state="TX",
    district="Travis",
    sub_district="Central",
    city="Austin",
    area="Downtown",
)


class TestNormalize:

    @pytest.mark.parametrize("raw,expected", [
        ("  Austin ", "austin"),
        ("DOWNTOWN", "downtown"),
        (None, ""),
        ("", ""),
    ])
    def test_trims_and_casefolds(self, raw, expected):
        assert normalize(raw) == expected


class TestSelectAdministrator:

    def test_city_and_area_beats_city_only(self):
        a = FakeAdmin(pk=1, state="TX", city="Austin")
        b = FakeAdmin(pk=2, state="TX", city="Austin", area="Downtown")
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [a, b]) is b

    def test_most_specific_tier_wins(self):
        tier4 = FakeAdmin(pk=1, city="Austin", area="Downtown")
        tier1 = FakeAdmin(
            pk=9, state="TX", district="Travis", sub_district="Central",
            city="Austin", area="Downtown",
        )
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [tier4, tier1]) is tier1

    def test_matching_is_case_and_whitespace_insensitive(self):
        admin = FakeAdmin(pk=3, state=" tx", city="AUSTIN ", area="downtown")
        other = FakeAdmin(pk=1, city="Dallas", area="Downtown")
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [other, admin]) is admin

    def test_lowest_pk_wins_inside_a_tier(self):
        a = FakeAdmin(pk=7, city="Austin", area="Downtown")
        b = FakeAdmin(pk=4, city="Austin", area="Downtown")
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [a, b]) is b
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [b, a]) is b

    def test_empty_fields_never_match(self):
        blank_city = FakeAdmin(pk=1, state="TX", area="Downtown")
        city_only = FakeAdmin(pk=2, city="Austin")
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [blank_city, city_only]) is city_only

    def test_fallback_to_any_active_administrator(self):
        far = FakeAdmin(pk=5, state="CA", city="Fresno", area="Tower")
        farther = FakeAdmin(pk=2, state="WA", city="Spokane", area="Hillyard")
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [far, farther]) is farther

    def test_inactive_candidates_are_ignored(self):
        inactive = FakeAdmin(pk=1, city="Austin", area="Downtown", is_active=False)
        active = FakeAdmin(pk=2, city="Fresno")
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [inactive, active]) is active

    def test_none_when_no_active_candidates(self):
        inactive = FakeAdmin(pk=1, city="Austin", area="Downtown", is_active=False)
        assert select_administrator(TX_AUSTIN_DOWNTOWN, []) is None
        assert select_administrator(TX_AUSTIN_DOWNTOWN, [inactive]) is None


class TestJurisdictionMatches:

    def test_city_match_is_enough(self):
        admin = FakeAdmin(pk=1, city="austin")
        assert jurisdiction_matches(admin, TX_AUSTIN_DOWNTOWN)
        assert matching_tier(admin, TX_AUSTIN_DOWNTOWN) == 5

    def test_no_fallback_for_claims(self):
        admin = FakeAdmin(pk=1, state="TX", city="Dallas", area="Downtown")
        assert not jurisdiction_matches(admin, TX_AUSTIN_DOWNTOWN)
        assert matching_tier(admin, TX_AUSTIN_DOWNTOWN) is None

    def test_full_match_reports_first_tier(self):
        admin = FakeAdmin(
            pk=1, state="TX", district="Travis", sub_district="Central",
            city="Austin", area="Downtown",
        )
        assert matching_tier(admin, TX_AUSTIN_DOWNTOWN) == 1
