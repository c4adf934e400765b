"""Tests for feed-to-catalog event matching."""

from datetime import UTC, datetime, timedelta

import pytest

from linksync.consumers.matching.event_matcher import (
    closest_candidate,
    match_catalog_event,
    names_correspond,
    within_window,
)
from linksync.core.types import CatalogEvent, FeedEvent

KICKOFF = datetime(2026, 10, 17, 19, 0, tzinfo=UTC)
KICKOFF_S = int(KICKOFF.timestamp())


def _feed(home="Real Madrid", away="Barcelona", start=KICKOFF_S, sport="Football"):
    return FeedEvent(home_team=home, away_team=away, start_time=start, sport_category=sport)


def _entry(key, team1="Real Madrid", team2="FC Barcelona", start=KICKOFF, sport="Football"):
    return CatalogEvent(
        key=key,
        team1_name=team1,
        team2_name=team2,
        sport_type=sport,
        start_time=start,
    )


# =============================================================================
# TEAM CORRESPONDENCE
# =============================================================================


class TestNamesCorrespond:
    def test_equal(self):
        assert names_correspond("barcelona", "barcelona")

    def test_substring_either_way(self):
        assert names_correspond("inter", "intermilan")
        assert names_correspond("intermilan", "inter")

    def test_unrelated(self):
        assert not names_correspond("realmadrid", "barcelona")


# =============================================================================
# MATCHING
# =============================================================================


class TestMatchCatalogEvent:
    def test_basic_match(self):
        entry = _entry("m1")
        assert match_catalog_event(_feed(), [entry]) is entry

    def test_no_catalog(self):
        assert match_catalog_event(_feed(), []) is None

    def test_sides_never_swapped(self):
        swapped = _entry("m1", team1="FC Barcelona", team2="Real Madrid")
        assert match_catalog_event(_feed(), [swapped]) is None

    def test_sport_must_match(self):
        cricket = _entry("m1", sport="Cricket")
        assert match_catalog_event(_feed(), [cricket]) is None

    def test_sport_case_insensitive(self):
        entry = _entry("m1", sport="football")
        assert match_catalog_event(_feed(sport="FOOTBALL"), [entry]) is entry

    def test_missing_sport_category_means_football(self):
        entry = _entry("m1")
        assert match_catalog_event(_feed(sport=""), [entry]) is entry

    def test_first_fit_in_catalog_order(self):
        first = _entry("m1", team2="Barcelona B")
        second = _entry("m2", team2="Barcelona")
        # "barcelona" is a substring of "barcelonab", so the first entry wins
        assert match_catalog_event(_feed(), [first, second]) is first
        assert match_catalog_event(_feed(), [second, first]) is second

    def test_unparsed_time_never_matches(self):
        assert match_catalog_event(_feed(), [_entry("m1", start=None)]) is None

    def test_diacritics_and_decorations(self):
        entry = _entry("m1", team1="Atlético de Madrid", team2="Sevilla FC")
        feed = _feed(home="Atletico de Madrid", away="Sevilla")
        assert match_catalog_event(feed, [entry]) is entry


class TestMatchWindow:
    @pytest.mark.parametrize(
        "offset_ms, expected",
        [
            (0, True),
            (86_399_999, True),
            (-86_399_999, True),
            (86_400_000, False),
            (86_400_001, False),
            (-86_400_001, False),
        ],
    )
    def test_window_boundaries(self, offset_ms, expected):
        entry = _entry("m1", start=KICKOFF + timedelta(milliseconds=offset_ms))
        assert within_window(_feed(), entry) is expected
        assert (match_catalog_event(_feed(), [entry]) is entry) is expected

    def test_out_of_window_entry_skipped_for_later_one(self):
        stale = _entry("old", start=KICKOFF - timedelta(days=7))
        current = _entry("new")
        assert match_catalog_event(_feed(), [stale, current]) is current


# =============================================================================
# NEAR-MISS DIAGNOSTICS
# =============================================================================


class TestClosestCandidate:
    def test_reports_similar_entry(self):
        swapped = _entry("m1", team1="FC Barcelona", team2="Real Madrid")
        near = closest_candidate(_feed(), [swapped])
        assert near is not None
        assert near.catalog_key == "m1"
        assert near.score >= 60
        assert "m1" in near.describe()

    def test_other_sport_ignored(self):
        assert closest_candidate(_feed(), [_entry("m1", sport="Cricket")]) is None

    def test_below_threshold(self):
        unrelated = _entry("m1", team1="Liverpool", team2="Everton")
        assert closest_candidate(_feed(), [unrelated], min_score=90) is None

    def test_best_score_wins(self):
        weak = _entry("weak", team1="Real Sociedad", team2="Barcelona")
        strong = _entry("strong", team1="Barcelona", team2="Real Madrid")
        near = closest_candidate(_feed(), [weak, strong])
        assert near.catalog_key == "strong"
