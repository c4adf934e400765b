"""Tests for the sync engine using in-memory collaborators."""

import logging
import random
from datetime import UTC, date, datetime

import pytest

from linksync.consumers.matching import SkipReason
from linksync.consumers.naming import BrandedNameGenerator
from linksync.consumers.sync import SyncEngine
from linksync.core.errors import AuditError, CatalogStoreError, KeysExhaustedError
from linksync.core.interfaces import FeedBatch
from linksync.core.types import CatalogEvent, FeedEndpoint, FeedEvent, Link, LinkOrigin
from linksync.utilities.constants import PRIMARY_LINK_NAME, SECONDARY_LINK_NAME

KICKOFF = datetime(2026, 10, 17, 19, 0, tzinfo=UTC)
KICKOFF_S = int(KICKOFF.timestamp())

SOCO = FeedEndpoint(url="https://pull.niues.live/live/rm-fcb.flv")
OK9 = FeedEndpoint(url="https://cdnok9.com/hls/rm-fcb.m3u8")
JUNK = FeedEndpoint(url="https://unknown.example.com/x")


# =============================================================================
# FAKES
# =============================================================================


class FakeFeed:
    def __init__(self, events=(), raw_records=None, error=None):
        self.events = list(events)
        self.raw_records = raw_records if raw_records is not None else [
            {"home_team_name": e.home_team} for e in self.events
        ]
        self.error = error
        self.calls = []

    def fetch_batch(self, date_str, pages):
        self.calls.append((date_str, pages))
        if self.error:
            raise self.error
        return FeedBatch(
            date_str=date_str,
            raw_records=list(self.raw_records),
            events=list(self.events),
            pages_fetched=pages,
        )


class FakeCatalog:
    def __init__(self, entries=(), fail_write=False):
        self.entries = list(entries)
        self.fail_write = fail_write
        self.reads = 0
        self.writes = []

    def read_catalog(self):
        self.reads += 1
        return list(self.entries)

    def write_links(self, key, links):
        if self.fail_write:
            raise CatalogStoreError("write refused")
        self.writes.append((key, list(links)))


class FakeAudit:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def record_feed(self, pass_id, date_str, records):
        if self.error:
            raise self.error
        self.calls.append((pass_id, date_str, list(records)))
        return len(records)


def _feed_event(home="Real Madrid", away="Barcelona", endpoints=(SOCO, OK9), start=KICKOFF_S):
    return FeedEvent(home_team=home, away_team=away, start_time=start, endpoints=tuple(endpoints))


def _catalog_entry(key="m1", team1="Real Madrid", team2="FC Barcelona", links=None):
    return CatalogEvent(
        key=key,
        team1_name=team1,
        team2_name=team2,
        sport_type="Football",
        start_time=KICKOFF,
        links=list(links or []),
    )


def _engine(feed, catalog, audit=None):
    return SyncEngine(
        feed,
        catalog,
        audit,
        name_generator=BrandedNameGenerator(random.Random(1)),
        pages=2,
        feed_tz=UTC,
    )


# =============================================================================
# FULL PASS
# =============================================================================


class TestRunPass:
    def test_end_to_end_update(self):
        promo = Link(
            name="Promo", url="https://promo", raw={"name": "Promo", "link": "https://promo"}
        )
        stale = Link(name="Old", url="https://old", origin=LinkOrigin.API)
        catalog = FakeCatalog([_catalog_entry(links=[promo, stale])])

        result = _engine(FakeFeed([_feed_event()]), catalog).run_pass(date(2026, 10, 17))

        assert result.date_str == "17102026"
        assert result.fetched == 1
        assert result.unique == 1
        assert result.updated == 1
        assert result.updated_keys == ["m1"]

        [(key, links)] = catalog.writes
        assert key == "m1"
        assert [link.name for link in links] == ["Promo", PRIMARY_LINK_NAME, SECONDARY_LINK_NAME]
        assert [link.url for link in links] == ["https://promo", SOCO.url, OK9.url]
        assert links[0] is promo

    def test_lowercase_feed_names_against_plain_catalog_names(self):
        promo = Link(
            name="Promo",
            url="https://x",
            raw={"name": "Promo", "link": "https://x", "origin": "manual"},
        )
        entry = _catalog_entry(team1="Real Madrid", team2="Barcelona", links=[promo])
        catalog = FakeCatalog([entry])
        feed_event = _feed_event(home="real madrid", away="fc barcelona", endpoints=[SOCO, OK9])
        feed = FakeFeed([feed_event])

        result = _engine(feed, catalog).run_pass(date(2026, 10, 17))

        assert result.updated_keys == ["m1"]
        [(_, links)] = catalog.writes
        assert [(link.name, link.origin) for link in links] == [
            ("Promo", LinkOrigin.MANUAL),
            (PRIMARY_LINK_NAME, LinkOrigin.API),
            (SECONDARY_LINK_NAME, LinkOrigin.API),
        ]
        assert [link.url for link in links] == ["https://x", SOCO.url, OK9.url]

    def test_feed_date_and_pages_passed_to_feed(self):
        feed = FakeFeed([])
        _engine(feed, FakeCatalog()).run_pass(datetime(2026, 10, 17, 23, 30, tzinfo=UTC))
        assert feed.calls == [("17102026", 2)]

    def test_empty_feed_skips_catalog_read(self):
        catalog = FakeCatalog([_catalog_entry()])
        result = _engine(FakeFeed([]), catalog).run_pass(date(2026, 10, 17))
        assert catalog.reads == 0
        assert catalog.writes == []
        assert result.unique == 0

    def test_no_match_writes_nothing(self):
        catalog = FakeCatalog([_catalog_entry(team1="Liverpool", team2="Everton")])
        result = _engine(FakeFeed([_feed_event()]), catalog).run_pass(date(2026, 10, 17))
        assert catalog.writes == []
        assert result.skipped_no_match == 1
        assert result.updated == 0

    def test_unclassified_endpoints_write_nothing(self):
        catalog = FakeCatalog([_catalog_entry()])
        feed = FakeFeed([_feed_event(endpoints=[JUNK])])
        result = _engine(feed, catalog).run_pass(date(2026, 10, 17))
        assert catalog.writes == []
        assert result.skipped_no_endpoints == 1
        assert result.matched == 1
        assert result.outcomes[0].catalog_key == "m1"

    def test_duplicates_collapsed_before_matching(self):
        poor = _feed_event(endpoints=[OK9])
        rich = _feed_event(away="FC Barcelona", endpoints=[SOCO, OK9])
        catalog = FakeCatalog([_catalog_entry()])

        result = _engine(FakeFeed([poor, rich]), catalog).run_pass(date(2026, 10, 17))

        assert result.fetched == 2
        assert result.unique == 1
        [(_, links)] = catalog.writes
        assert [link.url for link in links] == [SOCO.url, OK9.url]

    def test_catalog_read_once_per_pass(self):
        catalog = FakeCatalog([_catalog_entry("m1"), _catalog_entry("m2", "Liverpool", "Everton")])
        feed = FakeFeed([_feed_event(), _feed_event("Liverpool", "Everton")])
        result = _engine(feed, catalog).run_pass(date(2026, 10, 17))
        assert catalog.reads == 1
        assert result.updated_keys == ["m1", "m2"]

    def test_same_key_written_twice_warns(self, caplog):
        catalog = FakeCatalog([_catalog_entry(team2="Barcelona")])
        # Distinct pair keys, both correspond to the single catalog entry
        first = _feed_event(away="Barcelona")
        second = _feed_event(away="Barcelona Atletic")
        with caplog.at_level(logging.WARNING):
            result = _engine(FakeFeed([first, second]), catalog).run_pass(date(2026, 10, 17))
        assert [key for key, _ in catalog.writes] == ["m1", "m1"]
        assert result.updated == 2
        assert "already updated" in caplog.text


# =============================================================================
# AUDIT COPY
# =============================================================================


class TestAudit:
    def test_raw_records_recorded_before_dedupe(self):
        raw = [{"id": 1}, {"id": 2}, {"id": 3, "junk": True}]
        audit = FakeAudit()
        feed = FakeFeed([_feed_event(), _feed_event()], raw_records=raw)

        result = _engine(feed, FakeCatalog([_catalog_entry()]), audit).run_pass(date(2026, 10, 17))

        [(pass_id, date_str, records)] = audit.calls
        assert pass_id == result.pass_id
        assert date_str == "17102026"
        assert records == raw

    def test_audit_recorded_even_with_no_events(self):
        audit = FakeAudit()
        _engine(FakeFeed([], raw_records=[{"bad": 1}]), FakeCatalog(), audit).run_pass(
            date(2026, 10, 17)
        )
        assert audit.calls[0][2] == [{"bad": 1}]

    def test_audit_failure_aborts_pass(self):
        catalog = FakeCatalog([_catalog_entry()])
        engine = _engine(FakeFeed([_feed_event()]), catalog, FakeAudit(AuditError("disk full")))
        with pytest.raises(AuditError):
            engine.run_pass(date(2026, 10, 17))
        assert catalog.writes == []


# =============================================================================
# FAILURES
# =============================================================================


class TestFailures:
    def test_keys_exhausted_propagates(self):
        catalog = FakeCatalog([_catalog_entry()])
        feed = FakeFeed(error=KeysExhaustedError(3, page=1))
        with pytest.raises(KeysExhaustedError):
            _engine(feed, catalog).run_pass(date(2026, 10, 17))
        assert catalog.reads == 0
        assert catalog.writes == []

    def test_write_failure_propagates(self):
        catalog = FakeCatalog([_catalog_entry()], fail_write=True)
        with pytest.raises(CatalogStoreError):
            _engine(FakeFeed([_feed_event()]), catalog).run_pass(date(2026, 10, 17))


# =============================================================================
# SINGLE EVENT
# =============================================================================


class TestProcessEvent:
    def test_no_match_detail_names_closest(self):
        swapped = _catalog_entry(team1="FC Barcelona", team2="Real Madrid")
        outcome = _engine(FakeFeed(), FakeCatalog()).process_event(_feed_event(), [swapped])
        assert outcome.skip_reason == SkipReason.NO_MATCH
        assert "m1" in outcome.detail

    def test_updated_counts(self):
        promo = Link(name="Promo", url="https://promo")
        catalog = FakeCatalog()
        outcome = _engine(FakeFeed(), catalog).process_event(
            _feed_event(endpoints=[SOCO, OK9, JUNK]),
            [_catalog_entry(links=[promo])],
        )
        assert outcome.is_updated
        assert outcome.manual_count == 1
        assert outcome.api_count == 2
