"""Tests for the Realtime Database catalog store.

HTTP is served by httpx.MockTransport; no network access.
"""

import json
from datetime import UTC, datetime

import httpx
import pytest

from linksync.catalog import (
    FirebaseCatalogStore,
    FirebaseClient,
    link_from_wire,
    link_to_wire,
    links_from_wire,
)
from linksync.core.errors import CatalogStoreError
from linksync.core.types import Link, LinkOrigin

DB_URL = "https://demo-default-rtdb.firebaseio.com"


class RecordingHandler:
    def __init__(self, get_body=None, status=200):
        self.get_body = get_body
        self.status = status
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if request.method == "GET":
            return httpx.Response(
                self.status,
                content=json.dumps(self.get_body).encode(),
                headers={"content-type": "application/json"},
            )
        return httpx.Response(self.status, json=json.loads(request.content))


def _store(handler, token="secret"):
    client = FirebaseClient(DB_URL, auth_token=token, transport=httpx.MockTransport(handler))
    return FirebaseCatalogStore(client, catalog_path="matches")


# =============================================================================
# WIRE CONVERSION
# =============================================================================


class TestLinkWire:
    def test_missing_origin_is_manual(self):
        link = link_from_wire({"name": "Promo", "link": "https://promo"})
        assert link.origin == LinkOrigin.MANUAL
        assert link.kind == "Direct"

    def test_api_origin(self):
        link = link_from_wire({"name": "X", "link": "u", "origin": "api"})
        assert link.origin == LinkOrigin.API

    def test_unknown_origin_is_manual(self):
        assert link_from_wire({"name": "X", "link": "u", "origin": "editor"}).is_manual

    def test_manual_written_back_verbatim(self):
        stored = {"name": "Promo", "link": "https://promo", "order": 3, "quality": "4K"}
        assert link_to_wire(link_from_wire(stored)) == stored

    def test_api_link_serialized(self):
        link = Link(name="SPORTIFy TV", url="u", logo="l", origin=LinkOrigin.API)
        assert link_to_wire(link) == {
            "name": "SPORTIFy TV",
            "link": "u",
            "type": "Direct",
            "logo": "l",
            "origin": "api",
        }

    def test_new_manual_link_gets_origin(self):
        assert link_to_wire(Link(name="N", url="u"))["origin"] == "manual"

    def test_links_from_legacy_object_with_holes(self):
        raw = {"0": {"name": "A", "link": "a"}, "2": {"name": "B", "link": "b"}}
        assert [link.name for link in links_from_wire(raw)] == ["A", "B"]

    def test_links_from_list_with_nulls(self):
        raw = [None, {"name": "A", "link": "a"}, "junk"]
        assert [link.name for link in links_from_wire(raw)] == ["A"]

    def test_links_missing(self):
        assert links_from_wire(None) == []


# =============================================================================
# STORE
# =============================================================================


class TestReadCatalog:
    def test_reads_events_in_order(self):
        handler = RecordingHandler(
            {
                "-Nb2": {
                    "team1Name": "Real Madrid",
                    "team2Name": "Barcelona",
                    "sportType": "Football",
                    "matchTime": "2026-10-17T19:00:00Z",
                    "streamLinks": [{"name": "Promo", "link": "https://promo"}],
                },
                "-Nb1": {
                    "team1Name": "Liverpool",
                    "team2Name": "Everton",
                    "sportType": "Football",
                    "matchTime": 1792263600000,
                },
            }
        )
        events = _store(handler).read_catalog()

        assert [e.key for e in events] == ["-Nb2", "-Nb1"]
        assert events[0].start_time == datetime(2026, 10, 17, 19, 0, tzinfo=UTC)
        assert events[0].links[0].name == "Promo"
        assert events[1].links == []

        request = handler.requests[0]
        assert request.url.path == "/matches.json"
        assert request.url.params["auth"] == "secret"

    def test_empty_path(self):
        assert _store(RecordingHandler(None)).read_catalog() == []

    def test_empty_body_is_invalid_json(self):
        def handler(request):
            return httpx.Response(200, content=b"")

        with pytest.raises(CatalogStoreError, match="invalid JSON"):
            _store(handler).read_catalog()

    def test_array_catalog(self):
        handler = RecordingHandler([None, {"team1Name": "A", "team2Name": "B"}])
        events = _store(handler).read_catalog()
        assert [e.key for e in events] == ["1"]
        assert events[0].start_time is None

    def test_scalar_catalog_rejected(self):
        with pytest.raises(CatalogStoreError):
            _store(RecordingHandler("oops")).read_catalog()

    def test_http_error(self):
        with pytest.raises(CatalogStoreError, match="HTTP 401"):
            _store(RecordingHandler({}, status=401)).read_catalog()

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        with pytest.raises(CatalogStoreError):
            _store(handler).read_catalog()

    def test_no_token_no_auth_param(self):
        handler = RecordingHandler({})
        _store(handler, token=None).read_catalog()
        assert "auth" not in handler.requests[0].url.params


class TestWriteLinks:
    def test_put_full_list(self):
        handler = RecordingHandler()
        stored_manual = {"name": "Promo", "link": "https://promo", "pinned": True}
        links = [
            link_from_wire(stored_manual),
            Link(name="SPORTIFy TV", url="u1", logo="l1", origin=LinkOrigin.API),
        ]

        _store(handler).write_links("-Nb2", links)

        request = handler.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/matches/-Nb2/streamLinks.json"
        body = json.loads(request.content)
        assert body[0] == stored_manual
        assert body[1]["origin"] == "api"
        assert body[1]["link"] == "u1"

    def test_write_error(self):
        with pytest.raises(CatalogStoreError, match="write failed"):
            _store(RecordingHandler(status=500)).write_links("k", [])
