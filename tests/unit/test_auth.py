"""Tests for EdgeGrid request signing."""

import base64
import hashlib
from datetime import datetime, timezone

import httpx

from tfexport.api.auth import EdgeGridAuth, content_hash, eg_timestamp, make_signature


class TestContentHash:
    def test_only_post_bodies_are_hashed(self):
        assert content_hash("GET", b"payload", 1024) == ""
        assert content_hash("PUT", b"payload", 1024) == ""
        assert content_hash("POST", b"", 1024) == ""

    def test_post_body_is_truncated_to_max_body(self):
        expected = base64.b64encode(hashlib.sha256(b"abc").digest()).decode()

        assert content_hash("post", b"abcdef", 3) == expected


def test_timestamp_format():
    now = datetime(2024, 3, 5, 7, 8, 9, tzinfo=timezone.utc)

    assert eg_timestamp(now) == "20240305T07:08:09+0000"


class TestMakeSignature:
    def sign(self, **overrides):
        args = {
            "client_secret": "secret",
            "timestamp": "20240305T07:08:09+0000",
            "method": "GET",
            "url": httpx.URL("https://host.example/papi/v1/edgehostnames?contractId=C-1"),
            "body_hash": "",
            "auth_header": "EG1-HMAC-SHA256 client_token=ct;access_token=at;timestamp=t;nonce=n;",
        }
        args.update(overrides)
        return make_signature(**args)

    def test_deterministic(self):
        assert self.sign() == self.sign()

    def test_depends_on_every_input(self):
        baseline = self.sign()

        assert self.sign(client_secret="other") != baseline
        assert self.sign(method="POST") != baseline
        assert self.sign(url=httpx.URL("https://host.example/papi/v1/edgehostnames")) != baseline
        assert self.sign(body_hash="abc") != baseline
        assert self.sign(timestamp="20240305T07:08:10+0000") != baseline


def test_auth_flow_sets_authorization_header(edgegrid_config):
    auth = EdgeGridAuth(edgegrid_config)
    request = httpx.Request("GET", "https://akab-test.luna.akamaiapis.net/config-dns/v2/zones/a.com")

    signed = next(auth.auth_flow(request))
    header = signed.headers["Authorization"]

    assert header.startswith("EG1-HMAC-SHA256 client_token=akab-client-token;")
    assert "access_token=akab-access-token;" in header
    assert "timestamp=" in header
    assert "nonce=" in header
    assert header.rsplit(";", 1)[1].startswith("signature=")
