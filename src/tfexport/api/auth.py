"""EdgeGrid (EG1-HMAC-SHA256) request signing for httpx.

Every request carries an Authorization header of the form:

    EG1-HMAC-SHA256 client_token=<ct>;access_token=<at>;timestamp=<ts>;nonce=<n>;signature=<sig>

Signing steps:
1. signing key = base64(HMAC-SHA256(client_secret, timestamp))
2. data to sign = tab-joined method, scheme, host, path+query, canonical
   headers (none are signed), content hash and the header prefix
3. signature = base64(HMAC-SHA256(signing key, data to sign))

The content hash covers only POST bodies, truncated to max_body bytes.
"""

import base64
import hashlib
import hmac
import uuid
from collections.abc import Generator
from datetime import datetime, timezone

import httpx

from ..config import EdgeGridConfig

ALGORITHM = "EG1-HMAC-SHA256"


def _b64_hmac(key: bytes, message: str) -> str:
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def eg_timestamp(now: datetime | None = None) -> str:
    """Format a timestamp the way the signing algorithm expects."""
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y%m%dT%H:%M:%S+0000")


def content_hash(method: str, body: bytes, max_body: int) -> str:
    """Base64 SHA-256 of the (truncated) POST body, empty for other methods."""
    if method.upper() != "POST" or not body:
        return ""
    digest = hashlib.sha256(body[:max_body]).digest()
    return base64.b64encode(digest).decode("utf-8")


def make_signature(
    *,
    client_secret: str,
    timestamp: str,
    method: str,
    url: httpx.URL,
    body_hash: str,
    auth_header: str,
) -> str:
    """
    Compute the request signature.

    Args:
        client_secret: Secret from the credentials
        timestamp: Value produced by eg_timestamp()
        method: HTTP method
        url: Full request URL
        body_hash: Value produced by content_hash()
        auth_header: Authorization header without the signature field

    Returns:
        Base64 encoded signature
    """
    signing_key = _b64_hmac(client_secret.encode("utf-8"), timestamp)
    relative_url = url.raw_path.decode("ascii")
    data_to_sign = "\t".join(
        [
            method.upper(),
            url.scheme,
            url.host,
            relative_url,
            "",
            body_hash,
            auth_header,
        ]
    )
    return _b64_hmac(signing_key.encode("utf-8"), data_to_sign)


class EdgeGridAuth(httpx.Auth):
    """httpx authentication flow signing each request with EdgeGrid credentials."""

    requires_request_body = True

    def __init__(self, config: EdgeGridConfig) -> None:
        self.config = config

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        timestamp = eg_timestamp()
        auth_header = (
            f"{ALGORITHM} "
            f"client_token={self.config.client_token};"
            f"access_token={self.config.access_token};"
            f"timestamp={timestamp};"
            f"nonce={uuid.uuid4()};"
        )
        signature = make_signature(
            client_secret=self.config.client_secret,
            timestamp=timestamp,
            method=request.method,
            url=request.url,
            body_hash=content_hash(request.method, request.content, self.config.max_body),
            auth_header=auth_header,
        )
        request.headers["Authorization"] = f"{auth_header}signature={signature}"
        yield request
