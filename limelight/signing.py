"""
signing.py

Limelight request signing:
  payload   = "method|hostname|path|k1=v1&k2=v2..." (params sorted by key,
              access_key and expires included, signature excluded)
  signature = base64(HMAC_SHA256(secret, payload))
Request:
  {path}?access_key=...&expires=...&...&signature=...  (sorted by key)

The server rebuilds the same payload, so sorting must be identical for
signing and for the emitted query string.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple
from urllib.parse import urlencode, urlparse

from .config import Credentials
from .exceptions import MissingCredentialError

logger = logging.getLogger(__name__)

EXPIRY_WINDOW_SECONDS = 300


def _mask(s: Optional[str], keep: int = 4) -> str:
    if not s:
        return ""
    if len(s) <= keep:
        return "*" * len(s)
    return s[:keep] + "*" * (len(s) - keep)


def _hostname(host: str) -> str:
    # host as configured: case kept, userinfo and port dropped
    parsed = urlparse(host)
    netloc = parsed.netloc.rpartition("@")[2]
    if parsed.port is not None:
        netloc = netloc.rsplit(":", 1)[0]
    return netloc


def _origin(host: str) -> str:
    parsed = urlparse(host)
    return f"{parsed.scheme}://{parsed.netloc}"


def canonical_payload(method: str, host: str, path: str, params: Mapping[str, Any]) -> str:
    items = sorted((str(k), str(v)) for k, v in params.items())
    joined = "&".join(f"{k}={v}" for k, v in items)
    return "|".join([method.lower(), _hostname(host), path, joined])


def compute_signature(secret: str, payload: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii").rstrip("\n")


@dataclass(frozen=True)
class SignedRequest:
    method: str
    host: str
    path: str
    params: Tuple[Tuple[str, str], ...]
    payload: str

    @property
    def signature(self) -> str:
        return dict(self.params)["signature"]

    @property
    def query(self) -> str:
        return urlencode(self.params)

    @property
    def path_with_query(self) -> str:
        return f"{self.path}?{self.query}"

    @property
    def url(self) -> str:
        return f"{_origin(self.host)}{self.path_with_query}"


class RequestSigner:
    """Signs request paths with the configured access key and secret.

    ``clock`` returns the current Unix time; it is only swapped out in tests.
    """

    def __init__(
        self,
        credentials: Credentials,
        default_host: str,
        default_path: str,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self.default_host = default_host
        self.default_path = default_path
        self.clock = clock

    def _authorized(self) -> None:
        if not self.credentials.secret:
            raise MissingCredentialError("secret")
        if not self.credentials.access_key:
            raise MissingCredentialError("access_key")

    def sign(
        self,
        method: str = "get",
        path: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
        host: Optional[str] = None,
    ) -> SignedRequest:
        self._authorized()

        path = path or self.default_path
        host = host or self.default_host

        # fresh dict per call; the caller's mapping is never touched
        signed_params = {str(k): str(v) for k, v in (params or {}).items()}
        signed_params["access_key"] = self.credentials.access_key
        signed_params["expires"] = str(int(self.clock()) + EXPIRY_WINDOW_SECONDS)

        payload = canonical_payload(method, host, path, signed_params)
        signed_params["signature"] = compute_signature(self.credentials.secret, payload)

        logger.debug(
            "Signed %s %s for host=%s access_key=%s",
            method.upper(),
            path,
            _hostname(host),
            _mask(self.credentials.access_key),
        )

        return SignedRequest(
            method=method.lower(),
            host=host,
            path=path,
            params=tuple(sorted(signed_params.items())),
            payload=payload,
        )

    def signed_path(
        self,
        method: str = "get",
        path: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
        host: Optional[str] = None,
    ) -> str:
        return self.sign(method, path, params, host).path_with_query
