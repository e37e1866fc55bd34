"""
config.py

LimelightConfig supports:
- LimelightConfig.from_env()
- LimelightConfig.from_values(organization=..., access_key=..., secret=...)

Every value passed explicitly wins; anything omitted falls back to the
LIMELIGHT_* environment variables. Only the organization is required here.
access_key and secret are checked when a request is actually signed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import MissingCredentialError

DEFAULT_HOST = "http://api.videoplatform.limelight.com"
DEFAULT_ANALYTICS_HOST = "http://api.delvenetworks.com/rest/"
DEFAULT_TIMEOUT = 30
DEFAULT_UPLOAD_TIMEOUT = 60 * 60


def env(name: str, default: str = "") -> str:
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip()


def env_int(name: str, default: int) -> int:
    raw = env(name, "")
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Credentials:
    organization: str
    access_key: Optional[str] = None
    secret: Optional[str] = None


@dataclass(frozen=True)
class LimelightConfig:
    organization: str
    access_key: Optional[str] = None
    secret: Optional[str] = None
    host: str = DEFAULT_HOST
    analytics_host: str = DEFAULT_ANALYTICS_HOST
    timeout_seconds: int = DEFAULT_TIMEOUT
    upload_timeout_seconds: int = DEFAULT_UPLOAD_TIMEOUT

    def __post_init__(self) -> None:
        if not self.organization:
            raise MissingCredentialError("organization")

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            organization=self.organization,
            access_key=self.access_key,
            secret=self.secret,
        )

    @staticmethod
    def from_env() -> "LimelightConfig":
        return LimelightConfig.from_values()

    @staticmethod
    def from_values(
        *,
        organization: Optional[str] = None,
        access_key: Optional[str] = None,
        secret: Optional[str] = None,
        host: Optional[str] = None,
        analytics_host: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        upload_timeout_seconds: Optional[int] = None,
    ) -> "LimelightConfig":
        org = organization if organization is not None else env("LIMELIGHT_ORGANIZATION")
        k = access_key if access_key is not None else env("LIMELIGHT_ACCESS_KEY")
        s = secret if secret is not None else env("LIMELIGHT_SECRET")

        if timeout_seconds is None:
            timeout_seconds = env_int("LIMELIGHT_TIMEOUT", DEFAULT_TIMEOUT)
        if upload_timeout_seconds is None:
            upload_timeout_seconds = env_int("LIMELIGHT_UPLOAD_TIMEOUT", DEFAULT_UPLOAD_TIMEOUT)

        # an empty LIMELIGHT_*HOST counts as unset
        return LimelightConfig(
            organization=org,
            access_key=k or None,
            secret=s or None,
            host=host or env("LIMELIGHT_HOST") or DEFAULT_HOST,
            analytics_host=analytics_host or env("LIMELIGHT_ANALYTICS_HOST") or DEFAULT_ANALYTICS_HOST,
            timeout_seconds=timeout_seconds,
            upload_timeout_seconds=upload_timeout_seconds,
        )
