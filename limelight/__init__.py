"""
Signed client for the Limelight Video Platform REST API.

    from limelight import LimelightClient

    client = LimelightClient(organization="org", access_key="ak", secret="s3cr3t")
    client.media_info("m123")
"""

import logging

from .client import LimelightClient
from .config import Credentials, LimelightConfig
from .exceptions import (
    ConfigurationError,
    DecodeError,
    LimelightError,
    MissingCredentialError,
    TransportError,
    UnsupportedInputError,
)
from .signing import EXPIRY_WINDOW_SECONDS, RequestSigner, SignedRequest
from .uploads import ByteStream, FilePath

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "LimelightClient",
    "LimelightConfig",
    "Credentials",
    "RequestSigner",
    "SignedRequest",
    "EXPIRY_WINDOW_SECONDS",
    "FilePath",
    "ByteStream",
    "LimelightError",
    "ConfigurationError",
    "MissingCredentialError",
    "UnsupportedInputError",
    "TransportError",
    "DecodeError",
]
