import requests


class LimelightError(Exception):
    pass


class ConfigurationError(LimelightError):
    pass


class MissingCredentialError(ConfigurationError):
    """Raised when organization, access_key or secret is not available."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing Limelight credential: {name}")


class UnsupportedInputError(LimelightError):
    pass


# Transport and decode failures are not wrapped; these names let callers
# catch them without importing requests themselves.
TransportError = requests.RequestException
DecodeError = requests.JSONDecodeError
