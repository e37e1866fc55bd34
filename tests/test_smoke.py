import pytest


@pytest.mark.smoke
def test_import_package():
    import limelight
    assert limelight.LimelightClient is not None
    assert limelight.EXPIRY_WINDOW_SECONDS == 300


@pytest.mark.smoke
def test_error_hierarchy():
    from limelight import ConfigurationError, LimelightError, MissingCredentialError, UnsupportedInputError

    assert issubclass(MissingCredentialError, ConfigurationError)
    assert issubclass(ConfigurationError, LimelightError)
    assert issubclass(UnsupportedInputError, LimelightError)
