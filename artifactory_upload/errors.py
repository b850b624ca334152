"""
Error types raised by the upload step.

Every error is terminal. Failures of the external tool itself are not
wrapped: ``subprocess.CalledProcessError`` and ``OSError`` propagate as-is.
"""


class PluginError(Exception):
    """Base class for failures detected by the step itself."""
    pass


# ============================================================================
# Configuration validation
# ============================================================================

class ValidationError(PluginError):
    """Configuration cannot produce a valid command line."""

    # Logged as a warning without traceback by log_function_call
    expected = True


class MissingURL(ValidationError):
    def __init__(self) -> None:
        super().__init__("url needs to be set")


class MissingCredentials(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            "either username/password, api key or access token needs to be set"
        )


class MissingSource(ValidationError):
    def __init__(self) -> None:
        super().__init__("source file needs to be set")


class MissingTarget(ValidationError):
    def __init__(self) -> None:
        super().__init__("target path needs to be set")


# ============================================================================
# Certificate provisioning
# ============================================================================

class CertificateError(PluginError):
    """Filesystem failure while writing the trust certificate."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class CertDirError(CertificateError):
    """Certificate directory could not be created."""
    pass


class CertWriteError(CertificateError):
    """Certificate file could not be written."""
    pass
