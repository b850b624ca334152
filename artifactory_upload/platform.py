"""
Platform strategy for the upload step.

Shell choice, CLI binary location, default certificate path and the
environment-variable reference syntax all depend on one switch: Windows
runners versus everything else. Tests pass a Platform explicitly instead of
relying on the host OS.
"""

import sys
from enum import Enum
from typing import Tuple

# Variable that stops the jfrog CLI from prompting for interactive setup.
OFFER_CONFIG_ENV = "JFROG_CLI_OFFER_CONFIG"


class Platform(str, Enum):
    """
    Supported runner platform families.

    Values:
        WINDOWS: Windows containers, commands run through PowerShell
        POSIX: Linux/macOS runners, commands run through sh
    """

    WINDOWS = "windows"
    POSIX = "posix"

    @classmethod
    def current(cls) -> "Platform":
        """Return the platform of the running interpreter."""
        if sys.platform.startswith("win"):
            return cls.WINDOWS
        return cls.POSIX

    @property
    def shell(self) -> Tuple[str, str]:
        """Interpreter and the flag that makes it run a command string."""
        if self is Platform.WINDOWS:
            return ("powershell", "-Command")
        return ("sh", "-c")

    @property
    def jfrog_binary(self) -> str:
        if self is Platform.WINDOWS:
            return "C:/bin/jfrog.exe"
        return "jfrog"

    @property
    def default_cert_path(self) -> str:
        if self is Platform.WINDOWS:
            return "C:/users/ContainerAdministrator/.jfrog/security/certs/cert.pem"
        return "/root/.jfrog/security/certs/cert.pem"

    @property
    def env_prefix(self) -> str:
        """Prefix that makes the shell expand an environment variable name."""
        if self is Platform.WINDOWS:
            return "$Env:"
        return "$"

    def env_ref(self, name: str) -> str:
        """Shell reference to environment variable ``name``."""
        return f"{self.env_prefix}{name}"

    def sleep_command(self, seconds: int) -> str:
        if self is Platform.WINDOWS:
            return f"Start-Sleep {seconds}"
        return f"sleep {seconds}"
