"""
Command-line builder for ``jfrog rt u``.

Turns a PluginConfig into the ordered token list the jfrog CLI expects:
subcommand first, then flags, then the optional source/target positionals.
Credentials are emitted as shell references to the PLUGIN_* variables, never
as literal values, so secrets stay out of argument lists and logs.

Example usage:
    >>> from artifactory_upload.builder import build_command
    >>> from artifactory_upload.platform import Platform
    >>> from artifactory_upload.utils.config import PluginConfig
    >>> config = PluginConfig(url="https://example.com", api_key="k",
    ...                       source="dist/*.zip", target="libs/")
    >>> plan = build_command(config, Platform.POSIX)
    >>> " ".join(plan.tokens)
    'jfrog rt u --url https://example.com --apikey $PLUGIN_API_KEY --flat=false "dist/*.zip" libs/'
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from artifactory_upload.errors import (
    MissingCredentials,
    MissingSource,
    MissingTarget,
    MissingURL,
)
from artifactory_upload.platform import Platform
from artifactory_upload.utils.config import (
    ENV_ACCESS_TOKEN,
    ENV_API_KEY,
    ENV_PASSWORD,
    ENV_USERNAME,
    PluginConfig,
)
from artifactory_upload.utils.logging import get_logger, log_function_call

logger = get_logger(__name__)

UPLOAD_SUBCOMMAND = ["rt", "u"]

# strconv.ParseBool vocabulary, which is what pipeline authors already use.
_TRUE_VALUES = frozenset(["1", "t", "T", "TRUE", "true", "True"])
_FALSE_VALUES = frozenset(["0", "f", "F", "FALSE", "false", "False"])


# ============================================================================
# Credential selection
# ============================================================================

@dataclass(frozen=True)
class UserPassword:
    def flags(self, platform: Platform) -> List[str]:
        return [
            "--user", platform.env_ref(ENV_USERNAME),
            "--password", platform.env_ref(ENV_PASSWORD),
        ]


@dataclass(frozen=True)
class ApiKey:
    def flags(self, platform: Platform) -> List[str]:
        return ["--apikey", platform.env_ref(ENV_API_KEY)]


@dataclass(frozen=True)
class AccessToken:
    def flags(self, platform: Platform) -> List[str]:
        return ["--access-token", platform.env_ref(ENV_ACCESS_TOKEN)]


Credentials = Union[UserPassword, ApiKey, AccessToken]


def select_credentials(config: PluginConfig) -> Credentials:
    """
    Pick the authentication mode: username+password, then API key, then
    access token.

    Raises:
        MissingCredentials: If no mode is fully configured
    """
    if config.username and config.password:
        return UserPassword()
    if config.api_key:
        return ApiKey()
    if config.access_token:
        return AccessToken()
    raise MissingCredentials()


# ============================================================================
# Transfer mode
# ============================================================================

@dataclass(frozen=True)
class SpecTransfer:
    """Upload driven by a jfrog file spec."""

    spec: str
    spec_vars: str = ""

    def tokens(self) -> List[str]:
        tokens = [f"--spec={self.spec}"]
        if self.spec_vars:
            tokens.append(f"--spec-vars='{self.spec_vars}'")
        return tokens


@dataclass(frozen=True)
class PathTransfer:
    """Upload of a single source pattern to a target path."""

    source: str
    target: str

    def tokens(self) -> List[str]:
        # Quoted so the shell leaves spaces and wildcards for jfrog to expand.
        return [f'"{self.source}"', self.target]


Transfer = Union[SpecTransfer, PathTransfer]


def select_transfer(config: PluginConfig) -> Transfer:
    """
    Resolve spec-file mode or source/target mode.

    Raises:
        MissingSource: No spec and no source
        MissingTarget: No spec and no target
    """
    if config.spec:
        return SpecTransfer(spec=config.spec, spec_vars=config.spec_vars)
    if not config.source:
        raise MissingSource()
    if not config.target:
        raise MissingTarget()
    return PathTransfer(source=config.source, target=config.target)


# ============================================================================
# Builder
# ============================================================================

@dataclass(frozen=True)
class CertificateRequest:
    """A PEM certificate that must exist at ``path`` before the upload runs."""

    path: str
    contents: str

    def __repr__(self) -> str:
        return f"CertificateRequest(path={self.path!r}, contents=<{len(self.contents)} bytes>)"


@dataclass(frozen=True)
class CommandPlan:
    """Output of the builder: tokens to run plus an optional certificate."""

    tokens: List[str]
    certificate: Optional[CertificateRequest] = None

    @property
    def command_line(self) -> str:
        return " ".join(self.tokens)


def parse_bool(value: str, default: bool = False) -> bool:
    """Parse a boolean setting, returning ``default`` for anything unrecognised."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@log_function_call
def build_command(config: PluginConfig, platform: Platform) -> CommandPlan:
    """
    Build the ``jfrog rt u`` invocation for a configuration.

    Args:
        config: Step configuration
        platform: Platform that decides binary path and env-var syntax

    Returns:
        CommandPlan with the ordered tokens and, when needed, the certificate
        to provision first

    Raises:
        MissingURL, MissingCredentials, MissingSource, MissingTarget
    """
    if not config.url:
        raise MissingURL()

    tokens = [platform.jfrog_binary, *UPLOAD_SUBCOMMAND, "--url", config.url]

    if config.retries != 0:
        tokens.append(f"--retries={config.retries}")

    tokens.extend(select_credentials(config).flags(platform))

    flat = parse_bool(config.flat)
    tokens.append(f"--flat={str(flat).lower()}")

    if config.threads > 0:
        tokens.append(f"--threads={config.threads}")

    insecure = parse_bool(config.insecure)
    if insecure:
        tokens.append("--insecure-tls")

    certificate = None
    if config.pem_file_contents and not insecure:
        certificate = CertificateRequest(
            path=config.pem_file_path or platform.default_cert_path,
            contents=config.pem_file_contents,
        )
    elif config.pem_file_contents:
        logger.info("Insecure TLS requested; ignoring supplied PEM certificate")

    tokens.extend(select_transfer(config).tokens())

    return CommandPlan(tokens=tokens, certificate=certificate)
