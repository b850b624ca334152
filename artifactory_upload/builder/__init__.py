"""
Command-line builder module.

Validates the step configuration and assembles the ordered ``jfrog rt u``
tokens, deciding along the way whether a trust certificate is needed.
"""

from .builder import (
    AccessToken,
    ApiKey,
    CertificateRequest,
    CommandPlan,
    PathTransfer,
    SpecTransfer,
    UserPassword,
    build_command,
    parse_bool,
    select_credentials,
    select_transfer,
)

__all__ = [
    "AccessToken",
    "ApiKey",
    "CertificateRequest",
    "CommandPlan",
    "PathTransfer",
    "SpecTransfer",
    "UserPassword",
    "build_command",
    "parse_bool",
    "select_credentials",
    "select_transfer",
]
