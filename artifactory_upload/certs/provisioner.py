"""
Trust certificate provisioning.

Writes the PEM certificate the jfrog CLI uses to verify the Artifactory TLS
identity. An existing file is left untouched, so repeated runs on the same
runner are no-ops.
"""

import os
from pathlib import Path
from typing import List

from artifactory_upload.builder import CertificateRequest
from artifactory_upload.errors import CertDirError, CertWriteError
from artifactory_upload.utils.logging import get_logger, log_function_call

logger = get_logger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


def _make_private_dirs(directory: Path) -> None:
    """Create ``directory`` and any missing ancestors, each with DIR_MODE."""
    missing: List[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent

    for path in reversed(missing):
        path.mkdir(mode=DIR_MODE, exist_ok=True)


@log_function_call
def provision_certificate(request: CertificateRequest) -> bool:
    """
    Ensure the certificate exists at ``request.path``.

    Args:
        request: Destination path and PEM contents

    Returns:
        True if the file was written, False if it already existed

    Raises:
        CertDirError: Parent directory could not be created
        CertWriteError: File could not be written
    """
    path = Path(request.path)
    logger.info(f"Creating pem file at {str(path)!r}")

    if path.exists():
        logger.info(f"Pem file already present at {str(path)!r}, leaving it as is")
        return False

    try:
        _make_private_dirs(path.parent)
    except OSError as e:
        raise CertDirError(f"error creating pem folder: {e}", str(path)) from e

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(request.contents.encode("utf-8"))
    except OSError as e:
        raise CertWriteError(f"error writing pem file: {e}", str(path)) from e

    logger.info(f"Successfully created pem file at {str(path)!r}")
    return True
