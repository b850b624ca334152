"""
Shell runner for the jfrog CLI.

Commands go through the platform shell so that the $PLUGIN_* references
emitted by the builder are expanded by the shell from the inherited
environment. Child output is not captured: it goes straight to this
process's stdout/stderr.
"""

import os
import subprocess
import sys
from typing import Dict, List, Optional, Sequence

from artifactory_upload.platform import OFFER_CONFIG_ENV, Platform
from artifactory_upload.utils.logging import get_logger

logger = get_logger(__name__)


def shell_argv(command: str, platform: Platform) -> List[str]:
    """Argument vector that runs ``command`` through the platform shell."""
    shell, flag = platform.shell
    return [shell, flag, command]


def trace(argv: Sequence[str]) -> None:
    """Write the argument vector to stdout so it shows up in the build log."""
    sys.stdout.write(f"+ {' '.join(argv)}\n")
    sys.stdout.flush()


def _run_shell(
    command: str, platform: Platform, env: Optional[Dict[str, str]] = None
) -> subprocess.CompletedProcess:
    argv = shell_argv(command, platform)
    trace(argv)
    return subprocess.run(argv, env=env, check=False)


def run_command(tokens: Sequence[str], platform: Platform) -> None:
    """
    Run the built command line and wait for it to finish.

    Args:
        tokens: Command line tokens, joined with single spaces
        platform: Platform deciding the shell

    Raises:
        subprocess.CalledProcessError: The command exited non-zero
        OSError: The shell could not be started
    """
    command = " ".join(tokens)
    env = dict(os.environ)
    env[OFFER_CONFIG_ENV] = "false"

    result = _run_shell(command, platform, env=env)
    logger.debug(f"Upload command exited with {result.returncode}")
    result.check_returncode()


def run_delay(seconds: int, platform: Platform) -> Optional[int]:
    """
    Sleep in a separate shell invocation.

    The delay never fails the step: a non-zero status or a shell that cannot
    be started is only logged.

    Returns:
        Exit status of the sleep command, or None if the shell did not start
    """
    try:
        result = _run_shell(platform.sleep_command(seconds), platform, env=dict(os.environ))
    except OSError as e:
        logger.warning(f"Pre-execution delay could not start: {e}")
        return None
    if result.returncode != 0:
        logger.warning(f"Pre-execution delay exited with status {result.returncode}")
    return result.returncode
