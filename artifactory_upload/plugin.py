"""
Upload step entry point.

Runs the step in a single pass: optional pre-execution delay, command
build, optional certificate provisioning, then the jfrog CLI itself.
Validation failures stop the run before any certificate is written or the
CLI is started.

Example usage:
    >>> from artifactory_upload.plugin import execute
    >>> from artifactory_upload.utils.config import PluginConfig
    >>> execute(PluginConfig.from_env())
"""

from typing import Optional

from artifactory_upload.builder import CommandPlan, build_command
from artifactory_upload.certs import provision_certificate
from artifactory_upload.platform import Platform
from artifactory_upload.runner import run_command, run_delay
from artifactory_upload.utils.config import PluginConfig
from artifactory_upload.utils.logging import get_logger, set_correlation_id

logger = get_logger(__name__)


def prepare(config: PluginConfig, platform: Optional[Platform] = None) -> CommandPlan:
    """Build the command plan without touching the filesystem or spawning anything."""
    return build_command(config, platform or Platform.current())


def execute(config: PluginConfig, platform: Optional[Platform] = None) -> None:
    """
    Run the upload step.

    Args:
        config: Step configuration
        platform: Platform strategy (defaults to the host platform)

    Raises:
        ValidationError: Configuration is incomplete
        CertificateError: Certificate could not be written
        subprocess.CalledProcessError: jfrog exited non-zero
        OSError: The shell could not be started
    """
    platform = platform or Platform.current()

    correlation_id = config.pipeline.correlation_id
    if correlation_id:
        set_correlation_id(correlation_id)

    if config.pre_exec_delay > 0:
        logger.info(f"Waiting {config.pre_exec_delay}s before upload")
        run_delay(config.pre_exec_delay, platform)

    plan = build_command(config, platform)

    if plan.certificate is not None:
        provision_certificate(plan.certificate)

    logger.info(f"Uploading to {config.url}")
    run_command(plan.tokens, platform)
    logger.info("Upload finished")
