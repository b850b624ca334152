"""
Environment configuration loader for the Artifactory upload step.

The CI runner passes step settings as PLUGIN_* environment variables and
build metadata as DRONE_* variables. A .env file can seed the environment
for local runs.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

# Fields whose values must never show up in logs or reprs.
SECRET_FIELDS = ("password", "api_key", "access_token", "pem_file_contents")

# Environment variable names referenced by the built command line. The shell
# expands these; the builder never inlines their values.
ENV_USERNAME = "PLUGIN_USERNAME"
ENV_PASSWORD = "PLUGIN_PASSWORD"
ENV_API_KEY = "PLUGIN_API_KEY"
ENV_ACCESS_TOKEN = "PLUGIN_ACCESS_TOKEN"


@dataclass(frozen=True)
class PipelineInfo:
    """Build metadata supplied by the CI runner."""

    repo: str = ""
    build_number: str = ""
    step_name: str = ""

    @classmethod
    def from_env(cls) -> "PipelineInfo":
        return cls(
            repo=os.getenv("DRONE_REPO", ""),
            build_number=os.getenv("DRONE_BUILD_NUMBER", ""),
            step_name=os.getenv("DRONE_STEP_NAME", ""),
        )

    @property
    def correlation_id(self) -> Optional[str]:
        """Return "<repo>#<build>" or None when the runner supplied neither."""
        if not self.repo and not self.build_number:
            return None
        return f"{self.repo or 'unknown'}#{self.build_number or '0'}"


@dataclass(frozen=True)
class PluginConfig:
    """
    Upload step configuration.

    Values are kept as supplied; validation happens when the command line is
    built. ``flat`` and ``insecure`` stay raw strings because unparseable
    values fall back to false rather than failing the step.
    """

    url: str = ""

    # Credentials
    username: str = ""
    password: str = ""
    api_key: str = ""
    access_token: str = ""

    # Transfer tuning
    retries: int = 0
    threads: int = 0
    flat: str = ""

    # Spec file mode
    spec: str = ""
    spec_vars: str = ""

    # Source/target mode
    source: str = ""
    target: str = ""

    # TLS
    insecure: str = ""
    pem_file_contents: str = ""
    pem_file_path: str = ""

    log_level: str = "INFO"
    pre_exec_delay: int = 0

    pipeline: PipelineInfo = field(default_factory=PipelineInfo)

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in SECRET_FIELDS and value:
                value = "***"
            parts.append(f"{f.name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    @classmethod
    def from_env(cls) -> "PluginConfig":
        """
        Load configuration from environment variables.

        Returns:
            PluginConfig instance with loaded values

        Raises:
            ValueError: If an integer setting is not a valid integer
        """
        return cls(
            url=os.getenv("PLUGIN_URL", ""),
            username=os.getenv(ENV_USERNAME, ""),
            password=os.getenv(ENV_PASSWORD, ""),
            api_key=os.getenv(ENV_API_KEY, ""),
            access_token=os.getenv(ENV_ACCESS_TOKEN, ""),
            retries=_int_from_env("PLUGIN_RETRIES"),
            threads=_int_from_env("PLUGIN_THREADS"),
            flat=os.getenv("PLUGIN_FLAT", ""),
            spec=os.getenv("PLUGIN_SPEC", ""),
            spec_vars=os.getenv("PLUGIN_SPEC_VARS", ""),
            source=os.getenv("PLUGIN_SOURCE", ""),
            target=os.getenv("PLUGIN_TARGET", ""),
            insecure=os.getenv("PLUGIN_INSECURE", ""),
            pem_file_contents=os.getenv("PLUGIN_PEM_FILE_CONTENTS", ""),
            pem_file_path=os.getenv("PLUGIN_PEM_FILE_PATH", ""),
            log_level=os.getenv("PLUGIN_LOG_LEVEL") or "INFO",
            pre_exec_delay=_int_from_env("PLUGIN_PRE_EXEC_DELAY"),
            pipeline=PipelineInfo.from_env(),
        )


def _int_from_env(name: str, default: int = 0) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            f"{name} environment variable must be an integer (got: {raw!r})"
        ) from None


def load_dotenv_file(env_path: Union[str, Path]) -> bool:
    """
    Seed os.environ from a .env file without overriding existing variables.

    Returns:
        True if the file exists and set at least one variable
    """
    path = Path(env_path)
    if not path.is_file():
        return False
    return bool(load_dotenv(path, override=False))


# Global config instance (lazy-loaded)
_config: Optional[PluginConfig] = None


def get_config() -> PluginConfig:
    """
    Get or create the step configuration singleton.

    Example:
        >>> config = get_config()
        >>> print(config.url)
        https://artifactory.example.com/artifactory
    """
    global _config
    if _config is None:
        _config = PluginConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads env."""
    global _config
    _config = None
