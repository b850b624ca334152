"""
Utility modules for the Artifactory upload step.

- logging: Structured logging with entry/exit decorators
- config: PLUGIN_* environment configuration
"""

from artifactory_upload.utils.logging import get_logger, log_function_call

__all__ = ["get_logger", "log_function_call"]
