"""
Artifactory Upload Step

A CI pipeline step that uploads build artifacts to Artifactory by driving
the jfrog CLI (``jfrog rt u``) from PLUGIN_* environment settings.

Modules:
- builder: command line assembly and validation
- certs: trust certificate provisioning
- runner: shell execution with live output
- platform: Windows/POSIX strategy
- utils: logging and configuration
"""

__version__ = "0.1.0"

from artifactory_upload.utils.logging import setup_logging

# Initialize default logging configuration
setup_logging()
