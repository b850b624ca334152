"""
Certificate provisioning module.

Materializes the PEM trust certificate before the upload runs.
"""

from .provisioner import provision_certificate

__all__ = ["provision_certificate"]
