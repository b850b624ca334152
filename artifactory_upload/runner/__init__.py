"""
Process runner module.

Runs the built command line through the platform shell with live output.
"""

from .runner import run_command, run_delay, shell_argv, trace

__all__ = ["run_command", "run_delay", "shell_argv", "trace"]
