#!/usr/bin/env python3
"""
Upload build artifacts to Artifactory with the jfrog CLI.

CLI wrapper for the upload step. Settings come from PLUGIN_* environment
variables, as set by the CI runner.

Usage:
    python scripts/upload.py
    python scripts/upload.py --env-file .env
    python scripts/upload.py --dry-run
    python scripts/upload.py --log-level DEBUG
"""

import argparse
import subprocess
import sys
from pathlib import Path

# Add project root to path for imports (before other imports)
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from artifactory_upload.errors import PluginError  # noqa: E402
from artifactory_upload.plugin import execute, prepare  # noqa: E402
from artifactory_upload.utils.config import PluginConfig, load_dotenv_file  # noqa: E402
from artifactory_upload.utils.logging import get_logger, setup_logging  # noqa: E402

logger = get_logger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Upload build artifacts to Artifactory using the jfrog CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  PLUGIN_URL                 Artifactory URL (required)
  PLUGIN_USERNAME/PASSWORD   Basic credentials
  PLUGIN_API_KEY             API key (used if no username/password)
  PLUGIN_ACCESS_TOKEN        Access token (used if nothing else is set)
  PLUGIN_SOURCE/TARGET       Source pattern and target path
  PLUGIN_SPEC/SPEC_VARS      File spec (replaces source/target)
  PLUGIN_FLAT, PLUGIN_THREADS, PLUGIN_RETRIES, PLUGIN_INSECURE
  PLUGIN_PEM_FILE_CONTENTS/PATH, PLUGIN_LOG_LEVEL, PLUGIN_PRE_EXEC_DELAY

Examples:
  # Run with settings from the environment
  %(prog)s

  # Seed settings from a .env file
  %(prog)s --env-file .env

  # Show the command that would run
  %(prog)s --dry-run
        """,
    )

    parser.add_argument(
        "-e",
        "--env-file",
        help="Load settings from a .env file (existing variables win)",
    )

    parser.add_argument(
        "-l",
        "--log-level",
        help="Log level (default: PLUGIN_LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print the jfrog command line without running it",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the upload step."""
    args = parse_args(argv)

    if args.env_file and not load_dotenv_file(args.env_file):
        print(f"⚠️  Env file not found: {args.env_file}", file=sys.stderr)

    try:
        config = PluginConfig.from_env()
    except ValueError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(level="DEBUG" if args.verbose else (args.log_level or config.log_level))

    try:
        if args.dry_run:
            plan = prepare(config)
            print(plan.command_line)
            if plan.certificate is not None:
                print(f"# would write certificate to {plan.certificate.path}")
            return 0

        execute(config)
        return 0

    except PluginError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    except subprocess.CalledProcessError as e:
        logger.error(f"Upload command failed with exit status {e.returncode}")
        return e.returncode

    except OSError as e:
        print(f"❌ Could not start shell: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n⚠️  Upload cancelled by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
