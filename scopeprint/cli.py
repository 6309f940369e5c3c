"""
CLI -- Command interface

    scopeprint fingerprint checkstyle-result.xml --parser checkstyle -o current.json
    scopeprint compare baseline.json current.json
    scopeprint scope src/Foo.java 42 --category MagicNumber
    scopeprint config
"""

import argparse
import atexit
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config, ConfigManager
from .core.errors import ConfigError, MalformedFilterRegexError
from .fingerprint import FingerprintEngine
from .orchestrator import TaskOrchestrator, get_orchestrator
from . import __version__

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ScopeprintCLI:
    """Holds the resources commands share: config, orchestrator, engines."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir).resolve()
        self.config_manager = ConfigManager(self.project_dir)
        self._config: Optional[Config] = None
        self._orchestrator: Optional[TaskOrchestrator] = None

    @property
    def config(self) -> Config:
        """
        Validated configuration (loaded on first use).

        Raises:
            ConfigError: If the configuration is invalid
        """
        if self._config is None:
            self._config = self.config_manager.load_validated()
        return self._config

    @property
    def orchestrator(self) -> TaskOrchestrator:
        """Global orchestrator, shut down at exit."""
        if self._orchestrator is None:
            self._orchestrator = get_orchestrator()
            atexit.register(self._shutdown_orchestrator)
        return self._orchestrator

    def _shutdown_orchestrator(self):
        if self._orchestrator is not None:
            self._orchestrator.shutdown(wait=True)

    def engine(self, source_root: Optional[Path] = None) -> FingerprintEngine:
        return FingerprintEngine.from_config(
            self.config,
            source_root=source_root or self.project_dir,
            orchestrator=self.orchestrator,
        )


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library logging to stderr at the requested level."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopeprint",
        description="scopeprint -- Content-stable fingerprints for analysis warnings",
        epilog="Blank lines and renames do not make a warning new.",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("SCOPEPRINT_PROJECT_PATH", "."),
        help='Project directory (default: SCOPEPRINT_PROJECT_PATH or current)'
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Warnings and errors only')

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'scopeprint {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all
    register_all(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the scopeprint CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    from .commands import dispatch, get_registered_commands
    if args.command not in get_registered_commands():
        print(f"Error: Unknown command: {args.command}")
        parser.print_help()
        return 2

    cli = ScopeprintCLI(Path(args.project))

    try:
        return dispatch(args.command, cli, args) or 0
    except (ConfigError, MalformedFilterRegexError) as e:
        print(f"Configuration error: {e}")
        return 2


if __name__ == '__main__':
    sys.exit(main())
