"""
BaseCommand -- Shared foundation for all CLI commands

Provides access to CLI resources via composition.
Commands receive the CLI instance and access its resources through properties.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import ScopeprintCLI
    from ..fingerprint import FingerprintEngine


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Design principle: Composition over inheritance.
    Commands don't reinitialize resources -- they access them via the CLI instance.
    """

    def __init__(self, cli: 'ScopeprintCLI'):
        """
        Initialize command with CLI instance.

        Args:
            cli: The main ScopeprintCLI instance holding all resources
        """
        self._cli = cli

    # -------------------------------------------------------------------------
    # Core resources (convenience properties)
    # -------------------------------------------------------------------------

    @property
    def project_dir(self) -> Path:
        """Project root directory."""
        return self._cli.project_dir

    @property
    def config_manager(self):
        """Layered configuration loader."""
        return self._cli.config_manager

    @property
    def config(self):
        """Validated application configuration."""
        return self._cli.config

    @property
    def orchestrator(self):
        """Task orchestrator for per-file parallelism."""
        return self._cli.orchestrator

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    def engine(self, source_root: Optional[Path] = None) -> 'FingerprintEngine':
        """Fingerprint engine rooted at `source_root` (default: project dir)."""
        return self._cli.engine(source_root)

    def resolve(self, path: str) -> Path:
        """Resolve a path argument against the project directory."""
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.project_dir / candidate
