"""
Configuration -- Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (SCOPEPRINT_HASH_ALGORITHM, SCOPEPRINT_ENCODING,
     SCOPEPRINT_DEFAULT_SCOPE)
  2. Project config (.scopeprint/config.yaml)
  3. User config (~/.scopeprint/config.yaml)
  4. Defaults

Sections:
  fingerprint: hash algorithm, text encoding, context fields
  scopes: default scope and per-category overrides
  filters: include/exclude regexes per issue property
"""

import codecs
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .core.errors import ConfigError, MalformedFilterRegexError
from .fingerprint.hasher import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS
from .fingerprint.selectors import ScopeKind

logger = logging.getLogger(__name__)

# Issue attributes (plus the configured encoding) usable as hash context
CONTEXT_FIELDS = ("file_name", "package_name", "module_name", "category", "type", "encoding")


@dataclass
class FingerprintConfig:
    """Hashing settings."""
    algorithm: str = DEFAULT_ALGORITHM
    encoding: str = "utf-8"
    context_fields: List[str] = field(default_factory=list)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            return f"Unknown hash algorithm '{self.algorithm}'. Valid: {', '.join(SUPPORTED_ALGORITHMS)}"

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            return f"Unknown encoding '{self.encoding}'"

        unknown = [name for name in self.context_fields if name not in CONTEXT_FIELDS]
        if unknown:
            return f"Unknown context field(s) {', '.join(unknown)}. Valid: {', '.join(CONTEXT_FIELDS)}"
        return None


@dataclass
class ScopeConfig:
    """Scope selection settings."""
    default: str = ScopeKind.METHOD_OR_CLASS.value
    categories: Dict[str, str] = field(default_factory=dict)  # category/type -> scope name

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        for name in [self.default, *self.categories.values()]:
            try:
                ScopeKind.from_name(str(name))
            except ValueError as e:
                return str(e)
        return None


@dataclass
class FilterConfig:
    """Issue filter settings: property name -> list of regexes."""
    include: Dict[str, List[str]] = field(default_factory=dict)
    exclude: Dict[str, List[str]] = field(default_factory=dict)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        from .core.filter import IssueFilter

        try:
            IssueFilter.from_settings(self)
        except (MalformedFilterRegexError, ValueError) as e:
            return str(e)
        return None


@dataclass
class Config:
    """Application configuration."""
    fingerprint: FingerprintConfig = field(default_factory=FingerprintConfig)
    scopes: ScopeConfig = field(default_factory=ScopeConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)

    def validate(self) -> Optional[str]:
        """First validation error across all sections, or None."""
        for section in (self.fingerprint, self.scopes, self.filters):
            error = section.validate()
            if error:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "fingerprint": {
                "algorithm": self.fingerprint.algorithm,
                "encoding": self.fingerprint.encoding,
                "context_fields": list(self.fingerprint.context_fields),
            },
            "scopes": {
                "default": self.scopes.default,
                "categories": dict(self.scopes.categories),
            },
            "filters": {
                "include": {k: list(v) for k, v in self.filters.include.items()},
                "exclude": {k: list(v) for k, v in self.filters.exclude.items()},
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        fingerprint_data = data.get("fingerprint") or {}
        scopes_data = data.get("scopes") or {}
        filters_data = data.get("filters") or {}

        return cls(
            fingerprint=FingerprintConfig(
                algorithm=fingerprint_data.get("algorithm", DEFAULT_ALGORITHM),
                encoding=fingerprint_data.get("encoding", "utf-8"),
                context_fields=list(fingerprint_data.get("context_fields") or []),
            ),
            scopes=ScopeConfig(
                default=scopes_data.get("default", ScopeKind.METHOD_OR_CLASS.value),
                categories={str(k): str(v) for k, v in (scopes_data.get("categories") or {}).items()},
            ),
            filters=FilterConfig(
                include=_pattern_map(filters_data.get("include")),
                exclude=_pattern_map(filters_data.get("exclude")),
            ),
        )


def _pattern_map(data: Optional[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Normalize {prop: pattern | [patterns]} to {prop: [patterns]}."""
    result: Dict[str, List[str]] = {}
    for prop, patterns in (data or {}).items():
        if isinstance(patterns, str):
            patterns = [patterns]
        result[str(prop)] = [str(p) for p in patterns or []]
    return result


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment overrides
      2. Project config (.scopeprint/config.yaml)
      3. User config (~/.scopeprint/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".scopeprint"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".scopeprint"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_FILE

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one YAML layer; a malformed file is logged and skipped."""
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", path)
            return {}
        return data

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        if os.environ.get("SCOPEPRINT_HASH_ALGORITHM"):
            config_data.setdefault("fingerprint", {})["algorithm"] = os.environ["SCOPEPRINT_HASH_ALGORITHM"]
        if os.environ.get("SCOPEPRINT_ENCODING"):
            config_data.setdefault("fingerprint", {})["encoding"] = os.environ["SCOPEPRINT_ENCODING"]
        if os.environ.get("SCOPEPRINT_DEFAULT_SCOPE"):
            config_data.setdefault("scopes", {})["default"] = os.environ["SCOPEPRINT_DEFAULT_SCOPE"]

        self._config = Config.from_dict(config_data)
        return self._config

    def load_validated(self) -> Config:
        """
        Load configuration and reject invalid values.

        Raises:
            ConfigError: If any section fails validation
        """
        config = self.load()
        error = config.validate()
        if error:
            raise ConfigError(error)
        return config

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self.project_config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.project_config_path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._config = config

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self.USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)

        with open(self.user_config_path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "fingerprint.algorithm",
                "scopes.categories.MagicNumber")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        section = parts[0]

        if section == "fingerprint" and len(parts) == 2:
            setting = parts[1]
            if setting == "algorithm":
                config.fingerprint.algorithm = value
            elif setting == "encoding":
                config.fingerprint.encoding = value
            elif setting == "context_fields":
                config.fingerprint.context_fields = [v.strip() for v in value.split(",") if v.strip()]
            else:
                return f"Unknown fingerprint setting: {setting}. Valid: algorithm, encoding, context_fields"
            error = config.fingerprint.validate()

        elif section == "scopes" and len(parts) == 2 and parts[1] == "default":
            config.scopes.default = value
            error = config.scopes.validate()

        elif section == "scopes" and len(parts) == 3 and parts[1] == "categories":
            config.scopes.categories[parts[2]] = value
            error = config.scopes.validate()

        else:
            return (
                f"Invalid key: {key}. Valid: fingerprint.algorithm, fingerprint.encoding, "
                "fingerprint.context_fields, scopes.default, scopes.categories.<name>"
            )

        if error:
            self._config = None  # discard the rejected in-memory change
            return error

        if scope == "project":
            self.save_project(config)
        else:
            self.save_user(config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value."""
        config = self.load()

        parts = key.split(".")
        if parts[0] == "fingerprint" and len(parts) == 2:
            if parts[1] == "algorithm":
                return config.fingerprint.algorithm
            if parts[1] == "encoding":
                return config.fingerprint.encoding
            if parts[1] == "context_fields":
                return ",".join(config.fingerprint.context_fields)
        elif parts[0] == "scopes":
            if len(parts) == 2 and parts[1] == "default":
                return config.scopes.default
            if len(parts) == 3 and parts[1] == "categories":
                return config.scopes.categories.get(parts[2])

        return None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        lines = [
            "Configuration:",
            "",
            "Fingerprint:",
            f"  Algorithm: {config.fingerprint.algorithm}",
            f"  Encoding: {config.fingerprint.encoding}",
            f"  Context: {', '.join(config.fingerprint.context_fields) or '(none)'}",
            "",
            "Scopes:",
            f"  Default: {config.scopes.default}",
        ]
        for name, scope in sorted(config.scopes.categories.items()):
            lines.append(f"  {name}: {scope}")

        lines.extend(["", "Filters:"])
        if not config.filters.include and not config.filters.exclude:
            lines.append("  (none)")
        for label, rules in (("Include", config.filters.include), ("Exclude", config.filters.exclude)):
            for prop, patterns in rules.items():
                lines.append(f"  {label} {prop}: {', '.join(patterns)}")

        lines.extend([
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ])

        return "\n".join(lines)


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
