"""
Parser Registry -- Routes files to language-specific configurations.

Central registry that maps file extensions to LanguageConfig instances.

Usage:
    registry = ParserRegistry()
    registry.register(JAVA_CONFIG)

    config = registry.get_config(Path("src/Foo.java"))
    # Returns JAVA_CONFIG
"""

from pathlib import Path
from typing import Dict, List, Optional, Set

from .config import LanguageConfig


class ParserRegistry:
    """
    Registry of language configurations.

    Maps file extensions to LanguageConfig instances for routing.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._configs: Dict[str, LanguageConfig] = {}  # name -> config
        self._extension_map: Dict[str, str] = {}  # ext -> config name

    def register(self, config: LanguageConfig) -> None:
        """
        Register a language configuration.

        Args:
            config: LanguageConfig to register

        Raises:
            ValueError: If extension already registered to different config
        """
        for ext in config.extensions:
            existing = self._extension_map.get(ext.lower())
            if existing is not None and existing != config.name:
                raise ValueError(
                    f"Extension {ext} already registered to {existing}, "
                    f"cannot register to {config.name}"
                )

        self._configs[config.name] = config
        for ext in config.extensions:
            self._extension_map[ext.lower()] = config.name

    def get_config(self, file_path: Path) -> Optional[LanguageConfig]:
        """
        Get language config for a file based on extension.

        Args:
            file_path: Path to file

        Returns:
            LanguageConfig if extension is supported, None otherwise
        """
        config_name = self._extension_map.get(Path(file_path).suffix.lower())
        return self._configs.get(config_name) if config_name else None

    def get_config_by_name(self, name: str) -> Optional[LanguageConfig]:
        """Get language config by name, case-insensitive."""
        for config_name, config in self._configs.items():
            if config_name.lower() == name.lower():
                return config
        return None

    def supported_extensions(self) -> Set[str]:
        return set(self._extension_map.keys())

    def supported_languages(self) -> List[str]:
        return list(self._configs.keys())

    def is_supported(self, file_path: Path) -> bool:
        return Path(file_path).suffix.lower() in self._extension_map

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, name: str) -> bool:
        return name in self._configs


def default_registry() -> ParserRegistry:
    """Registry with every built-in language."""
    from .languages import BUILTIN_LANGUAGES

    registry = ParserRegistry()
    for config in BUILTIN_LANGUAGES:
        registry.register(config)
    return registry
