"""
Configuration management for code generation.

Loads ``coldConfig.json`` and the definition documents it points to into
immutable values that are built once and handed to every generator.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ...logging_config import get_logger
from ...utils import DocumentLoadError, load_json_object
from .errors import GeneratorError

logger = get_logger(__name__)

CONFIG_FILENAME = "coldConfig.json"

DEFAULT_INDENTATION = 4
DEFAULT_COMMENT_MAX_CHARS = 80
DEFAULT_LOG_DIR = "logs"

# target name -> (output dir field, refresh dir field)
_TARGET_FIELDS: Dict[str, Tuple[str, str]] = {
    "java": ("java_dir", "java_refresh_dir"),
    "typescript": ("js_dir", "js_refresh_dir"),
    "mongoose": ("mongoose_dir", "mongoose_refresh_dir"),
}


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass


@dataclass(frozen=True)
class TargetPaths:
    """Output locations of the generation targets."""

    base_dir: Path
    java_dir: str = "java"
    java_refresh_dir: str = ""
    js_dir: str = "javascript"
    js_refresh_dir: str = ""
    mongoose_dir: str = "mongoose"
    mongoose_refresh_dir: str = ""

    def _fields(self, target: str) -> Tuple[str, str]:
        try:
            return _TARGET_FIELDS[target]
        except KeyError:
            raise ConfigError(f"Unknown generation target: {target}")

    def output_dir(self, target: str) -> Path:
        dir_field, _ = self._fields(target)
        return self.base_dir / getattr(self, dir_field)

    def refresh_dir(self, target: str) -> Path:
        """Directory wiped before a run; the whole output dir when unset."""
        _, refresh_field = self._fields(target)
        refresh = getattr(self, refresh_field)
        output = self.output_dir(target)
        return output / refresh if refresh else output


@dataclass(frozen=True)
class DefinitionPaths:
    """Locations of the definition documents."""

    base_dir: Path
    domain: str = "domain.json"
    java: str = "java.json"
    javascript: str = "javascript.json"
    typescript: str = "typescript.json"

    def path(self, name: str) -> Path:
        return self.base_dir / getattr(self, name)


@dataclass(frozen=True)
class ProjectConfig:
    """Immutable run configuration."""

    lib_version: str
    target: TargetPaths
    definition: DefinitionPaths
    indentation: int = DEFAULT_INDENTATION
    comment_max_chars: int = DEFAULT_COMMENT_MAX_CHARS
    log_enabled: bool = False
    log_dir: Optional[Path] = None
    # Raw configuration document, source of ${name} placeholder values
    settings: Mapping[str, Any] = field(
        default_factory=dict, compare=False, repr=False
    )

    @property
    def indent(self) -> str:
        return " " * self.indentation


@dataclass(frozen=True)
class Definitions:
    """Parsed definition documents."""

    domain: Dict[str, Any]
    java: Dict[str, Any] = field(default_factory=dict)
    javascript: Dict[str, Any] = field(default_factory=dict)
    typescript: Dict[str, Any] = field(default_factory=dict)

    @property
    def maven(self) -> Dict[str, Any]:
        return self.java.get("maven") or {}

    @property
    def annotation_defaults(self) -> Dict[str, Any]:
        return self.java.get("annotateDefaultVal") or {}

    @property
    def package_javascript(self) -> Dict[str, Any]:
        return self.javascript.get("packageJavascript") or {}

    @property
    def package_mongoose(self) -> Dict[str, Any]:
        return self.javascript.get("packageMongoose") or {}

    @property
    def tsconfig(self) -> Dict[str, Any]:
        return self.typescript.get("tsconfig") or {}


def _resolve(base: Path, value: Optional[str], default: str) -> Path:
    path = Path(value or default)
    return path if path.is_absolute() else base / path


def _int_setting(settings: Mapping[str, Any], key: str, default: int) -> int:
    value = settings.get(key)
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Setting '{key}' must be an integer, got {value!r}")
    if number <= 0:
        raise ConfigError(f"Setting '{key}' must be positive, got {number}")
    return number


def build_config(settings: Mapping[str, Any], config_dir: Union[str, Path]) -> ProjectConfig:
    """
    Build a ProjectConfig from a parsed configuration document.

    Relative paths are resolved against ``config_dir``.

    Args:
        settings: Parsed ``coldConfig.json`` content
        config_dir: Directory the configuration was loaded from

    Returns:
        ProjectConfig instance

    Raises:
        ConfigError: If a required setting is missing or invalid
    """
    config_dir = Path(config_dir)

    lib_version = settings.get("libVer")
    if not lib_version:
        raise ConfigError("Configuration is missing 'libVer'")

    target = settings.get("target") or {}
    definition = settings.get("definition") or {}
    if not isinstance(target, dict) or not isinstance(definition, dict):
        raise ConfigError("'target' and 'definition' must be JSON objects")

    target_paths = TargetPaths(
        base_dir=_resolve(config_dir, target.get("baseDir"), "target"),
        java_dir=target.get("javaDir") or "java",
        java_refresh_dir=target.get("javaRefreshDir") or "",
        js_dir=target.get("jsDir") or "javascript",
        js_refresh_dir=target.get("jsRefreshDir") or "",
        mongoose_dir=target.get("mongooseDir") or "mongoose",
        mongoose_refresh_dir=target.get("mongooseRefreshDir") or "",
    )
    definition_paths = DefinitionPaths(
        base_dir=_resolve(config_dir, definition.get("baseDir"), "definition"),
        domain=definition.get("domain") or "domain.json",
        java=definition.get("java") or "java.json",
        javascript=definition.get("javascript") or "javascript.json",
        typescript=definition.get("typescript") or "typescript.json",
    )

    # logEnabled unset: file logging follows the presence of logDir
    log_enabled = settings.get("logEnabled")
    if log_enabled is None:
        log_enabled = bool(settings.get("logDir"))

    return ProjectConfig(
        lib_version=str(lib_version),
        target=target_paths,
        definition=definition_paths,
        indentation=_int_setting(settings, "indentation", DEFAULT_INDENTATION),
        comment_max_chars=_int_setting(
            settings, "commentBlockMaxCharPerLine", DEFAULT_COMMENT_MAX_CHARS
        ),
        log_enabled=bool(log_enabled),
        log_dir=_resolve(config_dir, settings.get("logDir"), DEFAULT_LOG_DIR),
        settings=MappingProxyType(dict(settings)),
    )


class ConfigManager:
    """Loads the configuration file and the definition documents."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing coldConfig.json (default: cwd)
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    def load_config(self) -> ProjectConfig:
        """
        Load and validate the configuration file.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        path = self.config_file
        try:
            settings = load_json_object(path)
        except FileNotFoundError:
            raise ConfigError(
                f"No configuration file [{CONFIG_FILENAME}] found in directory: "
                f"{self.config_dir}"
            )
        except DocumentLoadError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        config = build_config(settings, self.config_dir)
        logger.info(
            "Loaded configuration %s (lib version %s)", path, config.lib_version
        )
        return config

    def load_definitions(self, config: ProjectConfig) -> Definitions:
        """
        Load every definition document named by the configuration.

        Raises:
            ConfigError: If any document is missing or invalid
        """
        documents: Dict[str, Dict[str, Any]] = {}
        for name in ("domain", "java", "javascript", "typescript"):
            path = config.definition.path(name)
            try:
                documents[name] = load_json_object(path)
            except FileNotFoundError:
                raise ConfigError(f"Missing {name} definition document: {path}")
            except DocumentLoadError as e:
                raise ConfigError(f"Failed to load {name} definition: {e}") from e
        return Definitions(**documents)


def load_config(config_dir: Optional[Union[str, Path]] = None) -> ProjectConfig:
    """
    Convenience function to load configuration.

    Args:
        config_dir: Directory containing coldConfig.json

    Returns:
        ProjectConfig instance
    """
    return ConfigManager(config_dir).load_config()
