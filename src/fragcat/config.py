"""Project-scoped assembly configuration in .fragcat/config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from fragcat.core.constants import (
    CONFIG_FILENAME,
    DEFAULT_ENCODING,
    DEFAULT_EXTENSIONS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_ROOT_DIR,
    FRAGCAT_DIR,
)
from fragcat.exceptions import ConfigError
from fragcat.fragments.discovery import normalize_extensions

ORIGIN_DEFAULT = "default"
ORIGIN_CONFIG = "config"
ORIGIN_CLI = "cli"


@dataclass(slots=True)
class AssemblyConfig:
    """Resolved settings for one assembly run.

    ``origins`` maps each setting name to where its value came from.
    """

    project_root: Path
    root_dir: Path
    output_file: Path
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    encoding: str = DEFAULT_ENCODING
    origins: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """Section payload, paths relative to the project root when possible."""
        return {
            "root_dir": _relative(self.root_dir, self.project_root),
            "output_file": _relative(self.output_file, self.project_root),
            "extensions": list(self.extensions),
            "encoding": self.encoding,
        }

    @classmethod
    def defaults(cls, project_root: Path) -> "AssemblyConfig":
        project_root = project_root.resolve()
        return cls(
            project_root=project_root,
            root_dir=(project_root / DEFAULT_ROOT_DIR).resolve(),
            output_file=(project_root / DEFAULT_OUTPUT_FILE).resolve(),
            extensions=DEFAULT_EXTENSIONS,
            encoding=DEFAULT_ENCODING,
            origins={name: ORIGIN_DEFAULT for name in _SETTINGS},
        )

    def with_overrides(
        self,
        root_dir: Optional[Path] = None,
        output_file: Optional[Path] = None,
        extensions: Optional[Sequence[str]] = None,
        encoding: Optional[str] = None,
    ) -> "AssemblyConfig":
        """Apply command-line overrides; relative paths resolve against the cwd."""
        origins = dict(self.origins)
        if root_dir is not None:
            origins["root_dir"] = ORIGIN_CLI
        if output_file is not None:
            origins["output_file"] = ORIGIN_CLI
        if extensions:
            origins["extensions"] = ORIGIN_CLI
        if encoding:
            origins["encoding"] = ORIGIN_CLI
        return AssemblyConfig(
            project_root=self.project_root,
            root_dir=root_dir.resolve() if root_dir is not None else self.root_dir,
            output_file=output_file.resolve() if output_file is not None else self.output_file,
            extensions=normalize_extensions(extensions) if extensions else self.extensions,
            encoding=encoding or self.encoding,
            origins=origins,
        )


_SETTINGS = ("root_dir", "output_file", "extensions", "encoding")


def _relative(path: Path, base: Path) -> str:
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return str(path)


def config_path(project_root: Path) -> Path:
    return project_root / FRAGCAT_DIR / CONFIG_FILENAME


def _read_payload(path: Path) -> dict:
    yaml = YAML()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return payload


def _string_field(section: dict, name: str, path: Path) -> Optional[str]:
    value = section.get(name)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{path}: assembly.{name} must be a non-empty string")
    return value.strip()


def load_assembly_config(project_root: Path) -> AssemblyConfig:
    """Load the ``assembly`` section, falling back to defaults per setting.

    Raises:
        ConfigError: the file exists but is malformed or wrongly typed
    """
    config = AssemblyConfig.defaults(project_root)
    path = config_path(config.project_root)
    if not path.exists():
        return config

    payload = _read_payload(path)
    section = payload.get("assembly")
    if section is None:
        return config
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: 'assembly' must be a mapping")

    root_dir = _string_field(section, "root_dir", path)
    if root_dir is not None:
        config.root_dir = (config.project_root / root_dir).resolve()
        config.origins["root_dir"] = ORIGIN_CONFIG

    output_file = _string_field(section, "output_file", path)
    if output_file is not None:
        config.output_file = (config.project_root / output_file).resolve()
        config.origins["output_file"] = ORIGIN_CONFIG

    extensions = section.get("extensions")
    if extensions is not None:
        if isinstance(extensions, str):
            extensions = [extensions]
        if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
            raise ConfigError(f"{path}: assembly.extensions must be a list of strings")
        normalized = normalize_extensions(extensions)
        if not normalized:
            raise ConfigError(f"{path}: assembly.extensions must not be empty")
        config.extensions = normalized
        config.origins["extensions"] = ORIGIN_CONFIG

    encoding = _string_field(section, "encoding", path)
    if encoding is not None:
        config.encoding = encoding
        config.origins["encoding"] = ORIGIN_CONFIG

    return config


def save_assembly_config(config: AssemblyConfig) -> Path:
    """Persist the ``assembly`` section, preserving other sections."""
    path = config_path(config.project_root)
    path.parent.mkdir(parents=True, exist_ok=True)

    yaml = YAML()
    yaml.preserve_quotes = True

    payload = _read_payload(path) if path.exists() else {}
    payload["assembly"] = config.to_dict()

    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(payload, handle)
    return path


__all__ = [
    "AssemblyConfig",
    "ORIGIN_CLI",
    "ORIGIN_CONFIG",
    "ORIGIN_DEFAULT",
    "config_path",
    "load_assembly_config",
    "save_assembly_config",
]
