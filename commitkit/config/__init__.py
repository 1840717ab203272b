"""Configuration Management Package

Two tiers of JSON `.ckrc` files, merged key by key:

1. ~/.ckrc (global defaults)
2. ./.ckrc in the current directory (project overrides, or --config PATH)

Config format:
{
    "editor": "nano",
    "commit_types": ["feat", "fix", "docs", "test", "chore"],
    "template": "[{commit_number}] ({commit_type} on {branch_name}) {message}"
}
"""

import json
import os
import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

from commitkit import COMMIT_TYPE_NAMES
from commitkit.template import DEFAULT_TEMPLATE

DEFAULT_EDITOR = "nano"


class ConfigError(Exception):
    """Raised when configuration files cannot be created or updated."""
    pass


@dataclass
class Config:
    """User configuration with sensible defaults."""
    editor: Optional[str] = None
    commit_types: list[str] = field(default_factory=lambda: list(COMMIT_TYPE_NAMES))
    template: str = DEFAULT_TEMPLATE

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.editor is not None and (not isinstance(self.editor, str) or not self.editor.strip()):
            warnings.append(f"Invalid editor '{self.editor}', using default")
            self.editor = defaults.editor

        if (not isinstance(self.commit_types, list) or not self.commit_types
                or not all(isinstance(t, str) and t.strip() for t in self.commit_types)):
            warnings.append(f"Invalid commit_types '{self.commit_types}', using {defaults.commit_types}")
            self.commit_types = defaults.commit_types

        if not isinstance(self.template, str) or not self.template.strip():
            warnings.append(f"Invalid template '{self.template}', using '{defaults.template}'")
            self.template = defaults.template

        return warnings

    def resolve_editor(self) -> str:
        """Editor to launch. Precedence: CK_EDITOR > config > VISUAL > EDITOR > nano."""
        return (
            os.environ.get('CK_EDITOR')
            or self.editor
            or os.environ.get('VISUAL')
            or os.environ.get('EDITOR')
            or DEFAULT_EDITOR
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads the merged configuration and writes either tier."""

    CONFIG_FILENAME = ".ckrc"

    def __init__(self, project_path: Optional[Path] = None):
        self._project_override = Path(project_path) if project_path else None
        self._config: Optional[Config] = None
        self._loaded_paths: list[Path] = []

    @property
    def global_path(self) -> Path:
        return Path.home() / self.CONFIG_FILENAME

    @property
    def project_path(self) -> Path:
        return self._project_override or Path.cwd() / self.CONFIG_FILENAME

    def path_for(self, global_config: bool) -> Path:
        return self.global_path if global_config else self.project_path

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        merged = {}
        for path in (self.global_path, self.project_path):
            if path.exists():
                data = self._read_file(path)
                if data is not None:
                    merged.update(data)
                    self._loaded_paths.append(path)

        self._config = Config.from_dict(merged)
        return self._config

    def _read_file(self, path: Path) -> Optional[dict]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return None
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return None
        return data

    def _write_file(self, path: Path, data: dict) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
            f.write('\n')
        return path

    def create(self, editor: str, global_config: bool = False) -> Path:
        """Write a fresh config file with defaults and the given editor."""
        path = self.path_for(global_config)
        if path.exists():
            raise ConfigError(
                f"Configuration file already exists at {path} - use 'ck set-editor <editor>' to change it"
            )
        config = Config(editor=editor)
        return self._write_file(path, config.to_dict())

    def set_editor(self, editor: str, global_config: bool = False) -> Path:
        """Update only the editor key of one tier, keeping its other keys."""
        path = self.path_for(global_config)
        data = {}
        if path.exists():
            data = self._read_file(path)
            if data is None:
                raise ConfigError(f"Invalid configuration in {path} - fix or remove the file first")
        data['editor'] = editor
        self._config = None
        return self._write_file(path, data)

    def get_loaded_paths(self) -> list[Path]:
        return list(self._loaded_paths)


_manager = ConfigManager()


def configure(project_path: Optional[Path] = None) -> ConfigManager:
    """Replace the module-level manager (used for --config PATH)."""
    global _manager
    _manager = ConfigManager(project_path)
    return _manager


def get_manager() -> ConfigManager:
    return _manager


def load_config() -> Config:
    return _manager.load()


def get_config_paths() -> list[Path]:
    return _manager.get_loaded_paths()


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_EDITOR",
    "configure",
    "get_manager",
    "load_config",
    "get_config_paths",
]
