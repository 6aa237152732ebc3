"""
Settings for fmlogic.

All settings live in one small pydantic model. Values are resolved in
order: built-in defaults, then a YAML file, then environment variables.

    FMLOGIC_CONFIG             path to a YAML settings file
    FMLOGIC_MAX_TREE_DEPTH     depth bound for recursive tree walks
    FMLOGIC_VIRTUAL_ROOT_NAME  name given to a synthesized root feature
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fmlogic.errors import MalformedTreeError, SettingsError

LOG = logging.getLogger(__name__)

CONFIG_ENV = "FMLOGIC_CONFIG"
_ENV_OVERRIDES = {
    "max_tree_depth": "FMLOGIC_MAX_TREE_DEPTH",
    "virtual_root_name": "FMLOGIC_VIRTUAL_ROOT_NAME",
}


class Settings(BaseModel):
    """
    Tunables shared by the tree walks and the root unifier.

    Properties:
        max_tree_depth:
            Deepest constraint or feature tree a walk accepts before
            raising MalformedTreeError. Kept below the interpreter's
            recursion limit.

        virtual_root_name:
            Default name of the synthetic root inserted when a feature
            map has several roots.

        artificial_model_name:
            Provenance marker stored on a synthetic root.
    """

    model_config = ConfigDict(extra="forbid")

    max_tree_depth: int = Field(default=500, ge=1)
    virtual_root_name: str = Field(default="VirtualRoot", pattern=r"^\s*\S")
    artificial_model_name: str = "ARTIFICIAL_MODEL"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Settings":
        """
        Validate raw values (YAML or environment strings) into Settings.

        Raises:
            SettingsError: On unknown keys or invalid values
        """
        try:
            return cls(**d)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings: {e}") from e


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SettingsError(f"Settings file not found: {path}")
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid settings file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return data


def _apply_env(values: Dict[str, Any]) -> None:
    for name, env_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is not None:
            values[name] = value


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Build a fresh Settings instance.

    Args:
        path: YAML file to read. Falls back to $FMLOGIC_CONFIG when None.

    Raises:
        SettingsError: If the file or a value is invalid
    """
    values: Dict[str, Any] = {}
    path = path or os.environ.get(CONFIG_ENV)
    if path:
        LOG.debug("Reading settings from %s", path)
        values.update(_read_yaml(path))
    _apply_env(values)
    return Settings.from_dict(values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None


def check_depth(depth: int) -> None:
    """Raise MalformedTreeError once a walk goes deeper than allowed."""
    limit = get_settings().max_tree_depth
    if depth > limit:
        raise MalformedTreeError(depth, limit)
