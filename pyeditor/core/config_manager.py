from __future__ import annotations
from dataclasses import dataclass, asdict, fields
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pyeditor.utils.exceptions import ConfigError
from pyeditor.utils.logger import resolve_level

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pyeditor.json"
LOCAL_HOSTNAMES = ("localhost", "127.0.0.1", "")


@dataclass
class EditorConfig:
    """Editor support configuration."""
    board_id: str = "9900"
    editor_version: str = "2.0.0"
    hostname: str = "localhost"
    metrics_enabled: bool = True
    autocomplete: bool = True
    autocomplete_on_enter: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        # Board IDs are read from JSON or the command line, normalise them
        self.board_id = str(self.board_id)
        try:
            resolve_level(self.log_level)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @property
    def is_local(self) -> bool:
        """True when running on a development host."""
        return self.hostname in LOCAL_HOSTNAMES

    @property
    def metrics_category(self) -> str:
        return f"Python Editor {self.editor_version}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EditorConfig:
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Union[str, Path, None] = None) -> EditorConfig:
    """Load configuration from a JSON file.

    A missing file gives the default configuration.
    """
    config_file = Path(path or DEFAULT_CONFIG_FILE)
    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return EditorConfig()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a JSON object")

    config = EditorConfig.from_dict(data)
    logger.info(f"Loaded configuration from {config_file}")
    return config


def save_config(config: EditorConfig, path: Union[str, Path, None] = None) -> Path:
    """Write ``config`` as JSON and return the file path."""
    config_file = Path(path or DEFAULT_CONFIG_FILE)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info(f"Saved configuration to {config_file}")
    return config_file
