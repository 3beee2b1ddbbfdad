"""
Configuration Loader - Load and validate configuration from YAML.

Looks for config/default.yaml (or an explicit path). Missing sections and
keys fall back to dataclass defaults; unknown keys are ignored.
"""
import yaml
from pathlib import Path
from typing import Optional, Any, Dict
from dataclasses import dataclass, field, asdict
from copy import deepcopy

from ..game.config import DinoDuelConfig


@dataclass
class DisplayConfig:
    """Window and asset settings for the pygame host."""
    title: str = "Dino Duel"
    scale: float = 1.0
    asset_dir: str = "assets"


@dataclass
class ProgressConfig:
    """Where the highest unlocked level is saved."""
    save_path: str = "saves/progress.json"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    verbose: bool = True
    history: int = 50


@dataclass
class Config:
    """Complete application configuration."""
    game: DinoDuelConfig = field(default_factory=DinoDuelConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values()}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _find_config_file() -> Optional[Path]:
    """Find config/default.yaml in common locations."""
    possible_paths = [
        Path("config") / "default.yaml",
        Path(__file__).parent.parent.parent / "config" / "default.yaml",
        Path.cwd() / "config" / "default.yaml",
    ]

    for path in possible_paths:
        if path.exists():
            return path
    return None


def _load_yaml_file(path: Path) -> Dict:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return data if data else {}


def config_from_dict(data: Dict[str, Any]) -> Config:
    """Build a Config from a nested dictionary."""
    config = Config()

    if 'game' in data:
        config.game = DinoDuelConfig.from_dict(data['game'] or {})

    if 'display' in data:
        config.display = _dict_to_dataclass(data['display'], DisplayConfig)

    if 'progress' in data:
        config.progress = _dict_to_dataclass(data['progress'], ProgressConfig)

    if 'logging' in data:
        config.logging = _dict_to_dataclass(data['logging'], LoggingConfig)

    return config


def load_config(config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file (defaults to config/default.yaml)
        overrides: Nested dictionary merged over the file's contents

    Returns:
        Config object with all settings
    """
    path = Path(config_path) if config_path is not None else _find_config_file()

    data: Dict[str, Any] = {}
    if path is None or not path.exists():
        print("[Config] No config file found, using defaults")
    else:
        data = _load_yaml_file(path)

    if overrides:
        data = _deep_merge(data, overrides)

    return config_from_dict(data)


def config_to_dict(config: Config) -> Dict[str, Any]:
    """Nested dictionary form of a Config, as written to YAML."""
    data = asdict(config)
    data['game'] = config.game.to_dict()
    return data


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    with open(config_path, 'w') as f:
        yaml.dump(config_to_dict(config), f, default_flow_style=False, sort_keys=False)
