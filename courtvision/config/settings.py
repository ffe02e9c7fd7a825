"""
Global settings management
"""

import os
from dataclasses import dataclass, fields
from typing import Optional, Union, get_args, get_origin
import json
from pathlib import Path


@dataclass
class Settings:
    """Global application settings and feature flags"""

    # Environment
    environment_name: str = "Development"
    log_level: str = "INFO"

    # Networking
    api_base_url: Optional[str] = None
    api_timeout: float = 10.0

    # Detection
    enable_mock_shot_generation: bool = True
    mock_shot_interval: float = 3.5
    mock_seed: Optional[int] = None

    # Insights
    insights_latency: float = 0.4
    use_remote_insights: bool = False

    # History
    history_limit: int = 0  # 0 keeps every session
    history_path: Optional[str] = None

    # Frame source
    frame_width: int = 640
    frame_height: int = 480
    frame_rate: float = 30.0

    # Session dispatch
    dispatch_interval: float = 0.1

    @classmethod
    def from_file(cls, filepath: str) -> 'Settings':
        """Load settings from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(**data)

    @classmethod
    def from_env(cls) -> 'Settings':
        """Load settings from environment variables"""
        settings = cls()

        # Override from environment
        for f in fields(settings):
            env_key = f"COURTVISION_{f.name.upper()}"
            if env_key in os.environ:
                setattr(settings, f.name, _convert(os.environ[env_key], f.type))

        return settings

    def save(self, filepath: str):
        """Save settings to JSON file"""
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.__dict__, f, indent=2)


def _convert(value: str, field_type):
    """Convert an environment string to the field's declared type"""
    if get_origin(field_type) is Union:
        if value == '' or value.lower() == 'none':
            return None
        field_type = next(t for t in get_args(field_type) if t is not type(None))

    if field_type == bool:
        return value.lower() in ('true', '1', 'yes')
    if field_type == int:
        return int(value)
    if field_type == float:
        return float(value)
    return value


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance"""
    global _settings

    if _settings is None:
        # Try loading from file first
        config_file = os.environ.get("COURTVISION_CONFIG", "config/settings.json")
        if os.path.exists(config_file):
            _settings = Settings.from_file(config_file)
        else:
            # Load from environment or use defaults
            _settings = Settings.from_env()

    return _settings


def reset_settings():
    """Reset settings (mainly for testing)"""
    global _settings
    _settings = None
