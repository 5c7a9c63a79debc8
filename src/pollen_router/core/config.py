"""Configuration loader and dataclasses for pollen router settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


CONFIG_ENV_VAR = "POLLEN_ROUTER_CONFIG"


@dataclass
class PlannerConfig:
    """Route planner constants."""
    detour_threshold_deg: float = 0.05
    offset_factor: float = 0.1
    miles_per_degree: float = 69.0
    walking_speed_mph: float = 3.0


@dataclass
class GeocoderConfig:
    """Forward-geocoding service settings."""
    base_url: str = "https://nominatim.openstreetmap.org/search"
    user_agent: str = "pollen-router/0.1"
    timeout_s: float = 10.0


@dataclass
class ZonesConfig:
    """Zone layout source. ``None`` means the built-in layout."""
    layout_path: Optional[str] = None


@dataclass
class AppConfig:
    """Complete application configuration."""
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    geocoder: GeocoderConfig = field(default_factory=GeocoderConfig)
    zones: ZonesConfig = field(default_factory=ZonesConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "AppConfig":
        """Load configuration from a YAML file."""
        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            planner=PlannerConfig(**data.get('planner', {})),
            geocoder=GeocoderConfig(**data.get('geocoder', {})),
            zones=ZonesConfig(**data.get('zones', {})),
        )


# Global config instance - lazily loaded
_config: Optional[AppConfig] = None


def project_root() -> Path:
    """Get project root (4 levels up from this file)."""
    return Path(__file__).resolve().parents[3]


def get_config(config_path: Optional[Path] = None) -> AppConfig:
    """Get the global configuration, loading from file if not already loaded.

    Args:
        config_path: Path to the config file. If None, uses the
            ``POLLEN_ROUTER_CONFIG`` env var or configs/pollen_router.yaml.

    Returns:
        The AppConfig instance.
    """
    global _config

    if _config is None or config_path is not None:
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                config_path = Path(env_path)
            else:
                config_path = project_root() / "configs" / "pollen_router.yaml"

        if config_path.exists():
            _config = AppConfig.from_yaml(config_path)
            print(f"[CONFIG] Loaded {config_path}")
        else:
            # Use defaults if config file not found
            _config = AppConfig()

    return _config


def reload_config(config_path: Optional[Path] = None) -> AppConfig:
    """Force reload of configuration from file."""
    global _config
    _config = None
    return get_config(config_path)
