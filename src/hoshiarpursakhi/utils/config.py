"""
Configuration loader for HoshiarpurSakhi.

Loads settings from config.yaml and provides typed access to configuration values.
"""

from pathlib import Path
from typing import Any, cast

import yaml

from hoshiarpursakhi.models import RegionBounds


class Config:
    """
    Singleton configuration loader.

    Loads config.yaml once and provides access to all settings.
    """

    _instance: "Config | None" = None
    _config: dict[str, Any] | None = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self) -> None:
        """Load configuration from config.yaml."""
        # Find project root by looking for pyproject.toml
        config_path = self._find_project_root() / "config.yaml"
        if not config_path.exists():
            # Installed without the project tree: fall back to built-in defaults
            self._config = {}
            return
        with open(config_path, encoding="utf-8") as f:
            self._config = yaml.safe_load(f) or {}

    @staticmethod
    def _find_project_root() -> Path:
        """Find project root by searching for pyproject.toml."""
        current = Path(__file__).resolve().parent
        for _ in range(10):  # Prevent infinite loop
            if (current / "pyproject.toml").exists():
                return current
            if current.parent == current:
                break
            current = current.parent
        # Fallback: assume standard src layout (4 levels up from utils/config.py)
        return Path(__file__).resolve().parent.parent.parent.parent

    @staticmethod
    def package_dir() -> Path:
        """Directory of the installed hoshiarpursakhi package."""
        return Path(__file__).resolve().parent.parent

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Get a nested configuration value.

        Args:
            *keys: Path to the config value (e.g., 'region', 'min_lat')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    # Convenience properties for common settings
    @property
    def data_file(self) -> Path:
        result = self.get("data", "file", default="data/religious-sites.json")
        path = Path(cast(str, result))
        if path.is_absolute():
            return path
        return self.package_dir() / path

    @property
    def data_url(self) -> str:
        result = self.get("data", "url", default="")
        return cast(str, result or "")

    @property
    def http_timeout(self) -> int:
        result = self.get("http", "timeout", default=15)
        return cast(int, result)

    @property
    def user_agent(self) -> str:
        result = self.get(
            "http",
            "user_agent",
            default="HoshiarpurSakhi/1.2 (religious sites directory)",
        )
        return cast(str, result)

    @property
    def region_bounds(self) -> RegionBounds:
        return RegionBounds(
            name=cast(str, self.get("region", "name", default="Punjab")),
            min_lat=float(self.get("region", "min_lat", default=29.0)),
            max_lat=float(self.get("region", "max_lat", default=33.0)),
            min_lng=float(self.get("region", "min_lng", default=73.0)),
            max_lng=float(self.get("region", "max_lng", default=78.0)),
        )

    @property
    def recognized_facilities(self) -> list[str]:
        result = self.get("validation", "recognized_facilities", default=[])
        return cast(list[str], result)

    @property
    def map_center(self) -> tuple[float, float]:
        lat = self.get("map", "center_lat", default=31.5204)
        lng = self.get("map", "center_lng", default=75.9118)
        return (float(lat), float(lng))

    @property
    def map_zoom(self) -> int:
        result = self.get("map", "zoom", default=11)
        return cast(int, result)

    @property
    def min_sites(self) -> int:
        result = self.get("requirements", "min_sites", default=40)
        return cast(int, result)

    @property
    def min_type_share(self) -> float:
        result = self.get("requirements", "min_type_share", default=20)
        return cast(float, result)

    @property
    def max_type_share(self) -> float:
        result = self.get("requirements", "max_type_share", default=80)
        return cast(float, result)

    @property
    def min_contact_share(self) -> float:
        result = self.get("requirements", "min_contact_share", default=50)
        return cast(float, result)

    @property
    def min_description_length(self) -> int:
        result = self.get("requirements", "min_description_length", default=50)
        return cast(int, result)

    @property
    def min_history_length(self) -> int:
        result = self.get("requirements", "min_history_length", default=100)
        return cast(int, result)


# Global config instance
config = Config()
