"""Tests for configuration loading."""

from pathlib import Path

from hoshiarpursakhi.models import RegionBounds
from hoshiarpursakhi.utils.config import Config, config


class TestConfig:
    """Tests for Config singleton."""

    def test_singleton_pattern(self) -> None:
        """Test that Config follows singleton pattern."""
        config1 = Config()
        config2 = Config()
        assert config1 is config2

    def test_global_config_instance(self) -> None:
        """Test that global config instance is available."""
        assert config is not None
        assert isinstance(config, Config)

    def test_data_file_property(self) -> None:
        """Test data_file points at the bundled dataset."""
        path = config.data_file
        assert isinstance(path, Path)
        assert path.name == "religious-sites.json"
        assert path.exists()

    def test_data_url_property(self) -> None:
        """Test data_url returns string."""
        assert isinstance(config.data_url, str)

    def test_http_timeout_property(self) -> None:
        """Test http_timeout property returns int."""
        timeout = config.http_timeout
        assert isinstance(timeout, int)
        assert timeout > 0

    def test_user_agent_property(self) -> None:
        """Test user_agent property returns string."""
        ua = config.user_agent
        assert isinstance(ua, str)
        assert "HoshiarpurSakhi" in ua

    def test_region_bounds_property(self) -> None:
        """Test region_bounds describes the Punjab box."""
        region = config.region_bounds
        assert isinstance(region, RegionBounds)
        assert region.name == "Punjab"
        assert (region.min_lat, region.max_lat) == (29.0, 33.0)
        assert (region.min_lng, region.max_lng) == (73.0, 78.0)

    def test_recognized_facilities_property(self) -> None:
        """Test recognized_facilities property returns list."""
        facilities = config.recognized_facilities
        assert isinstance(facilities, list)
        assert "Langar Hall" in facilities
        assert "Parking" in facilities

    def test_map_properties(self) -> None:
        """Test map center and zoom."""
        lat, lng = config.map_center
        assert config.region_bounds.contains(lat, lng)
        assert isinstance(config.map_zoom, int)

    def test_requirement_thresholds(self) -> None:
        """Test requirement thresholds are sensible."""
        assert config.min_sites > 0
        assert 0 <= config.min_type_share < config.max_type_share <= 100
        assert 0 <= config.min_contact_share <= 100
        assert config.min_description_length > 0
        assert config.min_history_length > 0

    def test_get_method_with_valid_key(self) -> None:
        """Test get method with valid nested keys."""
        result = config.get("region", "name")
        assert result == "Punjab"

    def test_get_method_with_invalid_key(self) -> None:
        """Test get method with invalid key returns default."""
        result = config.get("nonexistent", "key", default="default_value")
        assert result == "default_value"

    def test_get_method_partial_path(self) -> None:
        """Test get method with partial path returns nested dict."""
        result = config.get("region")
        assert isinstance(result, dict)
        assert "min_lat" in result
