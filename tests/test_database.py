"""Tests for the site database accessor."""

import json
from unittest.mock import MagicMock, patch

import pytest
from requests.exceptions import ConnectionError as RequestsConnectionError

from hoshiarpursakhi.database import LOAD_FAILED_ERROR, SiteDatabase
from hoshiarpursakhi.models import RegionBounds, SearchFilters
from hoshiarpursakhi.validation import INVALID_STRUCTURE_ERROR


class TestLoading:
    """Tests for SiteDatabase loading."""

    def test_load_from_data(self, database_data: dict) -> None:
        """Test loading an in-memory document."""
        db = SiteDatabase(data=database_data)
        result = db.load()
        assert result.is_valid is True
        assert [site.id for site in result.sites] == [
            "temple-shiv-mandir-hoshiarpur",
            "gurdwara-singh-sabha-dasuya",
        ]
        assert result.validation_report.total_sites == 2

    def test_load_is_cached(self, database_data: dict) -> None:
        """Test the source is read only once."""
        db = SiteDatabase(data=database_data)
        with patch.object(db, "_read_source", wraps=db._read_source) as read:
            first = db.load()
            second = db.load()
            db.get_by_type("temple")
        assert first is second
        assert read.call_count == 1

    def test_reload(self, database_data: dict) -> None:
        """Test reload reads the source again."""
        db = SiteDatabase(data=database_data)
        first = db.load()
        assert db.reload() is not first

    def test_load_from_file(self, tmp_path, database_data: dict) -> None:
        """Test loading a JSON file."""
        path = tmp_path / "sites.json"
        path.write_text(json.dumps(database_data), encoding="utf-8")
        db = SiteDatabase(path=path)
        assert len(db.sites) == 2
        assert db.load().is_valid is True

    def test_missing_file(self, tmp_path) -> None:
        """Test an unreadable file gives an empty, invalid result."""
        db = SiteDatabase(path=tmp_path / "missing.json")
        result = db.load()
        assert result.sites == []
        assert result.is_valid is False
        entry = result.validation_report.invalid_entries[0]
        assert entry.index == -1
        assert entry.errors == [LOAD_FAILED_ERROR]

    def test_malformed_json(self, tmp_path) -> None:
        """Test invalid JSON is caught."""
        path = tmp_path / "sites.json"
        path.write_text("{not json", encoding="utf-8")
        result = SiteDatabase(path=path).load()
        assert result.sites == []
        assert result.is_valid is False

    def test_invalid_utf8(self, tmp_path) -> None:
        """Test undecodable bytes are caught."""
        path = tmp_path / "sites.json"
        path.write_bytes(b'{"sites": [{"name": "\xff\xfe"}]}')
        result = SiteDatabase(path=path).load()
        assert result.sites == []
        assert result.is_valid is False
        assert result.validation_report.invalid_entries[0].errors == [LOAD_FAILED_ERROR]

    def test_malformed_structure(self) -> None:
        """Test a document without a sites array."""
        result = SiteDatabase(data={"temples": []}).load()
        assert result.sites == []
        assert result.is_valid is False
        assert result.validation_report.invalid_entries[0].errors == [INVALID_STRUCTURE_ERROR]

    def test_invalid_records_still_served(self, database_data: dict) -> None:
        """Test data-quality problems are reported but records are kept."""
        database_data["sites"].append({"id": "temple-incomplete", "name": "Incomplete"})
        db = SiteDatabase(data=database_data)
        result = db.load()
        assert result.is_valid is False
        assert len(result.sites) == 3
        assert db.get_by_id("temple-incomplete") is not None

    def test_region_injection(self, database_data: dict) -> None:
        """Test a custom region is used for validation."""
        delhi = RegionBounds("Delhi", 28.4, 28.9, 76.8, 77.4)
        result = SiteDatabase(data=database_data, region=delhi).load()
        assert result.is_valid is False
        assert result.validation_report.valid_sites == 0

    def test_load_from_url(self, database_data: dict) -> None:
        """Test fetching the document over HTTP."""
        response = MagicMock()
        response.json.return_value = database_data
        with patch("hoshiarpursakhi.utils.loader.requests.get", return_value=response) as get:
            db = SiteDatabase(url="https://example.com/sites.json")
            assert len(db.sites) == 2
        get.assert_called_once()
        assert get.call_args[0][0] == "https://example.com/sites.json"
        response.raise_for_status.assert_called_once()

    def test_url_failure(self) -> None:
        """Test a network failure gives an empty, invalid result."""
        with patch(
            "hoshiarpursakhi.utils.loader.requests.get",
            side_effect=RequestsConnectionError("offline"),
        ):
            result = SiteDatabase(url="https://example.com/sites.json").load()
        assert result.sites == []
        assert result.is_valid is False

    def test_multiple_sources_rejected(self, database_data: dict) -> None:
        """Test that only one source can be given."""
        with pytest.raises(ValueError):
            SiteDatabase(data=database_data, url="https://example.com/sites.json")

    def test_default_source_is_bundled_dataset(self) -> None:
        """Test the bundled dataset loads and validates."""
        db = SiteDatabase()
        result = db.load()
        assert result.is_valid is True
        assert len(result.sites) > 0
        assert {site.type for site in result.sites} == {"temple", "gurdwara"}


class TestQueries:
    """Tests for SiteDatabase queries."""

    @pytest.fixture
    def db(self, database_data: dict) -> SiteDatabase:
        return SiteDatabase(data=database_data)

    def test_get_by_id(self, db: SiteDatabase) -> None:
        """Test lookup by id."""
        site = db.get_by_id("gurdwara-singh-sabha-dasuya")
        assert site is not None
        assert site.name == "Gurdwara Singh Sabha"

    def test_get_by_id_missing(self, db: SiteDatabase) -> None:
        """Test unknown id."""
        assert db.get_by_id("temple-unknown") is None

    def test_get_by_type(self, db: SiteDatabase) -> None:
        """Test lookup by type."""
        assert [site.type for site in db.get_by_type("temple")] == ["temple"]
        assert [site.type for site in db.get_by_type("gurdwara")] == ["gurdwara"]

    def test_get_by_location(self, db: SiteDatabase) -> None:
        """Test city and address matching."""
        assert [site.city for site in db.get_by_location("dasuya")] == ["Dasuya"]
        assert [site.city for site in db.get_by_location("COURT ROAD")] == ["Hoshiarpur"]
        assert len(db.get_by_location("punjab")) == 2
        assert db.get_by_location("Mukerian") == []

    def test_search(self, db: SiteDatabase) -> None:
        """Test free-text search."""
        assert [site.name for site in db.search("shiva")] == ["Shiv Mandir"]
        assert [site.name for site in db.search("LIBRARY")] == ["Gurdwara Singh Sabha"]

    @pytest.mark.parametrize("query", ["", "   ", "\n"])
    def test_blank_search_matches_everything(self, db: SiteDatabase, query: str) -> None:
        """Test a blank search returns every site."""
        assert db.search(query) == db.sites

    def test_get_by_facilities(self, db: SiteDatabase) -> None:
        """Test facility lookup."""
        assert [site.type for site in db.get_by_facilities(["langar"])] == ["gurdwara"]
        assert len(db.get_by_facilities(["park"])) == 2
        assert db.get_by_facilities([]) == db.sites

    def test_filter_sites(self, db: SiteDatabase) -> None:
        """Test combined filtering on loaded sites."""
        result = db.filter_sites(SearchFilters(type="temple"))
        assert [site.city for site in result] == ["Hoshiarpur"]

    def test_get_stats(self, db: SiteDatabase) -> None:
        """Test aggregate statistics."""
        stats = db.get_stats()
        sites = db.sites
        assert stats.total_sites == 2
        assert stats.temples == 1
        assert stats.gurdwaras == 1
        assert stats.sites_with_contact == 2
        assert stats.sites_with_images == 1
        expected = (len(sites[0].description) + len(sites[1].description)) / 2
        assert abs(stats.average_description_length - expected) <= 0.5
        assert stats.unique_facilities == [
            "Drinking Water", "Langar Hall", "Library", "Parking", "Shoe Stand"
        ]

    def test_get_stats_empty(self) -> None:
        """Test statistics of an empty database."""
        stats = SiteDatabase(data={"sites": []}).get_stats()
        assert stats.total_sites == 0
        assert stats.average_description_length == 0
        assert stats.average_history_length == 0
        assert stats.unique_facilities == []

    def test_get_unique_locations(self, db: SiteDatabase) -> None:
        """Test cities plus the first address part when it differs."""
        assert db.get_unique_locations() == ["Court Road", "Dasuya", "Hoshiarpur", "Main Bazaar"]

    def test_unique_locations_skip_single_part_address(self) -> None:
        """Test addresses without commas only contribute their city."""
        db = SiteDatabase(data={"sites": [{
            "location": {"address": "Hoshiarpur", "city": "Hoshiarpur"},
        }]})
        assert db.get_unique_locations() == ["Hoshiarpur"]


class TestRequirements:
    """Tests for check_requirements."""

    def test_small_database_fails(self, database_data: dict) -> None:
        """Test the minimum site count."""
        report = SiteDatabase(data=database_data).check_requirements()
        assert report.meets_requirements is False
        assert any("requires 40+" in issue for issue in report.issues)

    def test_missing_type_reported(self, temple_record: dict) -> None:
        """Test a database with only temples."""
        report = SiteDatabase(data={"sites": [temple_record]}).check_requirements()
        assert "Database contains no gurdwaras" in report.issues
        assert any(issue.startswith("Temple distribution (100.0%)") for issue in report.issues)

    def test_requirements_met(self, temple_record: dict, gurdwara_record: dict) -> None:
        """Test a balanced, complete database passes with relaxed thresholds."""
        sites = []
        for i in range(20):
            temple = dict(temple_record, id=f"temple-shiv-mandir-{i}")
            gurdwara = dict(gurdwara_record, id=f"gurdwara-singh-sabha-{i}")
            sites.extend([temple, gurdwara])

        report = SiteDatabase(data={"sites": sites}).check_requirements()
        assert report.issues == []
        assert report.meets_requirements is True
        assert report.stats.total_sites == 40
