"""
Site Database - Read-only access to the religious sites directory.

Loads the raw records once (from memory, a JSON file or a URL), runs them
through the validator and answers lookup, search and statistics queries.
Load failures never escape: they are logged and turned into an empty,
invalid result so callers can render an empty state instead of crashing.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from requests.exceptions import RequestException

from hoshiarpursakhi.models import RegionBounds, ReligiousSite, SearchFilters
from hoshiarpursakhi.search import facilities_predicate, filter_sites, location_predicate
from hoshiarpursakhi.utils import config, fetch_sites_url, load_sites_file
from hoshiarpursakhi.validation import DatabaseReport, validate_database

logger = logging.getLogger("HoshiarpurSakhi")

LOAD_FAILED_ERROR = "Failed to load database file"


@dataclass
class LoadResult:
    """Loaded sites together with their validation report."""
    sites: list[ReligiousSite]
    is_valid: bool
    validation_report: DatabaseReport


@dataclass
class DatabaseStats:
    """Aggregate figures shown on the directory page."""
    total_sites: int
    temples: int
    gurdwaras: int
    sites_with_contact: int
    sites_with_images: int
    average_description_length: int
    average_history_length: int
    unique_facilities: list[str] = field(default_factory=list)


@dataclass
class RequirementsReport:
    """Whether the dataset meets the directory's publishing requirements."""
    meets_requirements: bool
    issues: list[str]
    stats: DatabaseStats


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


class SiteDatabase:
    """
    Read-only accessor for the sites directory.

    At most one source may be given; with none, the configured remote URL is
    used if set, otherwise the bundled data file. Records are loaded lazily
    on first access and cached for the lifetime of the instance.
    """

    def __init__(
        self,
        data: Any = None,
        path: str | os.PathLike[str] | None = None,
        url: str | None = None,
        region: Optional[RegionBounds] = None,
    ) -> None:
        """
        Initialize the database.

        Args:
            data: Already-parsed ``{"sites": [...]}`` document
            path: JSON file to read
            url: HTTP(S) location to fetch
            region: Expected bounding box for coordinates (None = use config)
        """
        sources = [source for source in (data, path, url) if source is not None]
        if len(sources) > 1:
            raise ValueError("Provide at most one of data, path or url")

        if not sources:
            if config.data_url:
                url = config.data_url
            else:
                path = config.data_file

        self._data = data
        self._path = path
        self._url = url
        self.region = region
        self._result: LoadResult | None = None

    def _read_source(self) -> Any:
        if self._data is not None:
            return self._data
        if self._url is not None:
            return fetch_sites_url(self._url)
        return load_sites_file(self._path)

    def load(self) -> LoadResult:
        """
        Load and validate the records, once.

        Returns:
            Cached LoadResult; empty and invalid if the source could not be read
        """
        if self._result is not None:
            return self._result

        try:
            raw = self._read_source()
        except (OSError, ValueError, RequestException) as e:
            logger.error(f"Failed to load religious sites database: {e}")
            self._result = LoadResult(
                sites=[],
                is_valid=False,
                validation_report=DatabaseReport.failed(LOAD_FAILED_ERROR),
            )
            return self._result

        report = validate_database(raw, self.region)
        if not report.is_valid:
            logger.error(
                f"Database validation failed: {len(report.invalid_entries)} invalid entries"
            )
            for entry in report.invalid_entries:
                logger.debug(f"  Site {entry.index} ({entry.id}): {'; '.join(entry.errors)}")
        for advisory in report.advisories:
            logger.debug(advisory)

        records = raw.get("sites") if isinstance(raw, dict) else None
        if not isinstance(records, list):
            records = []
        sites = [ReligiousSite.from_dict(record) for record in records if isinstance(record, dict)]

        self._result = LoadResult(sites=sites, is_valid=report.is_valid, validation_report=report)
        return self._result

    def reload(self) -> LoadResult:
        """Drop the cached records and load them again."""
        self._result = None
        return self.load()

    @property
    def sites(self) -> list[ReligiousSite]:
        return self.load().sites

    @property
    def validation_report(self) -> DatabaseReport:
        return self.load().validation_report

    def get_by_id(self, site_id: str) -> Optional[ReligiousSite]:
        """Find a site by its id."""
        for site in self.sites:
            if site.id == site_id:
                return site
        return None

    def get_by_type(self, site_type: str) -> list[ReligiousSite]:
        """Get all sites of one type ("temple" or "gurdwara")."""
        return [site for site in self.sites if site.type == site_type]

    def get_by_location(self, location: str) -> list[ReligiousSite]:
        """Get sites whose city or address contains the term (case-insensitive)."""
        predicate = location_predicate(location)
        if predicate is None:
            return list(self.sites)
        return [site for site in self.sites if predicate(site)]

    def search(self, query: str) -> list[ReligiousSite]:
        """
        Free-text search over name, description, address, city and history.

        A blank query matches every site.
        """
        return filter_sites(SearchFilters(query=query), self.sites)

    def get_by_facilities(self, facilities: list[str]) -> list[ReligiousSite]:
        """Get sites offering every requested facility (substring match)."""
        predicate = facilities_predicate(facilities)
        if predicate is None:
            return list(self.sites)
        return [site for site in self.sites if predicate(site)]

    def filter_sites(self, filters: SearchFilters) -> list[ReligiousSite]:
        """Apply combined search filters to the loaded sites."""
        return filter_sites(filters, self.sites)

    def get_stats(self) -> DatabaseStats:
        """
        Compute aggregate statistics.

        Type, contact and image counts come from the validation summary and
        therefore cover valid records only.
        """
        result = self.load()
        sites = result.sites
        summary = result.validation_report.summary

        if sites:
            avg_description = _round_half_up(
                sum(len(site.description) for site in sites) / len(sites)
            )
            avg_history = _round_half_up(sum(len(site.history) for site in sites) / len(sites))
        else:
            avg_description = avg_history = 0

        unique_facilities = sorted({facility for site in sites for facility in site.facilities})

        return DatabaseStats(
            total_sites=result.validation_report.total_sites,
            temples=summary.temples,
            gurdwaras=summary.gurdwaras,
            sites_with_contact=summary.sites_with_contact,
            sites_with_images=summary.sites_with_images,
            average_description_length=avg_description,
            average_history_length=avg_history,
            unique_facilities=unique_facilities,
        )

    def get_unique_locations(self) -> list[str]:
        """
        Get the location options offered by the filter panel.

        Each site contributes its city and, when the address has more than
        one comma-separated part, the first part if it differs from the city.
        """
        locations: set[str] = set()
        for site in self.sites:
            if site.city:
                locations.add(site.city)
            parts = site.address.split(",")
            if len(parts) > 1:
                area = parts[0].strip()
                if area and area != site.city:
                    locations.add(area)
        return sorted(locations)

    def check_requirements(self) -> RequirementsReport:
        """
        Check the dataset against the publishing requirements in config.yaml.

        Returns:
            RequirementsReport listing every unmet requirement
        """
        stats = self.get_stats()
        issues: list[str] = []

        if stats.total_sites < config.min_sites:
            issues.append(
                f"Database contains only {stats.total_sites} sites, but requires {config.min_sites}+"
            )

        if stats.temples == 0:
            issues.append("Database contains no temples")
        if stats.gurdwaras == 0:
            issues.append("Database contains no gurdwaras")

        if stats.total_sites > 0:
            shares = {
                "Temple": stats.temples / stats.total_sites * 100,
                "Gurdwara": stats.gurdwaras / stats.total_sites * 100,
            }
            for label, share in shares.items():
                if share < config.min_type_share or share > config.max_type_share:
                    issues.append(f"{label} distribution ({share:.1f}%) may not be representative")

            contact_share = stats.sites_with_contact / stats.total_sites * 100
            if contact_share < config.min_contact_share:
                issues.append(f"Only {contact_share:.1f}% of sites have contact information")

        if stats.average_description_length < config.min_description_length:
            issues.append(
                f"Average description length ({stats.average_description_length}) is too short"
            )
        if stats.average_history_length < config.min_history_length:
            issues.append(f"Average history length ({stats.average_history_length}) is too short")

        return RequirementsReport(meets_requirements=not issues, issues=issues, stats=stats)
