"""
Record Validator - Schema checks for religious site records.

Every check returns a structured result instead of raising or printing, so
callers (the database accessor, the CLI, tests) decide how to surface it.
Hard problems go to ``errors``, recommended-but-optional content to
``warnings``, and informational notes (such as unrecognized facility names)
to ``advisories``. Only ``errors`` affect validity.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from hoshiarpursakhi.models import RegionBounds, SiteType
from hoshiarpursakhi.utils.config import config

SITE_ID_PATTERN = re.compile(r"^(temple|gurdwara)-[a-z0-9]+(-[a-z0-9]+)*$")
SITE_ID_MIN_LENGTH = 5
SITE_ID_MAX_LENGTH = 100

TIME_PATTERN = re.compile(r"\d{1,2}:\d{2}\s*(AM|PM)", re.IGNORECASE)
TIME_RANGE_PATTERN = re.compile(
    r"\d{1,2}:\d{2}\s*(AM|PM)\s*-\s*\d{1,2}:\d{2}\s*(AM|PM)", re.IGNORECASE
)

PHONE_PATTERN = re.compile(r"^\+91-\d{4}-\d{6}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_DESCRIPTION_LENGTH = 50
MIN_HISTORY_LENGTH = 100

# Used when config.yaml does not list any
DEFAULT_RECOGNIZED_FACILITIES = [
    "Langar Hall", "Parking", "Accommodation", "Library", "Medical Aid",
    "Community Hall", "Rest Rooms", "Shoe Stand", "Drinking Water",
    "Prasad Counter", "Donation Box", "Rest Area", "Study Hall",
    "Prayer Hall", "Educational Center", "Meditation Hall", "Satsang Hall",
]

INVALID_STRUCTURE_ERROR = "Database structure is invalid - missing sites array"


@dataclass
class ValidationResult:
    """Outcome of validating a single value or record."""
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    advisories: list[str] = field(default_factory=list)


@dataclass
class InvalidEntry:
    """A record that failed validation, located by its position."""
    index: int
    errors: list[str]
    warnings: list[str] = field(default_factory=list)
    id: Optional[str] = None


@dataclass
class CollectionReport:
    """Validation outcome for a list of records."""
    is_valid: bool
    invalid_entries: list[InvalidEntry] = field(default_factory=list)


@dataclass
class DatabaseSummary:
    """Counts over the valid records of a database."""
    temples: int = 0
    gurdwaras: int = 0
    sites_with_contact: int = 0
    sites_with_images: int = 0


@dataclass
class DatabaseReport:
    """Validation outcome for a whole ``{"sites": [...]}`` database."""
    is_valid: bool
    total_sites: int
    valid_sites: int
    invalid_entries: list[InvalidEntry] = field(default_factory=list)
    summary: DatabaseSummary = field(default_factory=DatabaseSummary)
    advisories: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, error: str) -> "DatabaseReport":
        """Report for a database that could not be read at all."""
        return cls(
            is_valid=False,
            total_sites=0,
            valid_sites=0,
            invalid_entries=[InvalidEntry(index=-1, errors=[error])],
        )


def _result(
    errors: list[str],
    warnings: Optional[list[str]] = None,
    advisories: Optional[list[str]] = None,
) -> ValidationResult:
    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings or [],
        advisories=advisories or [],
    )


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_required_fields(record: Any) -> ValidationResult:
    """
    Check that a record carries every required field.

    Args:
        record: Candidate record (any JSON value; non-mappings fail every check)

    Returns:
        ValidationResult listing every missing or malformed field
    """
    site = record if isinstance(record, dict) else {}
    errors: list[str] = []

    if _is_blank(site.get("id")):
        errors.append("Site ID is required")

    if _is_blank(site.get("name")):
        errors.append("Site name is required")

    if site.get("type") not in SiteType.ALL_TYPES:
        errors.append('Site type must be either "temple" or "gurdwara"')

    if _is_blank(site.get("description")):
        errors.append("Site description is required")

    if _is_blank(site.get("history")):
        errors.append("Site history is required")

    location = site.get("location")
    if not isinstance(location, dict) or not location:
        errors.append("Location information is required")
    else:
        if _is_blank(location.get("address")):
            errors.append("Location address is required")
        if _is_blank(location.get("city")):
            errors.append("Location city is required")

        coordinates = location.get("coordinates")
        if not isinstance(coordinates, dict) or not coordinates:
            errors.append("Location coordinates are required")
        else:
            if not _is_number(coordinates.get("lat")):
                errors.append("Location latitude must be a number")
            if not _is_number(coordinates.get("lng")):
                errors.append("Location longitude must be a number")

    timings = site.get("timings")
    if not isinstance(timings, dict) or not timings:
        errors.append("Timings information is required")
    else:
        if _is_blank(timings.get("weekdays")):
            errors.append("Weekday timings are required")
        if _is_blank(timings.get("weekends")):
            errors.append("Weekend timings are required")

    facilities = site.get("facilities")
    if not isinstance(facilities, list):
        errors.append("Facilities must be provided as an array")
    elif not facilities:
        errors.append("At least one facility must be specified")

    return _result(errors)


def validate_site_id(site_id: Any) -> ValidationResult:
    """Check the ``{temple|gurdwara}-kebab-case-name`` id format and length."""
    if _is_blank(site_id):
        return _result(["Site ID cannot be empty"])

    errors = []
    if not SITE_ID_PATTERN.match(site_id):
        errors.append(
            'Site ID must follow format: "temple-" or "gurdwara-" followed by kebab-case name'
        )
    if len(site_id) < SITE_ID_MIN_LENGTH:
        errors.append(f"Site ID must be at least {SITE_ID_MIN_LENGTH} characters long")
    if len(site_id) > SITE_ID_MAX_LENGTH:
        errors.append(f"Site ID must not exceed {SITE_ID_MAX_LENGTH} characters")
    return _result(errors)


def validate_coordinates(
    lat: Any, lng: Any, region: Optional[RegionBounds] = None
) -> ValidationResult:
    """
    Check that coordinates are numeric, on the globe and inside the region.

    Args:
        lat: Latitude in degrees
        lng: Longitude in degrees
        region: Expected bounding box (None = configured region)

    Returns:
        ValidationResult; a point outside the region is an error
    """
    region = region or config.region_bounds
    errors = []

    if not _is_number(lat):
        errors.append("Latitude must be a number")
    if not _is_number(lng):
        errors.append("Longitude must be a number")
    if errors:
        return _result(errors)

    if lat < -90 or lat > 90:
        errors.append("Latitude must be between -90 and 90 degrees")
    if lng < -180 or lng > 180:
        errors.append("Longitude must be between -180 and 180 degrees")

    if not region.contains_lat(lat):
        errors.append(
            f"Latitude appears to be outside {region.name} region "
            f"({region.min_lat:g}°N - {region.max_lat:g}°N)"
        )
    if not region.contains_lng(lng):
        errors.append(
            f"Longitude appears to be outside {region.name} region "
            f"({region.min_lng:g}°E - {region.max_lng:g}°E)"
        )
    return _result(errors)


def validate_timings(value: Any, label: str = "Timings") -> ValidationResult:
    """
    Check an opening-hours string.

    Accepts a time range ("6:00 AM - 8:00 PM"), a bare time, or anything
    mentioning "hours" ("24 hours", "Open hours vary").
    """
    if _is_blank(value):
        return _result([f"{label} cannot be empty"])

    if (
        TIME_RANGE_PATTERN.search(value)
        or TIME_PATTERN.search(value)
        or "hours" in value.lower()
    ):
        return _result([])

    return _result([
        f'{label} must include valid time format (e.g., "9:00 AM - 6:00 PM" or "24 hours")'
    ])


def validate_facilities(
    facilities: Any, recognized: Optional[list[str]] = None
) -> ValidationResult:
    """
    Check a facilities list.

    Empty or non-string entries are errors. Names outside the recognized
    set are reported as advisories only, so new facilities are allowed.

    Args:
        facilities: Candidate facilities list
        recognized: Known facility names (None = configured list)

    Returns:
        ValidationResult with errors and advisories
    """
    if not isinstance(facilities, list):
        return _result(["Facilities must be provided as an array"])
    if not facilities:
        return _result(["At least one facility must be specified"])

    if recognized is None:
        recognized = config.recognized_facilities or DEFAULT_RECOGNIZED_FACILITIES
    known = set(recognized)

    errors = []
    advisories = []
    for index, facility in enumerate(facilities):
        if _is_blank(facility):
            errors.append(f"Facility at index {index} is empty or invalid")
        elif facility not in known:
            advisories.append(
                f'Facility "{facility}" is not in the standard list of recognized facilities'
            )
    return _result(errors, advisories=advisories)


def validate_phone_number(phone: Any) -> ValidationResult:
    """Check the Indian ``+91-XXXX-XXXXXX`` phone format."""
    if _is_blank(phone):
        return _result(["Phone number cannot be empty"])
    if not PHONE_PATTERN.match(phone):
        return _result(["Phone number must follow format: +91-XXXX-XXXXXX"])
    return _result([])


def validate_email(email: Any) -> ValidationResult:
    """Check a ``local@domain.tld`` email shape."""
    if _is_blank(email):
        return _result(["Email cannot be empty"])
    if not EMAIL_PATTERN.match(email):
        return _result(["Email must be in valid format (e.g., example@domain.com)"])
    return _result([])


def validate_site(
    record: Any,
    region: Optional[RegionBounds] = None,
    recognized_facilities: Optional[list[str]] = None,
) -> ValidationResult:
    """
    Run every check on a site record.

    Format checks only run once the required fields are present; the
    recommended-content warnings are collected alongside them.

    Args:
        record: Candidate record
        region: Expected bounding box (None = configured region)
        recognized_facilities: Known facility names (None = configured list)

    Returns:
        ValidationResult with errors, warnings and advisories
    """
    basic = validate_required_fields(record)
    if not basic.is_valid:
        return basic

    site: dict = record
    errors: list[str] = []
    warnings: list[str] = []
    advisories: list[str] = []

    errors.extend(validate_site_id(site["id"]).errors)

    coordinates = site["location"]["coordinates"]
    errors.extend(
        validate_coordinates(coordinates["lat"], coordinates["lng"], region).errors
    )

    timings = site["timings"]
    errors.extend(validate_timings(timings["weekdays"], "Weekday timings").errors)
    errors.extend(validate_timings(timings["weekends"], "Weekend timings").errors)
    if timings.get("specialDays"):
        errors.extend(validate_timings(timings["specialDays"], "Special day timings").errors)

    facilities = validate_facilities(site["facilities"], recognized_facilities)
    errors.extend(facilities.errors)
    advisories.extend(facilities.advisories)

    contact = site.get("contact")
    if contact is not None and not isinstance(contact, dict):
        errors.append("Contact information must be an object")
        contact = None
    if contact:
        if contact.get("phone"):
            errors.extend(validate_phone_number(contact["phone"]).errors)
        if contact.get("email"):
            errors.extend(validate_email(contact["email"]).errors)

    if not contact or not (contact.get("phone") or contact.get("email")):
        warnings.append("Contact information (phone or email) is recommended")

    images = site.get("images")
    if not isinstance(images, list) or not images:
        warnings.append("Images are recommended for better user experience")

    if len(site["description"]) < MIN_DESCRIPTION_LENGTH:
        warnings.append(
            f"Description should be at least {MIN_DESCRIPTION_LENGTH} characters for better information"
        )
    if len(site["history"]) < MIN_HISTORY_LENGTH:
        warnings.append(
            f"History should be at least {MIN_HISTORY_LENGTH} characters for comprehensive information"
        )

    return _result(errors, warnings, advisories)


def _validate_records(
    records: list, region: Optional[RegionBounds]
) -> Iterator[tuple[int, Any, ValidationResult]]:
    """Validate each record, adding duplicate-id errors across the list."""
    seen_ids: dict[str, int] = {}
    for index, record in enumerate(records):
        result = validate_site(record, region)
        site_id = record.get("id") if isinstance(record, dict) else None
        if isinstance(site_id, str) and site_id:
            if site_id in seen_ids:
                result.errors.append(
                    f'Duplicate site ID "{site_id}" (first used at index {seen_ids[site_id]})'
                )
                result.is_valid = False
            else:
                seen_ids[site_id] = index
        yield index, record, result


def _entry(index: int, record: Any, result: ValidationResult) -> InvalidEntry:
    site_id = record.get("id") if isinstance(record, dict) else None
    return InvalidEntry(
        index=index,
        errors=result.errors,
        warnings=result.warnings,
        id=site_id if isinstance(site_id, str) else None,
    )


def validate_collection(
    records: list, region: Optional[RegionBounds] = None
) -> CollectionReport:
    """
    Validate every record of a list without stopping at the first failure.

    Args:
        records: Candidate records
        region: Expected bounding box (None = configured region)

    Returns:
        CollectionReport with one InvalidEntry per failing record
    """
    invalid = [
        _entry(index, record, result)
        for index, record, result in _validate_records(records, region)
        if not result.is_valid
    ]
    return CollectionReport(is_valid=not invalid, invalid_entries=invalid)


def validate_database(data: Any, region: Optional[RegionBounds] = None) -> DatabaseReport:
    """
    Validate a ``{"sites": [...]}`` database and summarize it.

    A missing or non-list ``sites`` collection yields a single synthetic
    entry at index -1 instead of an exception.

    Args:
        data: Parsed database
        region: Expected bounding box (None = configured region)

    Returns:
        DatabaseReport
    """
    sites = data.get("sites") if isinstance(data, dict) else None
    if not isinstance(sites, list):
        return DatabaseReport.failed(INVALID_STRUCTURE_ERROR)

    summary = DatabaseSummary()
    invalid: list[InvalidEntry] = []
    advisories: list[str] = []
    valid_sites = 0

    for index, record, result in _validate_records(sites, region):
        site_id = record.get("id") if isinstance(record, dict) else None
        for advisory in result.advisories:
            advisories.append(f"Site {index} ({site_id or f'site-{index}'}): {advisory}")

        if not result.is_valid:
            invalid.append(_entry(index, record, result))
            continue

        valid_sites += 1
        if record["type"] == SiteType.TEMPLE:
            summary.temples += 1
        elif record["type"] == SiteType.GURDWARA:
            summary.gurdwaras += 1

        contact = record.get("contact")
        if isinstance(contact, dict) and (contact.get("phone") or contact.get("email")):
            summary.sites_with_contact += 1

        images = record.get("images")
        if isinstance(images, list) and images:
            summary.sites_with_images += 1

    return DatabaseReport(
        is_valid=not invalid,
        total_sites=len(sites),
        valid_sites=valid_sites,
        invalid_entries=invalid,
        summary=summary,
        advisories=advisories,
    )
