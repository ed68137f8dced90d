"""
Data models for HoshiarpurSakhi.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


class SiteType:
    """Supported kinds of religious site."""
    TEMPLE = "temple"
    GURDWARA = "gurdwara"
    ALL = "all"

    ALL_TYPES = [TEMPLE, GURDWARA]

    @classmethod
    def get_display_name(cls, site_type: str) -> str:
        """Get human-readable name for a site type."""
        names = {
            cls.TEMPLE: "Temple",
            cls.GURDWARA: "Gurdwara",
            cls.ALL: "All Sites",
        }
        return names.get(site_type, site_type.replace("-", " ").title())


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


@dataclass
class Coordinates:
    """Geographic position of a site."""
    lat: Optional[float]
    lng: Optional[float]


@dataclass
class Location:
    """Postal address and position of a site."""
    address: str
    city: str
    coordinates: Coordinates


@dataclass
class Timings:
    """Opening hours, as free text."""
    weekdays: str
    weekends: str
    specialDays: str = ""


@dataclass
class Contact:
    """Optional contact details."""
    phone: str = ""
    email: str = ""


@dataclass
class RegionBounds:
    """Bounding box that every site of a deployment is expected to fall in."""
    name: str
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains_lat(self, lat: float) -> bool:
        return self.min_lat <= lat <= self.max_lat

    def contains_lng(self, lng: float) -> bool:
        return self.min_lng <= lng <= self.max_lng

    def contains(self, lat: float, lng: float) -> bool:
        """Check whether a point lies inside the box (edges included)."""
        return self.contains_lat(lat) and self.contains_lng(lng)


@dataclass
class ReligiousSite:
    """A temple or gurdwara in the directory."""
    id: str
    name: str
    type: str
    location: Location
    description: str
    history: str
    timings: Timings
    facilities: list[str] = field(default_factory=list)
    contact: Optional[Contact] = None
    images: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ReligiousSite":
        """
        Build a site from its JSON shape.

        Missing or malformed parts become empty values; this never raises,
        so records that failed validation can still be served.

        Args:
            data: Record as parsed from the sites JSON

        Returns:
            ReligiousSite instance
        """
        data = _mapping(data)
        location = _mapping(data.get("location"))
        coordinates = _mapping(location.get("coordinates"))
        timings = _mapping(data.get("timings"))
        contact = data.get("contact")
        facilities = data.get("facilities")
        images = data.get("images")

        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            type=_text(data.get("type")),
            location=Location(
                address=_text(location.get("address")),
                city=_text(location.get("city")),
                coordinates=Coordinates(
                    lat=_number(coordinates.get("lat")),
                    lng=_number(coordinates.get("lng")),
                ),
            ),
            description=_text(data.get("description")),
            history=_text(data.get("history")),
            timings=Timings(
                weekdays=_text(timings.get("weekdays")),
                weekends=_text(timings.get("weekends")),
                specialDays=_text(timings.get("specialDays")),
            ),
            facilities=[f for f in facilities if isinstance(f, str)]
            if isinstance(facilities, list) else [],
            contact=Contact(
                phone=_text(contact.get("phone")),
                email=_text(contact.get("email")),
            ) if isinstance(contact, dict) else None,
            images=[i for i in images if isinstance(i, str)]
            if isinstance(images, list) else [],
        )

    def to_dict(self) -> dict:
        """Serialize back to the JSON shape, omitting empty optional parts."""
        data = asdict(self)
        if not self.timings.specialDays:
            del data["timings"]["specialDays"]
        if self.contact is None:
            del data["contact"]
        else:
            data["contact"] = {k: v for k, v in data["contact"].items() if v}
            if not data["contact"]:
                del data["contact"]
        if not self.images:
            del data["images"]
        return data

    @property
    def city(self) -> str:
        return self.location.city

    @property
    def address(self) -> str:
        return self.location.address

    @property
    def has_contact(self) -> bool:
        return self.contact is not None and bool(self.contact.phone or self.contact.email)

    @property
    def has_images(self) -> bool:
        return len(self.images) > 0


@dataclass
class SearchFilters:
    """Combined query driving the filter engine."""
    query: str = ""
    type: str = SiteType.ALL
    location: str = ""
    facilities: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "SearchFilters":
        """Build filters from a JSON-shaped mapping; absent keys are no-ops."""
        facilities = data.get("facilities") or []
        return cls(
            query=data.get("query") or "",
            type=data.get("type") or SiteType.ALL,
            location=data.get("location") or "",
            facilities=[facilities] if isinstance(facilities, str) else list(facilities),
        )

    @property
    def active_filter_count(self) -> int:
        """Number of active criteria, counting each requested facility."""
        count = 0
        if self.query.strip():
            count += 1
        if self.type != SiteType.ALL:
            count += 1
        if self.location.strip():
            count += 1
        return count + len(self.facilities)

    @property
    def has_active_filters(self) -> bool:
        return self.active_filter_count > 0


@dataclass
class MapMarker:
    """Marker position for a site on the map."""
    id: str
    lat: float
    lng: float
    site: ReligiousSite


def build_map_markers(sites: list[ReligiousSite]) -> list[MapMarker]:
    """
    Turn sites into map markers.

    Sites without numeric coordinates cannot be placed and are skipped.
    """
    markers = []
    for site in sites:
        coords = site.location.coordinates
        if coords.lat is None or coords.lng is None:
            continue
        markers.append(MapMarker(id=site.id, lat=coords.lat, lng=coords.lng, site=site))
    return markers


__all__ = [
    "SiteType",
    "Coordinates",
    "Location",
    "Timings",
    "Contact",
    "RegionBounds",
    "ReligiousSite",
    "SearchFilters",
    "MapMarker",
    "build_map_markers",
]
