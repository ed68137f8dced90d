"""
Filter/Search Engine - Combined predicate evaluation over site records.

Each filter field maps to an independent predicate. Blank filter values
produce no predicate at all, so they pass every record through. The active
predicates are ANDed in a single pass and results keep the input order.
"""

from collections.abc import Callable, Iterable

from hoshiarpursakhi.models import ReligiousSite, SearchFilters, SiteType

SitePredicate = Callable[[ReligiousSite], bool]

SORT_FIELDS = ["name", "type", "location"]


def searchable_text(site: ReligiousSite) -> list[str]:
    """Lowercased fields that free-text search looks at."""
    return [
        site.name.lower(),
        site.description.lower(),
        site.location.address.lower(),
        site.location.city.lower(),
        site.history.lower(),
    ]


def query_predicate(query: str) -> SitePredicate | None:
    """Match the query against name, description, address, city or history."""
    if not query or not query.strip():
        return None
    term = query.lower()
    return lambda site: any(term in text for text in searchable_text(site))


def type_predicate(site_type: str) -> SitePredicate | None:
    """Exact match on site type; "all" disables the filter."""
    if not site_type or site_type == SiteType.ALL:
        return None
    return lambda site: site.type == site_type


def location_predicate(location: str) -> SitePredicate | None:
    """Match the location term against city or address."""
    if not location or not location.strip():
        return None
    term = location.lower()
    return lambda site: (
        term in site.location.city.lower() or term in site.location.address.lower()
    )


def facilities_predicate(facilities: list[str]) -> SitePredicate | None:
    """
    Require every requested facility.

    A requested facility is satisfied when it is a substring of any of the
    site's facilities, so "Park" matches "Parking".
    """
    if not facilities:
        return None
    terms = [facility.lower() for facility in facilities]

    def predicate(site: ReligiousSite) -> bool:
        available = [facility.lower() for facility in site.facilities]
        return all(any(term in facility for facility in available) for term in terms)

    return predicate


def build_predicates(filters: SearchFilters) -> list[SitePredicate]:
    """Build the active predicates for a set of filters."""
    candidates = [
        query_predicate(filters.query),
        type_predicate(filters.type),
        location_predicate(filters.location),
        facilities_predicate(filters.facilities),
    ]
    return [predicate for predicate in candidates if predicate is not None]


def matches_filters(site: ReligiousSite, filters: SearchFilters) -> bool:
    """Check a single site against all active filters."""
    return all(predicate(site) for predicate in build_predicates(filters))


def filter_sites(
    filters: SearchFilters, sites: Iterable[ReligiousSite]
) -> list[ReligiousSite]:
    """
    Apply every active filter to a collection of sites.

    Args:
        filters: Query, type, location and facility criteria
        sites: Records to filter (not modified)

    Returns:
        Matching sites in their original order
    """
    predicates = build_predicates(filters)
    return [site for site in sites if all(predicate(site) for predicate in predicates)]


def sort_sites(
    sites: Iterable[ReligiousSite],
    field: str = "name",
    descending: bool = False,
) -> list[ReligiousSite]:
    """
    Sort sites for table display.

    Args:
        sites: Records to sort (not modified)
        field: One of "name", "type" or "location" (address); anything else sorts by name
        descending: Reverse the order

    Returns:
        New sorted list; ties keep their input order
    """
    keys: dict[str, Callable[[ReligiousSite], str]] = {
        "name": lambda site: site.name.lower(),
        "type": lambda site: site.type.lower(),
        "location": lambda site: site.location.address.lower(),
    }
    key = keys.get(field, keys["name"])
    return sorted(sites, key=key, reverse=descending)
