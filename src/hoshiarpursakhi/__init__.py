"""
HoshiarpurSakhi.

Directory, validation and search tools for the temples and gurdwaras
of Hoshiarpur district.
"""

__version__ = "1.2.0"
__author__ = "HoshiarpurSakhi Team"

from hoshiarpursakhi.models import ReligiousSite, SearchFilters, SiteType
from hoshiarpursakhi.database import SiteDatabase
from hoshiarpursakhi.search import filter_sites
from hoshiarpursakhi.validation import validate_collection, validate_database, validate_site

__all__ = [
    "SiteDatabase",
    "ReligiousSite",
    "SearchFilters",
    "SiteType",
    "filter_sites",
    "validate_site",
    "validate_collection",
    "validate_database",
    "__version__",
]
