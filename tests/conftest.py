"""
Pytest configuration and shared fixtures.
"""

import copy

import pytest

from hoshiarpursakhi.models import ReligiousSite

VALID_SITE = {
    "id": "temple-test-site",
    "name": "Test Temple",
    "type": "temple",
    "location": {
        "address": "123 Test Street, Hoshiarpur",
        "city": "Hoshiarpur",
        "coordinates": {"lat": 31.5, "lng": 75.9},
    },
    "description": "A test temple",
    "history": "Built in test times",
    "timings": {
        "weekdays": "6:00 AM - 8:00 PM",
        "weekends": "5:00 AM - 9:00 PM",
    },
    "facilities": ["Parking"],
}


@pytest.fixture
def sample_site_data() -> dict:
    """A minimal record that passes every hard check."""
    return copy.deepcopy(VALID_SITE)


@pytest.fixture
def temple_record() -> dict:
    """Complete temple record in Hoshiarpur."""
    return {
        "id": "temple-shiv-mandir-hoshiarpur",
        "name": "Shiv Mandir",
        "type": "temple",
        "location": {
            "address": "Court Road, Hoshiarpur, Punjab 146001",
            "city": "Hoshiarpur",
            "coordinates": {"lat": 31.5318, "lng": 75.9107},
        },
        "description": "A neighbourhood temple dedicated to Lord Shiva with a lively evening aarti.",
        "history": (
            "The shrine began as a small lingam under a banyan tree tended by local "
            "families, and the present hall was added later through donations."
        ),
        "timings": {"weekdays": "5:00 AM - 9:00 PM", "weekends": "5:00 AM - 10:00 PM"},
        "facilities": ["Parking", "Shoe Stand", "Drinking Water"],
        "contact": {"phone": "+91-1882-220145"},
        "images": ["shiv-mandir.jpg"],
    }


@pytest.fixture
def gurdwara_record() -> dict:
    """Complete gurdwara record in Dasuya."""
    return {
        "id": "gurdwara-singh-sabha-dasuya",
        "name": "Gurdwara Singh Sabha",
        "type": "gurdwara",
        "location": {
            "address": "Main Bazaar, Dasuya, Punjab 144205",
            "city": "Dasuya",
            "coordinates": {"lat": 31.8168, "lng": 75.6537},
        },
        "description": "The main gurdwara of Dasuya town, serving langar to highway travellers.",
        "history": (
            "Built by the local Singh Sabha committee, the gurdwara grew from a single "
            "prayer room into a two-storey complex with a library."
        ),
        "timings": {"weekdays": "4:00 AM - 9:30 PM", "weekends": "Open 24 hours"},
        "facilities": ["Langar Hall", "Parking", "Library"],
        "contact": {"email": "singhsabha.dasuya@gmail.com"},
    }


@pytest.fixture
def database_data(temple_record: dict, gurdwara_record: dict) -> dict:
    """Two-site database document."""
    return {"sites": [temple_record, gurdwara_record]}


@pytest.fixture
def two_sites(temple_record: dict, gurdwara_record: dict) -> list[ReligiousSite]:
    """The two-site collection as model objects."""
    return [ReligiousSite.from_dict(temple_record), ReligiousSite.from_dict(gurdwara_record)]
