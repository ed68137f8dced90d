"""
Database Loader - Reads the raw sites database from disk or over HTTP.

The loaders return the parsed JSON untouched; shape checks are left to the
validator. Read failures propagate as OSError, json.JSONDecodeError or
requests.RequestException so the caller can turn them into a report.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

import requests

from .config import config

logger = logging.getLogger("HoshiarpurSakhi")


def load_sites_file(path: str | os.PathLike[str]) -> Any:
    """
    Load a sites database from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON document
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    count = len(data.get("sites", [])) if isinstance(data, dict) else 0
    logger.info(f"Loaded {count} site records from {path}")
    return data


def fetch_sites_url(url: str, timeout: int | None = None) -> Any:
    """
    Download a sites database published as JSON.

    Args:
        url: HTTP(S) location of the database
        timeout: Request timeout in seconds (None = use config)

    Returns:
        Parsed JSON document
    """
    headers = {"User-Agent": config.user_agent, "Accept": "application/json"}
    response = requests.get(url, headers=headers, timeout=timeout or config.http_timeout)
    response.raise_for_status()

    data = response.json()
    count = len(data.get("sites", [])) if isinstance(data, dict) else 0
    logger.info(f"Fetched {count} site records from {url}")
    return data


def save_sites_file(sites: list[dict], path: str | os.PathLike[str]) -> None:
    """
    Write records back out in the ``{"sites": [...]}`` shape.

    Args:
        sites: JSON-shaped site records
        path: Destination file
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"sites": sites}, f, indent=2, ensure_ascii=False)
    logger.debug(f"Saved {len(sites)} site records to {path}")
