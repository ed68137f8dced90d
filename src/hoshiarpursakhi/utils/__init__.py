"""
Utility modules for HoshiarpurSakhi.
"""

from .config import Config, config
from .loader import fetch_sites_url, load_sites_file, save_sites_file

__all__ = ["config", "Config", "fetch_sites_url", "load_sites_file", "save_sites_file"]
