"""Services module - Diff engine and supporting services"""

from .blob_fetcher import BlobFetcher, BlobNotFoundError, BlobStoreError
from .config_manager import ConfigManager
from .diff_generator import DiffGenerator, InvalidOptionsError, compare

__all__ = [
    "BlobFetcher",
    "BlobNotFoundError",
    "BlobStoreError",
    "ConfigManager",
    "DiffGenerator",
    "InvalidOptionsError",
    "compare",
]
