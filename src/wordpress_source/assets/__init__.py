# ABOUTME: Local copies of remote images referenced by WordPress content
# ABOUTME: Atomic staged downloads plus deterministic file naming

from .downloader import AssetDownloader
from .naming import asset_file_name

__all__ = ["AssetDownloader", "asset_file_name"]
