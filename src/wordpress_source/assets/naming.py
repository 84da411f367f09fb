# ABOUTME: Deterministic local file names for remote assets
# ABOUTME: Slugifies the last URL path segment and restores the extension dot

import re
from urllib.parse import unquote, urlsplit

from slugify import slugify

_LAST_DASH = re.compile(r"-([^-]*)$")


def asset_file_name(url_or_name: str) -> str:
    """``https://cdn.example.com/2024/05/My Photo.JPG?w=300`` → ``my-photo.jpg``."""
    path = urlsplit(url_or_name).path if "://" in url_or_name else url_or_name
    segment = unquote(path.rstrip("/").split("/")[-1])
    return _LAST_DASH.sub(r".\1", slugify(segment), count=1)
