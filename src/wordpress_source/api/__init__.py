# ABOUTME: REST transport and pagination for the WordPress API
# ABOUTME: Pipeline Stage 1: HTTP responses → raw record lists

from .client import ApiResponse, WordPressClient
from .pagination import PageCursor, PaginatedFetcher, ensure_list_data

__all__ = [
    "ApiResponse",
    "PageCursor",
    "PaginatedFetcher",
    "WordPressClient",
    "ensure_list_data",
]
