"""Bookmark use cases."""

from .list_bookmarks import ListBookmarksRequest, ListBookmarksResponse, ListBookmarksUseCase
from .toggle_bookmark import ToggleBookmarkRequest, ToggleBookmarkResponse, ToggleBookmarkUseCase

__all__ = [
    "ListBookmarksRequest",
    "ListBookmarksResponse",
    "ListBookmarksUseCase",
    "ToggleBookmarkRequest",
    "ToggleBookmarkResponse",
    "ToggleBookmarkUseCase",
]
