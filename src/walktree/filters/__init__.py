"""Reusable entry filters for WalkTreeBuilder.with_filter()."""

from .base_filter import BaseEntryFilter
from .composite_filter import CompositeFilter
from .git_filter import GitIgnoreFilter

__all__ = ["BaseEntryFilter", "CompositeFilter", "GitIgnoreFilter"]
