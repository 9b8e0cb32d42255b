"""Utility functions."""

from picsort.utils.hash import path_digest

__all__ = ["path_digest"]
