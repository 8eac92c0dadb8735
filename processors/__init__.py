"""Dialect processors for markup and stylesheets."""

from processors.dialect import EXTENSIONS, Dialect, dialect_for_path
from processors.normalize import normalize

__all__ = ["Dialect", "EXTENSIONS", "dialect_for_path", "normalize"]
