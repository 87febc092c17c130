"""Loaders that turn transaction export files into raw record mappings."""

from .utils import load_raw_records

__all__ = ["load_raw_records"]
