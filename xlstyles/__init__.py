"""Colours, cell style parts and conditional formatting rules for XLSX spreadsheets."""

__version__ = "0.1.0"

__all__ = ["colors", "formatstyle", "conditional"]