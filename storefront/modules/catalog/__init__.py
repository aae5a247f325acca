"""Catalog module: categories and products."""
