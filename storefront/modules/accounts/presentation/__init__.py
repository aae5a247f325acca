"""Presentation layer for accounts: form schemas."""
