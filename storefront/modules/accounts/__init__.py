"""Accounts module: customer and administrator users."""
