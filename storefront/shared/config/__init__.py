# 📄 File: storefront/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the storefront how to connect to its database,
# its session store, and how to behave in each environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management.
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (application startup)
# - Infrastructure components

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- Database connection configuration
- Redis configuration for the session store
"""

from .settings import ContextFailurePolicy, Settings, get_settings

__all__ = [
    "ContextFailurePolicy",
    "get_settings",
    "Settings",
]
