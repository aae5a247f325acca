# 📄 File: storefront/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools
# that every part of the storefront can use, like configuration, logging and errors.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, infrastructure (database, session
# store) and cross-cutting concerns used by the API layer and the modules.
#
# 🔄 Connected Modules / Calls From:
# - storefront.main, storefront.api, storefront.modules

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database and session-store infrastructure
- Security helpers (password hashing, session cookie signing)
- Exception hierarchy
- Logging setup
"""

__all__ = []
