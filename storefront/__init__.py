# 📄 File: storefront/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks this folder as the storefront application and records its name and version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata.
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (application entry point)
# - pyproject.toml (packaging)

"""
Storefront - server-rendered e-commerce web application

Request pipeline, sessions, sign-in, catalog pages and the error boundary
composed on FastAPI.
"""

__version__ = "1.0.0"
__title__ = "Storefront"
__description__ = "Server-rendered e-commerce storefront"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
