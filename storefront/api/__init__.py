# 📄 File: storefront/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing part of the storefront: what happens to each request and which
# page answers it.
# 🧪 Purpose (Technical Summary):
# Package initialization for the HTTP layer.
# 🔄 Connected Modules / Calls From:
# storefront.main

"""
Storefront HTTP Package

Structure:
    api/
    ├── __init__.py          # This file
    ├── pipeline.py          # Ordered middleware stages
    ├── errors.py            # Error boundary
    ├── templating.py        # Jinja2 renderer and shared view context
    ├── middleware/          # Pipeline stage implementations
    └── routes/              # Route groups and mount table
"""
