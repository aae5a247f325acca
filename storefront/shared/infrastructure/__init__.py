# 📄 File: storefront/shared/infrastructure/__init__.py
#
# 🧪 Purpose (Technical Summary):
# Infrastructure package: async SQLAlchemy database management and the
# Redis-backed server-side session store.
