# 📄 File: storefront/modules/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Groups the storefront's business areas: the product catalog and customer accounts.
#
# 🧪 Purpose (Technical Summary):
# Modular-monolith package. Each module has a `domain` layer (entities and
# repository contracts) and an `infrastructure` layer (SQLAlchemy models and
# repository implementations).
