"""
Meigen Backend
==============

A quotation service: categories, subcategories, authors and quotes with
soft delete, a daily featured selection, substring search, and
an admin session gate in front of every write.

Layers:

    ┌─────────────────────────────────────┐
    │   routes/      HTTP + envelope      │
    ├─────────────────────────────────────┤
    │   services/    business rules       │
    ├─────────────────────────────────────┤
    │   models/ schemas/                  │
    ├─────────────────────────────────────┤
    │   database.py  engine + sessions    │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
