"""
Restaurant API - Application Package Initializer
=================================================

What: Marks the `restaurant_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    ┌─────────────────────────────────────┐
    │        Routes (HTTP + validation)   │  ← status codes, body rules
    ├─────────────────────────────────────┤
    │        Services (store calls)       │  ← one round trip per operation
    ├─────────────────────────────────────┤
    │        Schemas (API contract)       │  ← Pydantic response models
    ├─────────────────────────────────────┤
    │        Database (store gateway)     │  ← connection-per-request scope
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
