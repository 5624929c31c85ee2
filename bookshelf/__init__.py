"""
BookShelf API

REST backend for a social book-review platform: accounts, a community
book catalog, reviews with likes, and comments.

Package Structure:
- config.py: Settings (pydantic-settings), read once and frozen
- database.py: SQLAlchemy engine, session factory and Base
- exceptions.py: Errors rendered as {"success": false, "message": ...}
- dependencies.py: Injection helpers, including the bearer-token auth gate
- main.py: FastAPI application factory
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Accounts, security (hashing, tokens), ratings, rate limiting
"""

__version__ = "1.0.0"
