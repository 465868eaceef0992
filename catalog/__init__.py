"""
Library Catalog Application Package

Server-rendered catalog of Authors, Books and Categories.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- exceptions.py: Domain error types raised by services
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- templating.py: Jinja2 template environment
- models/: SQLAlchemy ORM models
- schemas/: Pydantic form schemas
- repositories/: Persistence queries per entity
- services/: Business rules per entity
- routers/: HTML page and form handlers
- utils/: Pagination and flash-message helpers
"""

__version__ = "0.1.0"
