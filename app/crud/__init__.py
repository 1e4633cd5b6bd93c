"""
CRUD operations (Create, Read, Update, Delete) for companies and jobs.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Every statement is parameterized SQL built with
the helpers in app.core.sql.
"""

from app.crud import company, job

__all__ = ["company", "job"]
