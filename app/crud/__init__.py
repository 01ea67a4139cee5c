"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Ownership checks live in app.core.permissions
and are applied by the callers before mutating anything here.
"""

from app.crud import application, company, job, user

__all__ = ["application", "company", "job", "user"]
