"""
Pydantic schemas for user accounts.

Users are kept in the data store but no route exposes them; admin
access relies on the shared secret instead.  ``password`` holds the
PBKDF2 hash produced by ``core.security.hash_password``.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class User(BaseModel):
    id: int
    username: str
    password: str
