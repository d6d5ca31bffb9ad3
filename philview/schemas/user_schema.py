"""Signed-in user profile as returned by the identity provider."""

from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    OWNER = "owner"
    DIRECTOR = "director"
    BROKER = "broker"
    ACCOUNTANT = "accountant"
    MARKETING = "marketing"
    CLIENT = "client"


class User(BaseModel):
    """Profile used to phrase replies. Roles never gate assistant behavior."""
    id: str
    name: str
    email: str
    role: UserRole
