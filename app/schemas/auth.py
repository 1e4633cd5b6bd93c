"""
Pydantic schemas for the authenticated principal.
"""

from pydantic import BaseModel


class Principal(BaseModel):
    """Identity resolved from a verified bearer token. Not persisted."""
    username: str
    is_admin: bool = False

    @classmethod
    def from_claims(cls, payload: dict) -> "Principal":
        return cls(username=payload["sub"], is_admin=bool(payload.get("is_admin", False)))
