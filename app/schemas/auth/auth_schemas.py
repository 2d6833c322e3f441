from pydantic import BaseModel, Field
from typing import Optional


class SessionUser(BaseModel):
    """Claims carried by an access token."""

    id: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    username: Optional[str] = None
