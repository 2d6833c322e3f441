from pydantic import BaseModel
from typing import Any, Optional


class ComplaintStatusUpdate(BaseModel):
    # Untyped on purpose: the service rejects anything that is not one of
    # the allowed status strings with 400.
    status: Optional[Any] = None
    adminNotes: Optional[Any] = None


class ComplaintActionResponse(BaseModel):
    success: bool = True
    message: str
