from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class ActorContext(BaseModel):
    """Who is performing a mutation, and from where. Copied into audit entries."""
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class FieldError(BaseModel):
    field: str
    msg: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: Optional[str] = None
    errors: Optional[List[FieldError]] = None
    details: Optional[Dict[str, Any]] = None


class SuccessResponse(BaseModel):
    success: bool = True
