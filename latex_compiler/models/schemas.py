from typing import Optional

from pydantic import BaseModel, Field


class CompileRequest(BaseModel):
    """Compilation request."""
    latex_code: str = Field(..., description="LaTeX source to typeset")


class ErrorResponse(BaseModel):
    """Error body returned for every failed compilation."""
    error: str


class HealthResponse(BaseModel):
    """Health check body."""
    status: str
    compiler: Optional[str] = None  # Resolved executable path, None if not on PATH
