from .schemas import CompileRequest, ErrorResponse, HealthResponse

__all__ = ["CompileRequest", "ErrorResponse", "HealthResponse"]
