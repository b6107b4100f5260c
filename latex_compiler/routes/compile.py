"""Compile endpoint."""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..models import CompileRequest, ErrorResponse
from ..services.compiler import CompileError, get_compiler

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/compile",
    response_class=Response,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": CompileRequest.model_json_schema()}},
        }
    },
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Rendered PDF"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def compile_latex(request: Request):
    """Compile LaTeX source to PDF.

    POST /compile - returns the PDF bytes, or {"error": ...} with status 500
    when the compiler rejects the source or the service hits an I/O failure.

    The body is decoded as JSON whatever its Content-Type header says.
    """
    logger.info("Received compilation request")

    try:
        payload = CompileRequest.model_validate_json(await request.body())
    except ValidationError as e:
        logger.warning("JSON parsing failed: %s", e.errors(include_url=False))
        return _error(400, "Invalid JSON format")

    compiler = get_compiler()

    # Compilation blocks on the external process, keep it off the event loop
    try:
        result = await run_in_threadpool(compiler.compile, payload.latex_code)
    except CompileError as e:
        return _error(500, e.message)

    return Response(
        content=result.pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{result.request_id}.pdf"'},
    )
