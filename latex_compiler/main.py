"""FastAPI application for the LaTeX compiler service."""

import logging
import shutil
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .config import settings
from .models import HealthResponse
from .routes import compile_router
from .services.compiler import get_compiler

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    compiler_path = shutil.which(settings.compiler_command)
    if compiler_path is None:
        logger.warning("Compiler %r not found on PATH", settings.compiler_command)
    logger.info(
        "LaTeX compiler service starting on port %d (scratch dir: %s)",
        settings.port, settings.scratch_dir,
    )
    yield
    logger.info("LaTeX compiler service shutting down")


app = FastAPI(
    title="LaTeX Compiler Service",
    description="Typesets LaTeX source into PDF with an external compiler",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(compile_router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        compiler=shutil.which(get_compiler().command),
    )


def run():
    """Entry point for latex-compiler command."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
