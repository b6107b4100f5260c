"""Server configuration."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables with LATEX_ prefix.
    Example: LATEX_PORT=9000 LATEX_COMPILE_TIMEOUT=30 uv run latex-compiler
    """

    model_config = SettingsConfigDict(env_prefix="LATEX_")

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Compilation
    scratch_dir: Path = Path("/tmp")
    compiler_command: str = "pdflatex"
    compile_timeout: Optional[float] = None  # seconds; None waits for the compiler indefinitely


settings = Settings()
