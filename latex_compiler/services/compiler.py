"""Compiler service: runs LaTeX source through the external typesetting toolchain."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config import settings
from .workspace import TemporaryArtifactSet

logger = logging.getLogger(__name__)

FALLBACK_DIAGNOSTIC = "LaTeX compilation failed"


class CompileError(Exception):
    """Base class for compilation failures.

    ``message`` is the text returned to the caller in the error body.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SourceWriteError(CompileError):
    def __init__(self):
        super().__init__("Failed to create temporary file")


class CompilerNotFoundError(CompileError):
    def __init__(self):
        super().__init__("LaTeX compiler not available")


class CompilerTimeoutError(CompileError):
    def __init__(self):
        super().__init__("Compilation timed out")


class CompilerFailedError(CompileError):
    """The compiler exited non-zero; ``message`` carries its diagnostic."""

    def __init__(self, diagnostic: str, returncode: int):
        super().__init__(diagnostic)
        self.returncode = returncode


class OutputReadError(CompileError):
    def __init__(self):
        super().__init__("Failed to read generated PDF")


@dataclass
class CompileResult:
    """A successfully rendered document."""
    request_id: str
    pdf: bytes


def read_diagnostic(log_path: Path, captured_output: bytes) -> str:
    """Pick the diagnostic text for a failed compilation.

    The compiler's own log file wins when it exists and can be read; otherwise
    the captured stdout/stderr is used.
    """
    try:
        diagnostic = log_path.read_bytes().decode("utf-8", errors="replace")
    except OSError:
        diagnostic = captured_output.decode("utf-8", errors="replace")
    return diagnostic or FALLBACK_DIAGNOSTIC


class LatexCompiler:
    """Service for compiling LaTeX source to PDF."""

    def __init__(
        self,
        command: str = "pdflatex",
        scratch_dir: Path = Path("/tmp"),
        timeout: Optional[float] = None,
    ):
        self.command = command
        self.scratch_dir = Path(scratch_dir)
        self.timeout = timeout

    def build_command(self, source: Path) -> List[str]:
        """Command line for one compilation (nonstopmode never waits on stdin)."""
        return [
            self.command,
            f"-output-directory={self.scratch_dir}",
            "-interaction=nonstopmode",
            str(source),
        ]

    def compile(self, latex_code: str) -> CompileResult:
        """Compile LaTeX source and return the rendered PDF.

        Raises a CompileError subclass on any failure. Temporary files are
        removed before this returns, on every path.
        """
        with TemporaryArtifactSet(self.scratch_dir) as artifacts:
            try:
                artifacts.source.write_bytes(latex_code.encode("utf-8", errors="replace"))
            except OSError as e:
                logger.error("Failed to write LaTeX file %s: %s", artifacts.source, e)
                raise SourceWriteError() from e

            proc = self._run(artifacts)

            if proc.returncode != 0:
                diagnostic = read_diagnostic(artifacts.log, proc.stdout or b"")
                logger.error(
                    "%s failed for request %s (exit %d):\n%s",
                    self.command, artifacts.request_id, proc.returncode, diagnostic,
                )
                raise CompilerFailedError(diagnostic, proc.returncode)

            try:
                pdf = artifacts.output.read_bytes()
            except OSError as e:
                logger.error(
                    "%s exited 0 but %s is unreadable: %s",
                    self.command, artifacts.output, e,
                )
                raise OutputReadError() from e

            logger.info(
                "Successfully compiled LaTeX to PDF (request ID: %s, %d bytes)",
                artifacts.request_id, len(pdf),
            )
            return CompileResult(request_id=artifacts.request_id, pdf=pdf)

    def _run(self, artifacts: TemporaryArtifactSet) -> subprocess.CompletedProcess:
        cmd = self.build_command(artifacts.source)
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.timeout,
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.error("Cannot execute compiler %s: %s", self.command, e)
            raise CompilerNotFoundError() from e
        except subprocess.TimeoutExpired as e:
            logger.error(
                "%s timed out after %ss for request %s",
                self.command, self.timeout, artifacts.request_id,
            )
            raise CompilerTimeoutError() from e


# Global singleton
_compiler: Optional[LatexCompiler] = None


def get_compiler() -> LatexCompiler:
    """Get the global compiler service instance."""
    global _compiler
    if _compiler is None:
        _compiler = LatexCompiler(
            command=settings.compiler_command,
            scratch_dir=settings.scratch_dir,
            timeout=settings.compile_timeout,
        )
    return _compiler
