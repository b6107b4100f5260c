from .compiler import (
    CompileError,
    CompileResult,
    CompilerFailedError,
    CompilerNotFoundError,
    CompilerTimeoutError,
    LatexCompiler,
    OutputReadError,
    SourceWriteError,
    get_compiler,
)
from .workspace import TemporaryArtifactSet, new_request_id
