"""MCP server for the LaTeX compiler.

Exposes the compiler service as MCP tools for use with MCP clients that
want a PDF written to disk rather than streamed over HTTP.

Uses STDIO transport.
"""

import shutil
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from latex_compiler.services.compiler import CompileError, get_compiler

mcp = FastMCP("latex-compiler")


@mcp.tool()
def compile_latex(latex_code: str, output_path: str) -> str:
    """Compile a LaTeX document to PDF and save it.

    Args:
        latex_code: Complete LaTeX source, from \\documentclass to \\end{document}.
        output_path: Where to write the PDF. Parent directories are created.
    """
    compiler = get_compiler()
    try:
        result = compiler.compile(latex_code)
    except CompileError as e:
        return f"Compilation failed: {e.message}"

    dest = Path(output_path).expanduser()
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(result.pdf)
    except OSError as e:
        return f"Compiled, but failed to write {dest}: {e}"

    return f"Wrote {len(result.pdf)} bytes to {dest} (request ID: {result.request_id})"


@mcp.tool()
def check_compiler() -> str:
    """Report whether the configured LaTeX compiler can be found on PATH."""
    compiler = get_compiler()
    path = shutil.which(compiler.command)
    if path is None:
        return f"Compiler '{compiler.command}' not found on PATH."
    lines = [
        f"Compiler: {path}",
        f"Scratch dir: {compiler.scratch_dir}",
        f"Timeout: {compiler.timeout if compiler.timeout is not None else 'none'}",
    ]
    return "\n".join(lines)


def main():
    """Run the LaTeX compiler MCP server on STDIO transport."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
