import stat

import pytest
from fastapi.testclient import TestClient

import latex_compiler.services.compiler as compiler_module
from latex_compiler.services.compiler import LatexCompiler
from latex_compiler.main import app

# Stands in for pdflatex: same argv shape, and it leaves .log/.aux/.pdf
# files in the output directory the way the real tool does. Markers in the
# source select the outcome.
FAKE_COMPILER = r"""#!/bin/sh
outdir="${1#-output-directory=}"
src="$3"
name=$(basename "$src" .tex)
if [ -n "$FAKE_LATEX_CALLS" ]; then
    echo "$src" >> "$FAKE_LATEX_CALLS"
fi
if grep -q 'SLEEP' "$src"; then
    exec sleep 5
fi
if grep -q '\\notacommand' "$src"; then
    echo "! Undefined control sequence." > "$outdir/$name.log"
    echo "This is pdfTeX (fake)"
    exit 1
fi
if grep -q 'NOLOG' "$src"; then
    echo "captured: emergency stop"
    exit 1
fi
echo "This is pdfTeX (fake)" > "$outdir/$name.log"
echo "relax" > "$outdir/$name.aux"
if grep -q 'EXTRAS' "$src"; then
    echo "outline" > "$outdir/$name.out"
    echo "contents" > "$outdir/$name.toc"
fi
if grep -q 'NOPDF' "$src"; then
    exit 0
fi
printf '%%PDF-1.5\n%%fake document\n%%%%EOF\n' > "$outdir/$name.pdf"
exit 0
"""


def _reset_singletons():
    """Reset all service singletons."""
    compiler_module._compiler = None


@pytest.fixture
def fake_compiler(tmp_path):
    """Path to an executable fake pdflatex."""
    script = tmp_path / "fake-pdflatex"
    script.write_text(FAKE_COMPILER)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def scratch_dir(tmp_path):
    """Isolated scratch directory, empty at the start of each test."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def compiler_calls(tmp_path, monkeypatch):
    """File the fake compiler appends each invoked source path to."""
    calls = tmp_path / "calls.txt"
    monkeypatch.setenv("FAKE_LATEX_CALLS", str(calls))
    return calls


@pytest.fixture
def compiler(fake_compiler, scratch_dir, compiler_calls):
    """Compiler service wired to the fake toolchain and installed as the singleton."""
    _reset_singletons()
    svc = LatexCompiler(command=str(fake_compiler), scratch_dir=scratch_dir)
    compiler_module._compiler = svc

    yield svc

    _reset_singletons()


@pytest.fixture
def client(compiler):
    """Test client backed by the fake compiler."""
    with TestClient(app) as c:
        yield c
