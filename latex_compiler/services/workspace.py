"""Per-request temporary files in the shared scratch directory.

Every compilation stages its files under a name derived from a unique request
identifier, so concurrent requests own disjoint file sets and never need locks.
"""

import logging
import time
import uuid
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def new_request_id() -> str:
    """Return a unique identifier for one in-flight request.

    Nanosecond timestamp plus a random suffix, so two requests landing on the
    same clock tick still get different names.
    """
    return f"latex_{time.time_ns()}_{uuid.uuid4().hex[:8]}"


class TemporaryArtifactSet:
    """Source, output, log and aux paths for one request.

    Use as a context manager: on exit the four paths, plus any other file the
    compiler left under the same request ID (.out, .toc, ...), are removed,
    whether the block returns normally or raises.

        with TemporaryArtifactSet(scratch_dir) as artifacts:
            artifacts.source.write_text(code)
    """

    def __init__(self, scratch_dir: Path, request_id: Optional[str] = None):
        self.scratch_dir = Path(scratch_dir)
        self.request_id = request_id or new_request_id()
        self.source = self.scratch_dir / f"{self.request_id}.tex"
        self.output = self.scratch_dir / f"{self.request_id}.pdf"
        self.log = self.scratch_dir / f"{self.request_id}.log"
        self.aux = self.scratch_dir / f"{self.request_id}.aux"

    def paths(self) -> List[Path]:
        return [self.source, self.output, self.log, self.aux]

    def leftovers(self) -> List[Path]:
        """Files in the scratch dir named after this request, beyond the fixed four."""
        known = set(self.paths())
        return [p for p in self.scratch_dir.glob(f"{self.request_id}.*") if p not in known]

    def cleanup(self) -> None:
        """Remove every file belonging to the request. Safe to call more than once."""
        for path in self.paths() + self.leftovers():
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Failed to remove %s: %s", path, e)

    def __enter__(self) -> "TemporaryArtifactSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
