from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_atomic(dst: Path, data: bytes) -> None:
    """Write data to dst all-or-nothing.

    Writes a sibling temp file with a random suffix, fsyncs it and renames it
    over dst. On any failure the temp file is removed and dst is untouched.
    OSError propagates to the caller.
    """
    dst.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=dst.name + ".", suffix=".tmp", dir=str(dst.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(dst)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
