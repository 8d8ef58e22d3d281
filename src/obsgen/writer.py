"""Write the generated module to disk atomically.

The temporary file is created next to the destination so that
``os.replace`` is an atomic rename on POSIX systems; a crash mid-write never
leaves a truncated ``types.ts`` behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional


def write_output(path: str | Path, text: str) -> Path:
    """Write *text* to *path*, ensuring a trailing newline.

    Parent directories are created as needed.

    Returns:
        The destination path.
    """
    destination = Path(path)
    if not text.endswith("\n"):
        text += "\n"
    _atomic_write(destination, text)
    return destination


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
