"""Tests for obsgen.writer."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from obsgen.writer import write_output


class TestWriteOutput:
    """Atomic writes of the generated module."""

    def test_writes_and_returns_path(self, tmp_path: Path) -> None:
        target = tmp_path / "types.ts"
        assert write_output(target, "export {};\n") == target
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_adds_trailing_newline(self, tmp_path: Path) -> None:
        target = tmp_path / "types.ts"
        write_output(str(target), "export {};")
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "src" / "nested" / "types.ts"
        write_output(target, "x")
        assert target.is_file()

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "types.ts"
        target.write_text("old\n", encoding="utf-8")
        write_output(target, "new\n")
        assert target.read_text(encoding="utf-8") == "new\n"

    def test_failed_write_leaves_original_and_no_temp(self, tmp_path: Path) -> None:
        target = tmp_path / "types.ts"
        target.write_text("old\n", encoding="utf-8")
        with patch("obsgen.writer.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                write_output(target, "new\n")
        assert target.read_text(encoding="utf-8") == "old\n"
        assert [p.name for p in tmp_path.iterdir()] == ["types.ts"]
