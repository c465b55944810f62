from __future__ import annotations

"""
Unit tests for the Name Obliteration Service.

Verifies the exact rename sequence, the transcript format, collision and
precondition failures, failure attribution and resumption from an
intermediate all-zero name.
"""

import os
from pathlib import Path
from typing import List
from unittest.mock import patch

import pytest

from shrem.core.obliterator import NameObliterator
from shrem.domain.errors import NameCollision, NotEmpty, PathVanished, PermissionDenied
from shrem.domain.models import EntryKind


def test_directory_transcript_matches_shred_format(
        tmp_path: Path, monkeypatch: pytest.MonkeyPatch, transcript: List[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "dir").mkdir()

    last = NameObliterator(reporter=transcript.append).obliterate("dir")

    assert last == "0"
    assert transcript == [
        "shrem: dir: removing",
        "shrem: dir: renamed to 000",
        "shrem: 000: renamed to 00",
        "shrem: 00: renamed to 0",
        "shrem: 0: removed",
    ]
    assert os.listdir(tmp_path) == []


def test_exactly_n_renames_then_one_removal(tmp_path: Path) -> None:
    target = tmp_path / "abcdef"
    target.mkdir()
    renames = []
    removals = []
    real_rename = os.rename
    real_rmdir = os.rmdir

    def spy_rename(src, dst):
        renames.append((os.path.basename(src), os.path.basename(dst)))
        real_rename(src, dst)

    def spy_rmdir(path):
        removals.append(os.path.basename(path))
        real_rmdir(path)

    with patch("shrem.core.obliterator.os.rename", side_effect=spy_rename), \
            patch("shrem.core.obliterator.os.rmdir", side_effect=spy_rmdir):
        NameObliterator().obliterate(str(target))

    assert [dst for _, dst in renames] == ["000000", "00000", "0000", "000", "00", "0"]
    assert renames[0][0] == "abcdef"
    assert removals == ["0"]
    assert not target.exists()


def test_other_entries_are_unlinked(tmp_path: Path, transcript: List[str]) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "keep.txt").write_text("data", encoding="utf-8")
    tree = tmp_path / "tree"
    tree.mkdir()
    link = tree / "ln"
    os.symlink(outside, link)

    NameObliterator(reporter=transcript.append).obliterate(str(link), EntryKind.OTHER)

    assert os.listdir(tree) == []
    assert (outside / "keep.txt").read_text(encoding="utf-8") == "data"
    assert transcript[-1] == f"shrem: {tree / '0'}: removed"


def test_non_empty_directory_is_refused_before_any_rename(tmp_path: Path) -> None:
    target = tmp_path / "full"
    target.mkdir()
    (target / "child").write_text("x", encoding="utf-8")

    with pytest.raises(NotEmpty):
        NameObliterator().obliterate(str(target))

    assert target.exists()
    assert (target / "child").exists()


def test_collision_leaves_both_entries(tmp_path: Path) -> None:
    (tmp_path / "0").mkdir()
    (tmp_path / "x").mkdir()

    with pytest.raises(NameCollision) as info:
        NameObliterator().obliterate(str(tmp_path / "x"))

    assert info.value.step == 1
    assert info.value.current_path == str(tmp_path / "x")
    assert sorted(os.listdir(tmp_path)) == ["0", "x"]


def test_collision_midway_reports_intermediate_name(tmp_path: Path) -> None:
    (tmp_path / "00").write_text("sibling", encoding="utf-8")
    (tmp_path / "abc").mkdir()

    with pytest.raises(NameCollision) as info:
        NameObliterator().obliterate(str(tmp_path / "abc"))

    assert info.value.step == 2
    assert info.value.current_path == str(tmp_path / "000")
    assert (tmp_path / "00").read_text(encoding="utf-8") == "sibling"
    assert (tmp_path / "000").is_dir()


def test_rename_failure_is_attributed(tmp_path: Path) -> None:
    (tmp_path / "abcd").mkdir()
    real_rename = os.rename
    calls = {"n": 0}

    def flaky_rename(src, dst):
        calls["n"] += 1
        if calls["n"] == 2:
            raise PermissionError(13, "Permission denied")
        real_rename(src, dst)

    with patch("shrem.core.obliterator.os.rename", side_effect=flaky_rename):
        with pytest.raises(PermissionDenied) as info:
            NameObliterator().obliterate(str(tmp_path / "abcd"))

    err = info.value
    assert err.step == 2
    assert err.operation == "rename"
    assert err.path == str(tmp_path / "abcd")
    assert err.current_path == str(tmp_path / "0000")
    assert os.listdir(tmp_path) == ["0000"]


def test_vanished_entry(tmp_path: Path) -> None:
    with pytest.raises(PathVanished):
        NameObliterator().obliterate(str(tmp_path / "gone"), EntryKind.OTHER)


def test_resume_from_intermediate_name(tmp_path: Path, transcript: List[str]) -> None:
    (tmp_path / "00").mkdir()

    NameObliterator(reporter=transcript.append).obliterate(str(tmp_path / "00"))

    assert os.listdir(tmp_path) == []
    # The step targeting the current name is a no-op
    assert transcript == [
        f"shrem: {tmp_path / '00'}: removing",
        f"shrem: {tmp_path / '00'}: renamed to {tmp_path / '0'}",
        f"shrem: {tmp_path / '0'}: removed",
    ]


def test_custom_prefix(tmp_path: Path, transcript: List[str]) -> None:
    (tmp_path / "d").mkdir()

    NameObliterator(reporter=transcript.append, prefix="wipe").obliterate(str(tmp_path / "d"))

    assert all(line.startswith("wipe: ") for line in transcript)
