from __future__ import annotations

"""
Unit tests for the obliteration error hierarchy and OSError translation.
"""

import errno

import pytest

from shrem.domain.errors import (
    NameCollision,
    NotEmpty,
    ObliterationError,
    PathVanished,
    PermissionDenied,
    from_os_error,
)


@pytest.mark.parametrize(
    "code, operation, expected",
    [
        (errno.EACCES, "rename", PermissionDenied),
        (errno.EPERM, "remove", PermissionDenied),
        (errno.ENOENT, "rename", PathVanished),
        (errno.ENOTEMPTY, "remove", NotEmpty),
        (errno.EEXIST, "remove", NotEmpty),
        (errno.EIO, "rename", ObliterationError),
    ],
)
def test_from_os_error_mapping(code: int, operation: str, expected: type) -> None:
    exc = OSError(code, "boom")
    err = from_os_error(exc, "a/b", current_path="a/00", step=3, operation=operation)

    assert type(err) is expected
    assert err.path == "a/b"
    assert err.current_path == "a/00"
    assert err.step == 3
    assert err.reason == "boom"


def test_describe_mentions_step_and_leftover_name() -> None:
    err = NameCollision("dir/ab", "target name '0' already exists",
                        current_path="dir/00", step=2, operation="rename")

    text = err.describe()
    assert text.startswith("dir/ab: rename step 2: ")
    assert "left at 'dir/00'" in text
    assert str(err) == text


def test_describe_without_step() -> None:
    err = NotEmpty("dir", "directory not empty")

    assert err.current_path == "dir"
    assert err.describe() == "dir: remove: directory not empty"
    assert isinstance(err, ObliterationError)
