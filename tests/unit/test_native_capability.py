from __future__ import annotations

import errno

import pytest

from magiccookie.errors import (
    ApiViolationError,
    CookieError,
    NativeSetFlagsError,
    StaleCookieError,
)
from magiccookie.native import capability
from magiccookie.native.capability import NativeHandle


@pytest.mark.unit
def test_open_handle_returns_owned_pointer(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)

    assert handle.pointer == fake_library.opened[0]
    assert not handle.closed
    handle.close()
    assert handle.closed
    assert fake_library.closed == fake_library.opened


@pytest.mark.unit
def test_open_handle_failure_reports_os_errno(fake_library) -> None:
    fake_library.open_errno = errno.ENOMEM

    with pytest.raises(OSError) as excinfo:
        capability.open_handle(fake_library, 0)

    assert excinfo.value.errno == errno.ENOMEM
    assert fake_library.opened == []


@pytest.mark.unit
def test_handle_closes_at_most_once(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)

    handle.close()
    handle.close()

    assert len(fake_library.closed) == 1
    with pytest.raises(StaleCookieError):
        _ = handle.pointer
    assert repr(handle) == "NativeHandle(<closed>)"


@pytest.mark.unit
def test_handle_closes_when_collected(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    pointer = handle.pointer

    del handle

    assert fake_library.closed == [pointer]


@pytest.mark.unit
def test_failure_without_error_message_is_api_violation(fake_library, caplog) -> None:
    handle = capability.open_handle(fake_library, 0)
    fake_library.script("magic_load", result=-1, explanation=None)

    with pytest.raises(ApiViolationError, match="did not set last error"):
        capability.load(handle, None)

    assert "API violation" in caplog.text
    handle.close()


@pytest.mark.unit
def test_undocumented_status_is_api_violation(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    fake_library.script("magic_check", result=7, explanation=None)

    with pytest.raises(ApiViolationError, match="returned 7"):
        capability.check(handle, None)

    handle.close()


@pytest.mark.unit
def test_null_description_reads_last_error(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    fake_library.script("magic_buffer", result=None, explanation=b"bad things", errno=errno.EIO)

    with pytest.raises(CookieError) as excinfo:
        capability.buffer(handle, b"data")

    assert excinfo.value.explanation == "bad things"
    assert excinfo.value.errno == errno.EIO
    handle.close()


@pytest.mark.unit
def test_null_description_without_error_is_api_violation(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    fake_library.script("magic_file", result=None, explanation=None)

    with pytest.raises(ApiViolationError):
        capability.file(handle, b"/etc/hostname")

    handle.close()


@pytest.mark.unit
def test_last_error_maps_zero_errno_to_none(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    fake_library.script("magic_load", explanation=b"no magic", errno=0)

    with pytest.raises(CookieError) as excinfo:
        capability.load(handle, None)

    assert excinfo.value.errno is None
    assert str(excinfo.value) == "magic cookie error (no OS errno): no magic"
    handle.close()


@pytest.mark.unit
def test_setflags_rejection(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    fake_library.reject_preserve_atime = True

    with pytest.raises(NativeSetFlagsError):
        capability.setflags(handle, 0x80)
    capability.setflags(handle, 0x10)

    assert fake_library.flags[handle.pointer] == 0x10
    handle.close()


@pytest.mark.unit
def test_calls_after_close_never_reach_library(fake_library) -> None:
    handle = capability.open_handle(fake_library, 0)
    handle.close()
    calls_before = len(fake_library.calls)

    with pytest.raises(StaleCookieError):
        capability.buffer(handle, b"x")

    assert len(fake_library.calls) == calls_before


@pytest.mark.unit
def test_version_passthrough(fake_library) -> None:
    assert capability.version(fake_library) == 545


@pytest.mark.unit
def test_handle_repr_shows_pointer(fake_library) -> None:
    handle = NativeHandle(fake_library, fake_library.magic_open(0))

    assert repr(handle) == f"NativeHandle({handle.pointer:#x})"
    handle.close()
