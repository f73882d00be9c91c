from __future__ import annotations

from pathlib import Path

import pytest

from magiccookie import (
    DatabasePaths,
    Flags,
    LibraryUnavailableError,
    LoadedCookie,
    LoadError,
    OpenCookie,
    libmagic_version,
    open_loaded,
)
from magiccookie.native import get_library

pytestmark = pytest.mark.requires_libmagic


@pytest.fixture(scope="module")
def library():
    try:
        return get_library()
    except LibraryUnavailableError as exc:
        pytest.skip(f"libmagic not available: {exc}")


def test_real_version(library) -> None:
    assert libmagic_version(library) >= 500


def test_real_describe_buffer_and_file(library, tmp_path: Path) -> None:
    text = tmp_path / "hello.txt"
    text.write_text("hello world\n")

    with open_loaded(paths=DatabasePaths.default(), library=library) as loaded:
        assert "PDF document" in loaded.buffer(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n")
        assert "text" in loaded.file(text)
        assert loaded.file(text) == loaded.file(str(text))


def test_real_mime_flags(library) -> None:
    with open_loaded(Flags.MIME_TYPE, library=library) as loaded:
        assert loaded.buffer(b"%PDF-1.4\n") == "application/pdf"
        loaded.set_flags(Flags.NONE)
        assert loaded.buffer(b"%PDF-1.4\n").startswith("PDF document")


def test_real_failed_load_can_be_retried(library, tmp_path: Path) -> None:
    cookie = OpenCookie.open(Flags.NONE, library=library)

    with pytest.raises(LoadError) as excinfo:
        cookie.load(DatabasePaths.of(tmp_path / "missing.mgc"))

    assert excinfo.value.explanation
    retry = excinfo.value.take_cookie()
    with retry.load() as loaded:
        assert isinstance(loaded, LoadedCookie)
        assert loaded.buffer(b"") == "empty"

