from __future__ import annotations

from pathlib import Path

import pytest

from magiccookie.errors import LibraryUnavailableError
from magiccookie.native import library as library_module


@pytest.mark.unit
def test_environment_override_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(library_module.LIBMAGIC_ENV_VAR, "/opt/magic/libmagic.so.1")

    assert library_module._locate_library() == "/opt/magic/libmagic.so.1"


@pytest.mark.unit
def test_unloadable_library_is_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bogus = tmp_path / "libmagic.so"
    bogus.write_bytes(b"not a shared object")
    monkeypatch.setenv(library_module.LIBMAGIC_ENV_VAR, str(bogus))

    with pytest.raises(LibraryUnavailableError, match="could not load libmagic"):
        library_module.LibMagic()


@pytest.mark.unit
def test_get_library_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    created = []

    class Stub:
        def __init__(self):
            created.append(self)

    monkeypatch.setattr(library_module, "_library", None)
    monkeypatch.setattr(library_module, "LibMagic", Stub)

    first = library_module.get_library()
    second = library_module.get_library()

    assert first is second
    assert len(created) == 1
