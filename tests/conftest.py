"""Pytest configuration for shared fixtures."""

from __future__ import annotations

import errno as errno_codes
import logging
import os
from collections.abc import Sequence
from pathlib import Path

import pytest

from magiccookie.flags import Flags
from magiccookie.paths import DATABASE_FILENAME_SEPARATOR

# =============================================================================
# Instrumented fake libmagic
# =============================================================================
# Implements the NativeLibrary protocol in pure Python. Every pointer handed
# out by magic_open() is tracked so tests can assert that each one is closed
# exactly once and never touched after magic_close().

FIRST_POINTER = 0x5000
NO_MAGIC_FILES = b"could not find any valid magic files!"


class FakeLibMagic:
    def __init__(self, version: int = 545):
        self.version = version
        self.opened: list[int] = []
        self.closed: list[int] = []
        self.calls: list[tuple[str, int | None]] = []
        self.databases: dict[int, list[bytes]] = {}
        self.flags: dict[int, int] = {}
        self.open_errno: int | None = None
        self.reject_preserve_atime = False
        self._next_pointer = FIRST_POINTER
        self._slots: dict[int, tuple[bytes | None, int]] = {}
        self._scripted: dict[str, list[tuple[int | None, bytes | None, int]]] = {}
        self._os_errno = 0

    # -- scripting -----------------------------------------------------------

    def script(
        self,
        primitive: str,
        result: int | None = -1,
        explanation: bytes | None = b"scripted failure",
        errno: int = 0,
    ) -> None:
        """Make the next call to ``primitive`` return ``result`` and fill the error slot."""
        self._scripted.setdefault(primitive, []).append((result, explanation, errno))

    def _scripted_result(self, primitive: str, pointer: int):
        queue = self._scripted.get(primitive)
        if not queue:
            return False, None
        result, explanation, errno = queue.pop(0)
        self._slots[pointer] = (explanation, errno)
        return True, result

    def _enter(self, primitive: str, pointer: int) -> None:
        self.calls.append((primitive, pointer))
        assert pointer in self.opened, f"{primitive} on unknown pointer {pointer:#x}"
        assert pointer not in self.closed, f"{primitive} on closed pointer {pointer:#x}"

    def _reset_slot(self, pointer: int) -> None:
        self._slots[pointer] = (None, 0)

    def _fail(self, pointer: int, explanation: bytes, errno: int = 0) -> None:
        self._slots[pointer] = (explanation, errno)

    @property
    def live(self) -> list[int]:
        return [pointer for pointer in self.opened if pointer not in self.closed]

    # -- NativeLibrary -------------------------------------------------------

    def magic_open(self, flags: int) -> int | None:
        self.calls.append(("magic_open", None))
        if self.open_errno is not None:
            self._os_errno = self.open_errno
            return None
        pointer = self._next_pointer
        self._next_pointer += 0x10
        self.opened.append(pointer)
        self.flags[pointer] = flags
        self.databases[pointer] = []
        self._reset_slot(pointer)
        return pointer

    def magic_close(self, cookie: int) -> None:
        self._enter("magic_close", cookie)
        self.closed.append(cookie)

    def magic_error(self, cookie: int) -> bytes | None:
        self._enter("magic_error", cookie)
        return self._slots[cookie][0]

    def magic_errno(self, cookie: int) -> int:
        self._enter("magic_errno", cookie)
        return self._slots[cookie][1]

    def magic_file(self, cookie: int, filename: bytes) -> bytes | None:
        self._enter("magic_file", cookie)
        self._reset_slot(cookie)
        scripted, result = self._scripted_result("magic_file", cookie)
        if scripted:
            return result
        if not self.databases[cookie]:
            self._fail(cookie, b"no magic files loaded")
            return None
        try:
            size = os.stat(filename).st_size
        except OSError as exc:
            self._fail(cookie, b"cannot stat `" + filename + b"'", exc.errno or 0)
            return None
        if size == 0:
            return b"empty"
        return b"data, %d bytes" % size

    def magic_buffer(self, cookie: int, buffer: bytes) -> bytes | None:
        self._enter("magic_buffer", cookie)
        self._reset_slot(cookie)
        scripted, result = self._scripted_result("magic_buffer", cookie)
        if scripted:
            return result
        if not self.databases[cookie]:
            self._fail(cookie, b"no magic files loaded")
            return None
        if self.flags[cookie] & Flags.MIME_TYPE:
            return b"application/octet-stream"
        if buffer.startswith(b"%PDF-"):
            return b"PDF document, version " + buffer[5:8]
        return b"data" if buffer else b"empty"

    def magic_setflags(self, cookie: int, flags: int) -> int:
        self._enter("magic_setflags", cookie)
        scripted, result = self._scripted_result("magic_setflags", cookie)
        if scripted:
            return result
        if self.reject_preserve_atime and flags & Flags.PRESERVE_ATIME:
            return -1
        self.flags[cookie] = flags
        return 0

    def _database_call(self, primitive: str, cookie: int, filenames: bytes | None) -> int:
        self._enter(primitive, cookie)
        self._reset_slot(cookie)
        scripted, result = self._scripted_result(primitive, cookie)
        if scripted:
            return result
        if filenames is not None:
            for name in filenames.split(os.fsencode(DATABASE_FILENAME_SEPARATOR)):
                if not os.path.exists(name):
                    self._fail(cookie, NO_MAGIC_FILES, errno_codes.ENOENT)
                    return -1
        return 0

    def magic_check(self, cookie: int, filenames: bytes | None) -> int:
        return self._database_call("magic_check", cookie, filenames)

    def magic_compile(self, cookie: int, filenames: bytes | None) -> int:
        return self._database_call("magic_compile", cookie, filenames)

    def magic_list(self, cookie: int, filenames: bytes | None) -> int:
        return self._database_call("magic_list", cookie, filenames)

    def magic_load(self, cookie: int, filenames: bytes | None) -> int:
        result = self._database_call("magic_load", cookie, filenames)
        if result == 0:
            self.databases[cookie] = [filenames or b"<default>"]
        return result

    def magic_load_buffers(self, cookie: int, buffers: Sequence[bytes]) -> int:
        self._enter("magic_load_buffers", cookie)
        self._reset_slot(cookie)
        scripted, result = self._scripted_result("magic_load_buffers", cookie)
        if scripted:
            return result
        if not buffers or any(not buffer for buffer in buffers):
            self._fail(cookie, b"bad magic in buffer")
            return -1
        self.databases[cookie] = list(buffers)
        return 0

    def magic_version(self) -> int:
        return self.version

    def last_os_errno(self) -> int:
        return self._os_errno


@pytest.fixture
def fake_library() -> FakeLibMagic:
    """Return a fresh instrumented fake libmagic."""
    return FakeLibMagic()


@pytest.fixture
def database_file(tmp_path: Path) -> Path:
    """An existing file to stand in for a compiled magic database."""
    path = tmp_path / "magic.mgc"
    path.write_bytes(b"\x1c\x04\x1e\xf1fake")
    return path


# =============================================================================
# Environment isolation
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests against the fake libmagic")
    config.addinivalue_line("markers", "requires_libmagic: tests that need the real libmagic")


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Keep log files out of the home directory and drop handlers between tests."""
    from magiccookie.utils import logger as logger_module

    monkeypatch.setattr(logger_module, "LOG_DIR", tmp_path_factory.mktemp("logs"))
    monkeypatch.delenv("MAGICCOOKIE_FLAGS", raising=False)
    monkeypatch.delenv("MAGICCOOKIE_DATABASES", raising=False)
    yield
    package_logger = logging.getLogger("magiccookie")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
