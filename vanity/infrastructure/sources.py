"""
Byte-stream openers for the JSON record store.

An opener is a zero-argument callable returning `(stream, release)`. The store
calls it once per lookup and always calls `release` once the stream has been
read, whether decoding succeeded or not. Nothing is held open between calls,
so the backing file can be rewritten while the server runs.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Callable, Tuple, Union

Opener = Callable[[], Tuple[BinaryIO, Callable[[], None]]]


def file_opener(path: Union[str, Path]) -> Opener:
    """
    Opener reading `path` from disk on every call.

    Open errors (missing file, permissions) propagate to the caller as OSError.
    """
    file_path = Path(path)

    def _open() -> Tuple[BinaryIO, Callable[[], None]]:
        fd = file_path.open("rb")
        return fd, fd.close

    return _open


def bytes_opener(data: Union[bytes, str]) -> Opener:
    """
    Opener over an in-memory document; `str` input is UTF-8 encoded.
    """
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    def _open() -> Tuple[BinaryIO, Callable[[], None]]:
        buf = io.BytesIO(payload)
        return buf, buf.close

    return _open


__all__ = ["Opener", "file_opener", "bytes_opener"]
