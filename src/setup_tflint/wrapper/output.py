# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory capture of a child process output stream."""

from __future__ import annotations

from collections.abc import Callable


class OutputListener:
    """Accumulate output chunks and expose them as bytes or text."""

    def __init__(self) -> None:
        self._chunks: list[bytes] = []

    @property
    def listener(self) -> Callable[[bytes], None]:
        """Return a callable that records each chunk it receives."""

        return self._chunks.append

    @property
    def data(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def contents(self) -> str:
        return self.data.decode("utf-8", errors="replace")


__all__ = ["OutputListener"]
