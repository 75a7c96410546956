from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Logger:
    emit: Callable[[str], None]
    prefix: str = ""

    def info(self, msg: str) -> None:
        self.emit(f"{self.prefix}{msg}" if self.prefix else msg)

    def child(self, prefix: str) -> Logger:
        return Logger(self.emit, prefix=f"{self.prefix}{prefix}")
