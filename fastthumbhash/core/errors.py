from __future__ import annotations


class InvalidInputSize(ValueError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"expected {expected} rgba bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class MalformedHash(ValueError):
    pass
