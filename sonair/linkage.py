"""Linkage of symbols."""

from __future__ import annotations

import enum


class Linkage(enum.Enum):
    """Where a symbol is defined and who may use it."""

    PUBLIC = "public"
    PRIVATE = "private"
    EXTERNAL = "external"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, s: str) -> Linkage:
        """Parse a linkage keyword; raises ValueError for anything else."""
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"invalid linkage: {s!r}") from None