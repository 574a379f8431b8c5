"""Per-module context shared by the functions of a module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from sonair.isa import IsaBuilder, TargetIsa
from sonair.triple import TargetTriple
from sonair.types import AnyType, TypeStore


@dataclass(eq=False)
class ModuleCtx:
    """The target ISA and the type store of a module."""

    isa: TargetIsa
    type_store: TypeStore = field(default_factory=TypeStore)

    @classmethod
    def from_triple(cls, triple: Union[TargetTriple, str]) -> ModuleCtx:
        """Build a context for a triple, given as a TargetTriple or its text."""
        if isinstance(triple, str):
            triple = TargetTriple.parse(triple)
        return cls(IsaBuilder(triple).build())

    @property
    def triple(self) -> TargetTriple:
        return self.isa.triple

    def display_type(self, ty: AnyType) -> str:
        return self.type_store.display(ty)