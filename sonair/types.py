"""IR type definitions and the store that interns compound types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union


class Type(enum.Enum):
    """Primitive IR types; compound types are represented by CompoundType."""

    I1 = "i1"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    I256 = "i256"
    VOID = "void"

    def __str__(self) -> str:
        return self.value

    def is_integral(self) -> bool:
        return self in _INTEGRAL_RANK


_INTEGRAL_RANK = {
    ty: rank
    for rank, ty in enumerate(
        (Type.I1, Type.I8, Type.I16, Type.I32, Type.I64, Type.I128, Type.I256)
    )
}


@dataclass(frozen=True, order=True)
class CompoundType:
    """Opaque reference to compound type data held by a TypeStore."""

    index: int


AnyType = Union[Type, CompoundType]


@dataclass(frozen=True)
class ArrayData:
    elem: AnyType
    length: int


@dataclass(frozen=True)
class PtrData:
    elem: AnyType


@dataclass(frozen=True)
class StructData:
    name: str
    fields: Tuple[AnyType, ...]
    packed: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


CompoundTypeData = Union[ArrayData, PtrData, StructData]


def is_integral(ty: AnyType) -> bool:
    """True for the integer types i1 through i256."""
    return isinstance(ty, Type) and ty.is_integral()


def compare_types(lhs: AnyType, rhs: AnyType) -> Optional[int]:
    """Partial order on types: -1, 0 or 1, or None when incomparable."""
    if lhs == rhs:
        return 0
    if not is_integral(lhs) or not is_integral(rhs):
        return None
    return -1 if _INTEGRAL_RANK[lhs] < _INTEGRAL_RANK[rhs] else 1


@dataclass
class TypeStore:
    """Interns compound types and keeps named struct definitions in order."""

    _compounds: list = field(default_factory=list)
    _rev_types: dict = field(default_factory=dict)
    _struct_types: dict = field(default_factory=dict)

    def make_ptr(self, ty: AnyType) -> CompoundType:
        return self.make_compound(PtrData(ty))

    def make_array(self, elem: AnyType, length: int) -> CompoundType:
        return self.make_compound(ArrayData(elem, length))

    def make_struct(self, name: str, fields, packed: bool) -> CompoundType:
        if name in self._struct_types:
            raise ValueError(f"struct {name} is already defined")
        compound = self.make_compound(StructData(name, tuple(fields), packed))
        self._struct_types[name] = compound
        return compound

    def struct_def(self, ty: AnyType) -> Optional[StructData]:
        data = self._data_of(ty)
        return data if isinstance(data, StructData) else None

    def array_def(self, ty: AnyType) -> Optional[Tuple[AnyType, int]]:
        data = self._data_of(ty)
        if isinstance(data, ArrayData):
            return data.elem, data.length
        return None

    def struct_type_by_name(self, name: str) -> Optional[CompoundType]:
        return self._struct_types.get(name)

    def all_struct_data(self) -> Iterator[StructData]:
        for compound in self._struct_types.values():
            yield self.resolve_compound(compound)

    def deref(self, ptr: AnyType) -> Optional[AnyType]:
        data = self._data_of(ptr)
        return data.elem if isinstance(data, PtrData) else None

    def is_integral(self, ty: AnyType) -> bool:
        return is_integral(ty)

    def is_ptr(self, ty: AnyType) -> bool:
        return isinstance(self._data_of(ty), PtrData)

    def is_array(self, ty: AnyType) -> bool:
        return isinstance(self._data_of(ty), ArrayData)

    def make_compound(self, data: CompoundTypeData) -> CompoundType:
        existing = self._rev_types.get(data)
        if existing is not None:
            return existing
        compound = CompoundType(len(self._compounds))
        self._compounds.append(data)
        self._rev_types[data] = compound
        return compound

    def resolve_compound(self, compound: CompoundType) -> CompoundTypeData:
        if not 0 <= compound.index < len(self._compounds):
            raise KeyError(f"unknown compound type {compound.index}")
        return self._compounds[compound.index]

    def display(self, ty: AnyType) -> str:
        """Render a type the way diagnostics show it."""
        if isinstance(ty, Type):
            return "()" if ty is Type.VOID else ty.value
        data = self.resolve_compound(ty)
        if isinstance(data, ArrayData):
            return f"[{self.display(data.elem)};{data.length}]"
        if isinstance(data, PtrData):
            return f"*{self.display(data.elem)}"
        if data.packed:
            return f"<{{{data.name}}}>"
        return f"{{{data.name}}}"

    def _data_of(self, ty: AnyType) -> Optional[CompoundTypeData]:
        if isinstance(ty, CompoundType):
            return self.resolve_compound(ty)
        return None