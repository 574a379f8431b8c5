"""IR values and immediate constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sonair.types import Type, compare_types

_BITS = {
    Type.I1: 1,
    Type.I8: 8,
    Type.I16: 16,
    Type.I32: 32,
    Type.I64: 64,
    Type.I128: 128,
    Type.I256: 256,
}

_U256_MASK = (1 << 256) - 1
_USIZE_MAX = (1 << 64) - 1


def _wrap_signed(val: int, bits: int) -> int:
    modulus = 1 << bits
    val &= modulus - 1
    if val >= modulus >> 1:
        val -= modulus
    return val


def _truncate(val: int, ty: Type) -> int:
    """Bring an arbitrary integer into the canonical range of an integer type."""
    if ty is Type.I1:
        return val & 1
    return _wrap_signed(val, _BITS[ty])


def _require_integral(ty: object) -> Type:
    if not isinstance(ty, Type) or ty not in _BITS:
        raise ValueError(f"{ty} is not an integral type")
    return ty


@dataclass(frozen=True, order=True)
class Value:
    """Opaque reference to a value of a function."""

    index: int

    def __str__(self) -> str:
        return f"v{self.index}"


@dataclass(frozen=True)
class Immediate:
    """A constant of an integer type.

    ``value`` holds the signed value for i8 to i256 and 0 or 1 for i1.
    """

    value: int
    ty: Type

    def __post_init__(self) -> None:
        ty = _require_integral(self.ty)
        value = int(self.value)
        if _truncate(value, ty) != value:
            raise ValueError(f"{self.value} does not fit in {ty}")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return str(self.value)

    # Construction

    @classmethod
    def from_int(cls, val: int, ty: Type) -> Immediate:
        """Truncate an integer to the given type, wrapping like a cast."""
        ty = _require_integral(ty)
        return cls(_truncate(val, ty), ty)

    @classmethod
    def zero(cls, ty: Type) -> Immediate:
        return cls.from_int(0, ty)

    @classmethod
    def one(cls, ty: Type) -> Immediate:
        return cls.from_int(1, ty)

    @classmethod
    def all_one(cls, ty: Type) -> Immediate:
        return cls.from_int(-1, ty)

    # Conversions

    def as_int(self) -> int:
        """The value sign-extended to a Python integer (i1 gives 0 or 1)."""
        return self.value

    def as_usize(self) -> int:
        if self.is_negative():
            raise ValueError(f"negative immediate {self} cannot be used as a size")
        if self.value > _USIZE_MAX:
            raise OverflowError(f"immediate {self} does not fit in a size")
        return self.value

    def _as_u256(self) -> int:
        return self.value & _U256_MASK

    # Helpers

    def _check_same_type(self, rhs: Immediate) -> None:
        if self.ty is not rhs.ty:
            raise ValueError(f"type mismatch: {self.ty} and {rhs.ty}")

    def _binop(self, rhs: Immediate, f: Callable[[int, int], int]) -> Immediate:
        self._check_same_type(rhs)
        return Immediate.from_int(f(self.value, rhs.value), self.ty)

    def _predicate(self, rhs: Immediate, f: Callable[[int, int], bool]) -> Immediate:
        self._check_same_type(rhs)
        return Immediate(int(f(self.value, rhs.value)), Type.I1)

    def _unsigned_predicate(
        self, rhs: Immediate, f: Callable[[int, int], bool]
    ) -> Immediate:
        self._check_same_type(rhs)
        return Immediate(int(f(self._as_u256(), rhs._as_u256())), Type.I1)

    # Arithmetic

    def __add__(self, rhs: object) -> Immediate:
        if not isinstance(rhs, Immediate):
            return NotImplemented
        return self._binop(rhs, lambda a, b: a + b)

    def __sub__(self, rhs: object) -> Immediate:
        if not isinstance(rhs, Immediate):
            return NotImplemented
        return self._binop(rhs, lambda a, b: a - b)

    def __mul__(self, rhs: object) -> Immediate:
        if not isinstance(rhs, Immediate):
            return NotImplemented
        return self._binop(rhs, lambda a, b: a * b)

    def __and__(self, rhs: object) -> Immediate:
        if not isinstance(rhs, Immediate):
            return NotImplemented
        return self._binop(rhs, lambda a, b: a & b)

    def __or__(self, rhs: object) -> Immediate:
        if not isinstance(rhs, Immediate):
            return NotImplemented
        return self._binop(rhs, lambda a, b: a | b)

    def __xor__(self, rhs: object) -> Immediate:
        if not isinstance(rhs, Immediate):
            return NotImplemented
        return self._binop(rhs, lambda a, b: a ^ b)

    def __invert__(self) -> Immediate:
        return Immediate.from_int(~self.value, self.ty)

    def __neg__(self) -> Immediate:
        return Immediate.from_int(-self.value, self.ty)

    def udiv(self, rhs: Immediate) -> Immediate:
        """Unsigned division of the 256-bit sign-extended operands."""
        self._check_same_type(rhs)
        divisor = rhs._as_u256()
        if divisor == 0:
            raise ZeroDivisionError("unsigned division by zero")
        return Immediate.from_int(self._as_u256() // divisor, self.ty)

    def sdiv(self, rhs: Immediate) -> Immediate:
        """Signed division rounding toward zero, wrapping on overflow."""
        self._check_same_type(rhs)
        lhs_val, rhs_val = self.value, rhs.value
        if rhs_val == 0:
            raise ZeroDivisionError("signed division by zero")
        quotient = abs(lhs_val) // abs(rhs_val)
        if (lhs_val < 0) != (rhs_val < 0):
            quotient = -quotient
        return Immediate.from_int(_wrap_signed(quotient, 256), self.ty)

    # Comparisons, each giving an i1 immediate

    def lt(self, rhs: Immediate) -> Immediate:
        return self._unsigned_predicate(rhs, lambda a, b: a < b)

    def gt(self, rhs: Immediate) -> Immediate:
        return self._unsigned_predicate(rhs, lambda a, b: a > b)

    def le(self, rhs: Immediate) -> Immediate:
        return self._unsigned_predicate(rhs, lambda a, b: a <= b)

    def ge(self, rhs: Immediate) -> Immediate:
        return self._unsigned_predicate(rhs, lambda a, b: a >= b)

    def slt(self, rhs: Immediate) -> Immediate:
        return self._predicate(rhs, lambda a, b: a < b)

    def sgt(self, rhs: Immediate) -> Immediate:
        return self._predicate(rhs, lambda a, b: a > b)

    def sle(self, rhs: Immediate) -> Immediate:
        return self._predicate(rhs, lambda a, b: a <= b)

    def sge(self, rhs: Immediate) -> Immediate:
        return self._predicate(rhs, lambda a, b: a >= b)

    def imm_eq(self, rhs: Immediate) -> Immediate:
        self._check_same_type(rhs)
        return Immediate(int(self == rhs), Type.I1)

    def imm_ne(self, rhs: Immediate) -> Immediate:
        self._check_same_type(rhs)
        return Immediate(int(self != rhs), Type.I1)

    # Width changes

    def sext(self, ty: Type) -> Immediate:
        """Sign-extend to a wider integer type."""
        ty = _require_integral(ty)
        if compare_types(self.ty, ty) != -1:
            raise ValueError(f"cannot sign-extend {self.ty} to {ty}")
        return Immediate.from_int(self.value, ty)

    def zext(self, ty: Type) -> Immediate:
        """Zero-extend to a wider integer type."""
        ty = _require_integral(ty)
        if compare_types(self.ty, ty) != -1:
            raise ValueError(f"cannot zero-extend {self.ty} to {ty}")
        unsigned = self.value & ((1 << _BITS[self.ty]) - 1)
        return Immediate.from_int(unsigned, ty)

    def trunc(self, ty: Type) -> Immediate:
        """Truncate to a narrower integer type."""
        ty = _require_integral(ty)
        if compare_types(self.ty, ty) != 1:
            raise ValueError(f"cannot truncate {self.ty} to {ty}")
        return Immediate.from_int(self.value, ty)

    # Predicates

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1

    def is_positive(self) -> bool:
        return self.value > 0

    def is_negative(self) -> bool:
        return self.value < 0

    def is_all_one(self) -> bool:
        return self == Immediate.all_one(self.ty)

    def is_two(self) -> bool:
        return self.value == 2

    def is_power_of_two(self) -> bool:
        return (self & (self - Immediate.one(self.ty))).is_zero()