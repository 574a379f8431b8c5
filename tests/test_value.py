import pytest
from hypothesis import given, strategies as st

from sonair.types import Type
from sonair.value import Immediate, Value

INT_TYPES = [Type.I1, Type.I8, Type.I16, Type.I32, Type.I64, Type.I128, Type.I256]
SIGNED_TYPES = INT_TYPES[1:]

any_int = st.integers(min_value=-(1 << 300), max_value=1 << 300)
int_type = st.sampled_from(INT_TYPES)

TRUE = Immediate.one(Type.I1)
FALSE = Immediate.zero(Type.I1)


@st.composite
def immediates(draw, ty=None):
    chosen = ty if ty is not None else draw(int_type)
    return Immediate.from_int(draw(any_int), chosen)


@st.composite
def same_type_pair(draw):
    ty = draw(int_type)
    return draw(immediates(ty)), draw(immediates(ty))


def test_value_display():
    assert str(Value(3)) == "v3"


def test_i1_display():
    assert str(Immediate(True, Type.I1)) == "1"
    assert str(Immediate(False, Type.I1)) == "0"


def test_unsigned_source_wraps_to_signed():
    assert Immediate.from_int(255, Type.I8) == Immediate.all_one(Type.I8)
    assert Immediate.all_one(Type.I8).as_int() == -1


def test_constructor_rejects_out_of_range():
    with pytest.raises(ValueError):
        Immediate(128, Type.I8)
    with pytest.raises(ValueError):
        Immediate(2, Type.I1)


def test_non_integral_type_rejected():
    with pytest.raises(ValueError):
        Immediate.from_int(0, Type.VOID)


def test_type_mismatch_raises():
    with pytest.raises(ValueError):
        Immediate.one(Type.I8) + Immediate.one(Type.I16)
    with pytest.raises(ValueError):
        Immediate.one(Type.I8).imm_eq(Immediate.one(Type.I32))


@pytest.mark.parametrize("ty", INT_TYPES)
def test_division_by_zero(ty):
    with pytest.raises(ZeroDivisionError):
        Immediate.one(ty).udiv(Immediate.zero(ty))
    with pytest.raises(ZeroDivisionError):
        Immediate.one(ty).sdiv(Immediate.zero(ty))


@pytest.mark.parametrize("ty", INT_TYPES)
def test_all_one_is_not_zero(ty):
    assert (~Immediate.zero(ty)).is_all_one()
    assert Immediate.all_one(ty) == ~Immediate.zero(ty)


@pytest.mark.parametrize("ty", SIGNED_TYPES)
def test_signed_all_one_is_negative(ty):
    assert Immediate.all_one(ty).is_negative()
    assert not Immediate.all_one(ty).is_positive()


def test_i1_all_one_is_not_negative():
    ones = Immediate.all_one(Type.I1)
    assert ones.is_one()
    assert not ones.is_negative()


@pytest.mark.parametrize("ty", SIGNED_TYPES)
def test_unsigned_vs_signed_compare(ty):
    ones, one = Immediate.all_one(ty), Immediate.one(ty)
    assert ones.lt(one).is_zero()
    assert ones.gt(one).is_one()
    assert ones.slt(one).is_one()
    assert ones.sgt(one).is_zero()


@pytest.mark.parametrize("ty", SIGNED_TYPES)
def test_is_two_and_power_of_two(ty):
    one = Immediate.one(ty)
    two = one + one
    assert two.is_two()
    assert two.is_power_of_two()
    assert one.is_power_of_two()
    assert not (two + one).is_power_of_two()


def test_sdiv_overflow_wraps():
    minimum = Immediate.from_int(128, Type.I8)
    assert minimum.sdiv(Immediate.all_one(Type.I8)) == minimum


def test_sext_and_zext_of_negative():
    ones = Immediate.all_one(Type.I8)
    assert ones.sext(Type.I16) == Immediate.all_one(Type.I16)
    assert ones.zext(Type.I16).as_int() == 255


def test_width_change_direction_checked():
    with pytest.raises(ValueError):
        Immediate.one(Type.I16).sext(Type.I8)
    with pytest.raises(ValueError):
        Immediate.one(Type.I16).zext(Type.I16)
    with pytest.raises(ValueError):
        Immediate.one(Type.I8).trunc(Type.I16)


def test_as_usize():
    assert Immediate.one(Type.I64).as_usize() == 1
    with pytest.raises(ValueError):
        Immediate.all_one(Type.I8).as_usize()


@given(immediates())
def test_from_int_is_idempotent(imm):
    assert Immediate.from_int(imm.as_int(), imm.ty) == imm


@given(same_type_pair())
def test_add_sub_round_trip(pair):
    a, b = pair
    restored = (a + b) - b
    assert restored == a
    assert restored.imm_eq(a) == TRUE


@given(immediates())
def test_double_negation(imm):
    assert (-(-imm)).imm_eq(imm) == TRUE
    assert imm + (-imm) == Immediate.zero(imm.ty)


@given(immediates())
def test_xor_self_is_zero(imm):
    assert (imm ^ imm) == Immediate.zero(imm.ty)
    assert (imm & imm).imm_eq(imm) == TRUE
    assert (imm | imm).imm_eq(imm) == TRUE


@given(same_type_pair())
def test_commutative_ops(pair):
    a, b = pair
    assert (a + b).imm_eq(b + a) == TRUE
    assert (a * b).imm_eq(b * a) == TRUE
    assert (a & b).imm_eq(b & a) == TRUE


@given(immediates())
def test_division_by_one(imm):
    one = Immediate.one(imm.ty)
    assert imm.udiv(one) == imm
    assert imm.sdiv(one) == imm


@given(immediates())
def test_division_by_self(imm):
    if imm == Immediate.zero(imm.ty):
        with pytest.raises(ZeroDivisionError):
            imm.sdiv(imm)
    else:
        assert imm.sdiv(imm) == Immediate.one(imm.ty)
        assert imm.udiv(imm) == Immediate.one(imm.ty)


@given(same_type_pair())
def test_signed_comparisons_consistent(pair):
    a, b = pair
    assert a.slt(b) == b.sgt(a)
    assert a.sle(b) == b.sge(a)
    assert a.lt(b) == b.gt(a)
    assert a.le(b) == b.ge(a)
    assert (a.imm_eq(b) == TRUE) == (a == b)
    assert (a.imm_ne(b) == TRUE) == (a.imm_eq(b) == FALSE)


@given(immediates())
def test_comparisons_reflexive(imm):
    assert imm.imm_eq(imm) == TRUE
    assert imm.sle(imm) == TRUE
    assert imm.lt(imm) == FALSE


@given(st.integers(min_value=-128, max_value=127), st.sampled_from(SIGNED_TYPES[1:]))
def test_sext_trunc_round_trip(n, wider):
    imm = Immediate(n, Type.I8)
    extended = imm.sext(wider)
    assert extended.as_int() == n
    assert extended.trunc(Type.I8) == imm


@given(st.integers(min_value=-128, max_value=127), st.sampled_from(SIGNED_TYPES[1:]))
def test_zext_trunc_round_trip(n, wider):
    imm = Immediate(n, Type.I8)
    extended = imm.zext(wider)
    assert not extended.is_negative()
    assert extended.trunc(Type.I8) == imm


@given(immediates())
def test_sign_predicates_exclusive(imm):
    flags = [imm.is_zero(), imm.is_positive(), imm.is_negative()]
    assert flags.count(True) == 1
    assert imm.is_zero() == (imm == Immediate.zero(imm.ty))