import pytest

from sonair.module import ModuleCtx
from sonair.triple import EvmVersion, InvalidTriple, TargetTriple
from sonair.types import Type


def test_from_string_and_triple_agree():
    triple = TargetTriple.parse("evm-ethereum-london")
    by_text = ModuleCtx.from_triple("evm-ethereum-london")
    by_value = ModuleCtx.from_triple(triple)
    assert by_text.isa == by_value.isa
    assert by_text.triple == triple
    assert by_text.isa.type_provider.version is EvmVersion.LONDON


def test_from_triple_invalid():
    with pytest.raises(InvalidTriple):
        ModuleCtx.from_triple("evm-ethereum")


def test_display_type():
    ctx = ModuleCtx.from_triple("evm-ethereum-istanbul")
    assert ctx.display_type(Type.I256) == "i256"
    ptr = ctx.type_store.make_ptr(Type.I256)
    assert ctx.display_type(ptr) == "*i256"


def test_contexts_have_separate_type_stores():
    first = ModuleCtx.from_triple("evm-ethereum-istanbul")
    second = ModuleCtx.from_triple("evm-ethereum-istanbul")
    first.type_store.make_struct("s", [Type.I8], False)
    assert first.type_store.struct_type_by_name("s") is not None
    assert second.type_store.struct_type_by_name("s") is None