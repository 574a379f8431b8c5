# sonair

Building blocks for a compiler intermediate representation that targets the
EVM. The package provides target triples, symbol linkage, target ISA
descriptions, an interned type store, a module context, a block and
instruction layout, and fixed-width immediate arithmetic.

## Installation

```
pip install sonair
```

The package has no runtime dependencies. The tests need `pytest` and
`hypothesis`, which the `test` extra installs.

## Target triples and ISAs (`sonair.triple`, `sonair.isa`)

```python
from sonair.triple import TargetTriple
from sonair.isa import IsaBuilder

triple = TargetTriple.parse("evm-ethereum-london")
print(triple)                       # evm-ethereum-london
isa = IsaBuilder(triple).build()    # TargetIsa
isa.type_provider.pointer_type()    # Type.I256
```

A triple has three parts joined by `-`: an `Architecture` (only `evm`), a
`Chain` (only `ethereum`) and a `Version` that holds an `EvmVersion`
(`frontier`, `homestead`, `byzantium`, `constantinople`, `istanbul`,
`london`). A malformed or unsupported triple raises `InvalidTriple`, a
subclass of `ValueError`; its `kind` attribute tells which part was wrong.

`EvmEth`, the type provider of EVM targets, reports `Type.I256` from
`pointer_type()`, `balance_type()` and `gas_type()`.

## Linkage (`sonair.linkage`)

```python
from sonair.linkage import Linkage

Linkage.parse("public")    # Linkage.PUBLIC
str(Linkage.EXTERNAL)      # "external"
```

`Linkage.parse` raises `ValueError` for anything other than `public`,
`private` or `external`.

## Types (`sonair.types`)

Primitive types are members of `Type` (`I1` to `I256` and `VOID`). Compound
types are `CompoundType` handles issued by a `TypeStore`, which keeps the
`ArrayData`, `PtrData` and `StructData` behind them.

```python
from sonair.types import Type, TypeStore, compare_types

store = TypeStore()
ptr = store.make_ptr(Type.I32)
arr = store.make_array(Type.I8, 4)
point = store.make_struct("point", [Type.I64, Type.I64], False)

store.deref(ptr)                    # Type.I32
store.array_def(arr)                # (Type.I8, 4)
store.struct_type_by_name("point")  # the same handle as point
store.display(arr)                  # "[i8;4]"
store.display(ptr)                  # "*i32"
store.display(point)                # "{point}"

compare_types(Type.I8, Type.I32)    # -1
compare_types(Type.I8, ptr)         # None
```

Identical compound types are interned: making the same pointer or array
twice gives the same handle. Defining a struct name a second time raises
`ValueError`. `all_struct_data()` yields struct definitions in the order
they were made.

## Module context (`sonair.module`)

```python
from sonair.module import ModuleCtx

ctx = ModuleCtx.from_triple("evm-ethereum-london")
p = ctx.type_store.make_ptr(Type.I8)
ctx.display_type(p)                 # "*i8"
ctx.triple                          # the parsed TargetTriple
```

`ModuleCtx.from_triple` accepts a `TargetTriple` or its text.

## Layout (`sonair.layout`)

`Layout` keeps the order of blocks in a function and of instructions inside
each block, as doubly linked lists with constant-time insertion and removal.

```python
from sonair.layout import Block, Insn, Layout

layout = Layout()
b0, b1 = Block(0), Block(1)
layout.append_block(b0)
layout.insert_block_after(b1, b0)
layout.append_insn(Insn(0), b0)
layout.prepend_insn(Insn(1), b0)

[str(b) for b in layout.iter_block()]   # ["block0", "block1"]
list(layout.iter_insn(b0))              # [Insn(index=1), Insn(index=0)]
layout.entry_block                      # Block(index=0)
layout.insn_block(Insn(0))              # Block(index=0)
```

Asking about a block or instruction that is not in the layout, or inserting
one that already is, raises `ValueError`.

## Values and immediates (`sonair.value`)

`Value` is an opaque handle to a function value. `Immediate` is a
two's-complement integer of a fixed IR width, with wrapping arithmetic
(`+`, `-`, `*`, `&`, `|`, `^`, `~`, unary `-`), `udiv` and `sdiv`, unsigned
(`lt`, `gt`, `le`, `ge`) and signed (`slt`, `sgt`, `sle`, `sge`) comparisons
that give `i1` immediates, and extension and truncation between widths.

```python
from sonair.types import Type
from sonair.value import Immediate

a = Immediate.from_int(-1, Type.I8)
a.zext(Type.I16).as_int()   # 255
a.sext(Type.I16).as_int()   # -1
Immediate.from_int(300, Type.I8).as_int()   # 44
Immediate.from_int(8, Type.I32).is_power_of_two()   # True
```

Operands of a binary operation must have the same type, otherwise
`ValueError` is raised; division by zero raises `ZeroDivisionError`;
`sext` and `zext` need a wider type and `trunc` a narrower one.

## What the package does not do

The package holds the data structures only. It has no reader for a textual
IR, no writer that prints modules or functions, no data-flow graph,
function or module builder, and no command-line tool.