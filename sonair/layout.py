"""Function layout: the order of blocks and of the instructions inside them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional


@dataclass(frozen=True, order=True)
class Block:
    """Opaque reference to a basic block."""

    index: int

    def __str__(self) -> str:
        return f"block{self.index}"


@dataclass(frozen=True, order=True)
class Insn:
    """Opaque reference to an instruction."""

    index: int

    def __str__(self) -> str:
        return f"insn{self.index}"


@dataclass(slots=True)
class _BlockNode:
    prev: Optional[Block] = None
    next: Optional[Block] = None
    first_insn: Optional[Insn] = None
    last_insn: Optional[Insn] = None


@dataclass(slots=True)
class _InsnNode:
    block: Block
    prev: Optional[Insn] = None
    next: Optional[Insn] = None


class Layout:
    """Doubly linked order of blocks, each holding a doubly linked list of instructions."""

    def __init__(self) -> None:
        self._blocks: Dict[Block, _BlockNode] = {}
        self._insns: Dict[Insn, _InsnNode] = {}
        self._entry_block: Optional[Block] = None
        self._last_block: Optional[Block] = None

    @property
    def entry_block(self) -> Optional[Block]:
        return self._entry_block

    @property
    def last_block(self) -> Optional[Block]:
        return self._last_block

    def _block_node(self, block: Block) -> _BlockNode:
        try:
            return self._blocks[block]
        except KeyError:
            raise ValueError(f"{block} is not in the layout") from None

    def _insn_node(self, insn: Insn) -> _InsnNode:
        try:
            return self._insns[insn]
        except KeyError:
            raise ValueError(f"{insn} is not in the layout") from None

    def _require_block_absent(self, block: Block) -> None:
        if block in self._blocks:
            raise ValueError(f"{block} is already in the layout")

    def _require_insn_absent(self, insn: Insn) -> None:
        if insn in self._insns:
            raise ValueError(f"{insn} is already in the layout")

    def is_block_empty(self, block: Block) -> bool:
        return self.first_insn_of(block) is None

    def prev_block_of(self, block: Block) -> Optional[Block]:
        return self._block_node(block).prev

    def next_block_of(self, block: Block) -> Optional[Block]:
        return self._block_node(block).next

    def is_block_inserted(self, block: Block) -> bool:
        return block in self._blocks

    def first_insn_of(self, block: Block) -> Optional[Insn]:
        return self._block_node(block).first_insn

    def is_first_insn(self, insn: Insn) -> bool:
        return self.first_insn_of(self.insn_block(insn)) == insn

    def last_insn_of(self, block: Block) -> Optional[Insn]:
        return self._block_node(block).last_insn

    def prev_insn_of(self, insn: Insn) -> Optional[Insn]:
        return self._insn_node(insn).prev

    def next_insn_of(self, insn: Insn) -> Optional[Insn]:
        return self._insn_node(insn).next

    def insn_block(self, insn: Insn) -> Block:
        return self._insn_node(insn).block

    def is_insn_inserted(self, insn: Insn) -> bool:
        return insn in self._insns

    def iter_block(self) -> Iterator[Block]:
        """Yield blocks from the entry block onwards."""
        current = self._entry_block
        while current is not None:
            yield current
            current = self._blocks[current].next

    def iter_insn(self, block: Block) -> Iterator[Insn]:
        """Yield the instructions of a block in order."""
        current = self._block_node(block).first_insn
        while current is not None:
            yield current
            current = self._insns[current].next

    def append_block(self, block: Block) -> None:
        self._require_block_absent(block)
        node = _BlockNode()
        if self._last_block is not None:
            self._blocks[self._last_block].next = block
            node.prev = self._last_block
        else:
            self._entry_block = block
        self._blocks[block] = node
        self._last_block = block

    def insert_block_before(self, block: Block, before: Block) -> None:
        before_node = self._block_node(before)
        self._require_block_absent(block)
        node = _BlockNode(prev=before_node.prev, next=before)
        if before_node.prev is not None:
            self._blocks[before_node.prev].next = block
        else:
            self._entry_block = block
        before_node.prev = block
        self._blocks[block] = node

    def insert_block_after(self, block: Block, after: Block) -> None:
        after_node = self._block_node(after)
        self._require_block_absent(block)
        node = _BlockNode(prev=after, next=after_node.next)
        if after_node.next is not None:
            self._blocks[after_node.next].prev = block
        else:
            self._last_block = block
        after_node.next = block
        self._blocks[block] = node

    def remove_block(self, block: Block) -> None:
        node = self._block_node(block)
        prev, nxt = node.prev, node.next
        if prev is not None:
            self._blocks[prev].next = nxt
        else:
            self._entry_block = nxt
        if nxt is not None:
            self._blocks[nxt].prev = prev
        else:
            self._last_block = prev
        del self._blocks[block]

    def append_insn(self, insn: Insn, block: Block) -> None:
        block_node = self._block_node(block)
        self._require_insn_absent(insn)
        node = _InsnNode(block)
        if block_node.last_insn is not None:
            node.prev = block_node.last_insn
            self._insns[block_node.last_insn].next = insn
        else:
            block_node.first_insn = insn
        block_node.last_insn = insn
        self._insns[insn] = node

    def prepend_insn(self, insn: Insn, block: Block) -> None:
        block_node = self._block_node(block)
        self._require_insn_absent(insn)
        node = _InsnNode(block)
        if block_node.first_insn is not None:
            node.next = block_node.first_insn
            self._insns[block_node.first_insn].prev = insn
        else:
            block_node.last_insn = insn
        block_node.first_insn = insn
        self._insns[insn] = node

    def insert_insn_before(self, insn: Insn, before: Insn) -> None:
        before_node = self._insn_node(before)
        self._require_insn_absent(insn)
        block = before_node.block
        node = _InsnNode(block, prev=before_node.prev, next=before)
        if before_node.prev is not None:
            self._insns[before_node.prev].next = insn
        else:
            self._blocks[block].first_insn = insn
        before_node.prev = insn
        self._insns[insn] = node

    def insert_insn_after(self, insn: Insn, after: Insn) -> None:
        after_node = self._insn_node(after)
        self._require_insn_absent(insn)
        block = after_node.block
        node = _InsnNode(block, prev=after, next=after_node.next)
        if after_node.next is not None:
            self._insns[after_node.next].prev = insn
        else:
            self._blocks[block].last_insn = insn
        after_node.next = insn
        self._insns[insn] = node

    def remove_insn(self, insn: Insn) -> None:
        """Remove an instruction from the layout."""
        node = self._insn_node(insn)
        block_node = self._blocks[node.block]
        prev, nxt = node.prev, node.next
        if prev is not None:
            self._insns[prev].next = nxt
        else:
            block_node.first_insn = nxt
        if nxt is not None:
            self._insns[nxt].prev = prev
        else:
            block_node.last_insn = prev
        del self._insns[insn]