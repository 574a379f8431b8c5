"""Target instruction set descriptions."""

from __future__ import annotations

from dataclasses import dataclass

from sonair.triple import Architecture, Chain, EvmVersion, InvalidTriple, TargetTriple
from sonair.types import Type


@dataclass(frozen=True)
class EvmEth:
    """Type provider for the EVM on Ethereum."""

    version: EvmVersion

    def pointer_type(self) -> Type:
        return Type.I256

    def balance_type(self) -> Type:
        return Type.I256

    def gas_type(self) -> Type:
        return Type.I256


@dataclass(frozen=True)
class TargetIsa:
    """A target triple together with its ISA-specific type provider."""

    triple: TargetTriple
    type_provider: EvmEth


@dataclass(frozen=True)
class IsaBuilder:
    """Builds a TargetIsa for a target triple."""

    triple: TargetTriple

    def build(self) -> TargetIsa:
        if self.triple.architecture is Architecture.EVM:
            return _build_evm_eth(self.triple)
        raise InvalidTriple(InvalidTriple.ARCHITECTURE_NOT_SUPPORTED)


def _build_evm_eth(triple: TargetTriple) -> TargetIsa:
    if triple.chain is not Chain.ETHEREUM:
        raise InvalidTriple(InvalidTriple.INVALID_COMBINATION)
    return TargetIsa(triple, EvmEth(triple.version.evm_version))