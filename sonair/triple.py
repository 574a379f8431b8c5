"""Target triples naming the architecture, chain and version that code is built for."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Architecture(enum.Enum):
    """Instruction set architecture of a target."""

    EVM = "evm"

    def __str__(self) -> str:
        return self.value


class Chain(enum.Enum):
    """Blockchain a target runs on."""

    ETHEREUM = "ethereum"

    def __str__(self) -> str:
        return self.value


class EvmVersion(enum.Enum):
    """Hard fork of the EVM."""

    FRONTIER = "frontier"
    HOMESTEAD = "homestead"
    BYZANTIUM = "byzantium"
    CONSTANTINOPLE = "constantinople"
    ISTANBUL = "istanbul"
    LONDON = "london"

    def __str__(self) -> str:
        return self.value


class InvalidTriple(ValueError):
    """Raised when a target triple cannot be parsed."""

    INVALID_FORMAT = "invalid_format"
    ARCHITECTURE_NOT_SUPPORTED = "architecture_not_supported"
    CHAIN_NOT_SUPPORTED = "chain_not_supported"
    VERSION_NOT_SUPPORTED = "version_not_supported"
    INVALID_COMBINATION = "invalid_combination"

    _MESSAGES = {
        INVALID_FORMAT: (
            "the format of triple must be `architecture-chain-version: "
            "but got `{triple}`"
        ),
        ARCHITECTURE_NOT_SUPPORTED: "given architecture is not supported",
        CHAIN_NOT_SUPPORTED: "given chain is not supported",
        VERSION_NOT_SUPPORTED: "given version is not supported",
        INVALID_COMBINATION: "given triple consists of invalid combination",
    }

    def __init__(self, kind: str, triple: str = "") -> None:
        if kind not in self._MESSAGES:
            raise ValueError(f"unknown triple error kind {kind!r}")
        self.kind = kind
        self.triple = triple
        super().__init__(self._MESSAGES[kind].format(triple=triple))


@dataclass(frozen=True)
class Version:
    """Version of a target; for EVM targets this is the hard fork."""

    evm_version: EvmVersion

    def __str__(self) -> str:
        return str(self.evm_version)

    @classmethod
    def _parse(cls, arch: Architecture, chain: Chain, s: str) -> Version:
        if arch is Architecture.EVM and chain is Chain.ETHEREUM:
            try:
                return cls(EvmVersion(s))
            except ValueError:
                raise InvalidTriple(InvalidTriple.VERSION_NOT_SUPPORTED) from None
        raise InvalidTriple(InvalidTriple.INVALID_COMBINATION)


def _parse_architecture(s: str) -> Architecture:
    try:
        return Architecture(s)
    except ValueError:
        raise InvalidTriple(InvalidTriple.ARCHITECTURE_NOT_SUPPORTED) from None


def _parse_chain(s: str) -> Chain:
    try:
        return Chain(s)
    except ValueError:
        raise InvalidTriple(InvalidTriple.CHAIN_NOT_SUPPORTED) from None


@dataclass(frozen=True)
class TargetTriple:
    """An `architecture-chain-version` target description."""

    architecture: Architecture
    chain: Chain
    version: Version

    @classmethod
    def parse(cls, s: str) -> TargetTriple:
        """Parse a triple such as ``evm-ethereum-london``."""
        parts = s.split("-")

        def part(index: int) -> str:
            if index >= len(parts):
                raise InvalidTriple(InvalidTriple.INVALID_FORMAT, s)
            return parts[index]

        arch = _parse_architecture(part(0))
        chain = _parse_chain(part(1))
        version = Version._parse(arch, chain, part(2))
        if len(parts) > 3:
            raise InvalidTriple(InvalidTriple.INVALID_FORMAT, s)
        return cls(arch, chain, version)

    def __str__(self) -> str:
        return f"{self.architecture}-{self.chain}-{self.version}"