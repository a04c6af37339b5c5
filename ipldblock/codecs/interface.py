"""
Codec interface.

Every codec the registry hands out implements this contract. Codecs are
stateless: one instance serves every block in the process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ipldblock.codecs.reader import PathReader

if TYPE_CHECKING:
    from ipldblock.block import Block


class Codec(ABC):
    """
    A named encode/decode pair plus a structured reader.

    Attributes:
        name: Multicodec name embedded in CIDs (e.g. "dag-cbor")
        roundtrip_on_decode: When True, Block.decode() on a block built from
            a source value returns decode(encode(source)) instead of the
            source itself, so callers always see the wire form.
    """

    name: str = ""
    roundtrip_on_decode: bool = True

    @abstractmethod
    async def encode(self, value: Any) -> bytes:
        """Serialize a source value to bytes."""

    @abstractmethod
    async def decode(self, data: bytes) -> Any:
        """Deserialize bytes to a source value."""

    def reader(self, block: "Block") -> PathReader:
        """Return a read-only path view over the block's decoded value."""
        return PathReader(block)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
