"""Raw passthrough codec: the block's bytes are its value."""

from typing import Any

from ipldblock.codecs.interface import Codec


class RawCodec(Codec):
    name = "raw"
    roundtrip_on_decode = False

    async def encode(self, value: Any) -> bytes:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"raw codec can only encode bytes-like values, got {type(value).__name__}")
        return bytes(value)

    async def decode(self, data: bytes) -> bytes:
        return data


codec = RawCodec()
