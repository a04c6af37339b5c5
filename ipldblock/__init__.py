"""
ipldblock: content-addressed blocks.

    block = Block.encoder({"a": 1}, "dag-cbor")
    data = await block.encode()
    cid = await block.cid()
"""

from ipldblock.block import Block, BlockOptions
from ipldblock.codecs import Codec, CodecRegistry, PathReader, ReadResult, get_codec
from ipldblock.errors import (
    BlockError,
    CIDMismatchError,
    CodecAlreadyRegistered,
    ConfigurationError,
    ErrorCode,
    PathNotFoundError,
    UnknownCodec,
)

__version__ = "0.1.0"

__all__ = [
    "Block",
    "BlockOptions",
    "Codec",
    "CodecRegistry",
    "PathReader",
    "ReadResult",
    "get_codec",
    "BlockError",
    "CIDMismatchError",
    "CodecAlreadyRegistered",
    "ConfigurationError",
    "ErrorCode",
    "PathNotFoundError",
    "UnknownCodec",
]
