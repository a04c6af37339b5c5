"""
Codecs: the encode/decode formats a Block can be expressed in.

- interface.py: the Codec contract
- registry.py: lazy name -> codec resolution
- dag_cbor.py, raw.py, canonical_json.py: built-in formats
- reader.py: path-addressed read-only view over decoded values
"""

from ipldblock.codecs.interface import Codec
from ipldblock.codecs.reader import PathReader, ReadResult
from ipldblock.codecs.registry import CodecRegistry, get_codec, get_registry, set_registry

__all__ = [
    "Codec",
    "CodecRegistry",
    "PathReader",
    "ReadResult",
    "get_codec",
    "get_registry",
    "set_registry",
]
