"""
DAG-CBOR codec.

Encoding and decoding are delegated to libipld, which produces the
deterministic DAG-CBOR form (length-first sorted map keys, no indefinite
lengths, no floats where an int fits).

Links (CBOR tag 42) are exposed as multiformats CID objects. libipld has its
own value for a decoded link, so CIDs are translated to and from that form
on the way in and out.
"""

from collections.abc import Mapping
from typing import Any, Optional

import libipld
from multiformats import CID, multihash

from ipldblock.codecs.interface import Codec

# Tag 42 header; the payload is a byte string holding 0x00 + binary CID
_LINK_TAG = b"\xd8\x2a"

_link_type: Optional[type] = None


def _byte_string_header(length: int) -> bytes:
    if length < 24:
        return bytes([0x40 + length])
    if length < 0x100:
        return bytes([0x58, length])
    return bytes([0x59]) + length.to_bytes(2, "big")


def _to_libipld_link(cid: CID) -> Any:
    """The value libipld itself decodes a tag-42 link to."""
    payload = b"\x00" + bytes(cid)
    return libipld.decode_dag_cbor(_LINK_TAG + _byte_string_header(len(payload)) + payload)


def _libipld_link_type() -> type:
    global _link_type
    if _link_type is None:
        sample = CID("base32", 1, "raw", multihash.digest(b"", "sha2-256"))
        _link_type = type(_to_libipld_link(sample))
    return _link_type


def _to_ipld(value: Any) -> Any:
    if isinstance(value, CID):
        return _to_libipld_link(value)
    if isinstance(value, Mapping):
        return {key: _to_ipld(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_ipld(item) for item in value]
    return value


def _as_cid(value: Any) -> Any:
    raw = value[1:] if isinstance(value, bytes) and value[:1] == b"\x00" else value
    try:
        cid = CID.decode(raw)
    except (ValueError, KeyError):
        return value
    # Converted only when it is exactly the form libipld gives this link
    if _to_libipld_link(cid) != value:
        return value
    return cid


def _from_ipld(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _from_ipld(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_from_ipld(item) for item in value]
    if isinstance(value, _libipld_link_type()):
        return _as_cid(value)
    return value


class DagCborCodec(Codec):
    name = "dag-cbor"
    # decode(encode(x)) can differ from x: tuples come back as lists
    roundtrip_on_decode = True

    async def encode(self, value: Any) -> bytes:
        return libipld.encode_dag_cbor(_to_ipld(value))

    async def decode(self, data: bytes) -> Any:
        return _from_ipld(libipld.decode_dag_cbor(data))


codec = DagCborCodec()
