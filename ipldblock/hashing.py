"""
Hashing and identifier helpers.

Thin layer over `multiformats`:
- digest(): async multihash computation (large payloads hashed off-loop)
- make_cid() / parse_cid(): identifier construction and parsing
- verify(): recompute a block's multihash and compare with its CID

The CID and multihash binary layouts belong to multiformats; nothing here
touches them directly.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from multiformats import CID, multihash

from ipldblock.base.config import get_config

logger = logging.getLogger(__name__)


async def digest(data: bytes, algo: str) -> bytes:
    """
    Compute the multihash of `data` under the hash function `algo`.

    Args:
        data: Encoded block bytes
        algo: Multihash function name (e.g. "sha2-256")

    Returns:
        bytes: Multihash-encoded digest

    Raises:
        KeyError: (multiformats subclass) if `algo` is not a known hash function
    """
    threshold = get_config().codec.hash_offload_threshold
    if len(data) >= threshold:
        logger.debug(f"[Hash] Offloading {algo} over {len(data)} bytes to a worker thread")
        return await asyncio.to_thread(multihash.digest, data, algo)
    return multihash.digest(data, algo)


def make_cid(
    codec: str,
    mh: bytes,
    version: Optional[int] = None,
    base: Optional[str] = None,
) -> CID:
    """Build a CID from a codec name and multihash bytes."""
    cfg = get_config().block
    if version is None:
        version = cfg.cid_version
    return CID(base or cfg.cid_base, version, codec, mh)


def parse_cid(value: Union[CID, str, bytes]) -> CID:
    """Accept a CID instance or decode one from its string/binary form."""
    if isinstance(value, CID):
        return value
    return CID.decode(value)


def recompute(data: bytes, cid: CID) -> bytes:
    """
    Hash `data` under the hash function named by `cid`.

    Returns the raw digest cut to the length stored in `cid`, so truncated
    identifiers compare on their own length.
    """
    raw = bytes(multihash.unwrap(multihash.digest(data, cid.hashfun.name)))
    return raw[: len(cid.raw_digest)]


def verify(data: bytes, cid: CID) -> bool:
    """Check that `data` hashes to the digest carried by `cid`."""
    return recompute(data, cid) == bytes(cid.raw_digest)
