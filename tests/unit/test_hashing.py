"""
tests/unit/test_hashing.py
Multihash computation and CID helpers.
"""
import asyncio
from unittest.mock import patch

import pytest
from multiformats import CID, multihash

from ipldblock import hashing
from ipldblock.base.config import BlockConfig, CodecConfig, IpldConfig, set_config


@pytest.mark.asyncio
async def test_digest_matches_multihash():
    assert await hashing.digest(b"abc", "sha2-256") == multihash.digest(b"abc", "sha2-256")


@pytest.mark.asyncio
async def test_large_payload_hashed_in_thread():
    set_config(IpldConfig(codec=CodecConfig(hash_offload_threshold=4)))
    real_to_thread = asyncio.to_thread

    with patch("asyncio.to_thread", side_effect=real_to_thread) as spy:
        small = await hashing.digest(b"abc", "sha2-256")
        large = await hashing.digest(b"abcdef", "sha2-256")

    assert spy.call_count == 1
    assert small == multihash.digest(b"abc", "sha2-256")
    assert large == multihash.digest(b"abcdef", "sha2-256")


def test_make_cid_uses_configured_base():
    mh = multihash.digest(b"abc", "sha2-256")
    assert str(hashing.make_cid("raw", mh)).startswith("b")

    set_config(IpldConfig(block=BlockConfig(cid_base="base58btc")))
    cid = hashing.make_cid("raw", mh)
    assert str(cid).startswith("z")
    assert cid.version == 1
    assert cid.codec.name == "raw"


def test_parse_cid_forms():
    cid = hashing.make_cid("raw", multihash.digest(b"abc", "sha2-256"))
    assert hashing.parse_cid(cid) is cid
    assert bytes(hashing.parse_cid(str(cid))) == bytes(cid)
    assert bytes(hashing.parse_cid(bytes(cid))) == bytes(cid)


def test_verify():
    cid = CID("base32", 1, "raw", multihash.digest(b"abc", "sha2-256"))
    assert hashing.verify(b"abc", cid)
    assert not hashing.verify(b"abd", cid)
    assert hashing.recompute(b"abc", cid) == bytes(cid.raw_digest)
