"""Pytest configuration for ipldblock."""
import json
import os

import pytest

from ipldblock.base.config import IpldConfig, set_config
from ipldblock.codecs.canonical_json import canonicalize
from ipldblock.codecs.interface import Codec
from ipldblock.codecs.registry import CodecRegistry, set_registry


def pytest_configure():
    # Surface cache hits and derivations in captured logs.
    os.environ.setdefault("IPLDBLOCK_LOG_LEVEL", "DEBUG")


class CountingCodec(Codec):
    """Canonical JSON codec that records how often it is called."""

    name = "dag-json"

    def __init__(self, roundtrip_on_decode: bool = True):
        self.roundtrip_on_decode = roundtrip_on_decode
        self.encode_calls = 0
        self.decode_calls = 0
        self.fail_next_encode = False

    async def encode(self, value):
        self.encode_calls += 1
        if self.fail_next_encode:
            self.fail_next_encode = False
            raise ValueError("encoder exploded")
        return canonicalize(value)

    async def decode(self, data):
        self.decode_calls += 1
        return json.loads(data)


@pytest.fixture(autouse=True)
def registry():
    """Fresh default config and codec registry for every test."""
    set_config(IpldConfig())
    fresh = CodecRegistry()
    set_registry(fresh)
    yield fresh
    set_registry(None)
    set_config(None)


@pytest.fixture
def counting_codec(registry):
    codec = CountingCodec()
    registry.register(codec.name, codec)
    return codec
