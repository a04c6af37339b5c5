"""
Content-addressed Block.

A Block holds one logical value in up to three representations:
1. source: the decoded, structured value
2. data: its encoded bytes
3. cid: the identifier derived from {version, codec, multihash(data)}

Whatever the caller did not supply is derived on demand, once. Each derived
representation lives in a write-once cell, so two concurrent first calls
share one computation and nothing changes after it has been filled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from multiformats import CID

from ipldblock import hashing
from ipldblock.base.config import get_config
from ipldblock.codecs.interface import Codec
from ipldblock.codecs.reader import PathReader
from ipldblock.codecs.registry import CodecRegistry, get_registry
from ipldblock.errors import CIDMismatchError, ConfigurationError, ErrorCode
from ipldblock.utils.async_helpers import OnceCell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockOptions:
    """
    The values a Block was constructed with. Never mutated.

    Valid combinations:
        source + codec (+ algo)          encode on demand
        data + codec (+ algo)            decode on demand
        data + cid                       trusted bytes with a known identifier
    """
    source: Any = None
    data: Optional[bytes] = None
    cid: Optional[CID] = None
    codec: Optional[str] = None
    algo: Optional[str] = None


def _check_options(opts: BlockOptions) -> BlockOptions:
    if opts.source is None and opts.data is None:
        raise ConfigurationError(
            ErrorCode.BLOCK_MISSING_CONTENT,
            "Block instances must be created with either an encode source or data",
        )
    if opts.source is not None and not opts.codec:
        raise ConfigurationError(
            ErrorCode.BLOCK_SOURCE_WITHOUT_CODEC,
            "Block instances created from source objects must include desired codec",
        )
    if opts.data is not None and opts.cid is None and not opts.codec:
        raise ConfigurationError(
            ErrorCode.BLOCK_DATA_WITHOUT_CODEC,
            "Block instances created from data must include cid or codec",
        )
    if opts.cid is None and not opts.algo:
        opts = replace(opts, algo=get_config().block.default_algo)
    return opts


def _cell(value: Any, name: str) -> OnceCell:
    return OnceCell(name=name) if value is None else OnceCell(value, name=name)


class Block:
    """
    One content-addressed value.

    Build one with Block.encoder(), Block.decoder(), Block.create() or
    Block(...) directly. Fields are read-only; encode(), decode() and cid()
    fill in the missing representations.
    """

    __slots__ = ("_opts", "_registry", "_data", "_source", "_cid")

    def __init__(
        self,
        *,
        source: Any = None,
        data: Optional[bytes] = None,
        cid: Union[CID, str, None] = None,
        codec: Optional[str] = None,
        algo: Optional[str] = None,
        registry: Optional[CodecRegistry] = None,
    ):
        if cid is not None:
            cid = hashing.parse_cid(cid)
        if data is not None:
            data = bytes(data)

        opts = _check_options(
            BlockOptions(source=source, data=data, cid=cid, codec=codec, algo=algo)
        )

        object.__setattr__(self, "_opts", opts)
        object.__setattr__(self, "_registry", registry)
        object.__setattr__(self, "_data", _cell(data, "data"))
        object.__setattr__(self, "_cid", _cell(cid, "cid"))
        object.__setattr__(self, "_source", OnceCell(name="source"))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Cannot set read-only property")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Cannot delete read-only property")

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    @classmethod
    def encoder(cls, source: Any, codec: str, algo: Optional[str] = None) -> "Block":
        """Block that will encode `source` with `codec` and hash with `algo`."""
        return cls(source=source, codec=codec, algo=algo)

    @classmethod
    def decoder(cls, data: bytes, codec: str, algo: Optional[str] = None) -> "Block":
        """Block over bytes already encoded with `codec`."""
        return cls(data=data, codec=codec, algo=algo)

    @classmethod
    def create(
        cls,
        data: bytes,
        cid: Union[CID, str, bytes],
        validate: bool = False,
    ) -> "Block":
        """
        Block from bytes plus an identifier that is already known.

        The identifier is trusted unless `validate` is set (or
        validate_on_create is enabled in config), in which case `data` is
        hashed under the identifier's hash function and compared.

        Raises:
            CIDMismatchError: validation requested and the digests differ
        """
        parsed = hashing.parse_cid(cid)
        if validate or get_config().block.validate_on_create:
            data = bytes(data)
            if not hashing.verify(data, parsed):
                logger.warning(f"[Block] Data does not hash to {parsed}")
                raise CIDMismatchError(str(parsed), hashing.recompute(data, parsed).hex())
            logger.debug(f"[Block] Validated data against {parsed}")
        return cls(data=data, cid=parsed)

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------
    @property
    def opts(self) -> BlockOptions:
        return self._opts

    @property
    def codec(self) -> str:
        """Codec name: the CID's embedded codec when known, else the configured one."""
        cid = self._cid.peek()
        if cid is not None:
            return cid.codec.name
        return self._opts.codec

    async def _resolve_codec(self) -> Codec:
        registry = self._registry or get_registry()
        return await registry.resolve(self.codec)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    async def encode(self) -> bytes:
        """Encoded bytes, encoding the source on first call."""
        return await self._data.get_or_init(self._derive_data)

    async def _derive_data(self) -> bytes:
        codec = await self._resolve_codec()
        data = await codec.encode(self._opts.source)
        logger.debug(f"[Block] Encoded {len(data)} bytes with {codec.name}")
        return data

    async def decode(self) -> Any:
        """Decoded value, decoding the data (or round-tripping the source) on first call."""
        return await self._source.get_or_init(self._derive_source)

    async def _derive_source(self) -> Any:
        codec = await self._resolve_codec()
        if self._opts.source is not None:
            if not get_config().codec.roundtrip_enabled(codec.name, codec.roundtrip_on_decode):
                return self._opts.source
        # Sources come back in wire form: decode(encode(source))
        return await codec.decode(await self.encode())

    async def cid(self) -> CID:
        """Content identifier, hashing the encoded bytes on first call."""
        return await self._cid.get_or_init(self._derive_cid)

    async def _derive_cid(self) -> CID:
        codec_name = self.codec
        data = await self.encode()
        mh = await hashing.digest(data, self._opts.algo)
        cid = hashing.make_cid(codec_name, mh)
        logger.debug(f"[Block] Derived {cid} ({self._opts.algo})")
        return cid

    async def reader(self) -> PathReader:
        """Codec-specific read-only view over the decoded value."""
        codec = await self._resolve_codec()
        return codec.reader(self)

    async def validate(self) -> bool:
        """
        Confirm the encoded bytes hash to this block's CID.

        Raises:
            CIDMismatchError: if they do not
        """
        cid = await self.cid()
        data = await self.encode()
        if not hashing.verify(data, cid):
            logger.warning(f"[Block] Data does not hash to {cid}")
            raise CIDMismatchError(str(cid), hashing.recompute(data, cid).hex())
        return True

    def __repr__(self) -> str:
        cid = self._cid.peek()
        return f"<Block codec={self.codec} cid={cid if cid is not None else 'pending'}>"
