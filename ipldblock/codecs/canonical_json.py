"""
Canonical JSON codec.

Canonicalization for content addressing, in pure Python (RFC 8785 spirit):
- sorted keys
- no whitespace
- UTF-8
- stable number representation (notably: 1.0 -> 1)

NOTE:
Full RFC 8785 cross-language compliance is best done with a dedicated
JCS implementation. This is a Python-native approximation that avoids the
major drift footguns, which is enough for identical inputs to hash to
identical CIDs.
"""

from __future__ import annotations

import base64
import json
import math
from dataclasses import asdict, is_dataclass
from typing import Any, Dict

from ipldblock.codecs.interface import Codec


def normalize(value: Any, path: str = "$") -> Any:
    """
    Normalize a Python object into a JSON-compatible structure with
    deterministic numeric representation.

    - Path tracking for precise error reporting (e.g., "$.payload.data").
    - `bytes` become base64 strings.
    - dataclasses become dicts.
    """
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Non-finite float (NaN/Inf) at '{path}' is not allowed in canonical JSON.")
        if value.is_integer():
            # 1.0 -> 1 (matches JS/JSON.stringify behavior)
            return int(value)
        return value

    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")

    if is_dataclass(value) and not isinstance(value, type):
        return normalize(asdict(value), path)

    if isinstance(value, (list, tuple)):
        return [normalize(v, f"{path}[{i}]") for i, v in enumerate(value)]

    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(f"Canonical JSON requires string keys. Got {type(k)} at '{path}'.")
            out[k] = normalize(v, f"{path}.{k}")
        return out

    raise TypeError(f"Value type {type(value)} at '{path}' is not JSON-serializable for canonicalization.")


def canonicalize(value: Any) -> bytes:
    """Canonical JSON bytes for `value`; NaN/Inf rejected."""
    return json.dumps(
        normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


class JsonCodec(Codec):
    name = "json"
    # bytes, tuples and integral floats only take their JSON shape after encoding
    roundtrip_on_decode = True

    async def encode(self, value: Any) -> bytes:
        return canonicalize(value)

    async def decode(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


codec = JsonCodec()
