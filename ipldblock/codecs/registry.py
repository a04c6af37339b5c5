"""
ipldblock/codecs/registry.py
The Codec Registry.
Maps codec names to implementations, importing each one on first use.
"""

import importlib
import logging
import threading
from typing import Dict, List, Optional, Union

from ipldblock.codecs.interface import Codec
from ipldblock.errors import CodecAlreadyRegistered, UnknownCodec

logger = logging.getLogger(__name__)

# Built-in codecs, declared as "module:attribute" import paths.
# Nothing is imported until a block first asks for the codec.
BUILTIN_CODECS: Dict[str, str] = {
    "dag-cbor": "ipldblock.codecs.dag_cbor:codec",
    "raw": "ipldblock.codecs.raw:codec",
    "json": "ipldblock.codecs.canonical_json:codec",
}


def _import_codec(import_path: str) -> Codec:
    module_name, _, attribute = import_path.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attribute or "codec")


class CodecRegistry:
    """
    Name -> Codec resolution with a process-lifetime, append-only cache.

    Loads are serialized by a lock with a double-checked cache lookup, so
    concurrent resolution of one name (from tasks or threads) imports the
    implementation once and every caller gets the same instance.
    """

    def __init__(self, include_builtins: bool = True):
        self._declared: Dict[str, Union[str, Codec]] = {}
        self._cache: Dict[str, Codec] = {}
        self._lock = threading.Lock()
        if include_builtins:
            self._declared.update(BUILTIN_CODECS)

    def register(self, name: str, codec: Union[str, Codec]) -> None:
        """
        Declare a codec under `name`.

        Args:
            name: Codec name, unique within this registry
            codec: A Codec instance, or a "module:attribute" path imported lazily

        Raises:
            CodecAlreadyRegistered: if `name` is already declared
        """
        with self._lock:
            if name in self._declared:
                raise CodecAlreadyRegistered(name)
            self._declared[name] = codec
        logger.debug(f"[Registry] Declared codec {name}")

    def names(self) -> List[str]:
        return sorted(self._declared)

    def is_loaded(self, name: str) -> bool:
        return name in self._cache

    def load(self, name: str) -> Codec:
        """Synchronous resolve-or-load."""
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached

            entry = self._declared.get(name)
            if entry is None:
                raise UnknownCodec(name)

            if isinstance(entry, str):
                try:
                    codec = _import_codec(entry)
                except (ImportError, AttributeError) as exc:
                    logger.warning(f"[Registry] Could not load codec {name} from {entry}: {exc}")
                    raise UnknownCodec(name) from exc
            else:
                codec = entry
            self._cache[name] = codec
            logger.info(f"[Registry] Loaded codec {name} ({type(codec).__name__})")
            return codec

    async def resolve(self, name: str) -> Codec:
        """
        Return the codec registered under `name`, loading it on first request.

        Raises:
            UnknownCodec: if `name` is not a known codec or fails to import
        """
        return self.load(name)


# ============================================================================
# Process-wide default registry
# ============================================================================

_registry: Optional[CodecRegistry] = None


def get_registry() -> CodecRegistry:
    global _registry
    if _registry is None:
        _registry = CodecRegistry()
    return _registry


def set_registry(registry: Optional[CodecRegistry]) -> None:
    """Swap the default registry (mainly used for testing)."""
    global _registry
    _registry = registry


async def get_codec(name: str) -> Codec:
    """Resolve `name` against the default registry."""
    return await get_registry().resolve(name)
