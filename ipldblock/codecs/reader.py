"""
Path reader ("path level zero").

A read-only view over a block's decoded value, addressed by
slash-separated paths:

    reader = await block.reader()
    (await reader.get("a/b/0")).value

Mappings are walked by key, sequences by integer index. A CID met before
the path is exhausted is a link into another block: the walk stops there
and the unresolved tail is returned as `remaining`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Tuple

from multiformats import CID

from ipldblock.errors import PathNotFoundError

if TYPE_CHECKING:
    from ipldblock.block import Block

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadResult:
    value: Any
    # Path left to resolve inside the linked block; None when fully resolved
    remaining: Optional[str] = None


def _split(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _walk(value: Any, prefix: str) -> Iterator[Tuple[str, Any]]:
    if isinstance(value, Mapping):
        for key in sorted(value):
            child = f"{prefix}/{key}" if prefix else str(key)
            yield child, value[key]
            yield from _walk(value[key], child)
    elif _is_sequence(value):
        for index, item in enumerate(value):
            child = f"{prefix}/{index}" if prefix else str(index)
            yield child, item
            yield from _walk(item, child)


class PathReader:
    """Structured read-only view over one block."""

    def __init__(self, block: "Block"):
        self._block = block

    async def get(self, path: str) -> ReadResult:
        segments = _split(path)
        value = await self._block.decode()

        for position, segment in enumerate(segments):
            if isinstance(value, CID):
                remaining = "/".join(segments[position:])
                logger.debug(f"[Reader] Path '{path}' crosses link {value}, remaining '{remaining}'")
                return ReadResult(value=value, remaining=remaining)

            if isinstance(value, Mapping):
                if segment not in value:
                    raise PathNotFoundError(path, segment)
                value = value[segment]
            elif _is_sequence(value):
                try:
                    index = int(segment)
                except ValueError:
                    raise PathNotFoundError(path, segment) from None
                if index < 0 or index >= len(value):
                    raise PathNotFoundError(path, segment)
                value = value[index]
            else:
                raise PathNotFoundError(path, segment)

        return ReadResult(value=value)

    async def links(self) -> List[Tuple[str, CID]]:
        """Every (path, CID) pair in the decoded value."""
        value = await self._block.decode()
        return [(path, child) for path, child in _walk(value, "") if isinstance(child, CID)]

    async def tree(self) -> List[str]:
        """Every path in the decoded value, depth first with sorted keys."""
        value = await self._block.decode()
        return [path for path, _ in _walk(value, "")]
