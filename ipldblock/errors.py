"""Module errors: structured error taxonomy for ipldblock."""
#
# PURPOSE:
# Gives every failure this package raises on its own a stable error code,
# a human-readable message and a details dictionary.
#
# ERROR CODE FORMAT:
# - BLOCK_XXX: Block construction errors
# - CODEC_XXX: Codec registry errors
# - CID_XXX: Identifier integrity errors
# - PATH_XXX: Reader path resolution errors
#
# Errors raised by codec implementations and by the hashing library are NOT
# part of this taxonomy; they reach the caller unchanged.
#
# USAGE:
#   from ipldblock.errors import UnknownCodec
#
#   try:
#       codec = await get_codec("dag-pb")
#   except UnknownCodec as e:
#       print(e.code, e.details["codec"])
#
import json
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    # Block construction
    BLOCK_MISSING_CONTENT = "BLOCK_001"
    BLOCK_SOURCE_WITHOUT_CODEC = "BLOCK_002"
    BLOCK_DATA_WITHOUT_CODEC = "BLOCK_003"

    # Codec registry
    CODEC_UNKNOWN = "CODEC_001"
    CODEC_ALREADY_REGISTERED = "CODEC_002"

    # Identifier integrity
    CID_MISMATCH = "CID_001"

    # Reader
    PATH_NOT_FOUND = "PATH_001"


class BlockError(Exception):
    """
    Base exception for ipldblock with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "CODEC_001")
        message: Human-readable error message
        details: Dictionary with additional context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a JSON-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class ConfigurationError(BlockError):
    """Raised when Block options cannot satisfy the construction invariants."""


class UnknownCodec(BlockError):
    """Raised when the codec registry cannot resolve a codec name."""

    def __init__(self, name: str):
        super().__init__(
            ErrorCode.CODEC_UNKNOWN,
            f"Unknown codec {name}",
            details={"codec": name},
        )
        self.name = name


class CodecAlreadyRegistered(BlockError):
    """Raised when a codec name is registered twice."""

    def __init__(self, name: str):
        super().__init__(
            ErrorCode.CODEC_ALREADY_REGISTERED,
            f"Codec {name} is already registered",
            details={"codec": name},
        )
        self.name = name


class CIDMismatchError(BlockError):
    """Raised when block data does not hash to the identifier it was given."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            ErrorCode.CID_MISMATCH,
            f"Block data does not match identifier {expected}",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class PathNotFoundError(BlockError):
    """Raised when a reader path does not exist in the decoded value."""

    def __init__(self, path: str, segment: Optional[str] = None):
        super().__init__(
            ErrorCode.PATH_NOT_FOUND,
            f"Path not found: {path}",
            details={"path": path, "segment": segment},
        )
        self.path = path


__all__ = [
    "ErrorCode",
    "BlockError",
    "ConfigurationError",
    "UnknownCodec",
    "CodecAlreadyRegistered",
    "CIDMismatchError",
    "PathNotFoundError",
]
