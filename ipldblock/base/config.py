# ============================================================================
# ipldblock/base/config.py
# Block and Codec Configuration Management
# ============================================================================
#
# PURPOSE:
# Every tunable default of the package lives here: which hash algorithm a new
# block uses, how CIDs are rendered, which codecs round-trip their sources on
# decode, and how logging is wired.
#
# KEY CONCEPTS:
# 1. Frozen dataclasses: each section is immutable once loaded
# 2. Environment variables: IPLDBLOCK_* overrides, read by from_env()
# 3. Singleton: one shared config, replaceable in tests via set_config()
#
# ============================================================================

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_list(name: str) -> tuple:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


# ============================================================================
# Block Configuration
# ============================================================================
# Defaults applied when a Block is constructed and when its CID is derived.

@dataclass(frozen=True)
class BlockConfig:
    # Multihash function name used when neither a CID nor an algo is given
    default_algo: str = "sha2-256"

    # CID version for freshly derived identifiers
    cid_version: int = 1

    # Multibase used when a derived CID is rendered with str()
    cid_base: str = "base32"

    # Hash data against the supplied CID in Block.create() even when the
    # caller does not ask for it
    validate_on_create: bool = False


# ============================================================================
# Codec Configuration
# ============================================================================

@dataclass(frozen=True)
class CodecConfig:
    # Codec names whose round-trip-on-decode policy is forced off
    roundtrip_disabled: tuple = ()

    # Payloads at or above this size are hashed in a worker thread
    # 1 MiB keeps small blocks on the event loop
    hash_offload_threshold: int = 1024 * 1024

    def roundtrip_enabled(self, codec_name: str, codec_default: bool) -> bool:
        if codec_name in self.roundtrip_disabled:
            return False
        return codec_default


# ============================================================================
# Logging Configuration
# ============================================================================

@dataclass(frozen=True)
class LogConfig:
    # DEBUG shows cache hits and derivations, INFO shows codec loads
    level: str = "INFO"

    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    # Optional log file; None means console only
    file_path: Optional[Path] = None

    # Rotation limits for the log file
    max_file_size_mb: int = 10
    backup_count: int = 5


# ============================================================================
# Master Configuration Container
# ============================================================================

@dataclass(frozen=True)
class IpldConfig:
    block: BlockConfig = field(default_factory=BlockConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    log: LogConfig = field(default_factory=LogConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "IpldConfig":
        """Build a config from IPLDBLOCK_* environment variables."""
        block = BlockConfig(
            default_algo=os.getenv("IPLDBLOCK_DEFAULT_ALGO", "sha2-256"),
            cid_version=int(os.getenv("IPLDBLOCK_CID_VERSION", "1")),
            cid_base=os.getenv("IPLDBLOCK_CID_BASE", "base32"),
            validate_on_create=_env_flag("IPLDBLOCK_VALIDATE_ON_CREATE", "false"),
        )

        codec = CodecConfig(
            roundtrip_disabled=_env_list("IPLDBLOCK_ROUNDTRIP_DISABLED"),
            hash_offload_threshold=int(
                os.getenv("IPLDBLOCK_HASH_OFFLOAD_BYTES", str(1024 * 1024))
            ),
        )

        log_file = os.getenv("IPLDBLOCK_LOG_FILE")
        log = LogConfig(
            level=os.getenv("IPLDBLOCK_LOG_LEVEL", "INFO"),
            file_path=Path(log_file) if log_file else None,
        )

        return cls(
            block=block,
            codec=codec,
            log=log,
            debug=_env_flag("IPLDBLOCK_DEBUG", "false"),
        )


# ============================================================================
# Global Configuration Singleton
# ============================================================================

_config: Optional[IpldConfig] = None


def get_config() -> IpldConfig:
    """
    Get the global configuration instance.

    Loaded from the environment on first use, then shared.
    """
    global _config
    if _config is None:
        _config = IpldConfig.from_env()
    return _config


def set_config(config: Optional[IpldConfig]) -> None:
    """
    Replace the global configuration (mainly used for testing).

    Passing None makes the next get_config() reload from the environment.
    """
    global _config
    _config = config


def setup_logging(config: Optional[IpldConfig] = None) -> None:
    """
    Configure Python's logging system from LogConfig.

    Console output always; a rotating file handler when file_path is set.
    """
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_path is not None:
        from logging.handlers import RotatingFileHandler
        cfg.log.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            cfg.log.file_path,
            maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
            backupCount=cfg.log.backup_count,
        )
        handlers.append(file_handler)

    level = "DEBUG" if cfg.debug else cfg.log.level
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
