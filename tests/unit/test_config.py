"""
tests/unit/test_config.py
Environment loading, singleton access and logging setup.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import patch

from ipldblock.base.config import (
    CodecConfig,
    IpldConfig,
    LogConfig,
    get_config,
    set_config,
    setup_logging,
)


def test_defaults():
    cfg = IpldConfig()
    assert cfg.block.default_algo == "sha2-256"
    assert cfg.block.cid_version == 1
    assert cfg.block.cid_base == "base32"
    assert cfg.block.validate_on_create is False
    assert cfg.codec.roundtrip_disabled == ()


def test_from_env(monkeypatch):
    monkeypatch.setenv("IPLDBLOCK_DEFAULT_ALGO", "sha2-512")
    monkeypatch.setenv("IPLDBLOCK_CID_BASE", "base58btc")
    monkeypatch.setenv("IPLDBLOCK_VALIDATE_ON_CREATE", "TRUE")
    monkeypatch.setenv("IPLDBLOCK_ROUNDTRIP_DISABLED", "json, dag-cbor,")
    monkeypatch.setenv("IPLDBLOCK_HASH_OFFLOAD_BYTES", "4096")
    monkeypatch.setenv("IPLDBLOCK_LOG_FILE", "/tmp/ipldblock.log")

    cfg = IpldConfig.from_env()

    assert cfg.block.default_algo == "sha2-512"
    assert cfg.block.cid_base == "base58btc"
    assert cfg.block.validate_on_create is True
    assert cfg.codec.roundtrip_disabled == ("json", "dag-cbor")
    assert cfg.codec.hash_offload_threshold == 4096
    assert cfg.log.file_path == Path("/tmp/ipldblock.log")


def test_roundtrip_enabled():
    codec_cfg = CodecConfig(roundtrip_disabled=("json",))
    assert codec_cfg.roundtrip_enabled("json", True) is False
    assert codec_cfg.roundtrip_enabled("dag-cbor", True) is True
    assert codec_cfg.roundtrip_enabled("raw", False) is False


def test_singleton_reload(monkeypatch):
    custom = IpldConfig(debug=True)
    set_config(custom)
    assert get_config() is custom

    monkeypatch.setenv("IPLDBLOCK_DEFAULT_ALGO", "sha2-512")
    set_config(None)
    assert get_config().block.default_algo == "sha2-512"
    assert get_config() is get_config()


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "ipldblock.log"
    cfg = IpldConfig(log=LogConfig(level="WARNING", file_path=log_file))

    with patch("logging.basicConfig") as basic_config:
        setup_logging(cfg)

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.WARNING
    assert kwargs["force"] is True
    handlers = kwargs["handlers"]
    assert any(isinstance(h, RotatingFileHandler) for h in handlers)
    assert log_file.parent.is_dir()
    for handler in handlers:
        handler.close()


def test_debug_forces_debug_level():
    with patch("logging.basicConfig") as basic_config:
        setup_logging(IpldConfig(debug=True))

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    assert len(kwargs["handlers"]) == 1
