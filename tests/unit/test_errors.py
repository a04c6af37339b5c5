import json

from ipldblock.errors import (
    BlockError,
    CIDMismatchError,
    ConfigurationError,
    ErrorCode,
    PathNotFoundError,
    UnknownCodec,
)


def test_message_carries_code():
    err = ConfigurationError(ErrorCode.BLOCK_MISSING_CONTENT, "no content")
    assert str(err) == "[BLOCK_001] no content"
    assert isinstance(err, BlockError)


def test_to_dict_and_json():
    err = UnknownCodec("dag-pb")
    assert err.to_dict() == {
        "code": "CODEC_001",
        "message": "Unknown codec dag-pb",
        "details": {"codec": "dag-pb"},
    }
    assert json.loads(err.to_json())["details"]["codec"] == "dag-pb"


def test_specialised_details():
    mismatch = CIDMismatchError("bafkexpected", "abcd")
    assert mismatch.details == {"expected": "bafkexpected", "actual": "abcd"}

    missing = PathNotFoundError("a/b", "b")
    assert missing.details == {"path": "a/b", "segment": "b"}
    assert missing.code == ErrorCode.PATH_NOT_FOUND
