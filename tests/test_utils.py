import pytest

from chart_viewer.core.exceptions import DecodeFailed, InvalidOverrides
from chart_viewer.utils.encoding import content_hash, decode_entry, encode_entry
from chart_viewer.utils.version_compare import is_newer, latest_version


def test_content_hash_is_stable_across_str_and_bytes():
    assert content_hash("replicaCount: 3\n") == content_hash(b"replicaCount: 3\n")
    assert content_hash(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_content_hash_distinguishes_payloads():
    assert content_hash(b"a: 1\n") != content_hash(b"a: 2\n")


def test_content_hash_rejects_other_types():
    with pytest.raises(InvalidOverrides):
        content_hash(None)


def test_decode_entry():
    assert decode_entry(encode_entry({"a": [1, 2]})) == {"a": [1, 2]}
    with pytest.raises(DecodeFailed):
        decode_entry("")
    with pytest.raises(DecodeFailed):
        decode_entry("{oops")


@pytest.mark.parametrize("versions, expected", [
    (["0.3.4", "0.3.5", "0.3.10"], "0.3.10"),
    (["v1.2.0", "1.10.0"], "1.10.0"),
    (["latest", "1.0.0"], "1.0.0"),
    (["nightly"], "nightly"),
    ([], ""),
])
def test_latest_version(versions, expected):
    assert latest_version(versions) == expected


def test_is_newer():
    assert is_newer("1.0.0", "1.0.1")
    assert not is_newer("1.0.1", "1.0.0")
    assert not is_newer("1.0.0", "garbage")
