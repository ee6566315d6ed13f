"""Tests for fork directory name encoding."""

import base64
import pytest

from rerost.core.exceptions import DecodeError, InvalidNameError, NameFormatError
from rerost.core.naming import (
    FORK_DIR_PREFIX, build_fork_name, decode_source_path, encode_source_path,
    is_fork_name, parse_source_path
)


SAMPLE_PATHS = [
    "/",
    "/home/u/proj",
    "/home/u/my-project",
    "/tmp/with space/and=equals",
    "/srv/données/プロジェクト",
    "/x/>>>",
]


class TestSourcePathCodec:
    """Test cases for encode_source_path/decode_source_path."""

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_round_trip(self, path):
        """Test that decoding an encoded path returns the original."""
        assert decode_source_path(encode_source_path(path)) == path

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_encoding_never_contains_separator(self, path):
        """Test that tokens never contain the name field separator."""
        assert "-" not in encode_source_path(path)

    def test_separator_free_where_urlsafe_base64_is_not(self):
        """Test a path whose URL-safe base64 form contains a dash."""
        path = "/x/>>>"
        assert "-" in base64.urlsafe_b64encode(path.encode()).decode()

        token = encode_source_path(path)
        assert "-" not in token
        assert decode_source_path(token) == path

    def test_encoding_is_deterministic(self):
        """Test that the same path always encodes to the same token."""
        assert encode_source_path("/home/u/proj") == encode_source_path("/home/u/proj")

    def test_accepts_path_objects(self, tmp_path):
        """Test that os.PathLike values are encoded like their string form."""
        assert encode_source_path(tmp_path) == encode_source_path(str(tmp_path))

    @pytest.mark.parametrize("token", [
        "",
        "not base32!",
        "MFRGG",
        "mfrgg===",
    ])
    def test_decode_rejects_malformed_tokens(self, token):
        """Test that malformed tokens raise DecodeError."""
        with pytest.raises(DecodeError):
            decode_source_path(token)


class TestForkNames:
    """Test cases for building and parsing fork directory names."""

    def test_build_fork_name_layout(self):
        """Test the structure of a built fork name."""
        name = build_fork_name("proj", "/home/u/proj", 1700000000123456789)

        assert name == (
            f"{FORK_DIR_PREFIX}proj-1700000000123456789-"
            f"{encode_source_path('/home/u/proj')}"
        )
        assert name.startswith("rerost-fork-")

    @pytest.mark.parametrize("base_name,path", [
        ("proj", "/home/u/proj"),
        ("my-project", "/home/u/my-project"),
        ("a-b-c-d", "/srv/a-b-c-d"),
        ("", "/"),
    ])
    @pytest.mark.parametrize("timestamp", [0, 1, 1700000000123456789])
    def test_parse_source_path_of_built_name(self, base_name, path, timestamp):
        """Test that parsing a built name recovers the source path."""
        assert parse_source_path(build_fork_name(base_name, path, timestamp)) == path

    @pytest.mark.parametrize("name", ["proj", "a-b", ""])
    def test_parse_rejects_names_with_too_few_fields(self, name):
        """Test that names with fewer than three fields are invalid."""
        with pytest.raises(InvalidNameError):
            parse_source_path(name)

    def test_parse_bare_prefix_fails(self):
        """Test that a name consisting only of the prefix cannot be parsed."""
        with pytest.raises(NameFormatError):
            parse_source_path(FORK_DIR_PREFIX)

    def test_parse_rejects_undecodable_last_field(self):
        """Test that a garbage final field raises DecodeError."""
        with pytest.raises(DecodeError):
            parse_source_path("rerost-fork-proj-123-not*base32")

    def test_is_fork_name(self):
        """Test prefix detection."""
        assert is_fork_name(build_fork_name("proj", "/home/u/proj", 1))
        assert is_fork_name(FORK_DIR_PREFIX)
        assert not is_fork_name("rerost-proj")
        assert not is_fork_name("systemd-private-abc")
