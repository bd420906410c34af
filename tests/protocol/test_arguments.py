"""Tests for ToolArguments accessors."""

import pytest

from gitmcp.protocol.arguments import ToolArguments


class TestToolArguments:
    def test_non_object_is_empty(self) -> None:
        assert len(ToolArguments(None)) == 0
        assert len(ToolArguments(["url"])) == 0
        assert len(ToolArguments("url")) == 0

    def test_get_str(self) -> None:
        args = ToolArguments({"url": "https://github.com/a/b", "limit": 5})
        assert args.get_str("url") == "https://github.com/a/b"
        assert args.get_str("limit") is None
        assert args.get_str("missing") is None

    def test_get_int(self) -> None:
        args = ToolArguments({"n": 5, "zero": 0, "neg": -1, "flag": True, "f": 2.0, "s": "3"})
        assert args.get_int("n") == 5
        assert args.get_int("zero") == 0
        assert args.get_int("neg") is None
        assert args.get_int("flag") is None
        assert args.get_int("f") is None
        assert args.get_int("s") is None

    def test_mapping_view(self) -> None:
        args = ToolArguments({"a": 1})
        assert dict(args) == {"a": 1}
        assert "a" in args

    def test_get_typed_rejects_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="boolean"):
            ToolArguments({}).get_typed("a", "boolean")
