"""Tests for Parser: scanning, value conversion and callback dispatch."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path to import flagparse
sys.path.insert(0, str(Path(__file__).parent.parent))

from flagparse import (
    COULD_NOT_SET_VALUE,
    INVALID_FLAG_ID,
    Flag,
    FlagRegistry,
    FlagType,
    Options,
    Parser,
    Result,
)


@pytest.fixture
def parser():
    parser = Parser()
    parser.add("name", "Your name", aliases=["n"])
    parser.add("count", "How many", FlagType.NUMBER, aliases=["c"], default=1)
    parser.add("verbose", "Talk more", FlagType.BOOL, aliases=["v"])
    return parser


def test_positionals_kept_in_order(parser):
    result = parser.parse(["a", "b", "-", "c"])
    assert result.ok
    assert parser.args == ["a", "b", "-", "c"]


def test_bare_prefix_is_positional():
    parser = Parser(options=Options(flag_prefix="--"))
    assert parser.parse(["--", "-", "x"]).ok
    assert parser.args == ["--", "-", "x"]


def test_inline_number_value(parser):
    assert parser.parse(["-count=42"]).ok
    count = parser.registry.get("count")
    assert count.triggered
    assert count.value == 42.0


def test_lookahead_string_value(parser):
    assert parser.parse(["-name", "alice", "rest"]).ok
    assert parser.registry.get("name").value == "alice"
    assert parser.args == ["rest"]


def test_lookahead_value_may_look_like_a_flag(parser):
    assert parser.parse(["-name", "-verbose"]).ok
    assert parser.registry.get("name").value == "-verbose"
    assert not parser.registry.get("verbose").triggered


def test_empty_inline_value_falls_back_to_next_token(parser):
    assert parser.parse(["-name=", "bob"]).ok
    assert parser.registry.get("name").value == "bob"
    assert parser.args == []


def test_inline_value_keeps_later_separators(parser):
    assert parser.parse(["-n=a=b"]).ok
    assert parser.registry.get("name").value == "a=b"


def test_missing_value_for_last_flag(parser):
    result = parser.parse(["-name"])
    assert result == Result(False, "name", COULD_NOT_SET_VALUE)


def test_missing_value_after_empty_inline(parser):
    result = parser.parse(["-n="])
    assert not result.ok
    assert result.flag_id == "n"
    assert result.error == COULD_NOT_SET_VALUE


@pytest.mark.parametrize("token, expected", [
    ("-count=3.14", 3.14),
    ("-count=-2", -2.0),
    ("-c=1e5", 1e5),
])
def test_number_values(parser, token, expected):
    assert parser.parse([token]).ok
    assert parser.registry.get("count").value == expected


@pytest.mark.parametrize("args", [
    ["-count=12abc"],
    ["-count", ""],
    ["-c", "twelve"],
    ["-count=٤٢"],
    ["-c", "３.5"],
])
def test_number_coercion_failure(parser, args):
    result = parser.parse(args)
    assert not result.ok
    assert result.error == COULD_NOT_SET_VALUE
    count = parser.registry.get("count")
    assert not count.triggered
    assert count.value == 1.0


def test_bool_flag_never_consumes_value(parser):
    assert parser.parse(["-verbose", "file.txt"]).ok
    verbose = parser.registry.get("verbose")
    assert verbose.triggered
    assert verbose.value is True
    assert parser.args == ["file.txt"]


def test_bool_flag_ignores_inline_value(parser):
    assert parser.parse(["-v=false", "x"]).ok
    assert parser.registry.get("verbose").value is True
    assert parser.args == ["x"]


def test_unknown_flag_strict(parser):
    result = parser.parse(["--bogus"])
    assert result == Result(False, "-bogus", INVALID_FLAG_ID)


def test_unknown_flag_strict_with_inline_value(parser):
    result = parser.parse(["-bogus=1"])
    assert result.flag_id == "bogus"
    assert result.error == INVALID_FLAG_ID


def test_unknown_flag_lenient_is_dropped():
    parser = Parser(options=Options(strict_flags=False))
    parser.add("verbose", type=FlagType.BOOL)
    assert parser.parse(["a", "-bogus", "-verbose", "b"]).ok
    assert parser.args == ["a", "b"]
    assert parser.registry.get("verbose").triggered


def test_untouched_flag_keeps_default(parser):
    assert parser.parse(["-v"]).ok
    count = parser.registry.get("count")
    assert not count.triggered
    assert count.value == 1.0


def test_failure_is_not_rolled_back(parser):
    result = parser.parse(["first", "-v", "-name", "x", "-bogus", "later", "-c=5"])
    assert result.flag_id == "bogus"
    assert parser.args == ["first"]
    assert parser.registry.get("verbose").triggered
    assert parser.registry.get("name").value == "x"
    assert not parser.registry.get("count").triggered


def test_multi_character_separator_and_prefix():
    parser = Parser(options=Options(flag_prefix="--", separator=":="))
    parser.add("level", type=FlagType.NUMBER)
    parser.add("mode")
    assert parser.parse(["--level:=3", "--mode:=fast", "x"]).ok
    assert parser.registry.get("level").value == 3.0
    assert parser.registry.get("mode").value == "fast"
    assert parser.args == ["x"]

    # '=' alone is not the separator, so it stays part of the id
    parser.reset()
    result = parser.parse(["--mode=fast"])
    assert result == Result(False, "mode=fast", INVALID_FLAG_ID)


def test_separator_inside_prefix_is_not_matched():
    parser = Parser(options=Options(flag_prefix="+=", separator="="))
    parser.add("name")
    assert parser.parse(["+=name=bob"]).ok
    assert parser.registry.get("name").value == "bob"


def test_split_flag(parser):
    assert parser.split_flag("-name=bob") == ("name", "bob")
    assert parser.split_flag("-name=") == ("name", "")
    assert parser.split_flag("-name") == ("name", None)


def test_reset_allows_second_parse(parser):
    assert parser.parse(["-n", "alice", "pos"]).ok
    parser.reset()
    assert parser.args == []
    assert parser.registry.get("name").value == ""
    assert parser.parse(["other"]).ok
    assert parser.args == ["other"]


def test_set_chains():
    parser = Parser().set(Flag("a")).set(Flag("b", aliases=["bee"]))
    assert [flag.name for flag in parser.flags] == ["a", "b"]
    assert parser.table["bee"].name == "b"


def test_parser_shares_registry():
    registry = FlagRegistry([Flag("name")])
    parser = Parser(registry, Options(flag_prefix="/"))
    assert parser.registry is registry
    assert parser.options.flag_prefix == "/"
    assert parser.parse(["/name", "x"]).ok
    assert registry.get("name").value == "x"


def test_to_string_uses_prefix():
    parser = Parser(options=Options(flag_prefix="--"))
    parser.add("name", "Your name")
    parser.add("verbose", "Talk more", FlagType.BOOL)
    assert str(parser) == "--name\t\tYour name\n--verbose\t\tTalk more\n"
    assert parser.to_string() == str(parser)


def test_call_runs_triggered_callbacks_in_registration_order():
    calls = []

    def record(flag):
        calls.append(flag.name)
        return Result()

    parser = Parser()
    parser.add("a", type=FlagType.BOOL, callback=record)
    parser.add("b", type=FlagType.BOOL, callback=record)
    parser.add("c", type=FlagType.BOOL, callback=record)
    assert parser.parse(["-c", "-a"]).ok
    assert parser.call().ok
    assert calls == ["a", "c"]


def test_call_short_circuits_on_failure():
    calls = []

    def fail(flag):
        calls.append(flag.name)
        return Result.failure(flag.name, "callback failed")

    def succeed(flag):
        calls.append(flag.name)
        return Result()

    parser = Parser()
    parser.add("first", type=FlagType.BOOL, callback=fail)
    parser.add("second", type=FlagType.BOOL, callback=succeed)
    assert parser.parse(["-second", "-first"]).ok
    result = parser.call()
    assert result == Result(False, "first", "callback failed")
    assert calls == ["first"]


def test_callback_receives_mutable_flag():
    def double(flag):
        flag.assign(str(flag.value * 2))

    parser = Parser()
    parser.add("count", type=FlagType.NUMBER, callback=double)
    assert parser.parse(["-count", "21"]).ok
    assert parser.call().ok
    assert parser.registry.get("count").value == 42.0


def test_call_skips_untriggered_and_callbackless_flags():
    parser = Parser()
    parser.add("quiet", type=FlagType.BOOL)
    parser.add("loud", type=FlagType.BOOL, callback=lambda flag: Result.failure("loud", "no"))
    assert parser.parse(["-quiet"]).ok
    assert parser.call() == Result()
