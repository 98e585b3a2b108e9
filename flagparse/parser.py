"""Argument scanner that matches tokens against a FlagRegistry."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .definitions import Flag, FlagFn, Options, Result
from .errors import COULD_NOT_SET_VALUE, INVALID_FLAG_ID
from .flag_types import FlagType
from .registry import FlagRegistry

log = logging.getLogger(__name__)


class Parser:
    """Splits an argument list into matched flags and flagless arguments.

    Usage:
        parser = Parser(options=Options(flag_prefix="--"))
        parser.add("count", "How many", FlagType.NUMBER, aliases=["c"])
        result = parser.parse(["--count=3", "input.txt"])
        if not result:
            print(f"{result.error}: {result.flag_id}")

    A parser is not thread safe: parsing mutates the registered flags.
    """

    def __init__(self, registry: Optional[FlagRegistry] = None, options: Optional[Options] = None):
        self._registry = registry if registry is not None else FlagRegistry()
        self._options = options if options is not None else Options()
        self._flagless: List[str] = []

    def __str__(self) -> str:
        return self.to_string()

    def set(self, flag: Flag) -> 'Parser':
        """Register a flag and return the parser for chaining."""
        self._registry.register(flag)
        return self

    def add(
        self,
        name: str,
        description: str = "",
        type: FlagType = FlagType.STRING,
        aliases: Iterable[str] = (),
        default: Any = None,
        callback: Optional[FlagFn] = None
    ) -> Flag:
        return self._registry.add(name, description, type, aliases, default, callback)

    def is_flag(self, arg: str) -> bool:
        """Whether ``arg`` is longer than the prefix and starts with it."""
        prefix = self._options.flag_prefix
        return len(arg) > len(prefix) and arg.startswith(prefix)

    def split_flag(self, arg: str) -> Tuple[str, Optional[str]]:
        """Split a flag token into its id and inline value.

        The inline value is None when no separator follows the id and may
        be empty when the separator ends the token.
        """
        start = len(self._options.flag_prefix)
        index = arg.find(self._options.separator, start)
        if index == -1:
            return arg[start:], None
        return arg[start:index], arg[index + len(self._options.separator):]

    def parse(self, args: Sequence[str]) -> Result:
        """Match ``args`` against the registered flags.

        Stops at the first error and returns it; flags and flagless
        arguments handled before that point keep their new state.
        """
        count = len(args)
        a = 0
        while a < count:
            arg = args[a]
            a += 1

            if not self.is_flag(arg):
                self._flagless.append(arg)
                continue

            flag_id, inline = self.split_flag(arg)
            flag = self._registry.get(flag_id)

            if flag is None:
                if self._options.strict_flags:
                    log.debug("Unknown flag id '%s'", flag_id)
                    return Result.failure(flag_id, INVALID_FLAG_ID)
                log.debug("Skipping unknown flag id '%s'", flag_id)
                continue

            if not flag.type.takes_value:
                flag.trigger()
                log.debug("Set bool flag '%s'", flag.name)
                continue

            if inline:
                value = inline
            elif a < count:
                value = args[a]
                a += 1
            else:
                log.debug("No value for flag '%s'", flag_id)
                return Result.failure(flag_id, COULD_NOT_SET_VALUE)

            if not flag.set_value(value):
                log.debug("Could not convert '%s' for %s flag '%s'",
                          value, flag.type.display_name, flag_id)
                return Result.failure(flag_id, COULD_NOT_SET_VALUE)

            log.debug("Set flag '%s' to %r", flag.name, flag.value)

        return Result()

    def call(self) -> Result:
        """Run callbacks of triggered flags; return the first failure."""
        for flag in self._registry.flags:
            if flag.triggered and flag.callback is not None:
                result = flag.call()
                if not result.ok:
                    log.debug("Callback for flag '%s' failed: %s", flag.name, result.error)
                    return result
        return Result()

    def reset(self) -> None:
        """Forget the last parse: defaults restored, flagless list cleared."""
        self._registry.reset()
        self._flagless.clear()

    def to_string(self) -> str:
        return self._registry.describe(self._options.flag_prefix)

    @property
    def args(self) -> List[str]:
        """Arguments that were not flags, in input order."""
        return self._flagless

    @property
    def flags(self) -> List[Flag]:
        return self._registry.flags

    @property
    def table(self) -> Dict[str, Flag]:
        return self._registry.table

    @property
    def registry(self) -> FlagRegistry:
        return self._registry

    @property
    def options(self) -> Options:
        return self._options
