"""Flag definitions, flag data and the parse result/option records."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple, Union

from .errors import FlagValueError
from .flag_types import FlagType

log = logging.getLogger(__name__)

Value = Union[str, float, bool]

# Whole-string numeric literal over ASCII digits only: optional sign,
# digits with an optional fraction (or a bare fraction), optional exponent.
_NUMBER_RE = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_SPECIAL_NUMBER_RE = re.compile(r'[+-]?(?:inf|infinity|nan)', re.IGNORECASE | re.ASCII)


def parse_number(text: str) -> Optional[float]:
    """Parse ``text`` as a floating-point literal, or return None.

    Unlike ``float()`` this rejects surrounding whitespace, digit
    separators and any trailing characters.
    """
    if _NUMBER_RE.fullmatch(text) or _SPECIAL_NUMBER_RE.fullmatch(text):
        return float(text)
    return None


@dataclass(frozen=True)
class FlagData:
    """Tagged value of a flag: exactly one of text, number or boolean."""
    type: FlagType
    value: Value

    def __post_init__(self):
        expected = self.type.python_type
        value = self.value
        if self.type == FlagType.NUMBER:
            # bool is an int subclass but never a number here
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"number flag data expects float, got {type(value).__name__}")
            object.__setattr__(self, 'value', float(value))
        elif not isinstance(value, expected):
            raise TypeError(
                f"{self.type.display_name} flag data expects {expected.__name__}, "
                f"got {type(value).__name__}"
            )

    @classmethod
    def text(cls, value: str) -> 'FlagData':
        return cls(FlagType.STRING, value)

    @classmethod
    def number(cls, value: float) -> 'FlagData':
        return cls(FlagType.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> 'FlagData':
        return cls(FlagType.BOOL, value)

    @classmethod
    def default_for(cls, flag_type: FlagType) -> 'FlagData':
        """Zero value of the given type."""
        defaults = {
            FlagType.STRING: "",
            FlagType.NUMBER: 0.0,
            FlagType.BOOL: False,
        }
        return cls(flag_type, defaults[flag_type])


@dataclass(frozen=True)
class Result:
    """Outcome of ``Parser.parse`` and ``Parser.call``."""
    ok: bool = True
    # the flag id that caused the error
    flag_id: Optional[str] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def failure(cls, flag_id: str, error: str) -> 'Result':
        return cls(False, flag_id, error)


@dataclass(frozen=True)
class Options:
    """Configuration of a parse session."""
    flag_prefix: str = "-"
    separator: str = "="
    # when set, unknown flag ids abort parsing instead of being skipped
    strict_flags: bool = True

    def __post_init__(self):
        if not isinstance(self.flag_prefix, str) or not self.flag_prefix:
            raise ValueError("flag_prefix must be a non-empty string")
        if not isinstance(self.separator, str) or not self.separator:
            raise ValueError("separator must be a non-empty string")


FlagFn = Callable[['Flag'], Optional[Result]]


class Flag:
    """A named, typed command-line flag.

    ``data`` holds the default value until the flag is matched while
    parsing, then the parsed value. ``triggered`` records whether that
    happened.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        type: FlagType = FlagType.STRING,
        aliases: Iterable[str] = (),
        default: Any = None,
        callback: Optional[FlagFn] = None
    ):
        if not isinstance(name, str) or not name:
            raise ValueError("Flag name must be a non-empty string")
        if isinstance(aliases, str):
            aliases = (aliases,)

        self.name = name
        self.description = description
        self.type = FlagType(type)
        self.aliases: Tuple[str, ...] = tuple(aliases)
        self.callback = callback

        for alias in self.aliases:
            if not isinstance(alias, str) or not alias:
                raise ValueError(f"Flag '{name}' has an empty alias")

        if default is None:
            self.default = FlagData.default_for(self.type)
        elif isinstance(default, FlagData):
            if default.type != self.type:
                raise TypeError(
                    f"Flag '{name}' expects {self.type.display_name} default, "
                    f"got {default.type.display_name}"
                )
            self.default = default
        else:
            try:
                self.default = FlagData(self.type, default)
            except TypeError as exc:
                raise TypeError(f"Flag '{name}' has an invalid default: {exc}") from exc

        self.data = self.default
        self.triggered = False

    def __repr__(self) -> str:
        return (f"Flag(name={self.name!r}, type={self.type.display_name}, "
                f"value={self.value!r}, triggered={self.triggered})")

    @property
    def value(self) -> Value:
        """Current value of the flag."""
        return self.data.value

    @property
    def ids(self) -> Tuple[str, ...]:
        """The name followed by every alias."""
        return (self.name,) + self.aliases

    def trigger(self) -> None:
        """Mark a BOOL flag as present."""
        self.data = FlagData.boolean(True)
        self.triggered = True

    def set_value(self, text: str) -> bool:
        """Convert ``text`` to this flag's type and store it.

        Returns False, leaving the flag untouched, when the conversion fails.
        """
        if not self.type.takes_value:
            self.trigger()
            return True

        if self.type == FlagType.NUMBER:
            number = parse_number(text)
            if number is None:
                return False
            self.data = FlagData.number(number)
        else:
            self.data = FlagData.text(text)

        self.triggered = True
        return True

    def assign(self, text: str) -> None:
        """Like ``set_value`` but raises ``FlagValueError`` on bad input."""
        if not self.set_value(text):
            raise FlagValueError(self.name, text, self.type.display_name)

    def reset(self) -> None:
        """Restore the default value and clear ``triggered``."""
        self.data = self.default
        self.triggered = False

    def call(self) -> Result:
        """Run the callback, if any. A callback returning None succeeds."""
        if self.callback is None:
            return Result()
        log.debug("Calling callback for flag '%s'", self.name)
        result = self.callback(self)
        return Result() if result is None else result
