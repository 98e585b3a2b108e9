"""Registry of flag definitions and their name/alias lookup table."""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .definitions import Flag, FlagFn, Value
from .errors import DuplicateFlagError
from .flag_types import FlagType

log = logging.getLogger(__name__)


class FlagRegistry:
    """Owns registered flags and resolves names and aliases to them.

    Flags are kept in registration order. The lookup table maps every
    name and alias to the same ``Flag`` object, so a change made through
    one id is visible through all of them.
    """

    def __init__(self, flags: Iterable[Flag] = ()):
        self._flags: List[Flag] = []
        self._table: Dict[str, Flag] = {}
        for flag in flags:
            self.register(flag)

    def __contains__(self, flag_id: str) -> bool:
        return flag_id in self._table

    def __len__(self) -> int:
        return len(self._flags)

    def __iter__(self) -> Iterator[Flag]:
        return iter(list(self._flags))

    def register(self, flag: Flag) -> Flag:
        """Add a flag and index its name and aliases.

        Raises DuplicateFlagError if any of its ids is already taken, in
        which case nothing is registered.
        """
        seen = set()
        for flag_id in flag.ids:
            if flag_id in seen:
                raise DuplicateFlagError(flag_id, flag.name)
            if flag_id in self._table:
                raise DuplicateFlagError(flag_id, self._table[flag_id].name)
            seen.add(flag_id)

        self._flags.append(flag)
        for flag_id in flag.ids:
            self._table[flag_id] = flag

        log.debug("Registered %s flag '%s' (aliases: %s)",
                  flag.type.display_name, flag.name, list(flag.aliases))
        return flag

    def add(
        self,
        name: str,
        description: str = "",
        type: FlagType = FlagType.STRING,
        aliases: Iterable[str] = (),
        default: Any = None,
        callback: Optional[FlagFn] = None
    ) -> Flag:
        """Build a flag from its parts and register it."""
        return self.register(Flag(name, description, type, aliases, default, callback))

    def get(self, flag_id: str) -> Optional[Flag]:
        """Get a flag by name or alias."""
        return self._table.get(flag_id)

    @property
    def flags(self) -> List[Flag]:
        """All flags in registration order."""
        return list(self._flags)

    @property
    def table(self) -> Dict[str, Flag]:
        """Lookup table of every name and alias."""
        return dict(self._table)

    def triggered(self) -> List[Flag]:
        """Flags matched by the last parse, in registration order."""
        return [flag for flag in self._flags if flag.triggered]

    def to_dict(self) -> Dict[str, Value]:
        """Export current flag values keyed by flag name."""
        return {flag.name: flag.value for flag in self._flags}

    def reset(self) -> None:
        """Restore every flag to its default, untriggered state."""
        for flag in self._flags:
            flag.reset()

    def describe(self, prefix: str = "-") -> str:
        """One ``{prefix}{name}\\t\\t{description}`` line per flag."""
        output = ""
        for flag in self._flags:
            output += f"{prefix}{flag.name}\t\t{flag.description}\n"
        return output
