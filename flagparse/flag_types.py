"""Flag value types understood by the parser."""

from enum import IntEnum


class FlagType(IntEnum):
    """The closed set of value types a flag can declare."""
    STRING = 1
    NUMBER = 2
    BOOL = 3

    @property
    def display_name(self) -> str:
        """Get user-friendly name for the type."""
        names = {
            FlagType.STRING: "string",
            FlagType.NUMBER: "number",
            FlagType.BOOL: "bool",
        }
        return names.get(self, "unknown")

    @property
    def python_type(self) -> type:
        """Python type of the values stored for this flag type."""
        types = {
            FlagType.STRING: str,
            FlagType.NUMBER: float,
            FlagType.BOOL: bool,
        }
        return types[self]

    @property
    def takes_value(self) -> bool:
        """Whether matching a flag of this type consumes a value."""
        # BOOL flags are set by presence alone
        return self != FlagType.BOOL

    @classmethod
    def from_name(cls, name: str) -> 'FlagType':
        """Look up a type by its display name (case-insensitive)."""
        for member in cls:
            if member.display_name == name.strip().lower():
                return member
        valid = ", ".join(member.display_name for member in cls)
        raise ValueError(f"Unknown flag type '{name}', expected one of [{valid}]")
