"""Error messages and exceptions raised by flagparse.

Parse-time problems are reported through ``Result`` values carrying one of the
fixed messages below. Mistakes made while *defining* flags raise exceptions.
"""

# Messages carried by failed parse results
INVALID_FLAG_ID = "invalid flag id used"
COULD_NOT_SET_VALUE = "could not set flag value"


class DuplicateFlagError(ValueError):
    """A flag name or alias is already registered."""

    def __init__(self, flag_id: str, owner: str = None):
        self.flag_id = flag_id
        self.owner = owner
        if owner is None:
            message = f"duplicate flag id '{flag_id}'"
        else:
            message = f"duplicate flag id '{flag_id}' (already used by flag '{owner}')"
        super().__init__(message)


class FlagValueError(ValueError):
    """A value string could not be converted to a flag's type."""

    def __init__(self, flag_id: str, value: str, type_name: str):
        self.flag_id = flag_id
        self.value = value
        super().__init__(
            f"Flag '{flag_id}' expects {type_name}, got '{value}'"
        )
