class WireSizingError(Exception):
    """Base class for errors raised by the sizing toolkit."""

class InvalidInputError(WireSizingError, ValueError):
    """Circuit parameters that cannot describe a real circuit (negative distance,
    zero current, unknown material...). Raised before any table lookup."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}")

class TableLookupError(WireSizingError, LookupError):
    """A gauge/material/rating combination is missing from a reference table.

    The tables are complete for every gauge on the ladder, so this signals a
    programming error rather than bad user input.
    """
