"""
Error taxonomy for the retrieval and decision engine.
Structural problems raise; "no good match" never does.
"""


class ShelfSenseError(Exception):
    """Base class for all engine errors."""


class SchemaError(ShelfSenseError, ValueError):
    """Raised when a catalog cannot be built from the given records."""


class DimensionMismatch(ShelfSenseError, ValueError):
    """Raised when a query vector's dimension disagrees with the catalog."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Query vector dimension {actual} does not match catalog dimension {expected}")


class EncoderUnavailable(ShelfSenseError, RuntimeError):
    """Raised when the text encoder cannot produce a vector."""


class ConfigError(ShelfSenseError, ValueError):
    """Raised at startup when environment settings are invalid."""

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__("Invalid configuration: " + "; ".join(self.issues))
