"""Exceptions raised by the lookup core and the dataset loader."""


class DropLookupError(Exception):
    """Base class for drop-lookup errors."""


class DatasetNotLoadedError(DropLookupError):
    """Raised when the core is queried before any dataset was installed."""


class DatasetFormatError(DropLookupError):
    """Raised when a data blob or row cannot be turned into a Dataset."""


class EntityNotFoundError(DropLookupError, IndexError):
    """Raised when a drill-down targets a row index that does not exist."""

    def __init__(self, kind: str, index: int):
        self.kind = kind
        self.index = index
        super().__init__(f"No {kind} row at index {index}")


class UnknownVersionError(DropLookupError, KeyError):
    """Raised when a data version is not listed in the version catalog."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Unknown version"
