"""Exceptions raised while loading a GTFS feed."""


class FeedError(Exception):
    """Base class for all feed loading errors."""


class FeedFileError(FeedError):
    """A feed file could not be opened or its header is unusable.

    Raised for structural failures only. Field-level parse problems never
    raise; the affected field falls back to its zero value instead.
    """

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename}: {reason}")


class UnresolvedReferenceError(FeedError):
    """A row references an id that is not present in an already loaded file.

    Only raised when the loader runs in strict mode.
    """

    def __init__(self, filename: str, row_number: int, reference: str) -> None:
        self.filename = filename
        self.row_number = row_number
        self.reference = reference
        super().__init__(f"{filename} row {row_number}: unknown {reference}")
