"""Errors surfaced by the todo store. All are recoverable by the caller."""


class TodoStoreError(Exception):
    pass


class NotFound(TodoStoreError):
    pass


class ValidationFailed(TodoStoreError):
    pass


class BackendUnavailable(TodoStoreError):
    pass


class ImportAborted(ValidationFailed):
    """Snapshot rejected before anything was cleared."""


class ImportIncomplete(TodoStoreError):
    """Import failed after the collection was cleared.

    The store holds `written` of the snapshot's records.
    """

    def __init__(self, message: str, written: int = 0, total: int = 0):
        super().__init__(message)
        self.written = written
        self.total = total
