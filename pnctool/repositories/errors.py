class RecordNotFoundError(Exception):
    """Raised when a lookup or delete matches no row"""

    def __init__(self, message: str = "record not found"):
        super().__init__(message)


class EditConflictError(Exception):
    """Raised when a conditional update finds the stored version has moved on"""

    def __init__(self, message: str = "edit conflict"):
        super().__init__(message)


class StorageError(Exception):
    """Any other persistence failure; the original exception is chained"""
