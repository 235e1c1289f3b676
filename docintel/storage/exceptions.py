class StorageUnavailableError(Exception):
    """Raised when the storage backend cannot read, write or delete an object."""
