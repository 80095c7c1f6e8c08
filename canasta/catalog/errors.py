class CatalogError(Exception):
    """Base class for catalog listing errors."""


class StorageError(CatalogError):
    """A read against the catalog storage failed. Callers may retry."""


class StorageTimeout(StorageError):
    pass


class StorageUnavailable(StorageError):
    pass
