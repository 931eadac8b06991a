"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class CatalogError(ServiceError):
    """A single scope query produced no usable results."""


class ItemsNotFound(CatalogError):
    pass


class DecodeFailure(CatalogError):
    pass


class AssetMissing(ServiceError):
    pass
