"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services own the repository calls and logging around one aggregate;
    authorization decisions come from ``access_control`` and are made by
    the caller before a service mutates anything.
    """

    pass
