"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold progress rules that span several fields of the
    aggregate or several aggregates. They never perform remote I/O.
    """

    pass
