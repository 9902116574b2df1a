"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that span an identity and its bindings
    and are not tied to a single store or transport.
    """

    pass
