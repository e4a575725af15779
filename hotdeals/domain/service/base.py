"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the marketplace rules that span entities: reference
    resolution, tree constraints, the vote and lifecycle rules of the ledger.
    """

    pass
