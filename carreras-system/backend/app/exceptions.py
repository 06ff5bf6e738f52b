"""Domain errors raised by services and validators.

All of them are ValueErrors so routers can keep a single
``except ValueError`` around service calls.
"""


class CarrerasError(ValueError):
    """Base error for the carreras backend."""
    pass


class InvalidAmount(CarrerasError):
    """A mandatory money or percentage value was empty or unusable."""
    pass


class InvalidDate(CarrerasError):
    """Date is not a real 'YYYY-MM-DD' calendar day."""
    pass


class InvalidEnum(CarrerasError):
    """Value is outside a fixed set (currency, operation kind, ...)."""
    pass


class UnresolvedReference(CarrerasError):
    """A referenced row (photographer, movement type, account) does not exist."""
    pass


class EmptyReplacementGuard(CarrerasError):
    """Refused to replace a non-empty child list with an empty one."""
    pass


class ScopeViolation(CarrerasError):
    """Event-scoped ledger rows cannot be touched from the global ledger."""
    pass


class NotFound(CarrerasError):
    """Row with the given id does not exist."""
    pass
