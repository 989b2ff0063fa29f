class LedgerError(Exception):
    """Base class for errors raised by the ledger services."""


class ValidationError(LedgerError):
    """A mutation was rejected because it would break a ledger invariant."""


class NotFoundError(ValidationError):
    """A mutation referenced a group, user, or record that does not exist."""
