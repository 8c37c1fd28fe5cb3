"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as repeating a one-shot operation."""


class AlreadyClosedError(ConflictError):
    """The current fiscal period has already been closed."""


class TaxAlreadyPostedError(ConflictError):
    """Income tax has already been booked for the current period."""


class PeriodNotConfiguredError(DomainError):
    """Operation requires a fiscal period but none is set."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def template_not_found(template_id: str) -> str:
    """Return message for missing transaction template."""
    return f"Transaction template '{template_id}' not found"


def account_not_found(account_id: int) -> str:
    """Return message for an account id missing from the chart of accounts."""
    return f"Account {account_id} not found"


def unbalanced_entries(total_debit, total_credit) -> str:
    """Return message when debit and credit totals differ."""
    return f"Debits ({total_debit:,}) and credits ({total_credit:,}) do not balance"


def period_not_configured() -> str:
    """Return message for operations attempted before setup."""
    return "Fiscal period is not configured. Set a start date first."


def period_already_closed(label: str) -> str:
    """Return message when closing is attempted twice."""
    return f"Fiscal period {label} has already been closed"


def history_index_out_of_range(index: int, count: int) -> str:
    """Return message for an invalid historical period index."""
    if count == 0:
        return f"Historical period {index} not found: no periods have been closed"
    return f"Historical period {index} not found (valid range: 0-{count - 1})"
