"""Utility for resolving account names to IDs."""

from finavis.domain.chart_of_accounts import ChartOfAccounts


def resolve_account(chart: ChartOfAccounts, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        chart: Chart of accounts
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    # If it's already an integer, use it as ID
    if isinstance(account, int):
        if chart.lookup(account) is None:
            raise ValueError(f"Account ID {account} not found")
        return account

    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None
    if account_id is not None:
        if chart.lookup(account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    found = chart.find_by_name(account.strip())
    if found is None:
        raise ValueError(f"Account '{account}' not found")
    return found.id
