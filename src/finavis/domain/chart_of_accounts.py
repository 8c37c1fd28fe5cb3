"""Chart of accounts and transaction templates.

The chart is static reference data: accounts are created once when the
registry is built and never change afterwards.
"""

from typing import Iterable, Optional

from finavis.domain.entities import (
    Account,
    AccountSubType,
    AccountType,
    TemplateCategory,
    TransactionTemplate,
)

CASH_ACCOUNT_ID = 1
BANK_ACCOUNT_ID = 16
CAPITAL_STOCK_ACCOUNT_ID = 6
RETAINED_EARNINGS_ACCOUNT_ID = 15
SALES_ACCOUNT_ID = 7
PURCHASES_ACCOUNT_ID = 8
SALARIES_ACCOUNT_ID = 9
EQUIPMENT_ACCOUNT_ID = 10
INCOME_TAX_ACCOUNT_ID = 13
ACCRUED_INCOME_TAX_ACCOUNT_ID = 14

CAPITAL_STOCK_NAME = "資本金"

DEFAULT_ACCOUNTS: tuple[Account, ...] = (
    Account(1, "現金", AccountType.ASSET, AccountSubType.CURRENT),
    Account(2, "売掛金", AccountType.ASSET, AccountSubType.CURRENT),
    Account(3, "商品", AccountType.ASSET, AccountSubType.CURRENT),
    Account(16, "普通預金", AccountType.ASSET, AccountSubType.CURRENT),
    Account(10, "備品", AccountType.ASSET, AccountSubType.FIXED),
    Account(4, "買掛金", AccountType.LIABILITY, AccountSubType.CURRENT),
    Account(14, "未払法人税等", AccountType.LIABILITY, AccountSubType.CURRENT),
    Account(5, "借入金", AccountType.LIABILITY, AccountSubType.FIXED),
    Account(6, CAPITAL_STOCK_NAME, AccountType.EQUITY),
    Account(15, "利益剰余金", AccountType.EQUITY),
    Account(7, "売上", AccountType.REVENUE),
    Account(17, "受取利息", AccountType.REVENUE, AccountSubType.NON_OPERATING_REVENUE),
    Account(18, "固定資産売却益", AccountType.REVENUE, AccountSubType.EXTRAORDINARY_PROFIT),
    Account(8, "仕入", AccountType.EXPENSE, AccountSubType.COGS),
    Account(9, "給料", AccountType.EXPENSE, AccountSubType.SGA),
    Account(11, "消耗品費", AccountType.EXPENSE, AccountSubType.SGA),
    Account(12, "支払利息", AccountType.EXPENSE, AccountSubType.NON_OPERATING_EXPENSE),
    Account(19, "災害損失", AccountType.EXPENSE, AccountSubType.EXTRAORDINARY_LOSS),
    Account(13, "法人税等", AccountType.EXPENSE, AccountSubType.TAX),
)

DEFAULT_TEMPLATES: tuple[TransactionTemplate, ...] = (
    TransactionTemplate("revenue-cash", "現金での売上", TemplateCategory.REVENUE, 1, 7),
    TransactionTemplate("revenue-receivable", "掛けでの売上", TemplateCategory.REVENUE, 2, 7),
    TransactionTemplate("expense-cogs-cash", "現金での仕入", TemplateCategory.EXPENSE, 8, 1),
    TransactionTemplate("expense-cogs-payable", "掛けでの仕入", TemplateCategory.EXPENSE, 8, 4),
    TransactionTemplate(
        "expense-sga-cash", "現金での経費支払い（販売管理費）", TemplateCategory.EXPENSE, 11, 1
    ),
    TransactionTemplate(
        "expense-sga-payable", "掛けでの経費支払い（販売管理費）", TemplateCategory.EXPENSE, 11, 4
    ),
    TransactionTemplate(
        "asset-purchase-cash", "固定資産を現金で購入", TemplateCategory.INVESTING, 10, 1
    ),
    TransactionTemplate(
        "loan-repayment-cash", "借入金を現金で返済", TemplateCategory.FINANCING, 5, 1
    ),
    TransactionTemplate("financing-loan", "銀行からの借入", TemplateCategory.FINANCING, 1, 5),
    TransactionTemplate("financing-capital", "株主からの出資", TemplateCategory.FINANCING, 1, 6),
)


class ChartOfAccounts:
    """Read-only registry of accounts and transaction templates."""

    def __init__(
        self,
        accounts: Iterable[Account] = DEFAULT_ACCOUNTS,
        templates: Iterable[TransactionTemplate] = DEFAULT_TEMPLATES,
        cash_account_ids: Iterable[int] = (CASH_ACCOUNT_ID, BANK_ACCOUNT_ID),
        retained_earnings_account_id: int = RETAINED_EARNINGS_ACCOUNT_ID,
    ):
        """Initialize the registry.

        Args:
            accounts: Account definitions, in display order
            templates: Transaction templates, in display order
            cash_account_ids: Accounts treated as cash for the cash flow statement
            retained_earnings_account_id: Account receiving net income at closing

        Raises:
            ValueError: If account ids or template ids are duplicated, or a
                template or designated account refers to an unknown id
        """
        self._accounts: dict[int, Account] = {}
        for account in accounts:
            if account.id in self._accounts:
                raise ValueError(f"Duplicate account id {account.id}")
            self._accounts[account.id] = account

        self._templates: dict[str, TransactionTemplate] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate template id '{template.id}'")
            for account_id in (template.debit_account_id, template.credit_account_id):
                if account_id not in self._accounts:
                    raise ValueError(
                        f"Template '{template.id}' refers to unknown account {account_id}"
                    )
            self._templates[template.id] = template

        self.cash_account_ids = frozenset(cash_account_ids)
        self.retained_earnings_account_id = retained_earnings_account_id
        for account_id in (*self.cash_account_ids, retained_earnings_account_id):
            if account_id not in self._accounts:
                raise ValueError(f"Unknown designated account {account_id}")

    def lookup(self, account_id: int) -> Optional[Account]:
        """Return the account with ``account_id`` or None."""
        return self._accounts.get(account_id)

    def find_by_name(self, name: str) -> Optional[Account]:
        """Return the account with display name ``name`` or None."""
        for account in self._accounts.values():
            if account.name == name:
                return account
        return None

    def name_of(self, account_id: int) -> str:
        """Display name for ``account_id``; unknown ids render as ``#<id>``."""
        account = self._accounts.get(account_id)
        return account.name if account is not None else f"#{account_id}"

    def is_cash(self, account_id: int) -> bool:
        return account_id in self.cash_account_ids

    def list_accounts(self) -> list[Account]:
        return list(self._accounts.values())

    def get_template(self, template_id: str) -> Optional[TransactionTemplate]:
        return self._templates.get(template_id)

    def list_templates(self) -> list[TransactionTemplate]:
        return list(self._templates.values())
