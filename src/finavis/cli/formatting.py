"""Plain-text rendering of statements for the CLI."""

from decimal import Decimal

import click

from finavis.domain.chart_of_accounts import ChartOfAccounts
from finavis.domain.entities import BalanceSheet, CashFlowStatement, IncomeStatement
from finavis.utils.amount_parser import format_amount

WIDTH = 60


def _line(label: str, amount: Decimal, indent: int = 0) -> str:
    label = " " * indent + label
    return f"{label:<{WIDTH - 16}}{format_amount(amount):>16}"


def _bucket_lines(chart: ChartOfAccounts, bucket: dict[int, Decimal], indent: int = 4) -> list[str]:
    return [_line(chart.name_of(account_id), amount, indent) for account_id, amount in bucket.items()]


def render_balance_sheet(chart: ChartOfAccounts, sheet: BalanceSheet) -> list[str]:
    """Lines for a balance sheet."""
    lines = ["貸借対照表", "=" * WIDTH, "資産の部"]
    lines.append("  流動資産")
    lines.extend(_bucket_lines(chart, sheet.current_assets))
    lines.append("  固定資産")
    lines.extend(_bucket_lines(chart, sheet.fixed_assets))
    lines.append(_line("資産合計", sheet.total_assets))
    lines.append("-" * WIDTH)
    lines.append("負債の部")
    lines.append("  流動負債")
    lines.extend(_bucket_lines(chart, sheet.current_liabilities))
    lines.append("  固定負債")
    lines.extend(_bucket_lines(chart, sheet.fixed_liabilities))
    lines.append(_line("負債合計", sheet.total_liabilities))
    lines.append("-" * WIDTH)
    lines.append("純資産の部")
    lines.append(_line("資本金", sheet.capital_stock, 2))
    lines.append(_line("利益剰余金", sheet.retained_earnings, 2))
    lines.append(_line("純資産合計", sheet.total_equity))
    lines.append("=" * WIDTH)
    lines.append(_line("負債・純資産合計", sheet.total_liabilities + sheet.total_equity))
    return lines


def render_income_statement(chart: ChartOfAccounts, statement: IncomeStatement) -> list[str]:
    """Lines for an income statement, following the stepwise profit layout."""
    lines = ["損益計算書", "=" * WIDTH]
    sections = [
        ("売上高", statement.revenue, statement.total_revenue, None, None),
        ("売上原価", statement.cost_of_sales, statement.total_cost_of_sales,
         "売上総利益", statement.gross_profit),
        ("販売費及び一般管理費", statement.sga, statement.total_sga,
         "営業利益", statement.operating_income),
        ("営業外収益", statement.non_operating_revenue, statement.total_non_operating_revenue,
         None, None),
        ("営業外費用", statement.non_operating_expense, statement.total_non_operating_expense,
         "経常利益", statement.ordinary_income),
        ("特別利益", statement.extraordinary_profit, statement.total_extraordinary_profit,
         None, None),
        ("特別損失", statement.extraordinary_loss, statement.total_extraordinary_loss,
         "税引前当期純利益", statement.pre_tax_income),
        ("法人税等", statement.income_taxes, statement.total_income_taxes,
         "当期純利益", statement.net_income),
    ]
    for title, bucket, total, result_label, result in sections:
        lines.append(_line(title, total, 2))
        lines.extend(_bucket_lines(chart, bucket, 6))
        if result_label is not None:
            lines.append("-" * WIDTH)
            lines.append(_line(result_label, result))
    return lines


def render_cash_flow_statement(statement: CashFlowStatement) -> list[str]:
    """Lines for a cash flow statement."""
    return [
        "キャッシュフロー計算書",
        "=" * WIDTH,
        _line("期首現金残高", statement.beginning_cash_balance),
        _line("営業活動によるキャッシュフロー", statement.operating_activities, 2),
        _line("投資活動によるキャッシュフロー", statement.investing_activities, 2),
        _line("財務活動によるキャッシュフロー", statement.financing_activities, 2),
        "-" * WIDTH,
        _line("現金の増減額", statement.net_cash_flow),
        _line("期末現金残高", statement.ending_cash_balance),
    ]


def echo_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)
