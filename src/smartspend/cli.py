"""Command line entry points for operating a SmartSpend store."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .domain.periods import Period
from .logging_config import setup_logging
from .services.export_csv import export_transactions_csv
from .services.overview import load_analytics, load_dashboard


def _context(ctx: click.Context) -> AppContext:
    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_app_context(config)
        ctx.call_on_close(ctx.obj.dispose)
    return ctx.obj


def _fail(error: Exception) -> None:
    raise click.ClickException(str(error))


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """SmartSpend maintenance commands."""


@main.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create any missing tables."""

    app = _context(ctx)
    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@main.command("summary")
@click.option("--owner", "owner_id", required=True, help="Owner (user) id")
@click.option(
    "--period",
    type=click.Choice([p.value for p in Period]),
    default=Period.MONTHLY.value,
    show_default=True,
)
@click.pass_context
def summary(ctx: click.Context, owner_id: str, period: str) -> None:
    """Print totals and the category breakdown for a period."""

    app = _context(ctx)
    result = load_analytics(app.gateway, owner_id, period, today=date.today())
    if not result.ok:
        _fail(result.error)

    report = result.data
    click.echo(f"{report.label}")
    click.echo(f"  Income:   {report.totals.income:,.2f}")
    click.echo(f"  Expenses: {report.totals.expense:,.2f}")
    click.echo(f"  Balance:  {report.totals.balance:,.2f}")
    if not report.breakdown:
        click.echo("No transaction data available")
        return
    click.echo("Category breakdown:")
    for item in report.breakdown:
        share = f"{item.expense_share:5.1f}%" if item.expense_share is not None else "     -"
        click.echo(f"  {item.category:<16} {item.expense:>12,.2f} {share}")


@main.command("dashboard")
@click.option("--owner", "owner_id", required=True, help="Owner (user) id")
@click.pass_context
def dashboard(ctx: click.Context, owner_id: str) -> None:
    """Print balance, this month's budget status, goals and recent activity."""

    app = _context(ctx)
    result = load_dashboard(
        app.gateway, owner_id, today=date.today(), recent_limit=app.config.RECENT_LIMIT
    )
    if not result.ok:
        _fail(result.error)

    report = result.data
    click.echo(f"Balance: {report.totals.balance:,.2f}")
    status = report.budget_status
    if report.budget is None:
        click.echo("Budget: not set for this month")
    else:
        click.echo(
            f"Budget: {report.monthly_expense:,.2f} of {status.budget:,.2f} "
            f"({status.percent:.1f}%, {status.status.value})"
        )
    for item in report.goals:
        click.echo(
            f"Goal {item.goal.title}: {item.goal.amount:,.2f} / {item.goal.target:,.2f} "
            f"({item.progress.display_percent:.0f}%)"
        )
    if report.recent:
        click.echo("Recent transactions:")
    for txn in report.recent:
        sign = "+" if txn.is_income else "-"
        click.echo(f"  {txn.date.isoformat()} {txn.category:<16} {sign}{txn.amount:,.2f}")


@main.command("set-budget")
@click.option("--owner", "owner_id", required=True, help="Owner (user) id")
@click.option("--amount", required=True, help="Monthly spending limit")
@click.option("--month", default=None, help="Month name, defaults to the current month")
@click.option("--year", type=int, default=None, help="Defaults to the current year")
@click.pass_context
def set_budget(ctx: click.Context, owner_id: str, amount: str, month: str | None, year: int | None) -> None:
    """Set (or overwrite) the budget for a month."""

    app = _context(ctx)
    result = app.gateway.set_budget(owner_id, amount, month=month, year=year)
    if not result.ok:
        _fail(result.error)
    budget = result.data
    click.echo(f"Budget for {budget.month.title()} {budget.year}: {budget.amount:,.2f}")


@main.command("export")
@click.option("--owner", "owner_id", required=True, help="Owner (user) id")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_context
def export(ctx: click.Context, owner_id: str, output: Path) -> None:
    """Write the owner's transactions to a CSV file."""

    app = _context(ctx)
    result = app.gateway.list_transactions(owner_id)
    if not result.ok:
        _fail(result.error)
    path = export_transactions_csv(transactions=result.data, output_path=output)
    click.echo(f"Exported {len(result.data)} transactions to {path}")


if __name__ == "__main__":  # pragma: no cover
    main()
