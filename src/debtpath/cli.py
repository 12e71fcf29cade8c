"""Command-line interface for DebtPath."""

from __future__ import annotations

import click

from .config import BaseConfig
from .context import MONTHLY_LEFTOVER_KEY, AppContext, create_app_context
from .logging_config import get_logger, setup_logging
from .models.debt import DebtItem
from .services.calculators import compare_options, format_months
from .services.debt_engine import ComputedDebt, DebtType, NeverPaysOff
from .services.debt_records import calculate_debt_totals
from .services.projections import (
    ProjectionScenario,
    calculate_debt_projection,
    calculate_interest_savings,
    project_payoff,
)
from .services.velocity import calculate_payment_velocity

logger = get_logger("cli")

DEBT_TYPE_CHOICES = [kind.value for kind in DebtType]


def _money(value) -> str:
    if isinstance(value, NeverPaysOff):
        return "n/a"
    return f"{value:,.2f}"


def _computed_debts(app: AppContext) -> list[ComputedDebt]:
    try:
        return app.computed_debts()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _weeks(scenario: ProjectionScenario) -> str:
    if isinstance(scenario.weeks_remaining, NeverPaysOff):
        return str(scenario.weeks_remaining)
    text = f"{scenario.weeks_remaining.count} weeks"
    if scenario.date_estimate is not None:
        text += f" (around {scenario.date_estimate.isoformat()})"
    if scenario.weeks_saved:
        text += f", {scenario.weeks_saved} weeks sooner"
    return text


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track debts and project when they will be paid off."""

    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_app_context(config)


@cli.command("add-debt")
@click.argument("name")
@click.option("--type", "debt_type", type=click.Choice(DEBT_TYPE_CHOICES), default="credit_card")
@click.option("--balance", type=float, default=0.0, help="Current balance (or mortgage principal)")
@click.option("--rate", type=float, default=0.0, help="APR, % per year")
@click.option(
    "--payment",
    type=float,
    default=0.0,
    help="Monthly payment (for a mortgage, a bank quote overriding the formula)",
)
@click.option("--loan-amount", type=float, default=None)
@click.option("--term-years", type=float, default=None, help="Mortgage term")
@click.option("--id", "debt_id", default=None, help="Overwrite the debt with this id")
@click.pass_obj
def add_debt(
    app: AppContext,
    name: str,
    debt_type: str,
    balance: float,
    rate: float,
    payment: float,
    loan_amount: float | None,
    term_years: float | None,
    debt_id: str | None,
) -> None:
    """Add a debt, or replace an existing one with --id."""

    item = DebtItem(
        name=name,
        debt_type=debt_type,
        balance=balance,
        interest_rate=rate,
        monthly_payment=payment,
        loan_amount=loan_amount,
        mortgage_term_years=term_years,
    )
    if debt_id:
        item.id = debt_id
    saved = app.debt_repo.upsert(item)
    logger.info("Debt saved", extra={"debt_id": saved.id, "debt_type": saved.debt_type})
    click.echo(f"Saved {saved.name} ({saved.id})")


@cli.command("remove-debt")
@click.argument("debt_id")
@click.pass_obj
def remove_debt(app: AppContext, debt_id: str) -> None:
    """Delete a debt."""

    if not app.debt_repo.delete(debt_id):
        raise click.ClickException(f"No debt with id {debt_id}")
    click.echo(f"Removed {debt_id}")


@cli.command("pay")
@click.argument("debt_id")
@click.argument("amount", type=float)
@click.pass_obj
def pay(app: AppContext, debt_id: str, amount: float) -> None:
    """Record a payment against a debt's balance."""

    if amount <= 0:
        raise click.BadParameter("amount must be positive", param_hint="AMOUNT")
    debt = app.debt_repo.record_payment(debt_id, amount)
    if debt is None:
        raise click.ClickException(f"No debt with id {debt_id}")
    click.echo(f"{debt.name}: balance now {_money(debt.outstanding)}")


@cli.command("list")
@click.pass_obj
def list_debts(app: AppContext) -> None:
    """Show every debt with its payoff figures."""

    computed = _computed_debts(app)
    if not computed:
        click.echo("No debts recorded.")
        return

    for debt in computed:
        click.echo(
            f"{debt.id}  {debt.name:<20} {debt.debt_type.value:<14} "
            f"{_money(debt.outstanding):>12}  pay {_money(debt.monthly_payment)}/mo  "
            f"{format_months(debt.months_to_payoff)}  interest {_money(debt.total_interest)}"
        )

    totals = calculate_debt_totals(computed)
    click.echo(
        f"Total {_money(totals.total_debt)}, paying {_money(totals.total_monthly_payment)}/mo, "
        f"interest {_money(totals.total_interest)}"
    )
    if totals.has_unpayable_debt:
        click.echo("Some debts cannot be paid off at the current rate; their interest is not included.")


@cli.command("check-in")
@click.argument("week", type=click.IntRange(min=1))
@click.option("--extra", type=click.FloatRange(min=0), default=0.0, help="Extra paid this week")
@click.option("--mood", default="okay")
@click.pass_obj
def check_in(app: AppContext, week: int, extra: float, mood: str) -> None:
    """Record the weekly check-in."""

    app.check_in_repo.record(week, extra_payment=extra, mood=mood)
    click.echo(f"Week {week} checked in.")


@cli.command("set-leftover")
@click.argument("amount", type=float)
@click.pass_obj
def set_leftover(app: AppContext, amount: float) -> None:
    """Store the monthly amount left after essentials."""

    app.settings_repo.set(MONTHLY_LEFTOVER_KEY, str(amount), "Disposable income per month")
    click.echo(f"Monthly leftover set to {_money(amount)}")


@cli.command("project")
@click.option("--leftover", type=float, default=None, help="Override the stored monthly leftover")
@click.option("--extra", type=float, default=None, help="Override the weekly average extra payment")
@click.pass_obj
def project(app: AppContext, leftover: float | None, extra: float | None) -> None:
    """Project payoff at current pace, with extra payments, and best case."""

    computed = _computed_debts(app)
    if leftover is None:
        leftover = app.monthly_leftover()
    if extra is None:
        extra = calculate_payment_velocity(app.check_in_repo.list_all()).average_extra_payment

    projection = project_payoff(computed, leftover, extra)
    click.echo(f"Current pace:        {_weeks(projection.current_pace)}")
    click.echo(f"With extra payments: {_weeks(projection.with_extra_payments)}")
    click.echo(f"Best case:           {_weeks(projection.best_case)}")

    months = calculate_debt_projection(computed, leftover, committed=leftover > 0)
    if isinstance(months.current_timeline, NeverPaysOff) or isinstance(months.with_extra, NeverPaysOff):
        click.echo("Interest comparison unavailable: some debts cannot be paid off at the current rate.")
        return
    savings = calculate_interest_savings(
        computed, months.current_timeline.count, months.with_extra.count, leftover
    )
    click.echo(
        f"Estimated interest: {_money(savings.current_interest)} now, "
        f"{_money(savings.strategy_interest)} with leftover, "
        f"saving {_money(savings.interest_saved)}"
    )


@cli.command("savings")
@click.argument("price", type=float)
@click.option("--monthly-savings", type=float, required=True)
@click.option("--rate", type=float, required=True, help="Credit APR, % per year")
@click.option("--payment", type=float, required=True, help="Monthly credit payment")
def savings(price: float, monthly_savings: float, rate: float, payment: float) -> None:
    """Compare saving up against buying on credit."""

    result = compare_options(price, monthly_savings, rate, payment)
    click.echo(f"Saving:  {format_months(result.savings.months_to_save)}")
    click.echo(
        f"Credit:  {format_months(result.credit.months_to_pay)}"
        f"{' and still owing' if result.credit.capped else ''}, "
        f"costs {_money(result.cost_difference)} extra"
    )
    click.echo(f"Better option: {result.winner}")


def main() -> None:  # pragma: no cover - console entry point
    cli()
