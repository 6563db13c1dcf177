# expense_tracker/cli.py
import logging

import anyio
import click
import yaml

from expense_tracker.config import load_config
from expense_tracker.errors import StorageError, ValidationError
from expense_tracker.store import ExpenseStore
from expense_tracker.windows import Window


def _format_expense(expense):
    moment = expense.parsed_date()
    day = moment.strftime("%Y-%m-%d") if moment else "-"
    line = f"#{expense.id}  ${expense.amount:.2f}  {expense.category}  {day}"
    if expense.note:
        line += f"  {expense.note}"
    return line


def _open_store(ctx):
    cfg = ctx.obj["config"]
    try:
        store = ExpenseStore(cfg["db_path"], week_start=cfg["week_start"])
    except ValidationError as e:
        raise click.ClickException(f"Invalid config: {e}")
    try:
        anyio.run(store.ensure_schema)
    except StorageError as e:
        raise click.ClickException(f"Could not prepare database: {e}")
    return store


@click.group()
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to a YAML config file (default: expenses.yaml)'
)
@click.option(
    '--db', 'db_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='SQLite database file (overrides config)'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    default=False,
    help='Enable debug logging'
)
@click.pass_context
def main(ctx, config_path, db_path, verbose):
    """Record, list and delete personal expenses in a local SQLite file."""
    try:
        cfg = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid config: {e}")
    if db_path:
        cfg['db_path'] = db_path
    level = 'DEBUG' if verbose else str(cfg.get('log_level', 'WARNING')).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise click.ClickException(f"Invalid config: unknown log_level {level!r}")
    logging.basicConfig(level=level)
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@main.command()
@click.argument('amount')
@click.argument('category')
@click.option('--note', default=None, help='Optional note')
@click.pass_context
def add(ctx, amount, category, note):
    """Add an expense of AMOUNT under CATEGORY, stamped with the current time."""
    store = _open_store(ctx)
    try:
        anyio.run(store.add, amount, category, note)
    except ValidationError as e:
        raise click.ClickException(str(e))
    except StorageError as e:
        raise click.ClickException(f"Could not save expense: {e}")
    click.echo("Added expense.")


@main.command(name='list')
@click.option(
    '--filter', 'window',
    default=Window.ALL.value,
    type=click.Choice([w.value for w in Window]),
    help='Show all expenses, this week, or this month'
)
@click.pass_context
def list_expenses(ctx, window):
    """List expenses, most recently added first."""
    store = _open_store(ctx)
    try:
        expenses = anyio.run(store.list_filtered, window)
    except StorageError as e:
        raise click.ClickException(f"Could not read expenses: {e}")
    if not expenses:
        click.echo("No expenses yet.")
        return
    for expense in expenses:
        click.echo(_format_expense(expense))


@main.command()
@click.argument('expense_id', type=int)
@click.pass_context
def delete(ctx, expense_id):
    """Delete the expense with EXPENSE_ID."""
    store = _open_store(ctx)
    try:
        anyio.run(store.remove, expense_id)
    except StorageError as e:
        raise click.ClickException(f"Could not delete expense: {e}")
    click.echo(f"Deleted expense #{expense_id}.")
