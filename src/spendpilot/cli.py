"""
SpendPilot CLI — command-line interface.

Usage:
    spendpilot add 12.50 "Lunch" --category Food
    spendpilot edit <expense-id> --amount 14
    spendpilot budget set Food 400
    spendpilot dashboard
    spendpilot export --format csv --output expenses.csv
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from spendpilot import __version__
from spendpilot.errors import SpendPilotError
from spendpilot.models.budget import GoalPriority
from spendpilot.models.expense import DatePreset, ExpenseFilters
from spendpilot.models.intelligence import FinancialHealth, InsightType, SmartInsight
from spendpilot.tracker import ExpenseTracker

app = typer.Typer(
    name="spendpilot",
    help="💸 SpendPilot — personal expense tracking with built-in intelligence",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
budget_app = typer.Typer(help="Manage monthly category budgets.", no_args_is_help=True)
goal_app = typer.Typer(help="Manage savings goals.", no_args_is_help=True)
category_app = typer.Typer(help="Manage expense categories.", no_args_is_help=True)
app.add_typer(budget_app, name="budget")
app.add_typer(goal_app, name="goal")
app.add_typer(category_app, name="categories")

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]SpendPilot[/bold] v{__version__}")
        raise typer.Exit()


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date {value!r}; use YYYY-MM-DD") from None


def _tracker(ctx: typer.Context) -> ExpenseTracker:
    return ctx.obj


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    config: str = typer.Option(
        "spendpilot.yaml",
        "--config",
        "-c",
        help="Path to config file",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output"),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """💸 SpendPilot — Record expenses. Set budgets. Get insights."""
    config_path = config if Path(config).exists() else None
    tracker = ExpenseTracker.from_config(config_path)

    level = logging.DEBUG if verbose else tracker.config.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    ctx.obj = tracker


# ---------------------------------------------------------------------- #
#  Expenses                                                               #
# ---------------------------------------------------------------------- #


@app.command()
def add(
    ctx: typer.Context,
    amount: float = typer.Argument(..., help="Amount spent"),
    description: str = typer.Argument(..., help="What the money was spent on"),
    category: str = typer.Option("Other", "--category", "-k", help="Expense category"),
    on: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
) -> None:
    """Record a new expense."""
    tracker = _tracker(ctx)
    try:
        expense = tracker.add_expense(
            date=_parse_date(on) or date.today(),
            amount=amount,
            category=category,
            description=description,
        )
    except (SpendPilotError, ValidationError) as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/green] Added {escape(expense.category)} expense "
        f"[bold]${expense.amount:,.2f}[/bold] — {escape(expense.description)} [dim]({expense.id})[/dim]"
    )


@app.command("list")
def list_expenses(
    ctx: typer.Context,
    category: list[str] = typer.Option(None, "--category", "-k", help="Only these categories"),
    search: str = typer.Option(None, "--search", "-s", help="Search description/category/amount"),
    preset: DatePreset = typer.Option(None, "--period", "-p", help="Named date range"),
    start: str = typer.Option(None, "--from", help="Start date (YYYY-MM-DD)"),
    end: str = typer.Option(None, "--to", help="End date (YYYY-MM-DD)"),
    min_amount: float = typer.Option(None, "--min", help="Minimum amount"),
    max_amount: float = typer.Option(None, "--max", help="Maximum amount"),
) -> None:
    """List expenses, newest first."""
    filters = ExpenseFilters(
        categories=category or [],
        search_query=search,
        date_preset=preset,
        start_date=_parse_date(start),
        end_date=_parse_date(end),
        min_amount=min_amount,
        max_amount=max_amount,
    )
    expenses = sorted(_tracker(ctx).expenses(filters), key=lambda e: e.date, reverse=True)

    table = Table(title=f"Expenses ({len(expenses)})")
    table.add_column("Date")
    table.add_column("Category", style="bold cyan")
    table.add_column("Description")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim")
    for exp in expenses:
        table.add_row(
            exp.date.isoformat(),
            escape(exp.category),
            escape(exp.description),
            f"${exp.amount:,.2f}",
            exp.id,
        )
    console.print(table)
    console.print(f"Total: [bold]${sum(e.amount for e in expenses):,.2f}[/bold]")


@app.command()
def edit(
    ctx: typer.Context,
    expense_id: str = typer.Argument(..., help="ID of the expense to edit"),
    amount: float = typer.Option(None, "--amount", "-a", help="New amount"),
    description: str = typer.Option(None, "--description", "-m", help="New description"),
    category: str = typer.Option(None, "--category", "-k", help="New category"),
    on: str = typer.Option(None, "--date", "-d", help="New date (YYYY-MM-DD)"),
) -> None:
    """Change fields of an existing expense."""
    changes = {
        "amount": amount,
        "description": description,
        "category": category,
        "date": _parse_date(on),
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        _fail("Nothing to change; pass --amount, --description, --category or --date")
    try:
        expense = _tracker(ctx).update_expense(expense_id, **changes)
    except (SpendPilotError, ValidationError) as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/green] Updated {escape(expense.category)} expense "
        f"[bold]${expense.amount:,.2f}[/bold] — {escape(expense.description)} [dim]({expense.id})[/dim]"
    )


@app.command()
def delete(
    ctx: typer.Context,
    expense_id: str = typer.Argument(..., help="ID of the expense to delete"),
) -> None:
    """Delete an expense."""
    try:
        _tracker(ctx).delete_expense(expense_id)
    except SpendPilotError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Deleted expense {escape(expense_id)}")


@app.command("import")
def import_csv(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="CSV file to import"),
) -> None:
    """Import expenses from a CSV file."""
    try:
        added = _tracker(ctx).import_csv(path)
    except (FileNotFoundError, ValueError) as e:
        _fail(f"Could not import {path}: {e}")
    console.print(f"[green]✓[/green] Imported {len(added)} expenses from [bold]{escape(path)}[/bold]")


# ---------------------------------------------------------------------- #
#  Budgets, goals, categories                                             #
# ---------------------------------------------------------------------- #


@budget_app.command("set")
def budget_set(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category name"),
    amount: float = typer.Argument(..., help="Monthly limit (0 to clear)"),
) -> None:
    """Set the monthly limit for a category."""
    try:
        _tracker(ctx).set_budget(category, amount)
    except (SpendPilotError, ValueError) as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] {escape(category)} budget set to [bold]${amount:,.2f}[/bold]/month")


@budget_app.command("show")
def budget_show(
    ctx: typer.Context,
    month: str = typer.Option(None, "--date", "-d", help="Any day in the month to show"),
) -> None:
    """Show this month's spending against each budget."""
    budgets = _tracker(ctx).budgets(_parse_date(month))

    table = Table(title="Category Budgets", show_lines=True)
    table.add_column("Category", style="bold")
    table.add_column("Limit", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Used", justify="right")
    for b in budgets:
        color = "red" if b.percentage_used >= 100 else "yellow" if b.percentage_used >= 80 else "green"
        table.add_row(
            escape(b.category),
            f"${b.monthly_limit:,.2f}",
            f"${b.spent:,.2f}",
            f"${b.remaining:,.2f}",
            f"[{color}]{b.percentage_used:.0f}%[/{color}]" if b.monthly_limit > 0 else "[dim]—[/dim]",
        )
    console.print(table)


@goal_app.command("add")
def goal_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Goal name"),
    target: float = typer.Argument(..., help="Target amount"),
    deadline: str = typer.Argument(..., help="Deadline (YYYY-MM-DD)"),
    current: float = typer.Option(0.0, "--current", help="Amount already saved"),
    priority: GoalPriority = typer.Option(GoalPriority.MEDIUM, "--priority", help="Goal priority"),
) -> None:
    """Add a savings goal."""
    try:
        goal = _tracker(ctx).budget_store.create_goal(
            name=name,
            target_amount=target,
            deadline=_parse_date(deadline),
            current_amount=current,
            priority=priority,
        )
    except ValidationError as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/green] Added goal [bold]{escape(goal.name)}[/bold] "
        f"(${goal.target_amount:,.2f} by {goal.deadline}) [dim]({goal.id})[/dim]"
    )


@goal_app.command("list")
def goal_list(ctx: typer.Context) -> None:
    """List savings goals with progress."""
    today = date.today()
    table = Table(title="Savings Goals")
    table.add_column("Goal", style="bold")
    table.add_column("Progress", justify="right")
    table.add_column("Saved / Target", justify="right")
    table.add_column("Deadline")
    table.add_column("Priority")
    table.add_column("ID", style="dim")
    for goal in _tracker(ctx).budget_store.get_goals():
        if goal.is_completed:
            status = "[green]completed[/green]"
        elif goal.is_overdue(today):
            status = f"[red]{abs(goal.days_remaining(today))} days overdue[/red]"
        else:
            status = f"{goal.days_remaining(today)} days left"
        table.add_row(
            escape(goal.name),
            f"{goal.progress_percentage:.0f}%",
            f"${goal.current_amount:,.2f} / ${goal.target_amount:,.2f}",
            f"{goal.deadline} ({status})",
            goal.priority.value,
            goal.id,
        )
    console.print(table)


@goal_app.command("progress")
def goal_progress(
    ctx: typer.Context,
    goal_id: str = typer.Argument(..., help="Goal ID"),
    amount: float = typer.Argument(..., help="Total amount saved so far"),
) -> None:
    """Record how much has been saved towards a goal."""
    try:
        goal = _tracker(ctx).budget_store.update_progress(goal_id, amount)
    except SpendPilotError as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/green] {escape(goal.name)}: ${goal.current_amount:,.2f} of "
        f"${goal.target_amount:,.2f} ([bold]{goal.progress_percentage:.0f}%[/bold])"
    )


@goal_app.command("delete")
def goal_delete(
    ctx: typer.Context,
    goal_id: str = typer.Argument(..., help="Goal ID"),
) -> None:
    """Delete a savings goal."""
    try:
        _tracker(ctx).budget_store.delete_goal(goal_id)
    except SpendPilotError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Deleted goal {escape(goal_id)}")


@category_app.command("list")
def categories_list(ctx: typer.Context) -> None:
    """List available categories."""
    table = Table(title="Categories")
    table.add_column("", justify="center")
    table.add_column("Name", style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    for c in _tracker(ctx).categories.get_all():
        table.add_row(escape(c.icon), escape(c.name), c.id, "default" if c.is_default else "custom")
    console.print(table)


@category_app.command("add")
def categories_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name"),
    icon: str = typer.Option("📌", "--icon", help="Emoji icon"),
    color: str = typer.Option("#6b7280", "--color", help="Hex colour"),
) -> None:
    """Add a custom category."""
    try:
        category = _tracker(ctx).categories.add(name, icon=icon, color=color)
    except SpendPilotError as e:
        _fail(str(e))
    console.print(f"[green]✓[/green] Added category {escape(category.icon)} [bold]{escape(category.name)}[/bold]")


@category_app.command("remove")
def categories_remove(
    ctx: typer.Context,
    category_id: str = typer.Argument(..., help="Category ID"),
) -> None:
    """Remove a custom category."""
    try:
        removed = _tracker(ctx).categories.delete(category_id)
    except SpendPilotError as e:
        _fail(str(e))
    if not removed:
        _fail(f"No category with id {category_id}")
    console.print(f"[green]✓[/green] Removed category {escape(category_id)}")


# ---------------------------------------------------------------------- #
#  Intelligence                                                           #
# ---------------------------------------------------------------------- #


@app.command()
def insights(ctx: typer.Context) -> None:
    """Show smart insights, most important first."""
    _display_insights(_tracker(ctx).insights())


@app.command()
def recurring(ctx: typer.Context) -> None:
    """Show detected recurring expenses."""
    items = _tracker(ctx).recurring()
    table = Table(title="Recurring Expenses")
    table.add_column("Description", style="bold")
    table.add_column("Category")
    table.add_column("Avg Amount", justify="right")
    table.add_column("Frequency")
    table.add_column("Seen", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Next Expected")
    for r in items:
        table.add_row(
            escape(r.description),
            escape(r.category),
            f"${r.average_amount:,.2f}",
            r.frequency.value,
            str(r.occurrences),
            f"{r.confidence}%",
            r.next_expected.isoformat(),
        )
    console.print(table)


@app.command()
def health(ctx: typer.Context) -> None:
    """Show the financial health score."""
    _display_health(_tracker(ctx).health())


@app.command()
def dashboard(ctx: typer.Context) -> None:
    """Summary, budgets, insights and health in one view."""
    tracker = _tracker(ctx)
    with console.status("[bold green]Crunching numbers...[/bold green]"):
        view = tracker.dashboard()

    console.print(Panel.fit(
        "[bold blue]💸 SpendPilot[/bold blue] — Dashboard",
        subtitle=view.reference_date.strftime("%B %Y"),
    ))

    table = Table(title="Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total Spending", f"${view.summary.total_spending:,.2f}")
    table.add_row("This Month", f"${view.summary.monthly_spending:,.2f}")
    table.add_row("Expenses", str(view.summary.expense_count))
    table.add_row("Average Expense", f"${view.summary.average_expense:,.2f}")
    table.add_row("Recurring Detected", str(len(view.recurring)))
    console.print(table)
    console.print()

    _display_insights(view.insights)
    _display_health(view.health)


@app.command()
def export(
    ctx: typer.Context,
    fmt: str = typer.Option("csv", "--format", "-f", help="csv, json, html or md"),
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
    start: str = typer.Option(None, "--from", help="Start date (YYYY-MM-DD)"),
    end: str = typer.Option(None, "--to", help="End date (YYYY-MM-DD)"),
    category: list[str] = typer.Option(None, "--category", "-k", help="Only these categories"),
) -> None:
    """Export expenses (csv/json/html) or the dashboard report (md)."""
    from spendpilot.exporters import (
        export_to_csv,
        export_to_json,
        render_html,
        render_markdown,
        select_for_export,
    )

    tracker = _tracker(ctx)
    fmt = fmt.lower()
    if fmt == "md":
        content = render_markdown(tracker.dashboard())
    else:
        selected = select_for_export(tracker.expenses(), _parse_date(start), _parse_date(end), category)
        if not selected:
            _fail("No expenses to export with the selected filters")
        if fmt == "csv":
            content = export_to_csv(selected)
        elif fmt == "json":
            content = export_to_json(selected)
        elif fmt == "html":
            content = render_html(selected)
        else:
            _fail(f"Unknown format: {fmt}")

    path = Path(output or f"expenses-{datetime.now():%Y-%m-%d}.{fmt}")
    path.write_text(content, encoding="utf-8")
    console.print(f"[green]✓[/green] Exported to [bold]{escape(str(path))}[/bold]")


def _display_insights(items: list[SmartInsight]) -> None:
    """Print insights as a coloured list."""
    if not items:
        console.print("[dim]No insights yet. Add a few expenses and budgets.[/dim]")
        return
    colors = {
        InsightType.WARNING: "yellow",
        InsightType.TIP: "blue",
        InsightType.ACHIEVEMENT: "green",
        InsightType.PREDICTION: "magenta",
    }
    console.print("[bold]Insights:[/bold]")
    for insight in items:
        color = colors[insight.type]
        console.print(f"  [{color}][{insight.type.value.upper()}][/{color}] [bold]{escape(insight.title)}[/bold]")
        console.print(f"    {escape(insight.message)}")
    console.print()


def _display_health(result: FinancialHealth) -> None:
    """Print the health score and factor breakdown."""
    table = Table(title=f"Financial Health: {result.score}/100 ({result.level.value})", show_lines=True)
    table.add_column("Factor", style="bold")
    table.add_column("Score", justify="right")
    table.add_row("Budget Adherence", f"{result.factors.budget_adherence:.0f}")
    table.add_row("Savings Rate", f"{result.factors.savings_rate:.0f}")
    table.add_row("Spending Trend", f"{result.factors.spending_trend:.0f}")
    table.add_row("Category Balance", f"{result.factors.category_balance:.0f}")
    console.print(table)
    for rec in result.recommendations:
        console.print(f"  • {escape(rec)}")


if __name__ == "__main__":
    app()
