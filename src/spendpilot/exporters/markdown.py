"""
Markdown dashboard exporter.

Renders a Dashboard (budgets, insights, recurring expenses, health score)
as Markdown, suitable for GitHub, Notion, or any Markdown viewer.
"""

from __future__ import annotations

from spendpilot.models.intelligence import Dashboard, InsightType


def render_markdown(dashboard: Dashboard) -> str:
    """Render a Dashboard as Markdown."""
    lines: list[str] = []
    ref = dashboard.reference_date

    # Header
    lines.append(f"# 💸 SpendPilot Report — {ref.strftime('%B %Y')}")
    lines.append("")
    lines.append(f"*Generated: {dashboard.generated_at.strftime('%Y-%m-%d %H:%M')}*")
    lines.append("")

    # Summary
    summary = dashboard.summary
    health = dashboard.health
    lines.append("## 📊 Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| **Total Spending** | ${summary.total_spending:,.2f} |")
    lines.append(f"| **This Month** | ${summary.monthly_spending:,.2f} |")
    lines.append(f"| **Expenses Recorded** | {summary.expense_count} |")
    lines.append(f"| **Average Expense** | ${summary.average_expense:,.2f} |")
    lines.append(f"| **Financial Health** | {health.score}/100 ({health.level.value}) |")
    lines.append("")

    # Budgets
    budgeted = [b for b in dashboard.budgets if b.monthly_limit > 0 or b.spent > 0]
    if budgeted:
        lines.append("## 🎯 Budgets")
        lines.append("")
        lines.append("| Category | Limit | Spent | Remaining | Used |")
        lines.append("|----------|------:|------:|----------:|-----:|")
        for b in budgeted:
            limit = f"${b.monthly_limit:,.2f}" if b.monthly_limit > 0 else "—"
            used = f"{b.percentage_used:.0f}%" if b.monthly_limit > 0 else "—"
            lines.append(
                f"| {b.category} | {limit} | ${b.spent:,.2f} | ${b.remaining:,.2f} | {used} |"
            )
        lines.append("")

    # Insights
    insight_emoji = {
        InsightType.WARNING: "⚠️",
        InsightType.TIP: "💡",
        InsightType.ACHIEVEMENT: "🏆",
        InsightType.PREDICTION: "🔮",
    }
    if dashboard.insights:
        lines.append("## 🧠 Insights")
        lines.append("")
        for insight in dashboard.insights:
            lines.append(f"- {insight_emoji[insight.type]} **{insight.title}** — {insight.message}")
        lines.append("")

    # Recurring
    if dashboard.recurring:
        lines.append("## 🔁 Recurring Expenses")
        lines.append("")
        lines.append("| Description | Category | Avg Amount | Frequency | Confidence | Next Expected |")
        lines.append("|-------------|----------|-----------:|-----------|-----------:|---------------|")
        for r in dashboard.recurring:
            lines.append(
                f"| {r.description} | {r.category} | ${r.average_amount:,.2f} | "
                f"{r.frequency.value} | {r.confidence}% | {r.next_expected.isoformat()} |"
            )
        lines.append("")

    # Health
    factors = health.factors
    lines.append("## ❤️ Financial Health")
    lines.append("")
    lines.append(f"**Score:** {health.score}/100 — **{health.level.value}**")
    lines.append("")
    lines.append(f"- Budget adherence: {factors.budget_adherence:.0f}")
    lines.append(f"- Savings rate: {factors.savings_rate:.0f}")
    lines.append(f"- Spending trend: {factors.spending_trend:.0f}")
    lines.append(f"- Category balance: {factors.category_balance:.0f}")
    lines.append("")
    lines.append("**Recommendations:**")
    for rec in health.recommendations:
        lines.append(f"- {rec}")
    lines.append("")

    return "\n".join(lines)
