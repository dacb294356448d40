"""ETF profit calculator CLI.

Usage:
    etf-calc compute --regime intraday --buy 100 --sell 105 --qty 100
    etf-calc compare --buy 100 --sell 105 --qty 100
    etf-calc schedule --regime delivery
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from etfcalc.core.config import AppConfig, load_config
from etfcalc.core.logging_utils import get_logger, setup_logging
from etfcalc.fees.calculator import CostBreakdown, calculate
from etfcalc.fees.errors import InvalidInputError
from etfcalc.fees.schedule import Regime, schedule_for

app = typer.Typer(name="etf-calc", help="Net ETF trade profit after costs and tax.")
console = Console()
logger = get_logger("cli.calc")

# (label, field, kind) in display order; kind selects formatting
_ROWS = [
    ("Investment", "buy_amount", "money"),
    ("Sale", "sell_amount", "money"),
    ("Gross Profit", "gross_profit", "money"),
    ("Profit Margin", "profit_margin", "pct"),
    (None, None, None),
    ("Buy Brokerage", "buy_brokerage", "money"),
    ("Sell Brokerage", "sell_brokerage", "money"),
    ("STT", "stt", "money"),
    ("Stamp Duty", "stamp_duty", "money"),
    ("Exchange + SEBI Fees", "exchange_and_reg_fees", "money"),
    ("DP Charges", "dp_charges", "money"),
    ("GST (18%)", "gst", "money"),
    ("Total Costs", "total_costs", "money"),
    ("Cost % of Investment", "cost_percentage", "pct"),
    (None, None, None),
    ("After Costs", "net_profit_after_costs", "money"),
    ("Income Tax", "income_tax", "money"),
    ("Final Net", "net_profit_after_tax", "money"),
    ("Breakeven Sell Price", "breakeven_sell_price", "money"),
]


def _load(config: Optional[Path]) -> AppConfig:
    cfg = load_config(config)
    setup_logging(cfg.log_level, cfg.log_dir)
    return cfg


def _fail(error: InvalidInputError) -> None:
    logger.warning("Rejected input: %s", error)
    console.print(f"[bold red]✗[/] {error.user_message}")
    raise typer.Exit(1)


def _format(value: float, kind: str, currency: str) -> str:
    if kind == "pct":
        return f"{value:.2f}%"
    return f"{currency}{value:,.2f}"


def _breakdown_table(breakdown: CostBreakdown, currency: str) -> Table:
    summary = breakdown.summary()
    tax_pct = f"{breakdown.income_tax_rate:.0%}"

    table = Table(title=f"{breakdown.regime.value.title()} Round Trip")
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="green", justify="right")

    for label, field, kind in _ROWS:
        if label is None:
            table.add_section()
            continue
        if field == "income_tax":
            label = f"{label} (~{tax_pct})"
        table.add_row(label, _format(summary[field], kind, currency))
    return table


@app.command()
def compute(
    regime: Optional[str] = typer.Option(None, help="intraday or delivery (default from config)"),
    buy: str = typer.Option("", "--buy", help="Buy price per unit"),
    sell: str = typer.Option("", "--sell", help="Sell price per unit"),
    qty: str = typer.Option("", "--qty", help="Number of units"),
    config: Optional[Path] = typer.Option(None, help="Calculator config file"),
):
    """Compute the net profit of one round trip."""
    cfg = _load(config)
    try:
        selected = Regime.parse(regime) if regime else cfg.default_regime
    except ValueError as e:
        console.print(f"[bold red]✗[/] {e}")
        raise typer.Exit(1)

    result = calculate(selected, buy, sell, qty)
    if not result.ok:
        _fail(result.error)

    console.print(_breakdown_table(result.breakdown, cfg.currency_symbol))
    console.print("[dim]Income tax is approximate; DP charges vary; bid-ask spread not included.[/]")


@app.command()
def compare(
    buy: str = typer.Option("", "--buy", help="Buy price per unit"),
    sell: str = typer.Option("", "--sell", help="Sell price per unit"),
    qty: str = typer.Option("", "--qty", help="Number of units"),
    config: Optional[Path] = typer.Option(None, help="Calculator config file"),
):
    """Compare intraday and delivery for the same trade."""
    from etfcalc.fees.compare import best_regime, compare_regimes

    cfg = _load(config)
    try:
        df = compare_regimes(buy, sell, qty)
    except InvalidInputError as e:
        _fail(e)

    table = Table(title="Regime Comparison")
    table.add_column("Field", style="cyan")
    for col in df.columns:
        table.add_column(col.title(), style="green", justify="right")

    for field, row in df.iterrows():
        if field == "income_tax_rate":
            cells = [f"{v:.0%}" for v in row]
        elif field == "cost_percentage":
            cells = [f"{v:.2f}%" for v in row]
        else:
            cells = [f"{cfg.currency_symbol}{v:,.2f}" for v in row]
        table.add_row(str(field), *cells)

    console.print(table)
    console.print(f"[bold green]✓[/] Best after tax: {best_regime(df).value}")


@app.command()
def schedule(
    regime: str = typer.Option("intraday", help="intraday or delivery"),
):
    """Show the fixed rates of a regime."""
    try:
        fees = schedule_for(regime)
    except ValueError as e:
        console.print(f"[bold red]✗[/] {e}")
        raise typer.Exit(1)

    table = Table(title=f"{fees.regime.value.title()} Fee Schedule")
    table.add_column("Rate", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for k, v in fees.rates().items():
        table.add_row(k, str(v))
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
