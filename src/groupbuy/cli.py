"""
Command line: serve the API or compute a price quote without it.
"""
from __future__ import annotations

import typer

from groupbuy.core import ConfigurationError, Settings, configure_logging
from groupbuy.pricing import PricingPolicy, order_unit_price, quote as price_quote

app = typer.Typer(help="Group-buy storefront: serve the API, quote campaign prices.")


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e.message}", err=True)
        raise typer.Exit(2)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
) -> None:
    """Run the HTTP API (settings from GROUPBUY_* environment variables)."""
    from groupbuy.main import create_app

    settings = _settings()
    configure_logging(settings.log_level)
    create_app(settings).run(host=host, port=port)


@app.command()
def quote(
    starting_price: float = typer.Argument(..., help="Unit price with no buyers"),
    final_price: float = typer.Argument(..., help="Unit price once the target is reached"),
    target_quantity: int = typer.Argument(..., help="Units needed for the final price"),
    current_quantity: int = typer.Argument(0, help="Units committed so far"),
    policy: PricingPolicy = typer.Option(PricingPolicy.TIERED, "--policy", help="Order pricing policy"),
) -> None:
    """Print the current price, discount and progress of a campaign."""
    q = price_quote(starting_price, final_price, target_quantity, current_quantity)
    charged = order_unit_price(policy, starting_price, final_price, target_quantity, current_quantity)
    typer.echo(f"current price:    {q.current_price:.2f}")
    typer.echo(f"discount:         {q.discount_percent}%")
    typer.echo(f"progress:         {q.progress_percent:.0f}% ({current_quantity}/{target_quantity})")
    if q.target_reached:
        typer.echo("target reached:   yes")
    else:
        typer.echo(f"target reached:   no, {q.remaining_quantity} more needed")
    typer.echo(f"order price ({policy.value}): {float(charged):.2f}")


def main() -> None:
    """Entry point for the groupbuy console command."""
    app()


if __name__ == "__main__":
    main()
