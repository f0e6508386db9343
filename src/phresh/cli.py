import json
import logging
import sys

import click

from . import __version__ as VERSION
from .cart import build_order_summary
from .config import Config, refresh_config
from .errors import PhreshError
from .formatting import format_currency
from .pricing import badge_text, compute_discounted_price
from .records import load_cart, load_products, load_shipping_settings
from .types import DiscountComputation, OrderSummary

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--version", is_flag=True, help="Show the version and exit.")
def main(ctx, version):
    """phresh: storefront pricing CLI"""
    ctx.obj = {"config": refresh_config()}

    if version:
        click.echo(f"phresh version {VERSION}")
        return
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _emit_structured_error(message: str, *, code: str, category: str, as_json: bool = False, exit_code: int = 2):
    payload = {
        "ok": False,
        "error": {
            "code": code,
            "category": category,
            "message": message,
        },
    }
    if as_json:
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        prefix = "phresh internal error" if code == "INTERNAL" else "phresh error"
        click.echo(f"{prefix} [{category}:{code}]: {message}")
    sys.exit(exit_code)


def _run_guarded(action, as_json: bool):
    """Run a command body, mapping domain and unexpected failures to structured errors."""
    try:
        action()
    except SystemExit:
        raise
    except PhreshError as exc:
        _emit_structured_error(exc.explanation, code=exc.error_code, category=exc.category, as_json=as_json)
    except Exception as exc:  # keep CLI output structured for scripts
        logger.exception("Unhandled phresh error")
        _emit_structured_error(str(exc), code="INTERNAL", category="SYSTEM", as_json=as_json)


def _format_quote_line(name: str, pricing: DiscountComputation, config: Config) -> str:
    def money(value):
        return format_currency(value, config.currency_symbol, config.digit_grouping)

    if not pricing.has_discount:
        return f"{name}: {money(pricing.base_price)}"
    return f"{name}: {money(pricing.final_price)} (was {money(pricing.base_price)}, {pricing.discount_label})"


@main.command()
@click.argument("products_file")
@click.option("--base-price", type=float, default=None, help="Price every product from this base (e.g. a variant price)")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable pricing payloads")
@click.pass_obj
def quote(obj, products_file, base_price, json_output):
    """Price product records (a JSON file, or - for stdin)."""
    config = obj["config"]

    def action():
        products = load_products(products_file)
        rows = []
        for product in products:
            pricing = compute_discounted_price(product, base_price, **config.label_options)
            rows.append({"_id": product.get("_id"), "name": product.get("name"), **pricing.to_dict()})
            if not json_output:
                click.echo(_format_quote_line(product.get("name") or product.get("_id") or "<unnamed>", pricing, config))
        if json_output:
            click.echo(json.dumps(rows, indent=2, sort_keys=True))

    _run_guarded(action, json_output)


def _print_order_summary(summary: OrderSummary, config: Config):
    def money(value):
        return format_currency(value, config.currency_symbol, config.digit_grouping)

    click.echo("Order Summary")
    click.echo("-------------")
    for row in summary.lines:
        product = row.line["product"]
        name = product.get("name") or product.get("_id") or "<unnamed>"
        size = row.line.get("variant_size")
        title = f"{name} [{size}]" if size else name
        badge = badge_text(row.pricing)
        suffix = f" ({badge})" if badge else ""
        click.echo(f"{title} x{row.quantity}: {money(row.line_total)}{suffix}")
    click.echo()
    click.echo(f"Subtotal ({summary.item_count} items): {money(summary.subtotal)}")
    click.echo(f"Shipping: {'Free' if summary.is_free_shipping else money(summary.shipping)}")
    click.echo(f"Total: {money(summary.total)}")


@main.command()
@click.argument("cart_file")
@click.option("--shipping", "shipping_file", default=None, help="Shipping settings JSON (delivery_charges, free_delivery_threshold)")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable order summary")
@click.pass_obj
def cart(obj, cart_file, shipping_file, json_output):
    """Compute the checkout summary of a cart export."""
    config = obj["config"]

    def action():
        lines = load_cart(cart_file)
        settings = {"free_delivery_threshold": config.free_delivery_threshold}
        if shipping_file:
            settings.update(load_shipping_settings(shipping_file))
        summary = build_order_summary(lines, settings, config.default_delivery_charge, **config.label_options)
        if json_output:
            click.echo(json.dumps(summary.to_dict(), indent=2, sort_keys=True))
        else:
            _print_order_summary(summary, config)

    _run_guarded(action, json_output)


if __name__ == "__main__":
    main()
