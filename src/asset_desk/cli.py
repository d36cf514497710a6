"""
Command-line interface for the Digital Asset Desk.

Provides commands for:
- login / signup / magic-link / logout / whoami / profile: local session
- add / edit / delete / show / list: asset CRUD and search
- folders / overview / expiring: derived views
- export / import: CSV exchange
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from asset_desk.analytics import evaluate_readiness
from asset_desk.app import AssetDeskApp, create_app
from asset_desk.assets import (
    ALLOWED_TYPES,
    ValidationError,
    expiring_within,
    group_by_type,
    search_assets,
    sorted_status_counts,
)
from asset_desk.assets.validation import parse_asset_type
from asset_desk.config import ConfigurationError, load_app_config
from asset_desk.data import DataLoadError, export_assets_csv, load_asset_inputs_csv
from asset_desk.formatters import (
    expiration_status,
    format_currency,
    format_date,
    status_label,
    type_label,
)
from asset_desk.models import Asset, AssetInput, AssetStatus
from asset_desk.state import NotAuthenticatedError
from asset_desk.storage import PersistenceError


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


def _report_validation(error: ValidationError) -> None:
    click.echo("Invalid input:", err=True)
    for field_name, message in error.errors.items():
        click.echo(f"  {field_name}: {message}", err=True)
    sys.exit(1)


def _guard(action):
    """Run an action, turning domain errors into CLI errors."""
    try:
        return action()
    except NotAuthenticatedError:
        _fail("Not signed in. Run `asset-desk login EMAIL` first.")
    except ValidationError as e:
        _report_validation(e)
    except PersistenceError as e:
        _fail(f"Changes may not have been saved: {e}")


def _money(app: AssetDeskApp, amount) -> str:
    return f"{app.config.currency_symbol} {format_currency(amount, app.config.locale)}"


def _echo_asset_row(app: AssetDeskApp, asset: Asset) -> None:
    status = expiration_status(asset.expiration_date)
    click.echo(
        f"  {asset.id[:8]}  {asset.name[:28]:<28}  {type_label(asset.type):<18}  "
        f"{status_label(asset.status):<9}  {_money(app, asset.cost):>14}  {status.label}"
    )


def _echo_asset_detail(app: AssetDeskApp, asset: Asset) -> None:
    status = expiration_status(asset.expiration_date)
    click.echo(f"{asset.name}")
    click.echo(f"  ID:         {asset.id}")
    click.echo(f"  Type:       {type_label(asset.type)}")
    click.echo(f"  Status:     {status_label(asset.status)}")
    click.echo(f"  Cost:       {_money(app, asset.cost)}")
    click.echo(f"  Expires:    {format_date(asset.expiration_date, app.config.locale)} ({status.label})")
    click.echo(f"  Tags:       {', '.join(asset.tags) or '-'}")
    click.echo(f"  Created:    {format_date(asset.created_at, app.config.locale)}")
    click.echo(f"  Updated:    {format_date(asset.updated_at, app.config.locale)}")


@click.group()
@click.version_option(version="0.1.0", prog_name="asset-desk")
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to asset_desk.yaml configuration file",
)
@click.option(
    "--data-dir", "-d",
    type=click.Path(),
    default=None,
    help="Storage directory. Overrides the configured data_dir.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], data_dir: Optional[str], verbose: bool):
    """
    Digital Asset Desk.

    Track domains, hosting, ad accounts and social profiles: status,
    recurring cost, expiration and tags.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    try:
        app_config = load_app_config(config_path)
    except ConfigurationError as e:
        _fail(f"Error loading config: {e}")

    if data_dir:
        app_config.data_dir = Path(data_dir)

    try:
        ctx.obj = create_app(app_config)
    except PersistenceError as e:
        _fail(f"Cannot open storage: {e}")


# =============================================================================
# Session
# =============================================================================


@main.command()
@click.argument("email")
@click.option("--password", "-p", default="", help="Accepted but not verified")
@click.pass_obj
def login(app: AssetDeskApp, email: str, password: str):
    """Sign in with an e-mail address."""
    session = _guard(lambda: app.identity.sign_in(email, password))
    click.echo(f"Signed in as {session.user.email}")


@main.command()
@click.argument("email")
@click.option("--password", "-p", default="", help="Accepted but not verified")
@click.pass_obj
def signup(app: AssetDeskApp, email: str, password: str):
    """Create an account and sign in."""
    session = _guard(lambda: app.identity.sign_up(email, password))
    click.echo(f"Account created for {session.user.email}")


@main.command("magic-link")
@click.argument("email")
@click.pass_obj
def magic_link(app: AssetDeskApp, email: str):
    """Request a sign-in link (recorded only, nothing is sent)."""
    _guard(lambda: app.identity.sign_in_with_magic_link(email))
    click.echo(f"Sign-in link requested for {email.strip().lower()}")


@main.command()
@click.pass_obj
def logout(app: AssetDeskApp):
    """Sign out and remove this account's local asset data."""
    _guard(app.identity.sign_out)
    click.echo("Signed out")


@main.command()
@click.pass_obj
def whoami(app: AssetDeskApp):
    """Show the signed-in account."""
    session = app.identity.current_session()
    if session is None:
        _fail("Not signed in")
    profile = session.profile
    click.echo(f"{profile.name or profile.email} <{profile.email}>")
    click.echo(f"  Account:   {session.account_id}")
    click.echo(f"  Structure: {profile.structure_name}")


@main.command()
@click.option("--name", default=None, help="Display name")
@click.option("--avatar-url", default=None, help="Avatar URL")
@click.option("--structure-name", default=None, help="Portfolio structure label")
@click.pass_obj
def profile(app: AssetDeskApp, name: Optional[str], avatar_url: Optional[str], structure_name: Optional[str]):
    """Update profile settings."""
    changes = {
        k: v
        for k, v in (("name", name), ("avatar_url", avatar_url), ("structure_name", structure_name))
        if v is not None
    }
    if not changes:
        _fail("Nothing to update. Pass --name, --avatar-url or --structure-name.")
    updated = _guard(lambda: app.identity.update_profile(**changes))
    click.echo(f"Profile updated: {updated.name or updated.email} / {updated.structure_name}")


# =============================================================================
# Assets
# =============================================================================


@main.command()
@click.option("--name", "-n", required=True, help="Asset name")
@click.option(
    "--type", "-t",
    "asset_type",
    required=True,
    help=f"Asset type: {', '.join(ALLOWED_TYPES)}",
)
@click.option("--status", "-s", default="online", show_default=True, help="online, expired, pending or inactive")
@click.option("--cost", default="0", show_default=True, help="Recurring cost")
@click.option("--expires", "-e", default=None, help="Expiration date (YYYY-MM-DD)")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.pass_obj
def add(app: AssetDeskApp, name: str, asset_type: str, status: str, cost: str, expires: Optional[str], tags: tuple[str, ...]):
    """Add a new asset."""
    data = AssetInput(
        name=name,
        type=asset_type,
        status=status,
        cost=cost,
        expiration_date=expires,
        tags=list(tags),
    )
    asset = _guard(lambda: app.assets.create(data))
    click.echo(f"Created {asset.name} ({asset.id})")


@main.command()
@click.argument("asset_id")
@click.option("--name", "-n", default=None, help="New name")
@click.option("--type", "-t", "asset_type", default=None, help="New type")
@click.option("--status", "-s", default=None, help="New status")
@click.option("--cost", default=None, help="New recurring cost")
@click.option("--expires", "-e", default=None, help="New expiration date (YYYY-MM-DD)")
@click.option("--no-expiration", is_flag=True, help="Clear the expiration date")
@click.option("--tag", "tags", multiple=True, help="Replace tags (repeatable)")
@click.pass_obj
def edit(
    app: AssetDeskApp,
    asset_id: str,
    name: Optional[str],
    asset_type: Optional[str],
    status: Optional[str],
    cost: Optional[str],
    expires: Optional[str],
    no_expiration: bool,
    tags: tuple[str, ...],
):
    """Edit an existing asset."""
    asset = _guard(lambda: app.assets.get(asset_id))
    if asset is None:
        _fail(f"Asset {asset_id} not found")

    if name is not None:
        asset.name = name
    if asset_type is not None:
        asset.type = asset_type
    if status is not None:
        asset.status = status
    if cost is not None:
        asset.cost = cost
    if no_expiration:
        asset.expiration_date = None
    elif expires is not None:
        asset.expiration_date = expires
    if tags:
        asset.tags = tags

    updated = _guard(lambda: app.assets.update(asset))
    click.echo(f"Updated {updated.name} ({updated.id})")


@main.command()
@click.argument("asset_id")
@click.confirmation_option(prompt="Delete this asset permanently?")
@click.pass_obj
def delete(app: AssetDeskApp, asset_id: str):
    """Delete an asset permanently."""
    removed = _guard(lambda: app.assets.delete(asset_id))
    if removed:
        click.echo(f"Deleted {asset_id}")
    else:
        click.echo(f"No asset with id {asset_id}")


@main.command()
@click.argument("asset_id")
@click.pass_obj
def show(app: AssetDeskApp, asset_id: str):
    """Show one asset."""
    asset = _guard(lambda: app.assets.get(asset_id))
    if asset is None:
        _fail(f"Asset {asset_id} not found")
    _echo_asset_detail(app, asset)


@main.command("list")
@click.option("--search", "-q", default="", help="Match name or tag")
@click.option("--type", "-t", "asset_type", default=None, help="Restrict to one type")
@click.pass_obj
def list_assets(app: AssetDeskApp, search: str, asset_type: Optional[str]):
    """List assets, optionally filtered."""
    folder = None
    if asset_type is not None:
        try:
            folder = parse_asset_type(asset_type)
        except ValueError:
            _fail(f"Unknown type {asset_type!r}. Allowed types: {', '.join(ALLOWED_TYPES)}")

    assets = _guard(app.assets.list)
    matches = search_assets(assets, search, folder)

    if not matches:
        click.echo("No assets found")
        return

    click.echo(f"{len(matches)} asset(s):")
    for asset in matches:
        _echo_asset_row(app, asset)


@main.command()
@click.pass_obj
def folders(app: AssetDeskApp):
    """Show assets grouped by type with status counts."""
    assets = _guard(app.assets.list)
    for asset_type, group in group_by_type(assets).items():
        counts = ", ".join(
            f"{status_label(status)} {count}" for status, count in sorted_status_counts(group)
        )
        click.echo(f"{type_label(asset_type):<18} {len(group):>3}  {counts}")


@main.command()
@click.pass_obj
def overview(app: AssetDeskApp):
    """Dashboard summary: status counts, cost, readiness, expirations."""
    summary = _guard(app.overview)
    session = app.identity.current_session()

    click.echo(f"Structure: {session.profile.structure_name}")
    click.echo(f"  Assets:   {summary.total_assets}")
    click.echo(f"  Online:   {summary.status_counts[AssetStatus.ONLINE]}")
    click.echo(f"  Pending:  {summary.status_counts[AssetStatus.PENDING]}")
    click.echo(f"  Expired:  {summary.status_counts[AssetStatus.EXPIRED]}")
    click.echo(f"  Inactive: {summary.status_counts[AssetStatus.INACTIVE]}")
    click.echo(f"  Cost:     {_money(app, summary.total_cost)}")

    report = summary.readiness
    click.echo()
    if report.is_ready:
        click.echo(f"Structure ready ({report.active_count}/{report.total})")
    else:
        click.echo(f"Structure incomplete ({report.active_count}/{report.total})")
        click.echo(f"  Missing: {', '.join(report.missing)}")

    if summary.expiring_soon:
        click.echo()
        click.echo(f"Expiring within {app.config.expiring_window_days} days:")
        for asset in summary.expiring_soon:
            _echo_asset_row(app, asset)

    if summary.expired:
        click.echo()
        click.echo("Past expiration:")
        for asset in summary.expired:
            _echo_asset_row(app, asset)


@main.command()
@click.option("--days", "-n", type=int, default=None, help="Window in days (defaults to config)")
@click.pass_obj
def expiring(app: AssetDeskApp, days: Optional[int]):
    """List assets expiring soon."""
    window = app.config.expiring_window_days if days is None else days
    assets = _guard(app.assets.list)
    matches = expiring_within(assets, window)

    if not matches:
        click.echo(f"Nothing expires within {window} days")
        return

    for asset in matches:
        _echo_asset_row(app, asset)


@main.command()
@click.pass_obj
def readiness(app: AssetDeskApp):
    """Check whether the required structure is complete."""
    report = evaluate_readiness(_guard(app.assets.list))
    click.echo(f"{report.active_count}/{report.total} required categories online")
    for label in report.missing:
        click.echo(f"  missing: {label}")
    if not report.is_ready:
        sys.exit(2)


# =============================================================================
# CSV exchange
# =============================================================================


@main.command()
@click.argument("output", type=click.Path())
@click.pass_obj
def export(app: AssetDeskApp, output: str):
    """Export the current account's assets to CSV."""
    assets = _guard(app.assets.list)
    path = export_assets_csv(assets, output)
    app.activity_log.log_assets_exported(app.state.account_id, len(assets), str(path))
    click.echo(f"Exported {len(assets)} asset(s) to {path}")


@main.command("import")
@click.argument("source", type=click.Path(exists=True))
@click.pass_obj
def import_assets(app: AssetDeskApp, source: str):
    """
    Import assets from CSV.

    Each row is validated; invalid rows are reported and skipped.
    """
    try:
        rows = load_asset_inputs_csv(source)
    except DataLoadError as e:
        _fail(f"Error loading {source}: {e}")

    created = 0
    for line_number, row in enumerate(rows, start=2):
        try:
            app.assets.create(row)
            created += 1
        except ValidationError as e:
            click.echo(f"  line {line_number}: skipped ({e})", err=True)
        except NotAuthenticatedError:
            _fail("Not signed in. Run `asset-desk login EMAIL` first.")
        except PersistenceError as e:
            _fail(f"Changes may not have been saved after {created} row(s): {e}")

    app.activity_log.log_assets_imported(app.state.account_id, created, source)
    click.echo(f"Imported {created} of {len(rows)} asset(s)")


if __name__ == "__main__":
    main()
