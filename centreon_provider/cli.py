"""Command-line interface for the Centreon provider."""

import sys
import click
import logging
from typing import Dict, Optional

from pydantic import ValidationError

from . import __version__
from .config import load_config, load_config_file
from .errors import CentreonError
from .logging_utils import setup_logging
from .models.hosts import HostSpec
from .provider import CentreonProvider
from .services.base import OperationResult
from .utils import format_host_response, parse_search_option
from .validators import validate_host


@click.group()
@click.option('--log-level', default=None, help='Logging level (DEBUG, INFO, WARNING, ERROR)')
@click.option('--config', '--config-file', help='Path to configuration file (YAML, TOML, or JSON)')
@click.pass_context
def cli(ctx, log_level: Optional[str], config: Optional[str]):
    """Centreon Provider - declarative management of Centreon hosts."""
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = log_level
    ctx.obj['config_file'] = config


def _provider(ctx) -> CentreonProvider:
    """Load configuration and configure the provider on first use.

    Offline commands never call this, so they run without a Centreon
    configuration. The client session is closed when the CLI exits.
    """
    if 'provider' in ctx.obj:
        return ctx.obj['provider']

    try:
        app_config = load_config(config_file=ctx.obj['config_file'])

        # CLI flag overrides config
        setup_logging(ctx.obj['log_level'] or app_config.log_level, app_config.log_file)

        provider = CentreonProvider(__version__)
        diagnostics = provider.configure(app_config.centreon)
    except (CentreonError, ValidationError, ValueError, OSError) as e:
        logging.getLogger(__name__).error(f"Initialization failed: {e}")
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    if diagnostics:
        for diagnostic in diagnostics:
            click.echo(f"❌ {diagnostic}", err=True)
        sys.exit(1)

    ctx.find_root().call_on_close(provider.client.close)
    ctx.obj['config'] = app_config
    ctx.obj['provider'] = provider
    return provider


def _report(result: OperationResult, success_message: str) -> None:
    """Print an operation result; exit non-zero when it failed."""
    if result.success:
        click.echo(f"✅ {success_message}")
        return

    for diagnostic in result.errors:
        click.echo(f"❌ {diagnostic}", err=True)
    if result.state is not None:
        click.echo("⚠️  The change was applied but the configuration was not reloaded.")
    sys.exit(1)


def _load_host_file(path: str) -> HostSpec:
    return HostSpec(**load_config_file(path))


def _search_filter(search: Optional[str]) -> Dict[str, Optional[str]]:
    try:
        return parse_search_option(search)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--search")


@cli.command()
@click.pass_context
def test(ctx):
    """Test connection to the Centreon API."""
    client = _provider(ctx).client

    if client.test_connection():
        click.echo("✅ Successfully connected to Centreon API")
    else:
        click.echo("❌ Failed to connect to Centreon API")
        sys.exit(1)


@cli.command()
@click.pass_context
def platform(ctx):
    """Show the platform installation status."""
    data_source = _provider(ctx).data_source('centreon_platform_info')

    try:
        info = data_source.read()
    except CentreonError as e:
        click.echo(f"❌ Error reading platform info: {e}", err=True)
        sys.exit(1)

    click.echo(f"Installed: {'Yes' if info['is_installed'] else 'No'}")
    click.echo(f"Upgrade available: {'Yes' if info['has_upgrade_available'] else 'No'}")


@cli.group()
def hosts():
    """Host management commands."""
    pass


@hosts.command('list')
@click.option('--limit', default=10, show_default=True, help='Maximum number of hosts per page')
@click.option('--page', default=1, show_default=True, help='Page number')
@click.option('--search', help='Filter as NAME=VALUE, e.g. name=web01')
@click.pass_context
def list_hosts(ctx, limit: int, page: int, search: Optional[str]):
    """List hosts, optionally filtered."""
    data_source = _provider(ctx).data_source('centreon_hosts')
    search_filter = _search_filter(search)

    try:
        data = data_source.read(limit=limit, page=page, search=search_filter)
    except CentreonError as e:
        click.echo(f"❌ Error listing hosts: {e}", err=True)
        sys.exit(1)

    found = data['hosts']
    if not found:
        click.echo("No hosts found.")
        return

    click.echo(f"Found {len(found)} hosts:")
    for host in found:
        server = host.get('monitoring_server') or {}
        click.echo(f"  📦 {host['name']} (id {host['id']})")
        click.echo(f"     Address: {host.get('address') or 'Not set'}")
        click.echo(f"     Monitoring server: {server.get('name') or server.get('id', 'Unknown')}")
        click.echo()


@hosts.command('get')
@click.argument('host_name')
@click.pass_context
def get_host(ctx, host_name: str):
    """Show a host by exact name."""
    client = _provider(ctx).client

    try:
        host = client.find_host_by_name(host_name)
    except CentreonError as e:
        click.echo(f"❌ Error getting host: {e}", err=True)
        sys.exit(1)

    if host is None:
        click.echo(f"❌ Host '{host_name}' not found", err=True)
        sys.exit(1)

    click.echo(format_host_response(host))


@hosts.command('validate')
@click.argument('host_file', type=click.Path(exists=True, dir_okay=False))
def validate_host_file(host_file: str):
    """Validate a desired host file without contacting the API."""
    try:
        spec = _load_host_file(host_file)
    except (ValidationError, ValueError) as e:
        click.echo(f"❌ Invalid host file: {e}", err=True)
        sys.exit(1)

    diagnostics = validate_host(spec)
    if diagnostics:
        for diagnostic in diagnostics:
            click.echo(f"❌ {diagnostic}", err=True)
        sys.exit(1)

    click.echo(f"✅ Host '{spec.name}' is valid")


@hosts.command('plan')
@click.argument('host_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def plan_host(ctx, host_file: str):
    """Show what applying a desired host file would change."""
    resource = _provider(ctx).resource('centreon_host')

    try:
        spec = _load_host_file(host_file)
    except (ValidationError, ValueError) as e:
        click.echo(f"❌ Invalid host file: {e}", err=True)
        sys.exit(1)

    result = resource.execute('plan', spec)
    if not result.success:
        _report(result, "")

    plan = result.state
    if plan.action == 'create':
        click.echo(f"+ Host '{plan.name}' will be created")
    elif plan.action == 'update':
        click.echo(f"~ Host '{plan.name}' (id {plan.host_id}) will be updated:")
        for field, (current, desired) in sorted(plan.changes.items()):
            click.echo(f"    {field}: {current!r} -> {desired!r}")
    else:
        click.echo(f"Host '{plan.name}' is up to date.")


@hosts.command('apply')
@click.argument('host_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def apply_host(ctx, host_file: str):
    """Create or update a host from a desired host file."""
    resource = _provider(ctx).resource('centreon_host')

    try:
        spec = _load_host_file(host_file)
    except (ValidationError, ValueError) as e:
        click.echo(f"❌ Invalid host file: {e}", err=True)
        sys.exit(1)

    planned = resource.execute('plan', spec)
    if not planned.success:
        _report(planned, "")

    action = planned.state.action
    if action == 'none':
        click.echo(f"✅ Host '{spec.name}' is already up to date")
    elif action == 'create':
        _report(resource.execute('create', spec), f"Successfully created host: {spec.name}")
    else:
        _report(resource.execute('update', spec, spec), f"Successfully updated host: {spec.name}")


@hosts.command('delete')
@click.argument('host_name')
@click.option('--force', is_flag=True, help='Skip confirmation prompt')
@click.pass_context
def delete_host(ctx, host_name: str, force: bool):
    """Delete a host by name."""
    provider = _provider(ctx)

    try:
        host = provider.client.find_host_by_name(host_name)
    except CentreonError as e:
        click.echo(f"❌ Error deleting host: {e}", err=True)
        sys.exit(1)

    if host is None:
        click.echo(f"Host '{host_name}' does not exist, nothing to delete.")
        return

    click.echo(f"Host found: {host_name} (id {host['id']})")
    if not force:
        if not click.confirm(f"Are you sure you want to delete host '{host_name}'?"):
            click.echo("❌ Deletion cancelled.")
            return

    state = HostSpec.from_wire(host)
    _report(provider.resource('centreon_host').execute('delete', state), f"Successfully deleted host: {host_name}")


def _list_collection(ctx, type_name: str, key: str, label: str,
                     limit: int, page: int, search: Optional[str]) -> None:
    data_source = _provider(ctx).data_source(type_name)
    search_filter = _search_filter(search)

    try:
        data = data_source.read(limit=limit, page=page, search=search_filter)
    except CentreonError as e:
        click.echo(f"❌ Error listing {label}: {e}", err=True)
        sys.exit(1)

    items = data[key]
    if not items:
        click.echo(f"No {label} found.")
        return

    click.echo(f"Found {len(items)} {label}:")
    for item in items:
        click.echo(f"  {item['name']} (id {item['id']})")


def _collection_options(func):
    func = click.option('--search', help='Filter as NAME=VALUE, e.g. name=Central')(func)
    func = click.option('--page', default=1, show_default=True, help='Page number')(func)
    func = click.option('--limit', default=10, show_default=True, help='Maximum number of items per page')(func)
    return func


@cli.group('monitoring-servers')
def monitoring_servers():
    """Monitoring server (poller) commands."""
    pass


@monitoring_servers.command('list')
@_collection_options
@click.pass_context
def list_monitoring_servers(ctx, limit: int, page: int, search: Optional[str]):
    """List monitoring servers."""
    _list_collection(ctx, 'centreon_monitoring_servers', 'servers', 'monitoring servers', limit, page, search)


@cli.group('host-groups')
def host_groups():
    """Host group commands."""
    pass


@host_groups.command('list')
@_collection_options
@click.pass_context
def list_host_groups(ctx, limit: int, page: int, search: Optional[str]):
    """List host groups."""
    _list_collection(ctx, 'centreon_host_groups', 'groups', 'host groups', limit, page, search)


@cli.group('host-templates')
def host_templates():
    """Host template commands."""
    pass


@host_templates.command('list')
@_collection_options
@click.pass_context
def list_host_templates(ctx, limit: int, page: int, search: Optional[str]):
    """List host templates."""
    _list_collection(ctx, 'centreon_host_templates', 'templates', 'host templates', limit, page, search)


if __name__ == '__main__':
    cli()
