"""
Check Point MCP Server - Setup Command

Interactive setup for configuring Check Point management credentials.
"""

import getpass

import typer

from ..core.backends import select_backend
from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError
from ..core.models import ManagementSettings

BACKEND_CHOICES = ("cloud", "on-prem", "saas")


def setup_command(
    profile: str = typer.Option(
        "default", "--profile", "-p", help="Profile name (default, production, staging, etc.)"
    ),
    cloud_url: str | None = typer.Option(
        None, "--cloud-url", help="Smart-1 Cloud management API URL"
    ),
    host: str | None = typer.Option(None, "--host", help="Management server host name or IP"),
    port: str = typer.Option("443", "--port", help="Management server port"),
    origin: str | None = typer.Option(
        None, "--origin", help="Origin header for the SaaS (Harmony SASE) API"
    ),
    api_key: str | None = typer.Option(None, "--api-key", help="Management API key"),
    username: str | None = typer.Option(None, "--username", help="Management user name"),
    password: str | None = typer.Option(None, "--password", help="Management password"),
    use_keyring: bool = typer.Option(
        False, "--keyring/--no-keyring", help="Store secrets in the system keyring"
    ),
    interactive: bool = typer.Option(
        True, "--interactive/--non-interactive", help="Interactive mode with prompts"
    ),
):
    """
    Configure Check Point management credentials.

    Examples:
        # Interactive setup
        checkpoint-mcp setup

        # On-prem server with an API key
        checkpoint-mcp setup --host 10.0.0.5 --api-key KEY --non-interactive

        # Smart-1 Cloud profile, secrets in the keyring
        checkpoint-mcp setup --profile cloud --cloud-url https://tenant.maas.checkpoint.com/ID/web_api --keyring
    """
    typer.echo("\n🔧 Check Point MCP Server - Credential Setup\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    if interactive and not cloud_url and not host:
        backend = typer.prompt(
            f"Backend ({'/'.join(BACKEND_CHOICES)})", default="on-prem"
        ).strip().lower()
        if backend not in BACKEND_CHOICES:
            typer.echo(f"❌ Error: unknown backend '{backend}'", err=True)
            raise typer.Exit(1)

        if backend == "cloud":
            cloud_url = typer.prompt("Smart-1 Cloud API URL")
        else:
            host = typer.prompt("Management host")
            if backend == "saas":
                origin = origin or typer.prompt("Origin")
            else:
                port = typer.prompt("Management port", default=port)

    if interactive:
        needs_api_key = bool(cloud_url) or bool(origin)
        if not api_key and not (username and password):
            if needs_api_key or typer.confirm("Authenticate with an API key?", default=True):
                api_key = getpass.getpass("API Key (hidden): ")
            else:
                username = username or typer.prompt("Username")
                password = getpass.getpass("Password (hidden): ")

    # Validate and create settings
    try:
        settings = ManagementSettings(
            cloud_url=cloud_url,
            management_host=host,
            management_port=port,
            origin=origin,
            api_key=api_key,
            username=username,
            password=password,
        )
        backend = select_backend(settings)
    except ConfigurationError as e:
        typer.echo(f"❌ Invalid configuration: {e.message}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"❌ Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\nBackend: {backend.kind} ({backend.get_host()})")

    # Test login before saving
    typer.echo("\n🔍 Testing login...")
    if not _test_connection(settings):
        typer.echo("\n⚠️  Login test failed. Save anyway?", err=True)
        if not typer.confirm("Continue with save?", default=False):
            typer.echo("Setup cancelled")
            raise typer.Exit(0)

    try:
        ConfigLoader.save_profile(profile, settings, use_keyring=use_keyring)
        typer.echo(f"\n✅ Profile '{profile}' saved successfully!")
        typer.echo(f"\n📍 Config location: {ConfigLoader.DEFAULT_CONFIG_FILE}")
        typer.echo("🔒 File permissions: 0600 (owner read/write only)")
        if use_keyring:
            typer.echo(f"🔑 Secrets stored in keyring service '{ConfigLoader.KEYRING_SERVICE_NAME}'")

        typer.echo("\n📖 Usage:")
        typer.echo(
            f'   • In Claude Desktop, say: "Configure Check Point connection using profile {profile}"'
        )
        typer.echo(f"   • Test connection: checkpoint-mcp test-connection --profile {profile}")
        typer.echo("   • List profiles: checkpoint-mcp list-profiles")

    except Exception as e:
        typer.echo(f"\n❌ Error saving profile: {e}", err=True)
        raise typer.Exit(1)


def _test_connection(settings: ManagementSettings) -> bool:
    """
    Log in once with the new settings.

    Returns:
        True if the login succeeded, False otherwise
    """
    import asyncio

    from .test import _test_connection_async

    result = asyncio.run(_test_connection_async(settings))
    if result["success"]:
        typer.echo("✅ Login successful!")
        return True

    typer.echo(f"⚠️  Login failed: {result.get('error', 'Unknown error')}")
    return False
