"""
Check Point MCP Server - Test Connection Command

Log in to the management server with a stored profile.
"""

import asyncio

import typer

from ..core.backends import select_backend
from ..core.client import ManagementClient
from ..core.config_loader import ConfigLoader, describe_settings
from ..core.exceptions import AuthenticationError, ConfigurationError, TransportError
from ..core.models import ManagementSettings


def test_command(
    profile: str = typer.Option("default", "--profile", "-p", help="Profile name to test")
):
    """
    Log in to the Check Point management server.

    Examples:
        # Test default profile
        checkpoint-mcp test-connection

        # Test specific profile
        checkpoint-mcp test-connection --profile production
    """
    typer.echo("\n🔍 Testing Check Point Connection\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    try:
        typer.echo("📡 Loading credentials...")
        settings = ConfigLoader.load(profile)

        info = describe_settings(settings.model_dump())
        typer.echo(f"Backend: {info['backend']}")
        typer.echo(f"Target: {info['target']}")
        typer.echo(f"Authentication: {info['auth']}\n")

        typer.echo("🔌 Logging in...")
        result = asyncio.run(_test_connection_async(settings))

        if result["success"]:
            typer.echo(
                f"\n✅ {typer.style('Login successful!', fg=typer.colors.GREEN, bold=True)}"
            )
            timeout = result.get("session_timeout")
            if timeout is not None:
                typer.echo(f"\n⏱️  Session timeout: {int(timeout)}s")
            else:
                typer.echo("\n⏱️  Session timeout: not reported (session kept until rejected)")

            typer.echo("\n✓ Your Check Point connection is properly configured")
            typer.echo("✓ You can now use this profile in Claude Desktop")

        else:
            typer.echo(f"\n❌ {typer.style('Login failed', fg=typer.colors.RED, bold=True)}")
            typer.echo(f"\nError: {result.get('error', 'Unknown error')}")
            typer.echo("\n💡 Troubleshooting tips:")
            typer.echo("   • Verify the host or cloud URL is correct and reachable")
            typer.echo("   • Check the API key or username/password")
            typer.echo("   • Ensure the management API accepts connections from your IP")
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        typer.echo("\n💡 Run 'checkpoint-mcp setup' to configure credentials")
        raise typer.Exit(1)

    except Exception as e:
        typer.echo(f"❌ Unexpected error: {e}", err=True)
        raise typer.Exit(1)


async def _test_connection_async(settings: ManagementSettings):
    """
    Async helper performing one login.

    Returns:
        Dictionary with test results
    """
    client = None
    try:
        client = ManagementClient(select_backend(settings), verbose=settings.verbose)
        await client.login()

        return {"success": True, "session_timeout": client.session.timeout_seconds}

    except AuthenticationError as e:
        return {"success": False, "error": f"Authentication failed: {e.message} ({e.status_code})"}

    except TransportError as e:
        return {"success": False, "error": f"Network error: {e.message}"}

    except Exception as e:
        return {"success": False, "error": str(e)}

    finally:
        if client:
            await client.close()
