"""
Check Point MCP Server - List Profiles Command

List all configured credential profiles.
"""


import typer

from ..core.config_loader import ConfigLoader


def list_command(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed information for each profile"
    )
):
    """
    List all configured Check Point profiles.

    Examples:
        # List all profiles
        checkpoint-mcp list-profiles

        # List with details
        checkpoint-mcp list-profiles --verbose
    """
    typer.echo("\n📋 Configured Check Point Profiles\n")

    try:
        profiles = ConfigLoader.list_profiles()

        if not profiles:
            typer.echo("❌ No profiles configured yet")
            typer.echo("\n💡 Tip: Run 'checkpoint-mcp setup' to configure your first profile")
            return

        typer.echo(f"Found {len(profiles)} profile(s):\n")

        for profile in profiles:
            if verbose:
                try:
                    info = ConfigLoader.get_profile_info(profile)
                    typer.echo(f"📦 {typer.style(profile, fg=typer.colors.CYAN, bold=True)}")
                    typer.echo(f"   Backend: {info['backend']}")
                    typer.echo(f"   Target: {info['target']}")
                    typer.echo(f"   Authentication: {info['auth']}")
                    if info["api_key_preview"]:
                        typer.echo(f"   API Key: {info['api_key_preview']}")
                    if info["username"]:
                        typer.echo(f"   Username: {info['username']}")
                    typer.echo()
                except Exception as e:
                    typer.echo(f"📦 {profile} - Error loading details: {e}")
                    typer.echo()
            else:
                typer.echo(f"  • {profile}")

        if not verbose:
            typer.echo("\n💡 Tip: Use --verbose to see profile details")

        typer.echo(f"\n📍 Config file: {ConfigLoader.DEFAULT_CONFIG_FILE}")

    except Exception as e:
        typer.echo(f"❌ Error listing profiles: {e}", err=True)
        raise typer.Exit(1)
