"""Session commands."""

import click


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show who the current session belongs to."""
    session = ctx.obj["session"].current_session()
    if session is None:
        click.echo("Not signed in.")
        return
    click.echo(f"Signed in as {session.user} (since {session.issued_at:%Y-%m-%d %H:%M} UTC)")


def register_commands(cli):
    """Register session commands with main CLI."""
    cli.add_command(whoami)
