from __future__ import annotations

import click
from flask import Flask

from .container import Container
from .core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @click.group("roster", help="Monthly roster operations.")
    def roster_cli():
        pass

    @roster_cli.command("publish")
    @click.argument("roster_id", type=int)
    def publish_roster(roster_id: int):
        """Publish a roster and copy its shifts onto employee defaults."""
        try:
            roster = container.roster_service.publish(roster_id)
        except ValidationError as e:
            raise click.ClickException(str(e))
        click.echo(
            f"Roster {roster.roster_id} ({roster.month}) published: "
            f"{len(roster.assignments)} assignment(s) applied"
        )

    @roster_cli.command("archive")
    @click.argument("roster_id", type=int)
    def archive_roster(roster_id: int):
        """Archive a roster; it no longer drives shift resolution."""
        try:
            roster = container.roster_service.archive(roster_id)
        except ValidationError as e:
            raise click.ClickException(str(e))
        click.echo(f"Roster {roster.roster_id} ({roster.month}) archived")

    app.cli.add_command(roster_cli)
