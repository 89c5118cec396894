"""Main CLI application for the world map."""

import typer

from worldmap.cli.commands import world

# Create main app
app = typer.Typer(
    name="worldmap",
    help="Incrementally-built world map for generative adventures",
    add_completion=True,
)

# Add sub-commands
app.add_typer(world.app, name="world")


@app.callback()
def main() -> None:
    """World Map - places and paths discovered while playing.

    Use 'worldmap world merge facts.json' or 'worldmap world extract "..."'
    to add places, then 'worldmap world show' to list them.
    """
    pass


if __name__ == "__main__":
    app()
