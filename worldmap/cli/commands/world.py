"""World map commands."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from sqlalchemy.orm import Session

from worldmap.cli.display import (
    console,
    display_error,
    display_info,
    display_merge_result,
    display_place_card,
    display_success,
    display_world_table,
    progress_spinner,
)
from worldmap.database.connection import ensure_schema, get_db_session
from worldmap.extraction.extractor import FactExtractor
from worldmap.graph.schemas import Place
from worldmap.llm.exceptions import LLMError
from worldmap.managers.world_state_manager import WorldStateManager
from worldmap.render.surface import SvgSurface
from worldmap.world_map import WorldMap

app = typer.Typer(help="World map commands")


def _open_map(db: Session, slot: str | None) -> WorldMap:
    """Load the world map stored in a slot, creating tables on first use."""
    ensure_schema(db.get_bind())
    return WorldMap.open(WorldStateManager(db, slot))


@app.command()
def show(
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """List known places and the visited summary."""
    with get_db_session() as db:
        world_map = _open_map(db, slot)
        display_world_table(world_map.world)


@app.command()
def card(
    place_id: str = typer.Argument(..., help="Place ID"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Show the card for one place."""
    with get_db_session() as db:
        world_map = _open_map(db, slot)
        place_card = world_map.open_place_card(place_id)
        if place_card is None:
            display_error(f"Unknown place: {place_id}")
            raise typer.Exit(1)
        display_place_card(place_card)


@app.command()
def travel(
    place_id: str = typer.Argument(..., help="Place ID to travel to"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Fast travel to a discovered place."""
    with get_db_session() as db:
        world_map = _open_map(db, slot)

        def on_fast_travel(place: Place) -> None:
            world_map.visit(place.id)
            display_success(f"Travelled to {place.name}")

        world_map.set_on_fast_travel(on_fast_travel)
        place_card = world_map.open_place_card(place_id)
        if place_card is None:
            display_error(f"Unknown place: {place_id}")
            raise typer.Exit(1)
        place_card.travel()
        display_info(world_map.summary)


@app.command()
def goto(
    name: str = typer.Argument(..., help="Place name (case-insensitive)"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Mark a place as the current location by name."""
    with get_db_session() as db:
        world_map = _open_map(db, slot)
        place = world_map.set_current_place_by_name(name)
        if place is None:
            display_error(f"No place named '{name}'")
            raise typer.Exit(1)
        display_success(f"Now at {place.name}")


@app.command()
def merge(
    facts_file: Path = typer.Argument(..., help="JSON file with a facts payload"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Merge a facts payload from a JSON file."""
    try:
        payload = json.loads(facts_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        display_error(f"Could not read facts from {facts_file}: {e}")
        raise typer.Exit(1)

    with get_db_session() as db:
        world_map = _open_map(db, slot)
        result = world_map.merge_facts(payload)
        display_merge_result(result)
        display_info(world_map.summary)


@app.command()
def extract(
    scene: str = typer.Argument(..., help="Scene description"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Extract map facts from a scene description and merge them."""
    with get_db_session() as db:
        world_map = _open_map(db, slot)
        try:
            extractor = FactExtractor()
            with progress_spinner("Reading the scene..."):
                facts = asyncio.run(extractor.extract(scene, world_map.known_place_names()))
        except LLMError as e:
            display_error(f"Fact extraction failed: {e}")
            raise typer.Exit(1)

        result = world_map.merge_facts(facts)
        display_merge_result(result)
        display_info(world_map.summary)


@app.command()
def svg(
    output: Path = typer.Argument(Path("world_map.svg"), help="Output .svg path"),
    width: int = typer.Option(600, "--width", help="Drawing width"),
    height: int = typer.Option(420, "--height", help="Drawing height"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Render the map to an SVG file."""
    with get_db_session() as db:
        world_map = _open_map(db, slot)
        surface = SvgSurface(width=width, height=height)
        world_map.init(surface)
        surface.save(output)
        display_success(f"Wrote {output}")
        display_info(world_map.summary)


@app.command()
def reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    slot: Optional[str] = typer.Option(None, "--slot", help="Map slot to use"),
) -> None:
    """Forget every place and relation."""
    if not force:
        confirm = typer.confirm("Clear the whole world map?")
        if not confirm:
            display_info("Cancelled")
            return

    with get_db_session() as db:
        world_map = _open_map(db, slot)
        world_map.clear_all()
        display_success("World map cleared")
        console.print(world_map.summary)
