"""Rich display helpers for CLI output."""

from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from worldmap.graph.merger import MergeResult
from worldmap.graph.schemas import World
from worldmap.render.renderer import PlaceCard, visited_summary


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {message}")


def display_success(message: str) -> None:
    """Display success message.

    Args:
        message: Success message.
    """
    console.print(f"[bold green]{message}[/bold green]")


def display_info(message: str) -> None:
    """Display info message.

    Args:
        message: Info message.
    """
    console.print(f"[dim]{message}[/dim]")


def _format_position(x: float | None, y: float | None) -> str:
    if x is None or y is None:
        return "-"
    return f"({x:.2f}, {y:.2f})"


def display_world_table(world: World) -> None:
    """Display every known place and the visited summary.

    Args:
        world: World to list.
    """
    if not world.places:
        console.print("[dim]No places discovered yet.[/dim]")
        return

    table = Table(title="World Map")
    table.add_column("Place", style="green")
    table.add_column("ID", style="cyan")
    table.add_column("Visited", justify="center")
    table.add_column("Tags", style="white", max_width=30)
    table.add_column("Position", justify="right", style="dim")

    for place in sorted(world.places.values(), key=lambda p: p.name.lower()):
        name = place.name
        if place.id == world.last_place_id:
            name = f"[bold]{name}[/bold] (here)"
        table.add_row(
            name,
            place.id,
            "[green]yes[/green]" if place.visited else "[dim]no[/dim]",
            ", ".join(place.tags),
            _format_position(place.x, place.y),
        )

    console.print(table)
    console.print(
        f"[bold]{visited_summary(world)}[/bold] · {len(world.relations)} relation(s)"
    )


def display_place_card(card: PlaceCard) -> None:
    """Display a place card.

    Args:
        card: Card to show.
    """
    lines = [
        f"[bold]{card.name}[/bold]",
        "",
        f"[underline]Tags[/underline]  {card.tags_text}",
        "",
        card.notes_text,
    ]
    border = "green" if card.place.visited else "cyan"
    console.print(Panel("\n".join(lines), title=card.place.id, border_style=border))


def display_merge_result(result: MergeResult) -> None:
    """Summarize a merge.

    Args:
        result: Result returned by the merger.
    """
    console.print(
        f"[green]+{len(result.places_added)} place(s)[/green], "
        f"{len(result.places_updated)} updated, "
        f"[green]+{result.relations_added} relation(s)[/green]"
    )
    if result.relations_dropped:
        display_info(f"{result.relations_dropped} relation(s) skipped")
    if result.current_place_id:
        console.print(f"Current place: [bold]{result.current_place_id}[/bold]")


@contextmanager
def progress_spinner(description: str = "Processing..."):
    """Context manager for spinner during operations.

    Args:
        description: Text to show next to spinner.

    Yields:
        Tuple of (progress, task_id) for optional updates.
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(description, total=None)
        yield progress, task
