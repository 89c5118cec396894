"""Tests for CLI display functions."""

from worldmap.cli import display
from worldmap.graph.merger import MergeResult
from worldmap.render.renderer import PlaceCard
from tests.factories import create_place, create_world


class TestDisplayWorldTable:
    """Tests for display_world_table."""

    def test_empty_world(self, capsys):
        display.display_world_table(create_world())

        assert "No places discovered yet." in capsys.readouterr().out

    def test_summary_line(self, capsys):
        world = create_world(
            create_place("misty-harbor", visited=True, x=0.5, y=0.5),
            create_place("old-lighthouse"),
            last_place_id="misty-harbor",
        )

        display.display_world_table(world)

        assert "1/2 visited" in capsys.readouterr().out


class TestFormatPosition:
    """Tests for _format_position."""

    def test_unpositioned(self):
        assert display._format_position(None, None) == "-"

    def test_positioned(self):
        assert display._format_position(0.5, 0.25) == "(0.50, 0.25)"


class TestDisplayPlaceCard:
    """Tests for display_place_card."""

    def test_placeholders(self, capsys):
        display.display_place_card(PlaceCard(place=create_place("old-lighthouse")))

        out = capsys.readouterr().out
        assert "Old Lighthouse" in out
        assert "No notes yet." in out


class TestDisplayMergeResult:
    """Tests for display_merge_result."""

    def test_counts(self, capsys):
        result = MergeResult(
            places_added=["misty-harbor"],
            places_updated=[],
            relations_added=1,
            relations_dropped=2,
            current_place_id="misty-harbor",
        )

        display.display_merge_result(result)

        out = capsys.readouterr().out
        assert "+1 place(s)" in out
        assert "2 relation(s) skipped" in out
        assert "misty-harbor" in out
