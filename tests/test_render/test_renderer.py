"""Tests for MapRenderer and PlaceCard."""

import pytest

from worldmap.graph.exceptions import RendererNotInitializedError, WorldMapError
from worldmap.render.renderer import MapRenderer, visited_summary
from tests.factories import create_place, create_relation, create_world


@pytest.fixture
def harbor_world():
    return create_world(
        create_place("misty-harbor", name="Misty Harbor", visited=True, x=0.5, y=0.5, tags=["coast"]),
        create_place("old-lighthouse", name="Old Lighthouse", x=0.5, y=0.2),
        create_place("sunken-temple", name="Sunken Temple"),  # not laid out yet
        relations=[
            create_relation("misty-harbor", "old-lighthouse"),
            create_relation("misty-harbor", "sunken-temple"),
        ],
        last_place_id="misty-harbor",
    )


class TestRender:
    """Tests for render()."""

    def test_render_before_init_raises(self, harbor_world):
        renderer = MapRenderer()

        with pytest.raises(RendererNotInitializedError):
            renderer.render(harbor_world)

    def test_not_initialized_is_a_world_map_error(self):
        assert issubclass(RendererNotInitializedError, WorldMapError)

    def test_draws_positioned_pins_and_edges(self, harbor_world, surface):
        renderer = MapRenderer()
        renderer.init(surface)

        renderer.render(harbor_world)

        assert [pin.place_id for pin in surface.pins] == ["misty-harbor", "old-lighthouse"]
        assert len(surface.lines) == 1

    def test_pins_are_scaled_to_the_surface(self, harbor_world, surface):
        renderer = MapRenderer()
        renderer.init(surface)

        renderer.render(harbor_world)

        pin = surface.pin_for("old-lighthouse")
        assert pin.cx == pytest.approx(0.5 * surface.width)
        assert pin.cy == pytest.approx(0.2 * surface.height)
        assert pin.label == "Old Lighthouse"

    def test_visited_pins_are_filled(self, harbor_world, surface):
        renderer = MapRenderer()
        renderer.init(surface)

        renderer.render(harbor_world)

        assert surface.pin_for("misty-harbor").filled is True
        assert surface.pin_for("old-lighthouse").filled is False

    def test_render_clears_before_redrawing(self, harbor_world, surface):
        renderer = MapRenderer()
        renderer.init(surface)

        renderer.render(harbor_world)
        renderer.render(harbor_world)

        assert surface.clear_count == 2
        assert len(surface.pins) == 2

    def test_summary_counter(self, harbor_world, surface):
        renderer = MapRenderer()
        renderer.init(surface)

        summary = renderer.render(harbor_world)

        assert summary == "1/3 visited"
        assert renderer.summary == "1/3 visited"

    def test_empty_world(self, surface):
        renderer = MapRenderer()
        renderer.init(surface)

        assert renderer.render(create_world()) == "0/0 visited"
        assert surface.pins == []
        assert surface.lines == []


class TestPlaceCard:
    """Tests for place cards and fast travel."""

    def test_card_shows_metadata(self, harbor_world):
        renderer = MapRenderer()

        card = renderer.open_place_card(harbor_world, "misty-harbor")

        assert card.name == "Misty Harbor"
        assert card.tags_text == "coast"
        assert card.notes_text == "No notes yet."

    def test_card_placeholders(self, harbor_world):
        card = MapRenderer().open_place_card(harbor_world, "old-lighthouse")

        assert card.tags_text == "—"

    def test_unknown_place_has_no_card(self, harbor_world):
        assert MapRenderer().open_place_card(harbor_world, "nowhere") is None

    def test_travel_invokes_callback_with_full_place(self, harbor_world):
        travelled = []
        renderer = MapRenderer()
        renderer.set_on_fast_travel(travelled.append)

        card = renderer.open_place_card(harbor_world, "old-lighthouse")

        assert card.travel() is True
        assert travelled == [harbor_world.places["old-lighthouse"]]

    def test_travel_without_callback(self, harbor_world):
        card = MapRenderer().open_place_card(harbor_world, "old-lighthouse")

        assert card.travel() is False


class TestVisitedSummary:
    """Tests for visited_summary."""

    def test_counts(self):
        world = create_world(
            create_place("a", visited=True),
            create_place("b", visited=True),
            create_place("c"),
        )
        assert visited_summary(world) == "2/3 visited"
