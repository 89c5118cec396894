"""Tests for the WorldMap facade."""

from unittest.mock import MagicMock

from worldmap.graph.merger import WorldPersistence
from worldmap.managers.world_state_manager import WorldStateManager
from worldmap.world_map import WorldMap
from tests.factories import create_place, create_world, harbor_payload


def _persistence(world=None):
    persistence = MagicMock(spec=WorldPersistence)
    persistence.load.return_value = world or create_world()
    return persistence


class TestOpen:
    """Tests for WorldMap.open."""

    def test_open_loads_saved_world(self, layout_engine):
        saved = create_world(create_place("misty-harbor", x=0.5, y=0.5))
        persistence = _persistence(saved)

        world_map = WorldMap.open(persistence, layout_engine=layout_engine)

        assert world_map.world is saved
        persistence.load.assert_called_once()

    def test_open_from_database(self, db_session, layout_engine):
        manager = WorldStateManager(db_session, "facade")
        WorldMap(persistence=manager, layout_engine=layout_engine).merge_facts(harbor_payload())

        reopened = WorldMap.open(WorldStateManager(db_session, "facade"))

        assert set(reopened.world.places) == {"misty-harbor", "old-lighthouse"}
        assert reopened.world.last_place_id == "misty-harbor"


class TestMutations:
    """Every mutation repaints and persists."""

    def test_merge_repaints_and_saves(self, layout_engine, surface):
        persistence = _persistence()
        world_map = WorldMap.open(persistence, layout_engine=layout_engine)
        world_map.init(surface)

        world_map.merge_facts(harbor_payload())

        assert len(surface.pins) == 2
        assert len(surface.lines) == 1
        assert world_map.summary == "1/2 visited"
        persistence.save.assert_called_once_with(world_map.world)

    def test_merge_without_surface_still_saves(self, layout_engine):
        persistence = _persistence()
        world_map = WorldMap.open(persistence, layout_engine=layout_engine)

        world_map.merge_facts(harbor_payload())

        persistence.save.assert_called_once()

    def test_merge_none_is_noop(self, layout_engine, surface):
        persistence = _persistence()
        world_map = WorldMap.open(persistence, layout_engine=layout_engine)
        world_map.init(surface)

        world_map.merge_facts(None)

        persistence.save.assert_not_called()
        assert surface.clear_count == 1  # only the initial paint

    def test_fast_travel_round_trip(self, layout_engine, surface):
        world_map = WorldMap(layout_engine=layout_engine)
        world_map.init(surface)
        world_map.merge_facts(harbor_payload())
        world_map.set_on_fast_travel(lambda place: world_map.visit(place.id))

        world_map.open_place_card("old-lighthouse").travel()

        assert world_map.world.last_place_id == "old-lighthouse"
        assert surface.pin_for("old-lighthouse").filled is True
        assert world_map.summary == "2/2 visited"

    def test_visit_unknown_place(self, layout_engine):
        persistence = _persistence()
        world_map = WorldMap.open(persistence, layout_engine=layout_engine)

        assert world_map.visit("nowhere") is None
        persistence.save.assert_not_called()

    def test_set_current_place_by_name(self, layout_engine):
        world_map = WorldMap(layout_engine=layout_engine)
        world_map.merge_facts(harbor_payload())

        place = world_map.set_current_place_by_name("old lighthouse")

        assert place.id == "old-lighthouse"
        assert world_map.world.last_place_id == "old-lighthouse"

    def test_clear_all(self, layout_engine, surface):
        persistence = _persistence()
        world_map = WorldMap.open(persistence, layout_engine=layout_engine)
        world_map.init(surface)
        world_map.merge_facts(harbor_payload())

        world_map.clear_all()

        assert world_map.world.is_empty
        assert surface.pins == []
        assert world_map.summary == "0/0 visited"
        assert persistence.save.call_count == 2

    def test_known_place_names(self, layout_engine):
        world_map = WorldMap(layout_engine=layout_engine)
        world_map.merge_facts(harbor_payload())

        assert world_map.known_place_names() == ["Misty Harbor", "Old Lighthouse"]
