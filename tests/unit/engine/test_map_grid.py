"""Tests for campus map navigation."""

from __future__ import annotations

import pytest

from quizclash.core.exceptions import ValidationError
from quizclash.engine.map_grid import CampusMap
from quizclash.engine.progression import ProgressionTracker
from quizclash.models.roster import MapLocation


@pytest.fixture
def campus(progression: ProgressionTracker) -> CampusMap:
    return CampusMap(progression)


class TestCampusMap:
    """Tests for CampusMap."""

    def test_starts_in_center(self, campus: CampusMap) -> None:
        assert campus.position == (2, 2)
        assert len(campus.locations()) == 7

    def test_moves_are_case_insensitive(self, campus: CampusMap) -> None:
        campus.move("W")
        campus.move("d")
        assert campus.position == (1, 3)

    def test_clamps_at_edges(self, campus: CampusMap) -> None:
        for _ in range(5):
            campus.move("w")
        assert campus.position == (0, 2)

        for _ in range(5):
            campus.move("d")
        assert campus.position == (0, 4)

    def test_reaching_location(self, campus: CampusMap) -> None:
        campus.move("a")
        location = campus.move("a")

        assert location is not None
        assert location.id == "room_henrik"
        assert location.opponent_id == "henrik"

    def test_consumed_location_not_returned(
        self,
        campus: CampusMap,
        progression: ProgressionTracker,
    ) -> None:
        campus.move("a")
        location = campus.move("a")
        assert location is not None
        progression.mark_consumed(location.id)

        campus.move("d")
        assert campus.move("a") is None
        assert location not in campus.remaining_locations()

    def test_boss_cell(self, campus: CampusMap) -> None:
        campus.move("s")
        location = campus.move("d")

        assert location is not None
        assert location.opponent_id == "lars"

    def test_unknown_direction(self, campus: CampusMap) -> None:
        with pytest.raises(ValidationError):
            campus.move("x")
        assert campus.position == (2, 2)

    def test_location_off_map_rejected(self, progression: ProgressionTracker) -> None:
        with pytest.raises(ValidationError):
            CampusMap(progression, [MapLocation(id="far", cell=(9, 9), opponent_id="x", marker="X")])
