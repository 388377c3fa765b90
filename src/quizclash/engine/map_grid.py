"""Campus map navigation.

The map is a square grid with one-shot encounter locations. Moving onto a
location that has not been consumed yet returns it so the caller can start
the encounter; consumed locations are plain floor.
"""

from __future__ import annotations

from collections.abc import Iterable

from quizclash.core.constants import MAP_SIZE, MAP_START
from quizclash.core.exceptions import ValidationError
from quizclash.core.logging import get_logger
from quizclash.engine.progression import ProgressionTracker
from quizclash.models.enums import Direction
from quizclash.models.roster import DEFAULT_LAYOUT, MapLocation


logger = get_logger(__name__)


class CampusMap:
    """Player position and encounter locations on the campus grid.

    Example:
        >>> campus = CampusMap(ProgressionTracker())
        >>> campus.move("a")
        >>> campus.position
        (2, 1)
    """

    def __init__(
        self,
        progression: ProgressionTracker,
        layout: Iterable[MapLocation] = DEFAULT_LAYOUT,
        *,
        size: int = MAP_SIZE,
        start: tuple[int, int] = MAP_START,
    ) -> None:
        self.progression = progression
        self.size = size
        self._by_cell: dict[tuple[int, int], MapLocation] = {}
        self._by_id: dict[str, MapLocation] = {}
        for location in layout:
            if not self._in_bounds(location.cell):
                raise ValidationError(
                    f"Location {location.id} is off the map",
                    field_name="cell",
                    invalid_value=location.cell,
                )
            self._by_cell[location.cell] = location
            self._by_id[location.id] = location
        if not self._in_bounds(start):
            raise ValidationError("Start cell is off the map", field_name="start", invalid_value=start)
        self._position = start

    @property
    def position(self) -> tuple[int, int]:
        return self._position

    def location(self, location_id: str) -> MapLocation | None:
        return self._by_id.get(location_id)

    def locations(self) -> list[MapLocation]:
        return list(self._by_id.values())

    def remaining_locations(self) -> list[MapLocation]:
        """Locations whose encounter has not fired yet."""
        return [loc for loc in self._by_id.values() if not self.progression.is_consumed(loc.id)]

    def move(self, direction: Direction | str) -> MapLocation | None:
        """Move one cell, clamping at the edges.

        Args:
            direction: One of w/a/s/d, case-insensitive.

        Returns:
            The unconsumed location at the new cell, if any.

        Raises:
            ValidationError: If the direction is not w/a/s/d.
        """
        try:
            step = Direction(str(direction).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown direction: {direction}",
                field_name="direction",
                invalid_value=direction,
            ) from None

        d_row, d_col = step.delta
        row, col = self._position
        row = min(max(row + d_row, 0), self.size - 1)
        col = min(max(col + d_col, 0), self.size - 1)
        self._position = (row, col)
        logger.debug("Player moved", direction=step.value, position=self._position)

        location = self._by_cell.get(self._position)
        if location is None or self.progression.is_consumed(location.id):
            return None
        logger.info("Location reached", location_id=location.id, opponent_id=location.opponent_id)
        return location

    def _in_bounds(self, cell: tuple[int, int]) -> bool:
        row, col = cell
        return 0 <= row < self.size and 0 <= col < self.size


__all__ = ["CampusMap"]
