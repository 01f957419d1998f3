"""Route constructor list operations"""
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from ..config import MAX_WAYPOINTS
from ..models.schemas import ConstructorState, OptimizationResult, PlaceId, Waypoint
from .route_optimizer import RouteOptimizer

logger = logging.getLogger(__name__)


def _is_blank(place_id: Optional[PlaceId]) -> bool:
    return place_id is None or place_id == ""


class RouteConstructor:
    """
    Transitions of a route under construction.

    Every method takes the current ConstructorState and returns a new one;
    the given state is never modified. Pinned start/end places cannot be
    moved by the step and drag operations.
    """

    @staticmethod
    def add_place(state: ConstructorState, place_id: Optional[PlaceId]) -> ConstructorState:
        if _is_blank(place_id) or place_id in state.place_ids:
            return state.model_copy(deep=True)
        if len(state.place_ids) >= MAX_WAYPOINTS:
            raise ValueError(f"A route can hold at most {MAX_WAYPOINTS} places")
        return state.model_copy(update={"place_ids": [*state.place_ids, place_id]})

    @staticmethod
    def remove_place(state: ConstructorState, place_id: PlaceId) -> ConstructorState:
        return ConstructorState(
            place_ids=[pid for pid in state.place_ids if pid != place_id],
            start_place_id=None if state.start_place_id == place_id else state.start_place_id,
            end_place_id=None if state.end_place_id == place_id else state.end_place_id
        )

    @staticmethod
    def set_start_place(state: ConstructorState, place_id: Optional[PlaceId]) -> ConstructorState:
        """
        Pin a place as the first stop and move it to the front.

        Args:
            state: Current constructor state
            place_id: Place to pin, None to clear the start pin

        Returns:
            New constructor state
        """
        if place_id is None:
            return state.model_copy(update={"start_place_id": None}, deep=True)

        place_ids = list(state.place_ids)
        if place_id in place_ids and place_ids.index(place_id) > 0:
            place_ids.remove(place_id)
            place_ids.insert(0, place_id)

        return ConstructorState(
            place_ids=place_ids,
            start_place_id=place_id,
            end_place_id=None if state.end_place_id == place_id else state.end_place_id
        )

    @staticmethod
    def set_end_place(state: ConstructorState, place_id: Optional[PlaceId]) -> ConstructorState:
        """
        Pin a place as the last stop and move it to the back.

        Args:
            state: Current constructor state
            place_id: Place to pin, None to clear the end pin

        Returns:
            New constructor state
        """
        if place_id is None:
            return state.model_copy(update={"end_place_id": None}, deep=True)

        place_ids = list(state.place_ids)
        if place_id in place_ids and place_ids.index(place_id) < len(place_ids) - 1:
            place_ids.remove(place_id)
            place_ids.append(place_id)

        return ConstructorState(
            place_ids=place_ids,
            start_place_id=None if state.start_place_id == place_id else state.start_place_id,
            end_place_id=place_id
        )

    @staticmethod
    def move_place(state: ConstructorState, from_index: int, direction: int) -> ConstructorState:
        """Swap a place with its neighbor one step up (-1) or down (+1)."""
        to_index = from_index + direction
        if not RouteConstructor._movable(state, from_index, to_index):
            return state.model_copy(deep=True)

        place_ids = list(state.place_ids)
        place_ids[from_index], place_ids[to_index] = place_ids[to_index], place_ids[from_index]
        return state.model_copy(update={"place_ids": place_ids})

    @staticmethod
    def move_place_by_drag(state: ConstructorState, dragged_index: int, target_index: int) -> ConstructorState:
        if dragged_index == target_index or not RouteConstructor._movable(state, dragged_index, target_index):
            return state.model_copy(deep=True)

        place_ids = list(state.place_ids)
        place_ids.insert(target_index, place_ids.pop(dragged_index))
        return state.model_copy(update={"place_ids": place_ids})

    @staticmethod
    def reorder_place_ids(state: ConstructorState, new_ids: Sequence[PlaceId]) -> ConstructorState:
        """
        Apply an order coming from the client.

        Ids unknown to the state are ignored; ids of the state missing
        from new_ids are kept at the end in their current order.
        """
        valid = [pid for pid in new_ids if pid in state.place_ids]
        missing = [pid for pid in state.place_ids if pid not in new_ids]
        return state.model_copy(update={"place_ids": valid + missing})

    @staticmethod
    def clear(state: ConstructorState) -> ConstructorState:
        return ConstructorState()

    @staticmethod
    def load_place_ids(state: ConstructorState, ids: Optional[Iterable[PlaceId]]) -> ConstructorState:
        return ConstructorState(
            place_ids=[pid for pid in ids or [] if not _is_blank(pid)],
            start_place_id=state.start_place_id,
            end_place_id=state.end_place_id
        )

    @staticmethod
    def is_in_constructor(state: ConstructorState, place_id: PlaceId) -> bool:
        return place_id in state.place_ids

    @staticmethod
    def optimize(
        state: ConstructorState,
        waypoints: Sequence[Union[Waypoint, Mapping[str, Any]]]
    ) -> Tuple[ConstructorState, Optional[OptimizationResult]]:
        """
        Reorder the constructor places with RouteOptimizer.

        Places of the state with no entry in waypoints are handled as
        places without coordinates.

        Args:
            state: Current constructor state
            waypoints: Known places with coordinates, in any order

        Returns:
            Tuple of (new_state, result); result is None for fewer than two places
        """
        if len(state.place_ids) < 2:
            return state.model_copy(deep=True), None

        by_id = {}
        for waypoint in waypoints:
            if isinstance(waypoint, Mapping):
                waypoint_id = waypoint.get("id")
            else:
                waypoint_id = getattr(waypoint, "id", None)
            if waypoint_id is None:
                continue
            by_id.setdefault(waypoint_id, waypoint)

        ordered_input = [by_id.get(pid, {"id": pid}) for pid in state.place_ids]
        result = RouteOptimizer.optimize(
            ordered_input,
            pinned_start_id=state.start_place_id,
            pinned_end_id=state.end_place_id
        )

        logger.debug("Constructor reordered: changed=%s", result.changed)
        new_state = state.model_copy(update={"place_ids": list(result.ordered_waypoint_ids)})
        return new_state, result

    @staticmethod
    def _movable(state: ConstructorState, from_index: int, to_index: int) -> bool:
        size = len(state.place_ids)
        if not (0 <= from_index < size and 0 <= to_index < size):
            return False
        pinned = {state.start_place_id, state.end_place_id} - {None}
        return state.place_ids[from_index] not in pinned and state.place_ids[to_index] not in pinned
