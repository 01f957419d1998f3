"""Nearest-neighbor ordering of route waypoints"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from ..models.schemas import OptimizationResult, PlaceId, Waypoint
from ..utils.geo_utils import distance_km, parse_coordinate, path_length_km

logger = logging.getLogger(__name__)

# (id, lat, lon, title)
_Stop = Tuple[PlaceId, float, float, Optional[str]]


class RouteOptimizer:
    """Service for ordering the stops of a user route"""

    @staticmethod
    def optimize(
        waypoints: Sequence[Union[Waypoint, Mapping[str, Any]]],
        pinned_start_id: Optional[PlaceId] = None,
        pinned_end_id: Optional[PlaceId] = None
    ) -> OptimizationResult:
        """
        Reorder waypoints so that the connecting path is approximately shortest.

        Uses a greedy nearest-neighbor heuristic with haversine distance.
        Pinned waypoints stay first/last among the coordinated block.
        Waypoints without usable coordinates keep their relative order
        and are appended after the coordinated block.

        Args:
            waypoints: Waypoints in the current user-chosen order
            pinned_start_id: Id of the waypoint fixed as the first stop
            pinned_end_id: Id of the waypoint fixed as the last stop

        Returns:
            OptimizationResult with the new order and before/after distances
        """
        original_ids: List[PlaceId] = []
        coordinated: List[_Stop] = []
        uncoordinated: List[PlaceId] = []

        for waypoint in waypoints:
            stop = RouteOptimizer._to_stop(waypoint)
            original_ids.append(stop[0])
            if stop[1] is None or stop[2] is None:
                uncoordinated.append(stop[0])
            else:
                coordinated.append(stop)

        distance_before = RouteOptimizer._path_length(coordinated)

        if len(coordinated) < 2:
            logger.debug(
                "Skipping optimization: %d coordinated waypoint(s)", len(coordinated)
            )
            return OptimizationResult(
                changed=False,
                distance_before_km=distance_before,
                distance_after_km=distance_before,
                ordered_waypoint_ids=original_ids,
                ordered_titles=[stop[3] for stop in coordinated],
                coordinated_count=len(coordinated),
                uncoordinated_count=len(uncoordinated)
            )

        start_index = RouteOptimizer._find(coordinated, pinned_start_id)
        end_index = None
        if pinned_end_id is not None and pinned_end_id != pinned_start_id:
            end_index = RouteOptimizer._find(coordinated, pinned_end_id)

        middle = [
            stop for i, stop in enumerate(coordinated)
            if i != start_index and i != end_index
        ]
        ordered = RouteOptimizer.nearest_neighbor(middle)
        if start_index is not None:
            ordered.insert(0, coordinated[start_index])
        if end_index is not None:
            ordered.append(coordinated[end_index])

        distance_after = RouteOptimizer._path_length(ordered)
        ordered_ids = [stop[0] for stop in ordered] + uncoordinated
        changed = ordered_ids != original_ids

        logger.info(
            "Route optimized: %d coordinated, %d without coordinates, %.2f km -> %.2f km",
            len(coordinated),
            len(uncoordinated),
            distance_before,
            distance_after
        )

        return OptimizationResult(
            changed=changed,
            distance_before_km=distance_before,
            distance_after_km=distance_after,
            ordered_waypoint_ids=ordered_ids,
            ordered_titles=[stop[3] for stop in ordered],
            coordinated_count=len(coordinated),
            uncoordinated_count=len(uncoordinated)
        )

    @staticmethod
    def nearest_neighbor(stops: Sequence[_Stop]) -> List[_Stop]:
        """
        Greedy path starting at the first stop.

        On equal distances the stop that comes first in the remaining
        list wins.

        Args:
            stops: Coordinated stops in their original relative order

        Returns:
            New list with the visiting order
        """
        if not stops:
            return []

        current = stops[0]
        ordered = [current]
        remaining = list(stops[1:])

        while remaining:
            min_dist = float("inf")
            min_idx = 0
            for i, candidate in enumerate(remaining):
                dist = distance_km(current[1], current[2], candidate[1], candidate[2])
                if dist < min_dist:
                    min_dist = dist
                    min_idx = i
            current = remaining.pop(min_idx)
            ordered.append(current)

        return ordered

    @staticmethod
    def _to_stop(waypoint: Union[Waypoint, Mapping[str, Any]]) -> Tuple:
        if not isinstance(waypoint, Mapping):
            waypoint = vars(waypoint)

        lat = parse_coordinate(waypoint.get("latitude"))
        lon = parse_coordinate(waypoint.get("longitude"))
        if lat is None or lon is None:
            lat = lon = None
        title = waypoint.get("title")
        return waypoint.get("id"), lat, lon, None if title is None else str(title)

    @staticmethod
    def _find(stops: Sequence[_Stop], place_id: Optional[PlaceId]) -> Optional[int]:
        if place_id is None:
            return None
        for i, stop in enumerate(stops):
            if stop[0] == place_id:
                return i
        return None

    @staticmethod
    def _path_length(stops: Sequence[_Stop]) -> float:
        return path_length_km((stop[1], stop[2]) for stop in stops)


optimize = RouteOptimizer.optimize

__all__ = ["RouteOptimizer", "optimize", "distance_km"]
