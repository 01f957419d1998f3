import pytest

from tourroute.models.schemas import Waypoint
from tourroute.services.route_optimizer import RouteOptimizer, distance_km, optimize
from tourroute.utils.geo_utils import path_length_km


def coords_of(waypoints):
    return [(float(w.latitude), float(w.longitude)) for w in waypoints]


def test_crossed_square_gets_shorter(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    result = RouteOptimizer.optimize([A, D, B, C])

    assert result.changed is True
    assert result.ordered_waypoint_ids == ["A", "B", "D", "C"]
    assert result.distance_before_km == pytest.approx(path_length_km(coords_of([A, D, B, C])))
    assert result.distance_after_km == pytest.approx(path_length_km(coords_of([A, B, D, C])))
    assert result.distance_after_km <= result.distance_before_km
    assert result.ordered_titles == ["A", "B", "D", "C"]
    assert result.coordinated_count == 4
    assert result.uncoordinated_count == 0


@pytest.mark.parametrize("position", [0, 1, 2, 3, 4])
def test_uncoordinated_waypoint_goes_last(square, position):
    waypoints = [square["A"], square["D"], square["B"], square["C"]]
    waypoints.insert(position, Waypoint(id="E", title="E"))

    result = RouteOptimizer.optimize(waypoints)

    assert result.ordered_waypoint_ids[-1] == "E"
    assert result.ordered_waypoint_ids[:4] == ["A", "B", "D", "C"]
    assert result.uncoordinated_count == 1
    assert "E" not in result.ordered_titles


def test_uncoordinated_keep_relative_order(square):
    waypoints = [
        Waypoint(id="x1", latitude="abc", longitude=41.0),
        square["C"],
        Waypoint(id="x2", latitude=0, longitude=0),
        square["A"],
        Waypoint(id="x3", latitude=55.0),
    ]
    result = RouteOptimizer.optimize(waypoints)

    assert result.ordered_waypoint_ids == ["C", "A", "x1", "x2", "x3"]
    assert result.changed is True


def test_both_pins(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    result = RouteOptimizer.optimize([A, B, C, D], pinned_start_id="C", pinned_end_id="B")

    assert result.ordered_waypoint_ids == ["C", "A", "D", "B"]
    assert result.ordered_waypoint_ids[0] == "C"
    assert result.ordered_waypoint_ids[-1] == "B"


def test_start_pin_only(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    result = RouteOptimizer.optimize([A, B, C, D], pinned_start_id="D")

    # middle [A, B, C] ordered from A: B is closer than C
    assert result.ordered_waypoint_ids == ["D", "A", "B", "C"]


def test_end_pin_only(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    result = RouteOptimizer.optimize([A, B, C, D], pinned_end_id="A")

    assert result.ordered_waypoint_ids[-1] == "A"
    assert result.ordered_waypoint_ids == ["B", "D", "C", "A"]


def test_equal_pins_act_as_start_pin(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    both = RouteOptimizer.optimize([A, B, C, D], pinned_start_id="D", pinned_end_id="D")
    start_only = RouteOptimizer.optimize([A, B, C, D], pinned_start_id="D")

    assert both.ordered_waypoint_ids == start_only.ordered_waypoint_ids


def test_pin_on_uncoordinated_waypoint_is_ignored(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    E = Waypoint(id="E")
    result = RouteOptimizer.optimize([A, D, B, C, E], pinned_start_id="E", pinned_end_id="missing")

    assert result.ordered_waypoint_ids == ["A", "B", "D", "C", "E"]


def test_only_pins_are_coordinated(square):
    result = RouteOptimizer.optimize(
        [square["A"], square["B"]], pinned_start_id="B", pinned_end_id="A"
    )
    assert result.ordered_waypoint_ids == ["B", "A"]
    assert result.changed is True
    assert result.distance_after_km == pytest.approx(result.distance_before_km)


@pytest.mark.parametrize("waypoints", [
    [],
    [Waypoint(id=1, latitude=55.0, longitude=41.0)],
    [Waypoint(id=1), Waypoint(id=2, latitude=55.0, longitude=41.0), Waypoint(id=3, latitude=None)],
    [Waypoint(id=1), Waypoint(id=2)],
])
def test_fewer_than_two_coordinated_is_noop(waypoints):
    result = RouteOptimizer.optimize(waypoints, pinned_start_id=2)

    assert result.changed is False
    assert result.ordered_waypoint_ids == [w.id for w in waypoints]
    assert result.distance_before_km == 0.0
    assert result.distance_after_km == 0.0


def test_ties_go_to_first_remaining():
    origin = Waypoint(id="P", latitude=10.0, longitude=10.0)
    east = Waypoint(id="Q", latitude=10.0, longitude=11.0)
    west = Waypoint(id="R", latitude=10.0, longitude=9.0)

    assert RouteOptimizer.optimize([origin, east, west]).ordered_waypoint_ids == ["P", "Q", "R"]
    assert RouteOptimizer.optimize([origin, west, east]).ordered_waypoint_ids == ["P", "R", "Q"]


def test_accepts_plain_mappings():
    result = optimize([
        {"id": 1, "latitude": "55.0", "longitude": "41.0", "title": "Suzdal"},
        {"id": 2, "latitude": 56.0, "longitude": 42.0, "title": 7},
        {"id": 3, "latitude": 55.0, "longitude": 42.0},
        {"id": 4},
    ])

    assert result.ordered_waypoint_ids == [1, 3, 2, 4]
    assert result.ordered_titles == ["Suzdal", None, "7"]


def test_output_is_permutation_with_duplicate_ids(square):
    A, B, C, D = square["A"], square["B"], square["C"], square["D"]
    twin = Waypoint(id="A", latitude=55.1, longitude=41.1)
    waypoints = [A, D, twin, B, Waypoint(id="Z"), C]

    result = RouteOptimizer.optimize(waypoints, pinned_start_id="A", pinned_end_id="C")

    assert sorted(result.ordered_waypoint_ids) == sorted(w.id for w in waypoints)
    assert result.ordered_waypoint_ids[0] == "A"
    assert result.ordered_waypoint_ids[-2] == "C"
    assert result.ordered_waypoint_ids[-1] == "Z"


def test_pins_hold_for_any_input_order(square):
    import itertools

    for perm in itertools.permutations(square.values()):
        result = RouteOptimizer.optimize(list(perm), pinned_start_id="B", pinned_end_id="C")
        assert result.ordered_waypoint_ids[0] == "B"
        assert result.ordered_waypoint_ids[-1] == "C"
        assert sorted(result.ordered_waypoint_ids) == ["A", "B", "C", "D"]


def test_distance_km_is_exported():
    assert distance_km(55.0, 41.0, 56.0, 42.0) == pytest.approx(distance_km(56.0, 42.0, 55.0, 41.0))


def test_already_nearest_neighbor_order_is_unchanged():
    waypoints = [
        Waypoint(id=1, latitude=55.0, longitude=42.0),
        Waypoint(id=2, latitude=55.0, longitude=43.0),
        Waypoint(id=3, latitude=55.0, longitude=44.0),
    ]
    result = RouteOptimizer.optimize(waypoints)

    assert result.changed is False
    assert result.ordered_waypoint_ids == [1, 2, 3]
    assert result.distance_after_km == result.distance_before_km
