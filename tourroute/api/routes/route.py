"""Route ordering and route constructor endpoints"""
import logging

from fastapi import APIRouter, HTTPException
from ...models.schemas import (
    ConstructorActionRequest,
    ConstructorOptimizeRequest,
    ConstructorOptimizeResponse,
    ConstructorState,
    OptimizationRequest,
    OptimizationResult,
)
from ...services.route_constructor import RouteConstructor
from ...services.route_optimizer import RouteOptimizer

logger = logging.getLogger(__name__)

router = APIRouter()


def _require(value, name: str):
    if value is None:
        raise ValueError(f"'{name}' is required for this action")
    return value


CONSTRUCTOR_ACTIONS = {
    "add": lambda req: RouteConstructor.add_place(req.state, req.place_id),
    "remove": lambda req: RouteConstructor.remove_place(req.state, _require(req.place_id, "place_id")),
    "set_start": lambda req: RouteConstructor.set_start_place(req.state, req.place_id),
    "set_end": lambda req: RouteConstructor.set_end_place(req.state, req.place_id),
    "move": lambda req: RouteConstructor.move_place(
        req.state, _require(req.from_index, "from_index"), _require(req.direction, "direction")
    ),
    "move_by_drag": lambda req: RouteConstructor.move_place_by_drag(
        req.state, _require(req.from_index, "from_index"), _require(req.to_index, "to_index")
    ),
    "reorder": lambda req: RouteConstructor.reorder_place_ids(req.state, _require(req.place_ids, "place_ids")),
    "clear": lambda req: RouteConstructor.clear(req.state),
    "load": lambda req: RouteConstructor.load_place_ids(req.state, req.place_ids),
}


@router.post("/optimize_route", response_model=OptimizationResult, tags=["Optimization"])
async def optimize_route(request: OptimizationRequest):
    """
    Order the stops of a route to shorten the walked/driven path.

    This endpoint:
    1. Splits waypoints into those with and without coordinates
    2. Keeps the pinned start/end places at the ends of the route
    3. Orders the rest with a nearest-neighbor heuristic (haversine distance)
    4. Returns the new order with before/after distances

    Args:
        request: Waypoints in the current order plus optional pins

    Returns:
        Optimization result
    """
    try:
        logger.info("Optimizing route with %d waypoints", len(request.waypoints))
        return RouteOptimizer.optimize(
            request.waypoints,
            pinned_start_id=request.pinned_start_id,
            pinned_end_id=request.pinned_end_id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Route optimization failed")
        raise HTTPException(
            status_code=500,
            detail=f"Error in optimization: {str(e)}"
        )


@router.post(
    "/route_constructor/optimize",
    response_model=ConstructorOptimizeResponse,
    tags=["Route constructor"]
)
async def optimize_constructor(request: ConstructorOptimizeRequest):
    """
    Optimize the order of a route under construction.

    Returns the new constructor state and the optimization summary;
    the summary is null when the route has fewer than two places.
    """
    try:
        state, result = RouteConstructor.optimize(request.state, request.waypoints)
        return ConstructorOptimizeResponse(state=state, result=result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Route constructor optimization failed")
        raise HTTPException(
            status_code=500,
            detail=f"Error in optimization: {str(e)}"
        )


@router.post(
    "/route_constructor/{action}",
    response_model=ConstructorState,
    tags=["Route constructor"]
)
async def constructor_action(action: str, request: ConstructorActionRequest):
    """
    Apply one action to a route under construction.

    Actions: add, remove, set_start, set_end, move, move_by_drag,
    reorder, clear, load.

    Args:
        action: Action name
        request: Current state plus the arguments of the action

    Returns:
        New constructor state
    """
    handler = CONSTRUCTOR_ACTIONS.get(action)
    if handler is None:
        raise HTTPException(status_code=404, detail=f"Unknown route constructor action: {action}")

    try:
        return handler(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Route constructor action '%s' failed", action)
        raise HTTPException(
            status_code=500,
            detail=f"Error in route constructor: {str(e)}"
        )
