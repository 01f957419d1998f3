"""Pydantic models for request/response validation"""
from pydantic import BaseModel, Field
from typing import Any, List, Optional, Union

from ..config import MAX_WAYPOINTS

PlaceId = Union[int, str]


class Waypoint(BaseModel):
    """A place that can be a stop of a route"""
    id: PlaceId = Field(..., description="Identificador estable del lugar")
    latitude: Optional[Any] = Field(
        default=None,
        description="Latitud en grados decimales; vacía, cero o no numérica = sin coordenadas"
    )
    longitude: Optional[Any] = Field(
        default=None,
        description="Longitud en grados decimales; vacía, cero o no numérica = sin coordenadas"
    )
    title: Optional[str] = Field(default=None, description="Nombre visible del lugar")


class OptimizationRequest(BaseModel):
    """Request model for route ordering"""
    waypoints: List[Waypoint] = Field(
        ...,
        description="Lugares en el orden elegido por el usuario",
        max_length=MAX_WAYPOINTS
    )
    pinned_start_id: Optional[PlaceId] = Field(
        default=None,
        description="Lugar fijado como inicio del recorrido"
    )
    pinned_end_id: Optional[PlaceId] = Field(
        default=None,
        description="Lugar fijado como final del recorrido"
    )


class OptimizationResult(BaseModel):
    """Reordered ids plus the before/after comparison shown to the user"""
    changed: bool
    distance_before_km: float
    distance_after_km: float
    ordered_waypoint_ids: List[PlaceId]
    ordered_titles: List[Optional[str]] = Field(
        default_factory=list,
        description="Títulos del bloque con coordenadas, en el orden final"
    )
    coordinated_count: int
    uncoordinated_count: int


class ConstructorState(BaseModel):
    """Route under construction, owned by the caller"""
    place_ids: List[PlaceId] = Field(default_factory=list, max_length=MAX_WAYPOINTS)
    start_place_id: Optional[PlaceId] = None
    end_place_id: Optional[PlaceId] = None


class ConstructorActionRequest(BaseModel):
    """Arguments for a route constructor action; each action reads only its own fields"""
    state: ConstructorState = Field(default_factory=ConstructorState)
    place_id: Optional[PlaceId] = None
    place_ids: Optional[List[PlaceId]] = None
    from_index: Optional[int] = None
    to_index: Optional[int] = None
    direction: Optional[int] = Field(default=None, description="-1 sube, +1 baja")


class ConstructorOptimizeRequest(BaseModel):
    """Constructor state plus the coordinates of its places"""
    state: ConstructorState
    waypoints: List[Waypoint] = Field(default_factory=list, max_length=MAX_WAYPOINTS)


class ConstructorOptimizeResponse(BaseModel):
    state: ConstructorState
    result: Optional[OptimizationResult] = None
