"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import CoordinateSchema, OperationMessage, SensorSchema, SensorUpdate
from datastore.sensor_registry import SensorRegistry, build_default_registry
from services.sensors import SensorService

router = APIRouter()


def get_registry() -> SensorRegistry:
    return build_default_registry()


def get_service(registry: SensorRegistry = Depends(get_registry)) -> SensorService:
    return SensorService(registry=registry)


@router.post(
    "/sensors",
    status_code=status.HTTP_201_CREATED,
    response_model=SensorSchema,
    summary="Register a new sensor.",
)
async def create_sensor(
    payload: SensorSchema,
    service: SensorService = Depends(get_service),
) -> SensorSchema:
    sensor = service.create_sensor(payload.to_domain())
    return SensorSchema.from_domain(sensor)


@router.get(
    "/sensors",
    response_model=List[SensorSchema],
    summary="List every sensor in registration order.",
)
async def list_sensors(
    service: SensorService = Depends(get_service),
) -> List[SensorSchema]:
    return [SensorSchema.from_domain(sensor) for sensor in service.list_sensors()]


@router.get(
    "/nearest",
    response_model=SensorSchema,
    summary="Find the sensor closest to a coordinate.",
)
async def nearest_sensor(
    x: float = Query(..., allow_inf_nan=False, description="X component of the query point."),
    y: float = Query(..., allow_inf_nan=False, description="Y component of the query point."),
    service: SensorService = Depends(get_service),
) -> SensorSchema:
    target = CoordinateSchema(x=x, y=y).to_domain()
    try:
        sensor = service.nearest_sensor(target)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0],
        ) from exc
    return SensorSchema.from_domain(sensor)


@router.get(
    "/sensors/{name}",
    response_model=SensorSchema,
    summary="Fetch a sensor by name.",
)
async def get_sensor(
    name: str,
    service: SensorService = Depends(get_service),
) -> SensorSchema:
    try:
        sensor = service.fetch_sensor(name)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0],
        ) from exc
    return SensorSchema.from_domain(sensor)


@router.patch(
    "/sensors/{name}",
    response_model=OperationMessage,
    response_model_exclude_none=True,
    summary="Replace the tags and location of a sensor.",
)
async def update_sensor(
    name: str,
    payload: SensorUpdate,
    service: SensorService = Depends(get_service),
) -> OperationMessage:
    try:
        service.update_sensor(name, payload.tags, payload.location.to_domain())
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0],
        ) from exc
    return OperationMessage(success="sensor updated")


@router.delete(
    "/sensors/{name}",
    response_model=OperationMessage,
    response_model_exclude_none=True,
    summary="Delete every sensor with the given name.",
)
async def delete_sensor(
    name: str,
    service: SensorService = Depends(get_service),
) -> OperationMessage:
    if service.delete_sensor(name):
        return OperationMessage(success="sensor deleted")
    return OperationMessage(error="sensor not found")


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(
    registry: SensorRegistry = Depends(get_registry),
) -> dict[str, str | int]:
    return {"status": "ok", "sensor_count": len(registry)}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
