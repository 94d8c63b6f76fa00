"""Export, import, and reset endpoints for the whole store."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from task_planner.api.deps import get_data_transfer_service
from task_planner.schemas.common import OkResponse
from task_planner.schemas.data_transfer import DataExport, DataImport
from task_planner.schemas.errors import ErrorResponse
from task_planner.services.data_transfer import DataTransferService

router = APIRouter(prefix="/data", tags=["data"])
DATA_DEP = Depends(get_data_transfer_service)


@router.get("/export", response_model=DataExport)
async def export_data(service: DataTransferService = DATA_DEP) -> DataExport:
    """Full snapshot of tasks and categories."""
    return service.export()


@router.post(
    "/import",
    response_model=OkResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def import_data(
    payload: DataImport,
    service: DataTransferService = DATA_DEP,
) -> OkResponse:
    """Replace each collection present in the document."""
    service.import_snapshot(payload)
    return OkResponse()


@router.post("/reset", response_model=OkResponse)
async def reset_data(service: DataTransferService = DATA_DEP) -> OkResponse:
    """Restore the built-in sample categories and tasks."""
    service.reset()
    return OkResponse()
