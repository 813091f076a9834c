"""GET /api/service-types — public catalogue of active refinishing services."""
from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_storage
from models.service_type import ServiceType
from storage.base import Storage

router = APIRouter()


@router.get("/service-types", response_model=list[ServiceType])
def list_service_types(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_service_types(active_only=True)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch service types: {e}")
