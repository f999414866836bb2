"""
Resource list API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from fleetbook.config.column_loader import get_resource_labels
from fleetbook.db.database import get_db, settings
from fleetbook.schemas.resource import (
    ResourceType,
    ResourceValue,
    ResourceListsResponse,
    ResourceLabelsResponse,
)
from fleetbook.services.resource_store import (
    DatabaseResourceStore,
    JsonFileResourceStore,
    ResourceStore,
    UnknownResourceType,
    resolve_resource_type,
)

router = APIRouter()


def get_resource_store(db: Session = Depends(get_db)) -> ResourceStore:
    """Pick the configured resource backend."""
    if settings.resource_backend == "file":
        return JsonFileResourceStore(settings.resource_file)
    return DatabaseResourceStore(db)


def _resource_type(resource_type: str) -> ResourceType:
    try:
        return resolve_resource_type(resource_type)
    except UnknownResourceType as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.get("/", response_model=ResourceListsResponse)
async def get_resources(
    store: ResourceStore = Depends(get_resource_store)
):
    """All six resource lists."""
    return store.get()


@router.get("/labels", response_model=ResourceLabelsResponse)
async def get_labels():
    """Display labels per resource type."""
    labels = get_resource_labels()
    return {"labels": {member.value: labels.get(member.value, member.value) for member in ResourceType}}


@router.post("/{resource_type}", response_model=ResourceListsResponse, status_code=status.HTTP_201_CREATED)
async def add_resource(
    resource_type: str,
    payload: ResourceValue,
    store: ResourceStore = Depends(get_resource_store)
):
    """Add a value. Blank values and duplicates are ignored."""
    kind = _resource_type(resource_type)
    store.add(kind, payload.value)
    return store.get()


@router.delete("/{resource_type}/{value}", response_model=ResourceListsResponse)
async def remove_resource(
    resource_type: str,
    value: str,
    store: ResourceStore = Depends(get_resource_store)
):
    """Remove a value."""
    kind = _resource_type(resource_type)
    if not store.remove(kind, value):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"'{value}' is not in {kind.value}"
        )
    return store.get()
