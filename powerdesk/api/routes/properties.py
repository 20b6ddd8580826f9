"""Property API routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from powerdesk.core.database import get_db
from powerdesk.schemas.property import PropertyCreate, PropertyResponse
from powerdesk.services import property as property_service

router = APIRouter(prefix="/properties", tags=["properties"])


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """Create a new property."""
    db_property = property_service.create_property(db, property_data)
    return PropertyResponse.model_validate(db_property)


@router.get("", response_model=list[PropertyResponse])
def list_properties(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> list[PropertyResponse]:
    """List all active properties."""
    properties = property_service.get_properties(db, skip, limit)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """Get a property by ID."""
    return PropertyResponse.model_validate(property_service.get_property(db, property_id))
