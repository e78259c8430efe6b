from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/equipment", tags=["equipment"])


def _get_or_404(resource_id: int, db: Session) -> models.EquipmentResource:
    resource = db.query(models.EquipmentResource).filter(models.EquipmentResource.id == resource_id).first()
    if not resource:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return resource

@router.post("/", response_model=schemas.EquipmentResource)
def create_equipment(resource: schemas.EquipmentResourceCreate, db: Session = Depends(get_db)):
    db_resource = models.EquipmentResource(**resource.model_dump())
    db.add(db_resource)
    db.commit()
    db.refresh(db_resource)
    return db_resource

@router.get("/", response_model=List[schemas.EquipmentResource])
def list_equipment(db: Session = Depends(get_db)):
    return db.query(models.EquipmentResource).order_by(models.EquipmentResource.category, models.EquipmentResource.name).all()

@router.get("/{resource_id}", response_model=schemas.EquipmentResource)
def get_equipment(resource_id: int, db: Session = Depends(get_db)):
    return _get_or_404(resource_id, db)

@router.patch("/{resource_id}", response_model=schemas.EquipmentResource)
def update_equipment(resource_id: int, update: schemas.EquipmentResourceUpdate, db: Session = Depends(get_db)):
    resource = _get_or_404(resource_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(resource, field, value)
    db.commit()
    db.refresh(resource)
    return resource

@router.delete("/{resource_id}")
def delete_equipment(resource_id: int, db: Session = Depends(get_db)):
    resource = _get_or_404(resource_id, db)
    in_use = db.query(models.QuoteEquipmentLine).filter(models.QuoteEquipmentLine.equipment_id == resource_id).first()
    if in_use:
        raise HTTPException(status_code=400, detail="Equipment is used on saved quotes")
    db.delete(resource)
    db.commit()
    return {"ok": True}
