from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/labour", tags=["labour"])


def _get_or_404(resource_id: int, db: Session) -> models.LabourResource:
    resource = db.query(models.LabourResource).filter(models.LabourResource.id == resource_id).first()
    if not resource:
        raise HTTPException(status_code=404, detail="Labour entry not found")
    return resource

@router.post("/", response_model=schemas.LabourResource)
def create_labour(resource: schemas.LabourResourceCreate, db: Session = Depends(get_db)):
    db_resource = models.LabourResource(**resource.model_dump())
    db.add(db_resource)
    db.commit()
    db.refresh(db_resource)
    return db_resource

@router.get("/", response_model=List[schemas.LabourResource])
def list_labour(db: Session = Depends(get_db)):
    return db.query(models.LabourResource).order_by(models.LabourResource.name).all()

@router.get("/{resource_id}", response_model=schemas.LabourResource)
def get_labour(resource_id: int, db: Session = Depends(get_db)):
    return _get_or_404(resource_id, db)

@router.patch("/{resource_id}", response_model=schemas.LabourResource)
def update_labour(resource_id: int, update: schemas.LabourResourceUpdate, db: Session = Depends(get_db)):
    resource = _get_or_404(resource_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(resource, field, value)
    db.commit()
    db.refresh(resource)
    return resource

@router.delete("/{resource_id}")
def delete_labour(resource_id: int, db: Session = Depends(get_db)):
    resource = _get_or_404(resource_id, db)
    in_use = db.query(models.QuoteLabourLine).filter(models.QuoteLabourLine.labour_id == resource_id).first()
    if in_use:
        raise HTTPException(status_code=400, detail="Labour entry is used on saved quotes")
    db.delete(resource)
    db.commit()
    return {"ok": True}
