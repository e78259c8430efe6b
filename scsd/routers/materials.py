from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db
from ..pricing import depth_label, quantity_unit

router = APIRouter(prefix="/materials", tags=["materials"])


def _get_or_404(material_id: int, db: Session) -> models.MaterialResource:
    material = db.query(models.MaterialResource).filter(models.MaterialResource.id == material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found")
    return material

@router.get("/types")
def list_material_types():
    """Material types with the unit and second-field label each one uses."""
    return [
        {
            "material_type": mat_type.value,
            "unit": quantity_unit(mat_type),
            "depth_label": depth_label(mat_type),
        }
        for mat_type in models.MaterialType
    ]

@router.post("/", response_model=schemas.MaterialResource)
def create_material(material: schemas.MaterialResourceCreate, db: Session = Depends(get_db)):
    db_material = models.MaterialResource(**material.model_dump())
    db.add(db_material)
    db.commit()
    db.refresh(db_material)
    return db_material

@router.get("/", response_model=List[schemas.MaterialResource])
def list_materials(db: Session = Depends(get_db)):
    return db.query(models.MaterialResource).order_by(
        models.MaterialResource.material_type, models.MaterialResource.name,
    ).all()

@router.get("/{material_id}", response_model=schemas.MaterialResource)
def get_material(material_id: int, db: Session = Depends(get_db)):
    return _get_or_404(material_id, db)

@router.patch("/{material_id}", response_model=schemas.MaterialResource)
def update_material(material_id: int, update: schemas.MaterialResourceUpdate, db: Session = Depends(get_db)):
    material = _get_or_404(material_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(material, field, value)
    db.commit()
    db.refresh(material)
    return material

@router.delete("/{material_id}")
def delete_material(material_id: int, db: Session = Depends(get_db)):
    material = _get_or_404(material_id, db)
    in_use = db.query(models.QuoteMaterialLine).filter(models.QuoteMaterialLine.material_id == material_id).first()
    if in_use:
        raise HTTPException(status_code=400, detail="Material is used on saved quotes")
    db.delete(material)
    db.commit()
    return {"ok": True}
