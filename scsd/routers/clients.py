from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/clients", tags=["clients"])


def _get_or_404(client_id: int, db: Session) -> models.Client:
    client = db.query(models.Client).filter(models.Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client

@router.post("/", response_model=schemas.Client)
def create_client(client: schemas.ClientCreate, db: Session = Depends(get_db)):
    db_client = models.Client(**client.model_dump())
    db.add(db_client)
    db.commit()
    db.refresh(db_client)
    return db_client

@router.get("/", response_model=List[schemas.Client])
def list_clients(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return (
        db.query(models.Client)
        .order_by(models.Client.last_name, models.Client.first_name)
        .offset(skip).limit(limit).all()
    )

@router.get("/{client_id}", response_model=schemas.Client)
def get_client(client_id: int, db: Session = Depends(get_db)):
    return _get_or_404(client_id, db)

@router.patch("/{client_id}", response_model=schemas.Client)
def update_client(client_id: int, update: schemas.ClientUpdate, db: Session = Depends(get_db)):
    client = _get_or_404(client_id, db)
    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(client, field, value)
    db.commit()
    db.refresh(client)
    return client

@router.delete("/{client_id}")
def delete_client(client_id: int, db: Session = Depends(get_db)):
    client = _get_or_404(client_id, db)
    if client.quotes:
        raise HTTPException(status_code=400, detail="Client has quotes, delete them first")
    for job in client.jobs:
        job.client_id = None
    db.delete(client)
    db.commit()
    return {"ok": True}
