"""
Catalog repository: read access to clients and resource records.

The quote builder resolves picker selections through this object instead of
querying the session directly, so the pricing core never touches the database.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from . import models
from .database import get_db


class CatalogRepository:

    def __init__(self, db: Session):
        self.db = db

    def _get(self, model, record_id):
        if record_id is None:
            return None
        return self.db.query(model).filter(model.id == record_id).first()

    def get_client(self, client_id):
        return self._get(models.Client, client_id)

    def get_labour(self, labour_id):
        return self._get(models.LabourResource, labour_id)

    def get_equipment(self, equipment_id):
        return self._get(models.EquipmentResource, equipment_id)

    def get_material(self, material_id):
        return self._get(models.MaterialResource, material_id)


def get_catalog(db: Session = Depends(get_db)) -> CatalogRepository:
    return CatalogRepository(db)
