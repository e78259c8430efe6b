"""Immutable line-item and summary value types shared by the pricing core and the API."""

import math
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ..enums import MaterialType, Phase


def _matches(stored: float, expected: float) -> bool:
    return math.isclose(stored, expected, rel_tol=1e-9, abs_tol=1e-9)


class LabourLine(BaseModel):
    labour_id: Optional[int] = None
    quantity: float = Field(ge=0)
    charge_rate: float = Field(ge=0)  # day or night rate, snapshotted when the line was added
    total: float
    required_for: Phase
    is_night: bool = False

    class Config:
        frozen = True
        from_attributes = True

    @model_validator(mode="after")
    def _check_total(self):
        if not _matches(self.total, self.quantity * self.charge_rate):
            raise ValueError("total must equal quantity * charge_rate")
        return self


class EquipmentLine(BaseModel):
    equipment_id: Optional[int] = None
    quantity: float = Field(ge=0)
    charge_rate: float = Field(ge=0)
    total: float
    required_for: Phase
    is_night: bool = False

    class Config:
        frozen = True
        from_attributes = True

    @model_validator(mode="after")
    def _check_total(self):
        if not _matches(self.total, self.quantity * self.charge_rate):
            raise ValueError("total must equal quantity * charge_rate")
        return self


class MaterialLine(BaseModel):
    material_id: Optional[int] = None
    material_type: MaterialType
    sqm: float = Field(ge=0)
    depth: float = Field(ge=0)  # spray rate for Bitumen/Stone, depth for Asphalt/Roadbase
    quantity: float = Field(ge=0)
    sell_price: float = Field(ge=0)
    charge: float

    class Config:
        frozen = True
        from_attributes = True

    @model_validator(mode="after")
    def _check_charge(self):
        if not _matches(self.charge, self.quantity * self.sell_price):
            raise ValueError("charge must equal quantity * sell_price")
        return self


class QuoteSummary(BaseModel):
    labour_total: float
    equipment_total: float
    material_total: float
    cost_base: float
    markup_rate: float  # percent
    markup_amount: float
    subtotal: float
    gst_rate: float
    gst: float
    grand_total: float
    profit: float
    margin: float  # percent of subtotal

    class Config:
        frozen = True
