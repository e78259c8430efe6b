"""
Line-item builders.

Tests:
1. Day and night rate selection, total = quantity * rate
2. Missing selection, quantity or phase refuses the add (returns None)
3. Zero quantity accepted, negative refused
4. Text entries from form inputs are parsed
5. Material lines: quantity from the type formula, charge = quantity * sell price
6. Line models reject totals that do not match their inputs
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from scsd.enums import MaterialType, Phase
from scsd.pricing import (
    InvalidInput,
    LabourLine,
    MaterialLine,
    build_equipment_line,
    build_labour_line,
    build_material_line,
)


def _sample_labour(**overrides):
    data = {"id": 1, "name": "Crew hand", "charge_out_rate": 40.0, "night_rate": 65.0}
    data.update(overrides)
    return SimpleNamespace(**data)


def _sample_equipment(**overrides):
    data = {"id": 7, "name": "Bitumen sprayer", "charge_out_rate": 120.0, "night_rate": 150.0}
    data.update(overrides)
    return SimpleNamespace(**data)


def _sample_material(**overrides):
    data = {"id": 3, "name": "AC14", "material_type": "Asphalt", "formula": 2.4}
    data.update(overrides)
    return SimpleNamespace(**data)


# ============================================================
# Labour and equipment
# ============================================================

def test_labour_day_rate():
    line = build_labour_line(_sample_labour(), 8, "Preparation")
    assert line.charge_rate == 40.0
    assert line.total == 320.0
    assert line.required_for == Phase.PREPARATION
    assert line.is_night is False
    assert line.labour_id == 1


def test_equipment_night_rate():
    line = build_equipment_line(_sample_equipment(), 2, "Seal", is_night=True)
    assert line.charge_rate == 150.0
    assert line.total == 300.0
    assert line.is_night is True
    assert line.equipment_id == 7


def test_total_is_exact_product():
    line = build_labour_line(_sample_labour(charge_out_rate=33.33), 7.5, "Asphalt")
    assert line.total == 7.5 * 33.33


def test_missing_rate_counts_as_zero():
    line = build_equipment_line(_sample_equipment(night_rate=None), 3, "Seal", is_night=True)
    assert line.total == 0.0


def test_quantity_from_text_entry():
    line = build_labour_line(_sample_labour(), " 4.5 ", "Seal")
    assert line.quantity == 4.5
    assert line.total == 180.0


def test_zero_quantity_accepted():
    line = build_labour_line(_sample_labour(), 0, "Seal")
    assert line is not None
    assert line.total == 0.0


def test_negative_quantity_refused():
    assert build_labour_line(_sample_labour(), -1, "Seal") is None
    assert build_equipment_line(_sample_equipment(), -0.5, "Seal") is None


@pytest.mark.parametrize("quantity", [None, "", "abc", float("nan"), True])
def test_bad_quantity_refused(quantity):
    assert build_labour_line(_sample_labour(), quantity, "Seal") is None


def test_missing_selection_refused():
    assert build_labour_line(None, 8, "Seal") is None
    assert build_equipment_line(None, 8, "Seal") is None


@pytest.mark.parametrize("phase", [None, "", "Demolition"])
def test_missing_phase_refused(phase):
    assert build_equipment_line(_sample_equipment(), 2, phase) is None


# ============================================================
# Materials
# ============================================================

def test_asphalt_material_line():
    line = build_material_line(_sample_material(), 100, 0.05, 120)
    assert line.material_type == MaterialType.ASPHALT
    assert line.quantity == pytest.approx(12)
    assert line.charge == pytest.approx(1440)
    assert line.material_id == 3


def test_material_line_missing_formula():
    line = build_material_line(_sample_material(material_type="Bitumen", formula=None), 50, 1.5, 2)
    assert line.quantity == pytest.approx(75)
    assert line.charge == pytest.approx(150)


@pytest.mark.parametrize("sqm,depth,price", [
    (None, 0.05, 120),
    (100, "", 120),
    (100, 0.05, None),
    ("lots", 0.05, 120),
])
def test_material_missing_field_refused(sqm, depth, price):
    assert build_material_line(_sample_material(), sqm, depth, price) is None


def test_material_negative_price_refused():
    assert build_material_line(_sample_material(), 100, 0.05, -1) is None


def test_material_unknown_type_refused():
    assert build_material_line(_sample_material(material_type="Gravel"), 100, 0.05, 10) is None


def test_material_no_selection_refused():
    assert build_material_line(None, 100, 0.05, 10) is None


def test_material_zero_divisor_raises():
    with pytest.raises(InvalidInput):
        build_material_line(_sample_material(material_type="Stone", formula=3), 200, 0, 10)


# ============================================================
# Line models
# ============================================================

def test_labour_line_rejects_wrong_total():
    with pytest.raises(ValidationError):
        LabourLine(quantity=2, charge_rate=10, total=25, required_for="Seal")


def test_material_line_rejects_wrong_charge():
    with pytest.raises(ValidationError):
        MaterialLine(
            material_type="Asphalt", sqm=100, depth=0.05,
            quantity=12, sell_price=120, charge=1000,
        )


def test_lines_are_immutable():
    line = build_labour_line(_sample_labour(), 8, "Seal")
    with pytest.raises(ValidationError):
        line.total = 1.0
