"""
Material quantity formulas.

Tests:
1. Each material type applies its own formula
2. Missing formula constant counts as 1
3. Zero divisors raise InvalidInput (Bitumen formula, Stone spray rate)
4. Negative measurements raise InvalidInput
5. Unknown material types resolve to 0
6. Units and second-field labels per type
"""

import pytest

from scsd.enums import MaterialType
from scsd.pricing import InvalidInput, depth_label, material_quantity, quantity_unit


# ============================================================
# Formulas
# ============================================================

def test_bitumen_divides_by_formula():
    # 100 m2 at 1.5 L/m2 with a formula constant of 1 -> 150 L
    assert material_quantity(MaterialType.BITUMEN, 100, 1.5, 1) == pytest.approx(150)
    assert material_quantity(MaterialType.BITUMEN, 100, 1.5, 2) == pytest.approx(75)


def test_asphalt_multiplies_by_formula():
    assert material_quantity(MaterialType.ASPHALT, 100, 0.05, 2.4) == pytest.approx(12)


def test_roadbase_uses_asphalt_formula():
    assert material_quantity("Roadbase", 200, 0.1, 2.1) == pytest.approx(42)


def test_stone_divides_area_by_spray_rate():
    assert material_quantity(MaterialType.STONE, 100, 200, 1) == pytest.approx(0.5)
    assert material_quantity(MaterialType.STONE, 100, 200, 3) == pytest.approx(1.5)


def test_bitumen_fifty_square_metres():
    # 50 m2 sprayed at 1.5 -> 75 litres
    assert material_quantity(MaterialType.BITUMEN, 50, 1.5, 1) == pytest.approx(75)


def test_stone_two_hundred_square_metres():
    # 200 m2 / 4 * 3 -> 150 tonnes
    assert material_quantity(MaterialType.STONE, 200, 4, 3) == pytest.approx(150)


def test_missing_formula_counts_as_one():
    assert material_quantity(MaterialType.BITUMEN, 100, 1.5) == pytest.approx(150)
    assert material_quantity(MaterialType.ASPHALT, 100, 0.05, None) == pytest.approx(5)


def test_string_material_type_accepted():
    assert material_quantity("Bitumen", 10, 2, 1) == pytest.approx(20)


def test_zero_area_gives_zero_quantity():
    assert material_quantity(MaterialType.ASPHALT, 0, 0.05, 2.4) == 0
    assert material_quantity(MaterialType.STONE, 0, 200, 1) == 0


# ============================================================
# Invalid input
# ============================================================

def test_bitumen_zero_formula_raises():
    with pytest.raises(InvalidInput):
        material_quantity(MaterialType.BITUMEN, 100, 1.5, 0)


def test_stone_zero_spray_rate_raises():
    with pytest.raises(InvalidInput):
        material_quantity(MaterialType.STONE, 100, 0, 1)


def test_negative_area_raises():
    with pytest.raises(InvalidInput):
        material_quantity(MaterialType.ASPHALT, -5, 0.05, 2.4)


def test_negative_depth_raises():
    with pytest.raises(InvalidInput):
        material_quantity(MaterialType.ROADBASE, 10, -0.1, 2.1)


def test_invalid_input_is_a_value_error():
    assert issubclass(InvalidInput, ValueError)


def test_unknown_type_is_zero():
    assert material_quantity("Gravel", 100, 2, 5) == 0.0


# ============================================================
# Labels
# ============================================================

def test_units():
    assert quantity_unit(MaterialType.BITUMEN) == "litres"
    assert quantity_unit(MaterialType.ASPHALT) == "tonnes"
    assert quantity_unit(MaterialType.ROADBASE) == "tonnes"
    assert quantity_unit("Stone") == "tonnes"


def test_depth_labels():
    assert depth_label(MaterialType.BITUMEN) == "spray rate"
    assert depth_label(MaterialType.STONE) == "spray rate"
    assert depth_label(MaterialType.ASPHALT) == "depth"
    assert depth_label("Roadbase") == "depth"
