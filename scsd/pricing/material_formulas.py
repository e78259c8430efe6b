"""
Material quantity formulas.

Converts a measured area plus a type-specific second parameter into an
orderable quantity:

    Bitumen   (sqm * spray_rate) / formula    -> litres
    Asphalt   sqm * depth * formula           -> tonnes
    Roadbase  sqm * depth * formula           -> tonnes
    Stone     (sqm / spray_rate) * formula    -> tonnes

`formula` is the per-material constant from the catalog; a missing constant
is treated as 1. Unrecognized material types resolve to a quantity of 0.
"""

import math

from ..enums import MaterialType

DEFAULT_FORMULA = 1.0

SPRAY_RATE_TYPES = (MaterialType.BITUMEN, MaterialType.STONE)


class InvalidInput(ValueError):
    """Raised when a formula input cannot produce a finite, non-negative quantity."""


def coerce_material_type(material_type):
    if isinstance(material_type, MaterialType):
        return material_type
    try:
        return MaterialType(str(material_type))
    except ValueError:
        return None


def _check(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise InvalidInput(f"{name} must be a finite number, got {value}")
    if value < 0:
        raise InvalidInput(f"{name} must not be negative, got {value}")
    return value


def material_quantity(material_type, sqm: float, depth: float, formula: float = None) -> float:
    """
    Resolve the physical quantity for one material line.

    Raises InvalidInput for negative inputs and for a zero divisor
    (formula = 0 on Bitumen, depth = 0 on Stone).
    """
    sqm = _check("sqm", sqm)
    depth = _check("depth", depth)
    formula = DEFAULT_FORMULA if formula is None else _check("formula", formula)

    mtype = coerce_material_type(material_type)
    if mtype == MaterialType.BITUMEN:
        if formula == 0:
            raise InvalidInput("Bitumen formula constant must be greater than 0")
        return (sqm * depth) / formula
    if mtype in (MaterialType.ASPHALT, MaterialType.ROADBASE):
        return sqm * depth * formula
    if mtype == MaterialType.STONE:
        if depth == 0:
            raise InvalidInput("Stone spray rate must be greater than 0")
        return (sqm / depth) * formula
    return 0.0


def quantity_unit(material_type) -> str:
    return "litres" if coerce_material_type(material_type) == MaterialType.BITUMEN else "tonnes"


def depth_label(material_type) -> str:
    """Label for the second measurement field: 'spray rate' or 'depth'."""
    return "spray rate" if coerce_material_type(material_type) in SPRAY_RATE_TYPES else "depth"
