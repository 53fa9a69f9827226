"""
CSS Shapes Studio - Shape Data Model

Provides the Shape record used by every other part of the editor:
- Type-aware defaults (create_default)
- Deep copies with a fresh identity (clone)
- Property validation for edits coming from the host
- Plain dict round trip, which is the whole save format

This is part of the MODEL layer - pure data, no UI logic.

Usage:
    shape = create_default('ellipse', (40, 40))
    shape.width                 # 120
    record = shape.to_dict()    # {'id': ..., 'type': 'ellipse', 'flipX': False, ...}
    same = Shape.from_dict(record)
"""

import copy
import math
import logging
import numbers
import uuid as uuid_module
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from constants import (
    SHAPE_TYPES, SHAPE_TEXT, BORDER_RADIUS_TYPES, CURVE_TYPES,
    DEFAULT_SHAPE_COLOR, DEFAULT_OPACITY, DEFAULT_ROTATION,
    DEFAULT_FLIP_X, DEFAULT_FLIP_Y,
    DEFAULT_SHAPE_X, DEFAULT_SHAPE_Y,
    DEFAULT_SHAPE_WIDTH, DEFAULT_SHAPE_HEIGHT, DEFAULT_SHAPE_SIZES,
    DEFAULT_BORDER_RADIUS, DEFAULT_CURVE,
    DEFAULT_TEXT, DEFAULT_FONT_SIZE, DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_WEIGHT, DEFAULT_FONT_STYLE, DEFAULT_TEXT_ALIGN,
    FONT_WEIGHTS, FONT_STYLES, TEXT_ALIGNS,
    MIN_SHAPE_SIZE, OPACITY_MIN, OPACITY_MAX, ROTATION_FULL_TURN,
    BORDER_RADIUS_MIN, BORDER_RADIUS_MAX, CURVE_MIN, CURVE_MAX,
    FONT_SIZE_MIN,
)
from .errors import ValidationError

_logger = logging.getLogger('Shape')


# Record key (save format) -> attribute name
RECORD_KEYS = {
    'id': 'id',
    'type': 'type',
    'x': 'x',
    'y': 'y',
    'width': 'width',
    'height': 'height',
    'color': 'color',
    'opacity': 'opacity',
    'rotation': 'rotation',
    'flipX': 'flip_x',
    'flipY': 'flip_y',
    'text': 'text',
    'fontSize': 'font_size',
    'fontFamily': 'font_family',
    'fontWeight': 'font_weight',
    'fontStyle': 'font_style',
    'textAlign': 'text_align',
    'borderRadius': 'border_radius',
    'curve': 'curve',
}
ATTRIBUTE_KEYS = {attr: key for key, attr in RECORD_KEYS.items()}

TEXT_ATTRIBUTES = ('text', 'font_size', 'font_family', 'font_weight', 'font_style', 'text_align')

# Never editable through update_property
IMMUTABLE_ATTRIBUTES = ('id', 'type')


def new_shape_id() -> str:
    """Generate a fresh shape id"""
    return uuid_module.uuid4().hex


@dataclass
class Shape:
    """One positioned, styled drawable on the canvas.

    Geometry is a top-left anchored box in canvas pixels. Optional fields are
    None for shape types that do not carry them:
        text, font_*, text_align -> text shapes only
        border_radius            -> rectangle / square (percent, 0-50)
        curve                    -> triangle / rightTriangle / diamond / star (0-100)
    """
    id: str
    type: str
    x: float = DEFAULT_SHAPE_X
    y: float = DEFAULT_SHAPE_Y
    width: float = DEFAULT_SHAPE_WIDTH
    height: float = DEFAULT_SHAPE_HEIGHT
    color: str = DEFAULT_SHAPE_COLOR
    opacity: float = DEFAULT_OPACITY
    rotation: float = DEFAULT_ROTATION
    flip_x: bool = DEFAULT_FLIP_X
    flip_y: bool = DEFAULT_FLIP_Y
    text: Optional[str] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    text_align: Optional[str] = None
    border_radius: Optional[float] = None
    curve: Optional[float] = None

    @property
    def is_text(self) -> bool:
        return self.type == SHAPE_TEXT

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def copy(self) -> 'Shape':
        """Deep copy keeping the same id (snapshots, clipboard)"""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Export as a plain record using the save-format keys.

        Optional fields are only written for the types that carry them.
        """
        record = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and not supports_attribute(self.type, f.name):
                continue
            record[ATTRIBUTE_KEYS[f.name]] = value
        return record

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> 'Shape':
        """Build a validated Shape from a saved record.

        Missing fields fall back to the type defaults; a record without an id
        gets a fresh one.

        Raises:
            ValidationError: Unknown type, unknown key or invalid value
        """
        if not isinstance(record, dict):
            raise ValidationError(f"Shape record must be a dict, got {type(record).__name__}")

        shape_type = record.get('type')
        shape = create_default(shape_type)

        record_id = record.get('id')
        if record_id is not None:
            if isinstance(record_id, bool) or not isinstance(record_id, (str, int)):
                raise ValidationError(f"Invalid shape id: {record_id!r}")
            shape.id = record_id

        for key, value in record.items():
            if key in IMMUTABLE_ATTRIBUTES:
                continue
            attr = resolve_attribute(key)
            if value is None and not supports_attribute(shape_type, attr):
                continue
            setattr(shape, attr, validate_property(shape, attr, value))
        return shape


# ========================================
# Factory
# ========================================

def create_default(shape_type: str, position: Optional[Tuple[float, float]] = None) -> Shape:
    """Create a new shape with a fresh id and type-appropriate defaults

    Args:
        shape_type: One of SHAPE_TYPES
        position: Optional (x, y) of the top-left corner

    Returns:
        New Shape

    Raises:
        ValidationError: If shape_type is unknown
    """
    if shape_type not in SHAPE_TYPES:
        raise ValidationError(f"Unknown shape type: {shape_type!r}")

    width, height = DEFAULT_SHAPE_SIZES.get(shape_type, (DEFAULT_SHAPE_WIDTH, DEFAULT_SHAPE_HEIGHT))
    x, y = position if position is not None else (DEFAULT_SHAPE_X, DEFAULT_SHAPE_Y)

    shape = Shape(id=new_shape_id(), type=shape_type, x=x, y=y, width=width, height=height)

    if shape_type == SHAPE_TEXT:
        shape.text = DEFAULT_TEXT
        shape.font_size = DEFAULT_FONT_SIZE
        shape.font_family = DEFAULT_FONT_FAMILY
        shape.font_weight = DEFAULT_FONT_WEIGHT
        shape.font_style = DEFAULT_FONT_STYLE
        shape.text_align = DEFAULT_TEXT_ALIGN
    elif shape_type in BORDER_RADIUS_TYPES:
        shape.border_radius = DEFAULT_BORDER_RADIUS
    elif shape_type in CURVE_TYPES:
        shape.curve = DEFAULT_CURVE

    _logger.debug(f"Created default {shape_type} ({shape.id})")
    return shape


def clone(shape: Shape) -> Shape:
    """Deep copy with a new id (paste, save as new)"""
    duplicate = copy.deepcopy(shape)
    duplicate.id = new_shape_id()
    return duplicate


# ========================================
# Validation
# ========================================

def resolve_attribute(key: str) -> str:
    """Map a record key ('fontSize') or attribute name ('font_size') to the attribute

    Raises:
        ValidationError: If the key names no Shape field
    """
    if key in RECORD_KEYS:
        return RECORD_KEYS[key]
    if key in ATTRIBUTE_KEYS:
        return key
    raise ValidationError(f"Unknown shape property: {key!r}")


def supports_attribute(shape_type: str, attr: str) -> bool:
    """Check whether shapes of this type carry the given attribute"""
    if attr in TEXT_ATTRIBUTES:
        return shape_type == SHAPE_TEXT
    if attr == 'border_radius':
        return shape_type in BORDER_RADIUS_TYPES
    if attr == 'curve':
        return shape_type in CURVE_TYPES
    return attr in ATTRIBUTE_KEYS


def _number(attr, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{attr} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{attr} must be finite, got {value!r}")
    return value


def _in_range(attr, value, low, high):
    value = _number(attr, value)
    if value < low or value > high:
        raise ValidationError(f"{attr} must be within [{low}, {high}], got {value!r}")
    return value


def _choice(attr, value, allowed):
    if value not in allowed:
        raise ValidationError(f"{attr} must be one of {allowed}, got {value!r}")
    return value


def validate_property(shape: Shape, attr: str, value: Any) -> Any:
    """Validate a new value for one attribute of shape

    Rotation is normalised into [0, 360); every other invalid value is rejected.

    Args:
        shape: Shape the value is meant for (its type decides which fields exist)
        attr: Attribute name (see resolve_attribute)
        value: Proposed value

    Returns:
        The value to store

    Raises:
        ValidationError: If the value breaks an invariant or the type lacks the field
    """
    if attr in IMMUTABLE_ATTRIBUTES:
        raise ValidationError(f"{attr} cannot be changed")
    if not supports_attribute(shape.type, attr):
        raise ValidationError(f"{shape.type} shapes have no {attr}")

    if attr in ('x', 'y'):
        return _number(attr, value)
    if attr in ('width', 'height'):
        value = _number(attr, value)
        if value < MIN_SHAPE_SIZE:
            raise ValidationError(f"{attr} must be at least {MIN_SHAPE_SIZE}, got {value!r}")
        return value
    if attr == 'opacity':
        return _in_range(attr, value, OPACITY_MIN, OPACITY_MAX)
    if attr == 'rotation':
        rotation = _number(attr, value) % ROTATION_FULL_TURN
        # Tiny negative floats wrap to exactly a full turn
        return 0 if rotation == ROTATION_FULL_TURN else rotation
    if attr in ('flip_x', 'flip_y'):
        if not isinstance(value, bool):
            raise ValidationError(f"{attr} must be a bool, got {value!r}")
        return value
    if attr in ('color', 'font_family'):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{attr} must be a non-empty string, got {value!r}")
        return value
    if attr == 'text':
        if not isinstance(value, str):
            raise ValidationError(f"text must be a string, got {value!r}")
        return value
    if attr == 'font_size':
        value = _number(attr, value)
        if value < FONT_SIZE_MIN:
            raise ValidationError(f"font_size must be at least {FONT_SIZE_MIN}, got {value!r}")
        return value
    if attr == 'font_weight':
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        return _choice(attr, value, FONT_WEIGHTS)
    if attr == 'font_style':
        return _choice(attr, value, FONT_STYLES)
    if attr == 'text_align':
        return _choice(attr, value, TEXT_ALIGNS)
    if attr == 'border_radius':
        return _in_range(attr, value, BORDER_RADIUS_MIN, BORDER_RADIUS_MAX)
    if attr == 'curve':
        return _in_range(attr, value, CURVE_MIN, CURVE_MAX)

    raise ValidationError(f"Unknown shape property: {attr!r}")
