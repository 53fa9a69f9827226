"""
CSS Shapes Studio - Data Models

The shape record, its validation rules and the geometry used to render and
export it. This is the MODEL in MVC architecture.

Public API: Shape and its helpers from models.shape, errors from models.errors.
"""

from .errors import ValidationError, NotFoundError
from .shape import Shape, create_default, clone, new_shape_id

__all__ = ['Shape', 'create_default', 'clone', 'new_shape_id', 'ValidationError', 'NotFoundError']
