"""
Shape registrations for numpy values.

Arrays are compared row by row along their first axis so that a mismatch
is reported at the index where it occurs instead of as one truncated
array repr.
"""

import numpy as np

from .introspect import shape_of
from .shape import ShapeDescriptor


@shape_of.register(np.ndarray)
def _ndarray_shape(value: np.ndarray) -> ShapeDescriptor:
    if value.ndim == 0:
        return ShapeDescriptor.primitive()
    return ShapeDescriptor.sequence(list(value))


@shape_of.register(np.generic)
def _numpy_scalar_shape(value: np.generic) -> ShapeDescriptor:
    return ShapeDescriptor.primitive()
