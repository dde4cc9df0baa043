"""
Content-aware image width reduction by seam carving.

Repeatedly finds the cheapest top-to-bottom path of pixels under the
dual-gradient energy and removes it in place.
"""

__version__ = "0.1.0"

from .errors import (CarvingError, CapacityViolation, BufferTooSmall,
                     MalformedDimensions, ImageIOError)
from .energy import MAX_PIXEL_ENERGY, EnergyMap, dual_gradient_energy
from .seam import SeamFinder, remove_indices, seam_columns, seam_energy
from .carving import Carver, carve_image
from .image_io import as_pixel_buffer, to_array, load_image, save_image, draw_seam

__all__ = [
    'CarvingError',
    'CapacityViolation',
    'BufferTooSmall',
    'MalformedDimensions',
    'ImageIOError',
    'MAX_PIXEL_ENERGY',
    'EnergyMap',
    'dual_gradient_energy',
    'SeamFinder',
    'remove_indices',
    'seam_columns',
    'seam_energy',
    'Carver',
    'carve_image',
    'as_pixel_buffer',
    'to_array',
    'load_image',
    'save_image',
    'draw_seam',
]
