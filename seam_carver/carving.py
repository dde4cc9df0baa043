"""
High-level carving: the long-lived engine and the seam removal loop.
"""

import logging
import time
from typing import Callable, List, Optional

import torch

from .energy import EnergyMap
from .errors import MalformedDimensions
from .seam import SeamFinder, remove_indices

logger = logging.getLogger(__name__)


class Carver:
    """
    Seam carving engine sized once for the largest image it will see.

    Owns an EnergyMap and a SeamFinder reserved for `capacity` pixels.
    Nothing is reallocated while an image shrinks, so one Carver can be
    reused indefinitely for images up to that size.

    Args:
        capacity: Largest number of pixels (width * height) ever carved
        device: torch device for the energy and search arrays
    """

    def __init__(self, capacity: int, device='cpu'):
        self.capacity = capacity
        self.energy_map = EnergyMap(capacity, device=device)
        self.seam_finder = SeamFinder(capacity, device=device)
        self.scratch = None

    def _scratch_for(self, buffer: torch.Tensor) -> torch.Tensor:
        """Reserved staging rows for compaction, matching the pixel buffer."""
        scratch = self.scratch
        if (scratch is None or scratch.dtype != buffer.dtype
                or scratch.device != buffer.device or scratch.shape[1:] != buffer.shape[1:]):
            scratch = torch.empty((self.capacity,) + tuple(buffer.shape[1:]),
                                  dtype=buffer.dtype, device=buffer.device)
            self.scratch = scratch
        return scratch

    @property
    def energy(self) -> torch.Tensor:
        """The full reused energy array (only the logical region is valid)."""
        return self.energy_map.energy

    def calculate_energy(self, buffer: torch.Tensor, width: int, height: int) -> torch.Tensor:
        return self.energy_map.compute(buffer, width, height)

    def find_seam(self, width: int, height: int) -> List[int]:
        """Minimum-energy seam over the energy last computed for this size."""
        return self.seam_finder.find(self.energy_map.view(width, height), width, height)

    def carve_width(self, buffer: torch.Tensor, width: int, height: int, n_seams: int,
                    callback: Optional[Callable[[int, List[int]], None]] = None) -> int:
        """
        Remove `n_seams` vertical seams from `buffer` in place.

        Each iteration: compute energy, find the cheapest seam, compact the
        buffer over it, shrink the width by one.

        Args:
            buffer: Row-major RGB pixels (N, 3) uint8, N >= width * height
            width: Current logical width
            height: Current logical height
            n_seams: Number of seams to remove
            callback: Called as callback(step, seam) after each removal

        Returns:
            New logical width. buffer[:new_width * height] holds the result.
        """
        if n_seams < 0 or width - n_seams < 3:
            raise MalformedDimensions(
                f"cannot remove {n_seams} seams from width {width}, "
                f"at least 3 columns must remain")

        logger.info(f"Reducing width of {width} x {height} image by {n_seams} pixels")
        start = time.perf_counter()
        scratch = self._scratch_for(buffer)

        for step in range(n_seams):
            self.calculate_energy(buffer, width, height)
            seam = self.find_seam(width, height)
            remove_indices(buffer[:width * height], seam, scratch=scratch)
            width -= 1

            logger.debug(f"Removed seam {step + 1}/{n_seams} "
                         f"(cost {self.seam_finder.total_cost()}), width now {width}")
            if callback is not None:
                callback(step, seam)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Finished in {elapsed_ms:.0f} ms, image is now {width} x {height}")
        return width


def carve_image(pixels: torch.Tensor, n_seams: int, device='cpu') -> torch.Tensor:
    """
    Content-aware width reduction of a whole image.

    Args:
        pixels: RGB image tensor (H, W, 3), uint8
        n_seams: Number of columns to remove
        device: torch device for the engine arrays

    Returns:
        Carved image (H, W - n_seams, 3); the input is left untouched
    """
    H, W = pixels.shape[0], pixels.shape[1]
    buffer = pixels.reshape(H * W, 3).clone()
    carver = Carver(H * W, device=device)
    new_width = carver.carve_width(buffer, W, H, n_seams)
    return buffer[:new_width * H].reshape(H, new_width, 3).clone()
