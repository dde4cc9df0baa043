"""
Energy function for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: for an interior pixel (x, y),

    E(x, y) = Δx² + Δy²

where Δx² is the sum over R, G, B of the squared difference between the
left and right neighbours, and Δy² the same for the neighbours above and
below. The pixel's own colour does not take part. Border pixels are pinned
to MAX_PIXEL_ENERGY so seams never prefer running along the image edge.
"""

import torch

from .errors import BufferTooSmall, CapacityViolation, MalformedDimensions

# Energy of a completely standout pixel; also used for every border pixel.
MAX_PIXEL_ENERGY = 255 * 255 * 3


class EnergyMap:
    """
    Reusable energy buffer for repeated seam removal.

    Storage for `capacity` pixels is reserved once. Every call to
    `compute` overwrites the first width * height entries, so one instance
    serves an image for its whole carve, however narrow it gets.

    Args:
        capacity: Largest number of pixels (width * height) ever computed
        device: torch device holding the energy array
    """

    def __init__(self, capacity: int, device='cpu'):
        if capacity < 1:
            raise CapacityViolation(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.device = torch.device(device)
        self.energy = torch.zeros(capacity, dtype=torch.int32, device=self.device)

    def check_capacity(self, width: int, height: int):
        if width * height > self.capacity:
            raise CapacityViolation(
                f"{width} x {height} image needs {width * height} pixels, "
                f"energy map was reserved for {self.capacity}")

    def view(self, width: int, height: int) -> torch.Tensor:
        """(height, width) view onto the logical region of the energy array."""
        self.check_capacity(width, height)
        return self.energy[:width * height].view(height, width)

    def compute(self, buffer: torch.Tensor, width: int, height: int) -> torch.Tensor:
        """
        Compute dual-gradient energy for the logical region of `buffer`.

        Args:
            buffer: Row-major RGB pixels (N, 3) uint8 with N >= width * height.
                Entries past width * height are never read.
            width: Current logical width (>= 3)
            height: Current logical height (>= 1)

        Returns:
            Energy map (height, width), a view onto the reused energy array
        """
        if width < 3 or height < 1:
            raise MalformedDimensions(
                f"energy needs width >= 3 and height >= 1, got {width} x {height}")
        self.check_capacity(width, height)
        num_pixels = width * height
        if buffer.shape[0] < num_pixels:
            raise BufferTooSmall(
                f"buffer holds {buffer.shape[0]} pixels, need {num_pixels}")

        pixels = buffer[:num_pixels].reshape(height, width, 3).to(
            device=self.device, dtype=torch.int32)
        energy = self.view(width, height)

        # Borders first; the interior slice is empty when height < 3
        energy.fill_(MAX_PIXEL_ENERGY)

        dx = pixels[1:-1, 2:] - pixels[1:-1, :-2]
        dy = pixels[2:, 1:-1] - pixels[:-2, 1:-1]
        energy[1:-1, 1:-1] = (dx * dx).sum(dim=-1) + (dy * dy).sum(dim=-1)

        return energy


def dual_gradient_energy(pixels: torch.Tensor) -> torch.Tensor:
    """
    Compute dual-gradient energy for a whole image.

    Args:
        pixels: RGB image tensor (H, W, 3), uint8

    Returns:
        Energy map (H, W), int32
    """
    H, W = pixels.shape[0], pixels.shape[1]
    energy_map = EnergyMap(H * W, device=pixels.device)
    return energy_map.compute(pixels.reshape(H * W, 3), W, H).clone()
