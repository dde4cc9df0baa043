"""
Seam computation and removal.

The seam search is a shortest path over an implicit DAG:
- a fake source vertex with an edge to every pixel of the first row,
- an edge from every pixel to the (up to) three pixels touching it in the
  row below, weighted by the energy of the target pixel,
- an edge from every pixel of the last row to a fake destination vertex.

Every edge points one row down, so row order is a topological order and a
single relaxation pass per row finds the minimum-energy seam.
"""

from typing import List, Optional, Sequence

import torch

from .errors import BufferTooSmall, CapacityViolation, MalformedDimensions

# Larger than any accumulated seam cost
INFINITY = torch.iinfo(torch.int64).max


class SeamFinder:
    """
    Reusable shortest-path search for vertical seams.

    Holds the distance-to and predecessor arrays for `capacity` pixels plus
    the two virtual vertices. They are reset, never reallocated, on every
    call to `find`. The per-row comparisons use a few width-sized
    temporaries; nothing image-sized is allocated per search.

    Args:
        capacity: Largest number of pixels (width * height) ever searched
        device: torch device holding the search arrays
    """

    def __init__(self, capacity: int, device='cpu'):
        if capacity < 1:
            raise CapacityViolation(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.device = torch.device(device)
        vertex_count = capacity + 2
        self.dist_to = torch.full((vertex_count,), INFINITY, dtype=torch.int64,
                                  device=self.device)
        self.prev_vertex = torch.zeros(vertex_count, dtype=torch.int64,
                                       device=self.device)
        self._num_pixels = 0

    def find(self, energy: torch.Tensor, width: int, height: int) -> List[int]:
        """
        Find the minimum-energy top-to-bottom seam.

        Ties are broken towards the left: a pixel keeps the leftmost of its
        equally cheap parents, and the leftmost of equally cheap last-row
        pixels ends the seam.

        Args:
            energy: Energy values, flat (N,) with N >= width * height or (height, width)
            width: Current logical width
            height: Current logical height

        Returns:
            Flat pixel indices, one per row, top to bottom
        """
        if width < 1 or height < 1:
            raise MalformedDimensions(
                f"seam search needs a non-empty image, got {width} x {height}")
        num_pixels = width * height
        if num_pixels > self.capacity:
            raise CapacityViolation(
                f"{width} x {height} image needs {num_pixels} pixels, "
                f"seam finder was reserved for {self.capacity}")
        flat_energy = energy.reshape(-1)
        if flat_energy.shape[0] < num_pixels:
            raise BufferTooSmall(
                f"energy holds {flat_energy.shape[0]} values, need {num_pixels}")

        fake_src = num_pixels
        fake_dest = num_pixels + 1
        self._num_pixels = num_pixels

        self.dist_to[:num_pixels + 2].fill_(INFINITY)
        self.prev_vertex[:num_pixels + 2].zero_()

        energy = flat_energy[:num_pixels].to(device=self.device, dtype=torch.int64)
        energy = energy.view(height, width)
        dist = self.dist_to[:num_pixels].view(height, width)
        prev = self.prev_vertex[:num_pixels].view(height, width)

        # Fake source to each pixel in the first row
        dist[0] = energy[0]
        prev[0] = fake_src

        cols = torch.arange(width, dtype=torch.int64, device=self.device)
        left = torch.empty(width, dtype=torch.int64, device=self.device)
        right = torch.empty(width, dtype=torch.int64, device=self.device)

        for y in range(height - 1):
            above = dist[y]

            # Candidate parents in the order sequential relaxation visits them:
            # up-left, up, up-right. Strict < keeps the first on ties.
            left.fill_(INFINITY)
            left[1:] = above[:-1]
            best = left
            parent = cols - 1

            take = above < best
            best = torch.where(take, above, best)
            parent = torch.where(take, cols, parent)

            right.fill_(INFINITY)
            right[:-1] = above[1:]
            take = right < best
            best = torch.where(take, right, best)
            parent = torch.where(take, cols + 1, parent)

            dist[y + 1] = best + energy[y + 1]
            prev[y + 1] = parent + y * width

        # Each pixel in the last row to the fake destination, at no cost
        last_row = dist[height - 1]
        col = int(torch.nonzero(last_row == last_row.min())[0])
        self.dist_to[fake_dest] = last_row[col]
        self.prev_vertex[fake_dest] = (height - 1) * width + col

        path = []
        curr = int(self.prev_vertex[fake_dest])
        while curr != fake_src:
            path.append(curr)
            curr = int(self.prev_vertex[curr])
        path.reverse()
        return path

    def distance_to(self, vertex: int) -> int:
        """Accumulated energy from the fake source to `vertex` in the last search."""
        if not 0 <= vertex < self._num_pixels + 2:
            raise IndexError(f"vertex {vertex} outside the last searched graph")
        return int(self.dist_to[vertex])

    def total_cost(self) -> int:
        """Energy of the last seam found (distance to the fake destination)."""
        return self.distance_to(self._num_pixels + 1)


def seam_columns(seam: Sequence[int], width: int) -> List[int]:
    """Column of each seam pixel, top to bottom."""
    return [index - row * width for row, index in enumerate(seam)]


def seam_energy(energy: torch.Tensor, seam: Sequence[int]) -> int:
    """Total energy along a seam of flat indices."""
    flat = energy.reshape(-1)
    return int(flat[torch.as_tensor(list(seam), dtype=torch.long,
                                    device=flat.device)].to(torch.int64).sum())


def remove_indices(buffer, indices: Sequence[int], scratch: Optional[torch.Tensor] = None) -> int:
    """
    Remove `indices` from `buffer` in place by shifting survivors left.

    Everything between two removed positions moves left by the number of
    positions removed so far. The last len(indices) entries of the logical
    region hold junk afterwards and must not be read. Runs in linear time.

    Args:
        buffer: Mutable sequence supporting slice assignment (list, or a
            tensor compacted along dim 0). Its logical region is
            buffer[:len(buffer)].
        indices: Strictly increasing positions to remove, e.g. a seam.
            Positions at or past the end have nothing after them to shift.
        scratch: For tensor buffers, reserved storage with at least len(buffer)
            rows, same dtype and trailing shape. torch refuses overlapping
            copies, so each moved segment is staged through it. Without it a
            temporary copy is made for each segment.

    Returns:
        New logical length, len(buffer) - len(indices)
    """
    length = len(buffer)
    indices = list(indices)
    for a, b in zip(indices, indices[1:]):
        if b <= a:
            raise MalformedDimensions(f"indices must be strictly increasing, got {a} then {b}")
    if indices and indices[0] < 0:
        raise MalformedDimensions(f"indices must be non-negative, got {indices[0]}")

    for offset, start in enumerate(indices):
        finish = indices[offset + 1] if offset < len(indices) - 1 else length
        if finish - start <= 1:
            continue
        segment = buffer[start + 1:finish]
        if isinstance(segment, torch.Tensor):
            if scratch is None:
                segment = segment.clone()
            else:
                segment = scratch[:len(segment)].copy_(segment)
        buffer[start - offset:finish - offset - 1] = segment

    return length - len(indices)
