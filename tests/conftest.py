"""Shared test fixtures for the seam carving test suite."""

import itertools
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_carver.energy import MAX_PIXEL_ENERGY


M = MAX_PIXEL_ENERGY


@pytest.fixture
def sample_pixels():
    """3 x 4 RGB image with hand-checked interior energies."""
    return torch.tensor([
        [255, 101, 51], [255, 101, 153], [255, 101, 255],
        [255, 153, 51], [255, 153, 153], [255, 153, 255],
        [255, 203, 51], [255, 204, 153], [255, 205, 255],
        [255, 255, 51], [255, 255, 153], [255, 255, 255],
    ], dtype=torch.uint8)


@pytest.fixture
def energy_6x5():
    """6 x 5 energy grid whose cheapest seam has columns 2, 3, 3, 3, 2."""
    return torch.tensor([
        M, M,     M,     M,     M,     M,
        M, 23346, 51304, 31519, 55112, M,
        M, 47908, 61346, 35919, 38887, M,
        M, 31400, 37927, 14437, 63076, M,
        M, M,     M,     M,     M,     M,
    ], dtype=torch.int32)


def make_random_buffer(H, W, seed=42):
    """Random (H * W, 3) uint8 pixel buffer."""
    gen = torch.Generator().manual_seed(seed)
    return torch.randint(0, 256, (H * W, 3), dtype=torch.uint8, generator=gen)


def make_edge_image(H, W, edge_col):
    """Black left of `edge_col`, white from it onwards, (H, W, 3) uint8."""
    img = torch.zeros(H, W, 3, dtype=torch.uint8)
    img[:, edge_col:] = 255
    return img


def brute_force_min_cost(energy, width, height):
    """Cheapest seam cost by enumerating every connected path."""
    grid = energy.reshape(-1)[:width * height].view(height, width).tolist()
    best = None
    for start in range(width):
        for moves in itertools.product((-1, 0, 1), repeat=height - 1):
            col = start
            total = grid[0][col]
            valid = True
            for row, move in enumerate(moves, start=1):
                col += move
                if not 0 <= col < width:
                    valid = False
                    break
                total += grid[row][col]
            if valid and (best is None or total < best):
                best = total
    return best
