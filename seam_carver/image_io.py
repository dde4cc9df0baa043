"""
Image decoding/encoding around the carving engine.

Images travel through the engine as row-major (N, 3) uint8 tensors plus an
explicit width and height.
"""

from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
import torch
from PIL import Image

from .errors import BufferTooSmall, ImageIOError


def as_pixel_buffer(array) -> Tuple[torch.Tensor, int, int]:
    """
    Flatten an (H, W, 3) RGB array into an engine pixel buffer.

    Args:
        array: numpy array or torch tensor (H, W, 3)

    Returns:
        (buffer, width, height) with buffer of shape (H * W, 3), uint8
    """
    if isinstance(array, np.ndarray):
        tensor = torch.from_numpy(np.ascontiguousarray(array, dtype=np.uint8))
    else:
        tensor = array.to(torch.uint8)

    if tensor.dim() != 3 or tensor.shape[2] != 3:
        raise ValueError(f"expected an (H, W, 3) RGB array, got shape {tuple(tensor.shape)}")

    H, W = tensor.shape[0], tensor.shape[1]
    return tensor.reshape(H * W, 3).clone(), W, H


def to_array(buffer: torch.Tensor, width: int, height: int) -> np.ndarray:
    """Logical region of a pixel buffer as an (H, W, 3) uint8 numpy array."""
    if buffer.shape[0] < width * height:
        raise BufferTooSmall(
            f"buffer holds {buffer.shape[0]} pixels, need {width * height}")
    region = buffer[:width * height].reshape(height, width, 3)
    return region.cpu().numpy().astype(np.uint8)


def load_image(path) -> Tuple[torch.Tensor, int, int]:
    """Decode an image file as RGB8 into (buffer, width, height)."""
    path = Path(path)
    try:
        img = Image.open(path).convert('RGB')
    except (OSError, ValueError) as e:
        raise ImageIOError(f"Could not load {path}, because: {e}") from e
    return as_pixel_buffer(np.array(img, dtype=np.uint8))


def save_image(buffer: torch.Tensor, width: int, height: int, path):
    """Encode the logical region of `buffer`; trailing junk is never written."""
    path = Path(path)
    img = Image.fromarray(to_array(buffer, width, height))
    try:
        img.save(path)
    except (OSError, ValueError) as e:
        raise ImageIOError(f"Failed to save image to {path} because: {e}") from e


def draw_seam(buffer: torch.Tensor, width: int, height: int, seam: Sequence[int],
              color=(255, 0, 0)) -> np.ndarray:
    """Copy of the image with the seam painted in `color`."""
    img_vis = to_array(buffer, width, height).copy()
    for row, index in enumerate(seam):
        img_vis[row, index - row * width] = color
    return img_vis
