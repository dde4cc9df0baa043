"""
Basic seam carving example.

Shows the energy map and the first seam of an image, then removes
seams one at a time and saves the narrower result.

    python examples/basic_seam_carving.py INPUT [--seams N] [--output-dir DIR]
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from seam_carver.carving import Carver
from seam_carver.image_io import draw_seam, load_image, save_image, to_array


def plot_energy_and_seam(carver, buffer, width, height, path):
    """Side-by-side energy map and image with its cheapest seam."""
    energy = carver.calculate_energy(buffer, width, height)
    seam = carver.find_seam(width, height)

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].imshow(energy.cpu().numpy(), cmap='magma')
    axes[0].set_title('Dual-gradient energy')
    axes[1].imshow(draw_seam(buffer, width, height, seam))
    axes[1].set_title(f'Cheapest seam (cost {carver.seam_finder.total_cost()})')
    for ax in axes:
        ax.axis('off')
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    print(f"Saved: {path}")


def main():
    parser = argparse.ArgumentParser(description="Seam carving walkthrough")
    parser.add_argument('input', type=str, help='Image to carve')
    parser.add_argument('--seams', type=int, default=100,
                        help='Number of seams to remove (default: 100)')
    parser.add_argument('--output-dir', type=str, default='output',
                        help='Directory for the figures (default: output)')
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print("Loading image...")
    buffer, width, height = load_image(args.input)
    print(f"Image size: {width} x {height}")

    carver = Carver(buffer.shape[0])
    plot_energy_and_seam(carver, buffer, width, height, output_dir / 'energy_and_seam.png')

    n_seams = min(args.seams, width - 3)
    print(f"Carving image (removing {n_seams} seams)...")

    def report(step, seam):
        if (step + 1) % 20 == 0:
            print(f"  Removed {step + 1}/{n_seams} seams, width: {width - step - 1}")

    new_width = carver.carve_width(buffer, width, height, n_seams, callback=report)
    save_image(buffer, new_width, height, output_dir / 'carved.png')

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    original, _, _ = load_image(args.input)
    axes[0].imshow(to_array(original, width, height))
    axes[0].set_title(f'Original ({width} x {height})')
    axes[1].imshow(to_array(buffer, new_width, height))
    axes[1].set_title(f'Carved ({new_width} x {height})')
    for ax in axes:
        ax.axis('off')
    fig.tight_layout()
    fig.savefig(output_dir / 'comparison.png')
    plt.close(fig)

    print(f"\nDone! Check the {output_dir}/ directory for results.")


if __name__ == '__main__':
    main()
