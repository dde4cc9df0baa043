"""
Command line entry point: shrink an image's width by seam carving.

    seam-carve INPUT [-o OUTPUT] [-W WIDTH_REDUCTION]
"""

import argparse
import logging
import sys

from .carving import Carver
from .errors import CarvingError, ImageIOError
from .image_io import load_image, save_image


def build_parser():
    parser = argparse.ArgumentParser(
        prog='seam-carve',
        description="Reduce the width of an image by content-aware seam carving"
    )
    parser.add_argument(
        'input',
        type=str,
        help='Path of the image to carve'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        help='Path to write the resulting image (default: do not save)'
    )
    parser.add_argument(
        '-W', '--width-reduction',
        type=int,
        default=1,
        help='Number of pixels to reduce the width by (default: 1)'
    )
    parser.add_argument(
        '--device',
        type=str,
        default='cpu',
        help='torch device for the carving arrays (default: cpu)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="Log every removed seam (default: log start and finish only)"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        buffer, width, height = load_image(args.input)
        print(f"Decoded {width} x {height} image at {args.input}")

        carver = Carver(buffer.shape[0], device=args.device)
        width = carver.carve_width(buffer, width, height, args.width_reduction)

        if args.output:
            save_image(buffer, width, height, args.output)
            print(f"Saved output image to {args.output}")
        else:
            print("Not saving output image; specify -o if you want to save the result")
    except (ImageIOError, CarvingError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
