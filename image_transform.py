import argparse
import json
import logging
import sys
from pathlib import Path

import cv2

from transforms import FastRotate, GeneralRotate, Region, RegionExtract, TransformError, apply_filters
from transforms.config import load_config_file, parse_config


class ImageTransformer:
    """Reads an image, applies a region crop and rotation, writes the result."""

    def __init__(self, config_file=None, region=None, angle=None, fast=False):
        self.config_file = config_file
        self.region = region
        self.angle = angle
        self.fast = fast

        self._filters = None

    def _load_config(self):
        """Build the filter chain from the config file and command-line overrides."""
        filters = []
        if self.config_file is not None:
            config_path = Path(self.config_file)
            if not config_path.exists():
                print(f"Warning: Config file not found: {self.config_file}")
            else:
                filters, warnings = parse_config(load_config_file(config_path))
                for warning in warnings:
                    print(f"Warning: {warning}")
                print(f"Loaded config from {self.config_file}")

        if self.region is not None:
            filters = [f for f in filters if not isinstance(f, RegionExtract)]
            filters.insert(0, RegionExtract(Region(*self.region)))
        if self.angle is not None:
            filters = [f for f in filters
                       if not isinstance(f, (FastRotate, GeneralRotate))]
            rotator = FastRotate(self.angle) if self.fast else GeneralRotate(self.angle)
            filters.append(rotator)

        for image_filter in filters:
            print(f"  {image_filter}")
        self._filters = filters

    def process(self, input_path, output_path):
        """Transform one image file. Returns True on success."""
        image = cv2.imread(str(input_path), cv2.IMREAD_UNCHANGED)
        if image is None:
            print(f"Error: Cannot read image {input_path}")
            return False

        try:
            if self._filters is None:
                self._load_config()
            result = apply_filters(image, self._filters)
        except json.JSONDecodeError as e:
            print(f"Error parsing config file: {e}")
            return False
        except TransformError as e:
            print(f"Error: {e}")
            return False

        if not cv2.imwrite(str(output_path), result):
            print(f"Error: Cannot write image {output_path}")
            return False

        in_h, in_w = image.shape[:2]
        out_h, out_w = result.shape[:2]
        print(f"Wrote {output_path}: {in_w}x{in_h} -> {out_w}x{out_h}")
        return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Crop a region from an image and rotate it"
    )
    parser.add_argument('input', type=str, help='Source image file')
    parser.add_argument('output', type=str, help='Destination image file')
    parser.add_argument('-c', '--config', type=str, default=None,
                        help='JSON transform configuration file')
    parser.add_argument('--region', type=int, nargs=4, metavar=('X', 'Y', 'W', 'H'),
                        default=None, help='Region to extract (overrides config)')
    parser.add_argument('--angle', type=float, default=None,
                        help='Rotation angle in degrees, clockwise (overrides config)')
    parser.add_argument('--fast', action='store_true',
                        help='Use the exact 90-degree rotation (angle must be a multiple of 90)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log transform details')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')

    transformer = ImageTransformer(
        config_file=args.config,
        region=args.region,
        angle=args.angle,
        fast=args.fast
    )

    return 0 if transformer.process(args.input, args.output) else 1


if __name__ == "__main__":
    sys.exit(main())
