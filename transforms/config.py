"""Loading transform chains from JSON configuration.

Example::

    {
        "region": {"x": -20, "y": -20, "width": 100, "height": 100},
        "rotate": {"angle": 90, "mode": "fast"}
    }

``region`` may instead name an anchor, ``{"position": "center", "width":
64, "height": 64}`` or ``{"position": "top_left", "scale": 0.5}``.
``rotate`` may be a bare number, which selects the general path.
"""

import json
import math
from numbers import Real

from .errors import InvalidArgumentError
from .region import AbsoluteSize, AnchoredRegion, Positions, Region, RegionExtract, RelativeSize
from .rotation import FastRotate, GeneralRotate

KNOWN_KEYS = ('region', 'rotate')
ROTATE_MODES = ('general', 'fast')


def _number(section, key, value):
    """Check ``value`` is a finite number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(f"{section}.{key} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{section}.{key} must be finite, got {value}")
    return value


def _integer(section, key, value):
    value = _number(section, key, value)
    if value != int(value):
        raise InvalidArgumentError(f"{section}.{key} must be a whole number, got {value}")
    return int(value)


def _require(section, config, keys):
    missing = [k for k in keys if k not in config]
    if missing:
        raise InvalidArgumentError(f"Missing required key(s) in {section}: {missing}")


def _parse_region(region):
    if not isinstance(region, dict):
        raise InvalidArgumentError(f"region must be an object, got {region!r}")

    if 'position' in region:
        name = str(region['position']).upper()
        if name not in Positions.__members__:
            raise InvalidArgumentError(f"Unknown region position: {region['position']!r}")
        if 'scale' in region:
            size = RelativeSize(_number('region', 'scale', region['scale']))
        else:
            _require('region', region, ('width', 'height'))
            size = AbsoluteSize(_integer('region', 'width', region['width']),
                                _integer('region', 'height', region['height']))
        return AnchoredRegion(Positions[name], size)

    _require('region', region, ('x', 'y', 'width', 'height'))
    parsed = Region(*(_integer('region', k, region[k])
                      for k in ('x', 'y', 'width', 'height')))
    if parsed.width <= 0 or parsed.height <= 0:
        raise InvalidArgumentError(
            f"region width and height must be non-zero and positive, "
            f"got {parsed.width}x{parsed.height}"
        )
    return parsed


def _parse_rotate(rotate):
    if isinstance(rotate, dict):
        _require('rotate', rotate, ('angle',))
        angle = _number('rotate', 'angle', rotate['angle'])
        mode = rotate.get('mode', 'general')
    else:
        angle = _number('rotate', 'angle', rotate)
        mode = 'general'

    if mode not in ROTATE_MODES:
        raise InvalidArgumentError(f"Unknown rotate mode {mode!r}, expected one of {ROTATE_MODES}")
    if mode == 'fast':
        return FastRotate(angle)
    return GeneralRotate(angle)


def parse_config(config):
    """Turn a transform config into its filter chain: region, then rotation.

    Returns ``(filters, warnings)``, where the warnings flag input that is
    legal but probably not what was meant. Raises InvalidArgumentError for
    input that cannot be used.
    """
    if not isinstance(config, dict):
        raise InvalidArgumentError(f"Config must be an object, got {type(config).__name__}")

    filters = []
    warnings = []
    unknown = [k for k in config if k not in KNOWN_KEYS]
    if unknown:
        warnings.append(f"Unknown config keys ignored: {unknown}")
    if not any(k in config for k in KNOWN_KEYS):
        warnings.append("Config has no region and no rotation, images pass through unchanged")

    if 'region' in config:
        region = _parse_region(config['region'])
        if isinstance(region, Region) and (region.x < 0 or region.y < 0):
            warnings.append(
                f"region origin ({region.x}, {region.y}) is negative and will be clamped"
            )
        filters.append(RegionExtract(region))

    if 'rotate' in config:
        rotator = _parse_rotate(config['rotate'])
        if not 0 <= rotator.angle < 360:
            warnings.append(f"rotate angle {rotator.angle} is outside [0, 360)")
        filters.append(rotator)

    return filters, warnings


def validate_config(config):
    """Validate a transform config, returning its warnings."""
    return parse_config(config)[1]


def build_filters(config):
    """Build the filter chain described by ``config``."""
    return parse_config(config)[0]


def load_config_file(filepath):
    """Load a transform config from a JSON file."""
    with open(filepath, 'r') as f:
        return json.load(f)
