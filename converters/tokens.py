"""
Unify design-token catalogs and lookup helpers.

Every numeric catalog is an ascending tuple of ``(threshold, token)`` pairs and
is searched with the same closest-smaller-or-equal rule:

- a value at or above the largest threshold maps to the largest token
- a value below the smallest threshold maps to the smallest token
- anything else maps to the largest threshold that is <= the value
"""

from typing import Any, Dict, Optional, Sequence, Tuple, Union

from converters.logger import get_logger

LOGGER = get_logger(__name__)

Number = Union[int, float]

# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

BORDER_WIDTH_TOKENS: Tuple[Tuple[Number, str], ...] = (
    (0, 'border-0'),
    (1, 'border-1'),
    (2, 'border-2'),
    (3, 'border-3'),
    (4, 'border-4'),
)

# Inclusive ranges; values in a gap fall back to DEFAULT_FONT_WEIGHT_TOKEN
FONT_WEIGHT_TOKENS: Tuple[Tuple[Tuple[Number, Number], str], ...] = (
    ((100, 200), 'light'),
    ((300, 400), 'regular'),
    ((500, 500), 'medium'),
    ((600, 600), 'semi-bold'),
    ((700, 900), 'bold'),
)
DEFAULT_FONT_WEIGHT_TOKEN = 'regular'

FONT_SIZE_TOKENS: Tuple[Tuple[Number, str], ...] = (
    (10, 'text-xxxs'),
    (11, 'text-xxs'),
    (12, 'text-xs'),
    (14, 'text-sm'),
    (16, 'text-md'),
    (18, 'text-lg'),
    (20, 'text-xl'),
    (24, 'display-xs'),
    (30, 'display-sm'),
    (44, 'display-md'),
    (48, 'display-lg'),
    (60, 'display-xl'),
    (72, 'display-2xl'),
)

AUTO = 'auto'

# px -> (padding token, margin token); AUTO sorts after every number
SPACING_TOKENS: Tuple[Tuple[Union[Number, str], Tuple[str, str]], ...] = (
    (0, ('p-none', 'm-none')),
    (2, ('p-xxs', 'm-xxs')),
    (4, ('p-xs', 'm-xs')),
    (6, ('p-sm', 'm-sm')),
    (8, ('p-md', 'm-md')),
    (12, ('p-lg', 'm-lg')),
    (16, ('p-xl', 'm-xl')),
    (20, ('p-2xl', 'm-2xl')),
    (24, ('p-3xl', 'm-3xl')),
    (32, ('p-4xl', 'm-4xl')),
    (40, ('p-5xl', 'm-5xl')),
    (48, ('p-6xl', 'm-6xl')),
    (64, ('p-7xl', 'm-7xl')),
    (AUTO, ('p-auto', 'm-auto')),
)

SPACING_MODES = ('padding', 'margin')

# Logical (RTL-aware) direction suffixes: "p-md" -> "pe-md" for the right side
DIRECTION_SUFFIXES: Dict[str, str] = {
    'top': 't',
    'right': 'e',
    'bottom': 'b',
    'left': 's',
    'x': 'x',
    'y': 'y',
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def closest_token(catalog: Sequence[Tuple[Number, Any]], value: Number) -> Any:
    """Return the entry of the largest threshold <= value, clamped to the catalog ends."""
    for index, (threshold, token) in enumerate(catalog):
        if threshold > value:
            if index == 0:
                return token
            return catalog[index - 1][1]
    return catalog[-1][1]


def map_to_border_width_token(px: Number) -> str:
    """Map a stroke weight in pixels to a border width token."""
    return closest_token(BORDER_WIDTH_TOKENS, px)


def map_to_font_size_token(px: Number) -> str:
    """Map a font size in pixels to a text variant token."""
    return closest_token(FONT_SIZE_TOKENS, px)


def map_to_font_weight_token(weight: Number) -> str:
    """Map a numeric font weight to a named weight token."""
    for (low, high), token in FONT_WEIGHT_TOKENS:
        if low <= weight <= high:
            return token
    return DEFAULT_FONT_WEIGHT_TOKEN


def _numeric_spacing() -> Tuple[Tuple[Number, Tuple[str, str]], ...]:
    return tuple(entry for entry in SPACING_TOKENS if entry[0] != AUTO)


def spacing_token(px: Union[Number, str], mode: str = 'padding', side: Optional[str] = None) -> str:
    """Map a spacing measurement to a padding/margin token.

    ``side`` is one of DIRECTION_SUFFIXES; when given, the prefix letter gets
    the logical direction suffix ("p-md" -> "pt-md", "ps-md", "px-md", ...).
    """
    if mode not in SPACING_MODES:
        raise ValueError(f"Unknown spacing mode: {mode!r}")

    if px == AUTO:
        pair = SPACING_TOKENS[-1][1]
    else:
        pair = closest_token(_numeric_spacing(), px)
    base = pair[SPACING_MODES.index(mode)]

    if side is None:
        return base
    prefix, rest = base.split('-', 1)
    return f"{prefix}{DIRECTION_SUFFIXES[side]}-{rest}"


def resolve_spacing(
    top: Union[Number, str],
    right: Union[Number, str],
    bottom: Union[Number, str],
    left: Union[Number, str],
    mode: str = 'padding',
) -> Optional[Dict[str, str]]:
    """Collapse four side measurements into the shortest token structure.

    Returns None when every side is zero so the caller can drop the field.
    Order: exact-equal -> token-equal -> axis-equal -> full directional.
    """
    sides = (top, right, bottom, left)
    if all(value == 0 for value in sides):
        return None

    if top == right == bottom == left:
        return {'all': spacing_token(top, mode)}

    bases = [spacing_token(value, mode) for value in sides]
    if len(set(bases)) == 1:
        LOGGER.debug("%s sides %s collapse to %s", mode, sides, bases[0])
        return {'all': bases[0]}

    top_base, right_base, bottom_base, left_base = bases
    if left_base == right_base and top_base == bottom_base:
        return {
            'x': spacing_token(left, mode, 'x'),
            'y': spacing_token(top, mode, 'y'),
        }

    return {
        'top': spacing_token(top, mode, 'top'),
        'right': spacing_token(right, mode, 'right'),
        'bottom': spacing_token(bottom, mode, 'bottom'),
        'left': spacing_token(left, mode, 'left'),
    }
