"""
Shared helpers for reading Figma node trees.

Covers document unwrapping, solid color extraction, component property reads,
dual-shape child resolution, interaction mapping and identifier generation.
"""

import math
import secrets
import string
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from converters.logger import get_logger

LOGGER = get_logger(__name__)

DISABLED_GRAY = '#CCCCCC'
TRANSPARENT = 'transparent'

_ID_ALPHABET = string.ascii_lowercase + string.digits


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ConversionError(ValueError):
    """Fatal input error: the document cannot be converted."""


class NoNodesError(ConversionError):
    def __init__(self) -> None:
        super().__init__("No nodes found in Figma JSON")


class InstanceNotFoundError(ConversionError):
    def __init__(self, node_key: str) -> None:
        self.node_key = node_key
        super().__init__(f"Component instance not found for node '{node_key}'")


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (banker's rounding would differ)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ColorValue:
    """Figma RGBA color with channels in the 0-1 range."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    @classmethod
    def from_figma(cls, color: Dict[str, Any]) -> 'ColorValue':
        return cls(
            r=color.get('r', 0.0),
            g=color.get('g', 0.0),
            b=color.get('b', 0.0),
            a=color.get('a', 1.0),
        )

    @property
    def hex(self) -> str:
        """Uppercase #RRGGBB, or #RRGGBBAA when not fully opaque."""
        channels = [self.r, self.g, self.b]
        if self.a < 1:
            channels.append(self.a)
        return '#' + ''.join(f"{round_half_up(c * 255):02X}" for c in channels)


DEFAULT_LABEL_COLOR = ColorValue(0.11764705926179886, 0.11764705926179886, 0.11764705926179886, 1)
DEFAULT_DESCRIPTION_COLOR = ColorValue(0.4588235318660736, 0.4588235318660736, 0.4588235318660736, 1)
DEFAULT_BACKGROUND_COLOR = ColorValue(0, 0, 0, 0)
DEFAULT_BORDER_COLOR = ColorValue(0.1725490242242813, 0.1725490242242813, 0.1725490242242813, 1)


def _solid_paint_color(paints: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(paints, list):
        return None
    for paint in paints:
        if not isinstance(paint, dict):
            continue
        if paint.get('type') != 'SOLID' or paint.get('visible', True) is not True:
            continue
        return paint.get('color') or None
    return None


def solid_color(paints: Any) -> Optional[ColorValue]:
    """Return the color of the first visible SOLID paint in a fills/strokes list."""
    color = _solid_paint_color(paints)
    return ColorValue.from_figma(color) if color else None


def color_hex(paints: Any, default: ColorValue) -> str:
    return (solid_color(paints) or default).hex


def background_hex(paints: Any, default: ColorValue = DEFAULT_BACKGROUND_COLOR) -> str:
    """Like color_hex, but a transparent background becomes 'transparent'.

    A paint color without an alpha channel counts as transparent here.
    """
    color = _solid_paint_color(paints)
    if color is None:
        if default.a > 0:
            return default.hex
        return TRANSPARENT
    if color.get('a', 0) > 0:
        return ColorValue.from_figma(color).hex
    return TRANSPARENT


# ---------------------------------------------------------------------------
# Document / node access
# ---------------------------------------------------------------------------

def extract_instance(figma_json: Any) -> Dict[str, Any]:
    """Return the top-level component node from a raw document.

    Accepts both ``{"Result": {"nodes": ...}}`` and ``{"nodes": ...}``.
    """
    if not isinstance(figma_json, dict):
        raise NoNodesError()
    result = figma_json.get('Result')
    nodes = result.get('nodes') if isinstance(result, dict) else None
    nodes = nodes or figma_json.get('nodes')
    if not isinstance(nodes, dict) or not nodes:
        raise NoNodesError()

    node_key = next(iter(nodes))
    entry = nodes[node_key]
    instance = entry.get('document') if isinstance(entry, dict) else None
    if not isinstance(instance, dict) or not instance:
        raise InstanceNotFoundError(node_key)
    return instance


def get_property_value(props: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Read a component property's ``value``; missing or null falls back to default."""
    prop = props.get(name)
    if isinstance(prop, dict) and prop.get('value') is not None:
        return prop['value']
    return default


def find_child(node: Dict[str, Any], name: str) -> Dict[str, Any]:
    for child in node.get('children') or []:
        if child.get('name') == name:
            return child
    return {}


def resolve_node(instance: Dict[str, Any], candidates: Sequence[Tuple[str, str]]) -> Dict[str, Any]:
    """Return the first ``(frame name, child name)`` candidate node bearing an id.

    Missing frames and children are skipped; no match yields an empty dict.
    """
    for frame_name, child_name in candidates:
        node = find_child(find_child(instance, frame_name), child_name)
        if node.get('id'):
            LOGGER.debug("Resolved %s/%s -> %s", frame_name, child_name, node['id'])
            return node
    return {}


# ---------------------------------------------------------------------------
# Interactions
# ---------------------------------------------------------------------------

INTERACTION_ACTIONS: Dict[str, Dict[str, str]] = {
    'ON_CLICK': {'event': 'click', 'action': 'toggle'},
    'ON_HOVER': {'event': 'hover', 'action': 'highlight'},
    'MOUSE_ENTER': {'event': 'hover', 'action': 'highlight'},
}


def map_interactions(node: Dict[str, Any]) -> List[Dict[str, str]]:
    """Translate prototype triggers into Unify event/action pairs, dropping unknown ones."""
    actions = []
    for interaction in node.get('interactions') or []:
        trigger_type = (interaction.get('trigger') or {}).get('type')
        if trigger_type in INTERACTION_ACTIONS:
            actions.append(dict(INTERACTION_ACTIONS[trigger_type]))
    return actions


# ---------------------------------------------------------------------------
# Identifier generation
# ---------------------------------------------------------------------------

class NameGenerator(Protocol):
    def new_id(self, prefix: str) -> str: ...

    def new_display_name(self, base_name: str) -> str: ...


class RandomNameGenerator:
    """Random base-36 suffixes for component ids and display names."""

    def __init__(self, id_length: int = 7, display_name_length: int = 5):
        self.id_length = id_length
        self.display_name_length = display_name_length

    def _suffix(self, length: int) -> str:
        return ''.join(secrets.choice(_ID_ALPHABET) for _ in range(length))

    def new_id(self, prefix: str) -> str:
        return f"{prefix}{self._suffix(self.id_length)}"

    def new_display_name(self, base_name: str) -> str:
        return f"{base_name}_{self._suffix(self.display_name_length)}"
