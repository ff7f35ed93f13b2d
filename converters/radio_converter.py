"""
Radio button / checkbox converter - Figma component instance to Unify RadioButton.

Handles both component shapes published in the design system:
- Checkbox: "Text and supporting text" / "Input" frames
- Radio field: "Checkbox and Label" / "Description Row" frames
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from converters.base import (
    DEFAULT_BORDER_COLOR,
    DEFAULT_DESCRIPTION_COLOR,
    DEFAULT_LABEL_COLOR,
    DISABLED_GRAY,
    NameGenerator,
    RandomNameGenerator,
    background_hex,
    color_hex,
    extract_instance,
    get_property_value,
    map_interactions,
    resolve_node,
    round_half_up,
)
from converters.logger import get_logger
from converters.tokens import (
    map_to_border_width_token,
    map_to_font_size_token,
    map_to_font_weight_token,
    resolve_spacing,
)

LOGGER = get_logger(__name__)

COMPONENT_TYPE = 'RadioButton'
PARENT_ID = 'root_id'
ID_PREFIX = 'terms-radio-'

# Candidate (frame, child) paths in priority order, checkbox shape first
LABEL_PATHS = (('Text and supporting text', 'Text'), ('Checkbox and Label', 'Label'))
DESCRIPTION_PATHS = (('Text and supporting text', 'Supporting text'), ('Description Row', 'Description'))
SHAPE_PATHS = (('Input', '_Checkbox base'), ('Checkbox and Label', 'Radio'))


class ConversionOverrides(BaseModel):
    """Caller-supplied values that replace derived fields."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, description="Component id")
    display_name: Optional[str] = Field(default=None, alias='displayName', description="Display name")
    label: Optional[str] = Field(default=None, description="Label text")
    description: Optional[str] = Field(default=None, description="Description text")
    default_value: Optional[Any] = Field(default=None, alias='defaultValue', description="Default value, passed through as given")


def _font_weight(node: Dict[str, Any]) -> float:
    # boundVariables.fontWeight only points at a variable; the resolved value lives in style
    style = node.get('style') or {}
    return style.get('fontWeight') or 0


def _text_appearance(node: Dict[str, Any], default_color, disabled: bool) -> Dict[str, str]:
    style = node.get('style') or {}
    return {
        'color': DISABLED_GRAY if disabled else color_hex(node.get('fills'), default_color),
        'variant': map_to_font_size_token(style.get('fontSize') or 0),
        'weight': map_to_font_weight_token(_font_weight(node)),
    }


def _build_styles(instance: Dict[str, Any], disabled: bool) -> Dict[str, Any]:
    bbox = instance.get('absoluteBoundingBox') or {}
    width = round_half_up(bbox.get('width') or 0)
    height = round_half_up(bbox.get('height') or 0)

    styles: Dict[str, Any] = {}
    padding = resolve_spacing(
        instance.get('paddingTop') or 0,
        instance.get('paddingRight') or 0,
        instance.get('paddingBottom') or 0,
        instance.get('paddingLeft') or 0,
        mode='padding',
    )
    if padding:
        styles['padding'] = padding
    # Figma has no margin; kept for sources that add one
    margin = resolve_spacing(0, 0, 0, 0, mode='margin')
    if margin:
        styles['margin'] = margin

    styles.update({
        'backgroundColor': DISABLED_GRAY if disabled else background_hex(instance.get('fills')),
        'borderColor': DISABLED_GRAY if disabled else color_hex(instance.get('strokes'), DEFAULT_BORDER_COLOR),
        'borderWidth': {'all': map_to_border_width_token(instance.get('strokeWeight') or 0)},
        'width': f"{width}px",
        'height': f"{height}px",
    })
    return styles


def convert_radio_button(
    figma_json: Dict[str, Any],
    overrides: Union[ConversionOverrides, Mapping[str, Any], None] = None,
    names: Optional[NameGenerator] = None,
) -> Dict[str, Dict[str, Any]]:
    """Convert a Figma radio/checkbox document into a Unify component record.

    Args:
        figma_json: Raw document, either ``{"Result": {"nodes": ...}}`` or ``{"nodes": ...}``
        overrides: ConversionOverrides or a mapping with id/displayName/label/description/defaultValue
        names: Generator used for the id and display name when not overridden

    Returns:
        Dict with a single entry keyed by the component id

    Raises:
        ConversionError: The document has no nodes or no component instance
    """
    if overrides is None:
        overrides = ConversionOverrides()
    elif not isinstance(overrides, ConversionOverrides):
        overrides = ConversionOverrides.model_validate(dict(overrides))
    names = names or RandomNameGenerator()

    instance = extract_instance(figma_json)
    props = instance.get('componentProperties') or {}

    label_node = resolve_node(instance, LABEL_PATHS)
    description_node = resolve_node(instance, DESCRIPTION_PATHS)
    shape_node = resolve_node(instance, SHAPE_PATHS)
    LOGGER.debug(
        "Instance %s: label=%s description=%s shape=%s",
        instance.get('id'), label_node.get('id'), description_node.get('id'), shape_node.get('id'),
    )

    size = str(get_property_value(props, 'Size', 'md')).lower()
    disabled = get_property_value(props, 'State') == 'Disabled'
    checked = (
        get_property_value(props, 'Checked') == 'True'
        or get_property_value(props, 'Value Type') == 'Checked'
    )

    label = (
        overrides.label
        or label_node.get('characters')
        or get_property_value(props, 'Text')
        or get_property_value(props, 'Label')
        or ''
    )
    description = (
        overrides.description
        or description_node.get('characters')
        or get_property_value(props, 'Hint Text')
        or get_property_value(props, 'Description')
        or ''
    )
    default_value = overrides.default_value or get_property_value(props, 'DefaultValue')
    component_id = overrides.id or names.new_id(ID_PREFIX)
    display_name = overrides.display_name or names.new_display_name(COMPONENT_TYPE)

    content: Dict[str, Any] = {}
    if label:
        content['label'] = label
    if description:
        content['description'] = description
    if default_value:
        content['defaultValue'] = default_value
    content['checked'] = checked

    return {
        component_id: {
            'component': {
                'componentType': COMPONENT_TYPE,
                'appearance': {
                    'size': size,
                    'description': _text_appearance(description_node, DEFAULT_DESCRIPTION_COLOR, disabled),
                    'styles': _build_styles(instance, disabled),
                    'label': _text_appearance(label_node, DEFAULT_LABEL_COLOR, disabled),
                },
                'content': content,
            },
            'visibility': {'value': not disabled},
            'dpOn': map_interactions(instance),
            'displayName': display_name,
            'dataSourceIds': [],
            'id': component_id,
            'parentId': PARENT_ID,
        }
    }
