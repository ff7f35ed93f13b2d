"""Shared test fixtures for converter tests."""
import pytest


class FixedNames:
    """Deterministic id / display name generator."""

    def new_id(self, prefix):
        return f"{prefix}test"

    def new_display_name(self, base_name):
        return f"{base_name}_test"


def wrap_document(instance, envelope=True):
    """Wrap a component instance the way the Unify fetch endpoint returns it."""
    nodes = {'1:5780': {'document': instance}}
    if envelope:
        return {'Result': {'nodes': nodes}}
    return {'nodes': nodes}


@pytest.fixture
def names():
    return FixedNames()


@pytest.fixture
def wrap():
    return wrap_document


@pytest.fixture
def checkbox_instance():
    """Checkbox-shaped instance: 'Input' + 'Text and supporting text' frames."""
    return {
        'id': '1:5780',
        'name': 'Checkbox',
        'type': 'INSTANCE',
        'componentProperties': {
            'Size': {'type': 'VARIANT', 'value': 'SM'},
            'State': {'type': 'VARIANT', 'value': 'Default'},
            'Checked': {'type': 'VARIANT', 'value': 'True'},
        },
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 199.6, 'height': 20},
        'fills': [],
        'strokes': [{'type': 'SOLID', 'visible': True, 'color': {'r': 0, 'g': 0, 'b': 0, 'a': 1}}],
        'strokeWeight': 1,
        'paddingTop': 0,
        'paddingRight': 0,
        'paddingBottom': 0,
        'paddingLeft': 0,
        'interactions': [
            {'trigger': {'type': 'ON_CLICK'}, 'actions': []},
            {'trigger': {'type': 'ON_DRAG'}, 'actions': []},
        ],
        'children': [
            {
                'id': '1:5781',
                'name': 'Input',
                'type': 'FRAME',
                'children': [{'id': '1:5782', 'name': '_Checkbox base', 'type': 'INSTANCE'}],
            },
            {
                'id': '1:5783',
                'name': 'Text and supporting text',
                'type': 'FRAME',
                'children': [
                    {
                        'id': '1:5784',
                        'name': 'Text',
                        'type': 'TEXT',
                        'characters': 'Remember me',
                        'style': {'fontSize': 14, 'fontWeight': 500},
                        'fills': [{'type': 'SOLID', 'color': {'r': 0.2, 'g': 0.4, 'b': 0.6, 'a': 1}}],
                    },
                    {
                        'id': '1:5785',
                        'name': 'Supporting text',
                        'type': 'TEXT',
                        'characters': 'Save my login details for next time.',
                        'style': {'fontSize': 14, 'fontWeight': 400},
                        'boundVariables': {'fontWeight': [{'type': 'VARIABLE_ALIAS', 'id': 'VariableID:1'}]},
                        'fills': [{'type': 'SOLID', 'color': {'r': 0.4588235318660736, 'g': 0.4588235318660736,
                                                              'b': 0.4588235318660736, 'a': 1}}],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def radio_field_instance():
    """Radio-field-shaped instance: 'Checkbox and Label' + 'Description Row' frames."""
    return {
        'id': '2:100',
        'name': 'Radio Field',
        'type': 'INSTANCE',
        'componentProperties': {
            'Size': {'type': 'VARIANT', 'value': 'md'},
            'Value Type': {'type': 'VARIANT', 'value': 'Checked'},
            'DefaultValue': {'type': 'TEXT', 'value': 'option-a'},
        },
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 240, 'height': 44},
        'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}}],
        'strokes': [],
        'strokeWeight': 2,
        'paddingTop': 8,
        'paddingRight': 8,
        'paddingBottom': 8,
        'paddingLeft': 8,
        'children': [
            {
                'id': '2:101',
                'name': 'Checkbox and Label',
                'type': 'FRAME',
                'children': [
                    {'id': '2:102', 'name': 'Radio', 'type': 'INSTANCE'},
                    {
                        'id': '2:103',
                        'name': 'Label',
                        'type': 'TEXT',
                        'characters': 'Option A',
                        'style': {'fontSize': 16, 'fontWeight': 600},
                        'fills': [{'type': 'SOLID', 'color': {'r': 0, 'g': 0, 'b': 0, 'a': 1}}],
                    },
                ],
            },
            {
                'id': '2:104',
                'name': 'Description Row',
                'type': 'FRAME',
                'children': [
                    {
                        'id': '2:105',
                        'name': 'Description',
                        'type': 'TEXT',
                        'characters': 'The first option',
                        'style': {'fontSize': 12, 'fontWeight': 450},
                        'fills': [],
                    },
                ],
            },
        ],
    }
