"""Pytest configuration and fixtures for Hue dashboard tests."""

import pytest
from pathlib import Path


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_lights():
    """Exported lights (lights-v2.json 'lights' content)."""
    return {
        'light-1': {
            'id': 'light-1',
            'name': 'Sofa lamp',
            'archetype': 'table_shade',
            'state': {'on': True, 'brightness': 80.0, 'color_temperature': 366, 'color_xy': None},
            'capabilities': {
                'dimming': {'brightness': 80.0, 'min_dim_level': 0.2},
                'color_temperature': {'mirek': 366, 'mirek_schema': {'mirek_minimum': 153, 'mirek_maximum': 500}},
                'color': None,
            },
        },
        'light-2': {
            'id': 'light-2',
            'name': 'Ceiling',
            'archetype': 'ceiling_round',
            'state': {'on': True, 'brightness': 100.0, 'color_temperature': None,
                      'color_xy': {'x': 0.7, 'y': 0.3}},
            'capabilities': {'dimming': {'brightness': 100.0}, 'color_temperature': None,
                             'color': {'xy': {'x': 0.7, 'y': 0.3}, 'gamut_type': 'C'}},
        },
        'light-3': {
            'id': 'light-3',
            'name': 'Bedside',
            'archetype': 'flexible_lamp',
            'state': {'on': False, 'brightness': None, 'color_temperature': None, 'color_xy': None},
            'capabilities': {'dimming': None, 'color_temperature': None, 'color': None},
        },
    }


@pytest.fixture
def sample_devices():
    """Exported devices (devices-v2.json 'devices' content)."""
    return {
        'device-1': {
            'id': 'device-1',
            'name': 'Sofa lamp',
            'archetype': 'table_shade',
            'product_data': {'product_name': 'Hue color lamp', 'model_id': 'LCT015'},
            'services': [{'rid': 'light-1', 'rtype': 'light'}],
        },
        'device-2': {
            'id': 'device-2',
            'name': 'Ceiling',
            'archetype': 'ceiling_round',
            'product_data': {'product_name': 'Hue color lamp', 'model_id': 'LCT015'},
            'services': [{'rid': 'light-2', 'rtype': 'light'}],
        },
        'device-3': {
            'id': 'device-3',
            'name': 'Bedside',
            'archetype': 'flexible_lamp',
            'product_data': {'product_name': 'Hue white lamp', 'model_id': 'LWB010'},
            'services': [{'rid': 'light-3', 'rtype': 'light'}],
        },
        'device-4': {
            'id': 'device-4',
            'name': 'Hue dimmer switch 1',
            'archetype': 'unknown_archetype',
            'product_data': {'product_name': 'Hue dimmer switch', 'model_id': 'RWL021'},
            'services': [{'rid': 'button-1', 'rtype': 'button'}, {'rid': 'power-1', 'rtype': 'device_power'}],
        },
    }


@pytest.fixture
def sample_rooms():
    """Exported rooms (rooms-v2.json 'rooms' content)."""
    return {
        'room-1': {
            'id': 'room-1',
            'name': 'Lounge',
            'archetype': 'living_room',
            'children': [
                {'rid': 'device-1', 'rtype': 'device'},
                {'rid': 'device-2', 'rtype': 'device'},
                {'rid': 'device-4', 'rtype': 'device'},
            ],
        },
        'room-2': {
            'id': 'room-2',
            'name': 'Bedroom',
            'archetype': 'bedroom',
            'children': [{'rid': 'device-3', 'rtype': 'device'}],
        },
    }


@pytest.fixture
def sample_scenes():
    """Exported scenes (scenes-v2.json 'scenes' content)."""
    return {
        'scene-1': {
            'id': 'scene-1',
            'name': 'Relax',
            'group': {'rid': 'room-1', 'rtype': 'room'},
            'actions': [
                {'target': {'rid': 'light-1', 'rtype': 'light'},
                 'action': {'on': {'on': True}, 'dimming': {'brightness': 56.0},
                            'color_temperature': {'mirek': 447}}},
                {'target': {'rid': 'light-2', 'rtype': 'light'},
                 'action': {'on': {'on': True}, 'color': {'xy': {'x': 0.5, 'y': 0.4}}}},
            ],
            'speed': 0.5,
            'auto_dynamic': False,
        },
        'scene-2': {
            'id': 'scene-2',
            'name': 'Nightlight',
            'group': {'rid': 'room-2', 'rtype': 'room'},
            'actions': [
                {'target': {'rid': 'light-3', 'rtype': 'light'},
                 'action': {'on': {'on': True}, 'dimming': {'brightness': 1.0}}},
            ],
        },
    }


@pytest.fixture
def cycle_rules():
    """Bridge rules for dimmer switch 1: power-on scene C, then A and B."""
    return {
        '1': {
            'name': 'dimmer switch 1.on',
            'conditions': [{'address': '/sensors/2/state/buttonevent', 'operator': 'eq', 'value': '1002'}],
            'actions': [{'address': '/groups/1/action', 'method': 'PUT', 'body': {'scene': 'C'}}],
        },
        '2': {
            'name': 'dimmer switch 1 step1',
            'conditions': [{'address': '/sensors/12/state/status', 'operator': 'eq', 'value': '1'}],
            'actions': [{'address': '/groups/1/action', 'method': 'PUT', 'body': {'scene': 'A'}}],
        },
        '3': {
            'name': 'dimmer switch 1 step2',
            'conditions': [{'address': '/sensors/12/state/status', 'operator': 'eq', 'value': '2'}],
            'actions': [{'address': '/groups/1/action', 'method': 'PUT', 'body': {'scene': 'B'}}],
        },
    }


@pytest.fixture
def scenes_v1():
    """scenes.json content with the scenes the cycle rules recall."""
    return {
        'scenes': {
            'A': {'id': 'A', 'name': 'Read'},
            'B': {'id': 'B', 'name': 'Nightlight'},
            'C': {'id': 'C', 'name': 'Bright'},
        }
    }


@pytest.fixture
def sample_snapshot(sample_lights, sample_rooms, sample_scenes, sample_devices, cycle_rules, scenes_v1):
    """A complete snapshot as returned by load_snapshot()."""
    return {
        'lights': sample_lights,
        'rooms': sample_rooms,
        'scenes': sample_scenes,
        'devices': sample_devices,
        'bridge': {'config': {}, 'schedules': {}, 'rules': cycle_rules, 'resourcelinks': {}},
        'scenes_v1': scenes_v1,
    }
