"""Switch scene cycle reconstruction from bridge (v1) rules.

A Hue dimmer switch configured by the Hue app cycles through scenes on repeated
presses of its ON button. The bridge stores this as a set of v1 rules whose
names contain "dimmer switch <n>", where each step is a rule with:
- a condition on a CLIP generic status sensor: {'address': '/sensors/12/state/status',
  'operator': 'eq', 'value': '1'}
- an action recalling a scene: {'address': '/groups/3/action', 'body': {'scene': 'abc'}}

The status value is the step's position in the cycle. A rule whose name contains
'.on' recalls the scene used when the lights are switched on from off (order 0).
"""

import re

from models.types import CycleScene, SwitchSceneCycle

SWITCH_NAME_PATTERN = re.compile(r'dimmer switch (\d+)')
ORDER_PATTERN = re.compile(r'\s*([+-]?\d+)')
UNKNOWN_SCENE_NAME = 'Unknown Scene'


def extract_switch_id(rule_name: str | None) -> str | None:
    """Extract the switch number from a rule name ('... dimmer switch 2 ...' -> '2')."""
    if not isinstance(rule_name, str):
        return None
    match = SWITCH_NAME_PATTERN.search(rule_name)
    return match.group(1) if match else None


def _scene_id_from_rule(rule: dict) -> str | None:
    """Get the scene ID recalled by the first scene action of a rule."""
    for action in rule.get('actions') or []:
        if not isinstance(action, dict):
            continue
        body = action.get('body')
        if isinstance(body, dict) and body.get('scene'):
            return body['scene']
    return None


def _status_condition(rule: dict) -> dict | None:
    """Get the first '<sensor>/state/status eq <n>' condition of a rule."""
    for condition in rule.get('conditions') or []:
        if not isinstance(condition, dict):
            continue
        address = condition.get('address')
        if isinstance(address, str) and '/state/status' in address and condition.get('operator') == 'eq':
            return condition
    return None


def _parse_order(value) -> int | None:
    """Parse the leading integer of a condition value ('2', ' 2', '1.5', 2) as a step order."""
    if value is None:
        return None
    match = ORDER_PATTERN.match(str(value))
    return int(match.group(1)) if match else None


def _iter_rules(rules) -> list[dict]:
    """Accept rules as exported (id -> rule dict) or as a plain list; anything else has no rules."""
    if isinstance(rules, dict):
        values = rules.values()
    elif isinstance(rules, list):
        values = rules
    else:
        return []
    return [rule for rule in values if isinstance(rule, dict)]


def group_rules_by_switch(rules) -> dict[str, list[dict]]:
    """Group dimmer switch rules that have both actions and conditions by switch ID."""
    groups = {}
    for rule in _iter_rules(rules):
        name = rule.get('name')
        if not isinstance(name, str) or 'dimmer switch' not in name:
            continue
        if not rule.get('actions') or not rule.get('conditions'):
            continue

        switch_id = extract_switch_id(name)
        if switch_id is None:
            continue
        groups.setdefault(switch_id, []).append(rule)
    return groups


def _scene_name(scene_id: str, v1_scenes: dict) -> str:
    scene = v1_scenes.get(scene_id)
    if isinstance(scene, dict) and scene.get('name'):
        return scene['name']
    return UNKNOWN_SCENE_NAME


def resolve_cycle(rules: list[dict], v1_scenes: dict) -> list[CycleScene]:
    """Build the sorted scene cycle for one switch's rules."""
    scenes = []

    for rule in rules:
        scene_id = _scene_id_from_rule(rule)
        condition = _status_condition(rule)
        if not scene_id or not condition:
            continue
        order = _parse_order(condition.get('value'))
        if order is None:
            continue
        scenes.append({'scene_id': scene_id, 'name': _scene_name(scene_id, v1_scenes), 'order': order})

    # Scene recalled when switching on from off
    on_rule = next(
        (r for r in rules if '.on' in r.get('name', '') and _scene_id_from_rule(r)),
        None
    )
    if on_rule:
        scene_id = _scene_id_from_rule(on_rule)
        scenes.append({'scene_id': scene_id, 'name': _scene_name(scene_id, v1_scenes), 'order': 0})

    scenes.sort(key=lambda s: s['order'])
    return scenes


def parse_switch_scene_cycles(bridge_data: dict | None, scenes_v1_data: dict | None) -> list[SwitchSceneCycle]:
    """Reconstruct the scene cycle of every dimmer switch from bridge rules.

    Args:
        bridge_data: Contents of bridge.json (uses the 'rules' key)
        scenes_v1_data: Contents of scenes.json (uses the 'scenes' key for names)

    Returns:
        One SwitchSceneCycle per switch with at least one resolvable scene.
        Empty list if either input has no rules/scenes.
    """
    rules = (bridge_data or {}).get('rules')
    v1_scenes = (scenes_v1_data or {}).get('scenes')
    if not rules or not v1_scenes or not isinstance(v1_scenes, dict):
        return []

    cycles = []
    for switch_id, switch_rules in group_rules_by_switch(rules).items():
        scenes = resolve_cycle(switch_rules, v1_scenes)
        if scenes:
            cycles.append({
                'switch_id': switch_id,
                'switch_name': f"Hue dimmer switch {switch_id}",
                'scenes': scenes,
            })
    return cycles


def find_cycle_for_device(cycles: list[SwitchSceneCycle], device_name: str | None) -> SwitchSceneCycle | None:
    """Find the cycle for a switch device by the first number in its name.

    'Hue dimmer switch 2' matches the cycle with switch_id '2'. Names without
    a number match nothing.
    """
    match = re.search(r'\d+', device_name or '')
    if not match:
        return None
    return next((c for c in cycles if c['switch_id'] == match.group(0)), None)
