"""Data models and display logic.

This package contains:
- colour: xy / colour temperature to RGB and hex conversion
- icons: Emoji tables for scenes, rooms, lights, devices and services
- scenes: Scene colour palettes, light counts and emoji
- switch_cycles: Switch scene cycles reconstructed from bridge rules
- types: TypedDict and NamedTuple definitions
- utils: Utility functions (display_width, find_resource, similarity_score, etc.)
"""
