"""CLI command modules.

This package contains:
- setup: Help, discovery, configuration and connection check commands
- export: Export commands (export, export-info)
- dashboard: Dashboard views (overview, lights, rooms, scenes, devices, switches)
"""
