"""Core functionality for Hue Dashboard.

This package contains:
- config: Paths, snapshot file names and JSON file helpers
- auth: Bridge discovery, link button pairing and credential sources
- controller: HueController class for read-only API access
- export: Snapshot export, backups and snapshot information
- snapshot: Loading exported snapshots for the dashboard
"""
