"""Rendering of simulation snapshots."""
