"""Simulation subsystems."""
