"""
errors.py
---------
Exception hierarchy shared by the simulation core and its adapters.
"""


class SkyClimbError(Exception):
    """Base class for all SkyClimb errors."""


class ConfigError(SkyClimbError):
    """Raised when a simulation configuration is inconsistent."""


class SimulationActiveError(SkyClimbError):
    """Raised when a second simulation is started while another one is running."""


class ReentrantTickError(SkyClimbError):
    """Raised when a tick is requested while a previous tick is still executing."""
