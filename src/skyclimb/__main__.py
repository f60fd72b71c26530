"""
Command-line entry point.

Usage:
    python -m skyclimb                       # Play with default settings
    python -m skyclimb --config easy.json    # Override constants from JSON
    python -m skyclimb --leaderboard-url URL # Enable the remote top-10
"""

import argparse
import sys

from skyclimb.core.debug.debug_logger import DebugLogger, LoggerConfig
from skyclimb.core.errors import ConfigError
from skyclimb.core.runtime.sim_config import load_simulation_config
from skyclimb.core.runtime.simulation import Simulation
from skyclimb.systems.leaderboard.leaderboard_client import LeaderboardClient


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="skyclimb", description="Endless vertical platform climber")
    p.add_argument("--config", default=None,
                   help="JSON file with overrides for the simulation constants")
    p.add_argument("--leaderboard-url", default=None,
                   help="Leaderboard web app endpoint")
    p.add_argument("--no-leaderboard", action="store_true",
                   help="Do not contact the leaderboard service")
    p.add_argument("--log-level", default=LoggerConfig.LOG_LEVEL,
                   choices=sorted(DebugLogger.LEVEL_VALUES),
                   help="Console log verbosity")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    LoggerConfig.configure(level=args.log_level)

    try:
        config = load_simulation_config(args.config, strict=args.config is not None)
    except (ConfigError, FileNotFoundError) as e:
        DebugLogger.fail(f"Invalid configuration: {e}")
        return 2

    leaderboard = None
    if not args.no_leaderboard:
        leaderboard = LeaderboardClient(api_url=args.leaderboard_url)

    # Imported late so --help works without initializing pygame
    from skyclimb.core.runtime.main_loop import MainLoop

    MainLoop(Simulation(config), leaderboard=leaderboard).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
