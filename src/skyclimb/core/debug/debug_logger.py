"""
debug_logger.py
---------------
Console diagnostics for the simulation and its collaborators.

Features:
- Per-category switches and a global verbosity level
- Optional simulation clock prefix ("run 2 t=345") bound by the running simulation
- Throttling for messages that can repeat every tick
- Pluggable output stream (stdout by default) so tests can capture lines
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Controls which components emit log messages and at what verbosity."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE

    CATEGORIES = {
        # Core
        "loading": False,
        "system": True,
        "display": True,
        "input": False,
        "event_manager": False,

        # Simulation
        "simulation": True,
        "physics": False,
        "collision": False,
        "camera": False,
        "difficulty": True,

        # Platforms
        "platform_spawn": False,
        "platform_cleanup": False,

        # Front end
        "render": False,

        # Collaborators
        "leaderboard": True,
    }

    SHOW_TIMESTAMP = True
    SHOW_CLOCK = True
    USE_COLOR = True
    STREAM = None  # None -> sys.stdout at write time

    @classmethod
    def configure(cls, level=None, enabled=None, categories=None, stream=None):
        """
        Apply runtime overrides, e.g. from command-line flags.

        Args:
            level: One of DebugLogger.LEVEL_VALUES
            enabled: Master switch
            categories: {category: bool} merged into CATEGORIES
            stream: File-like object receiving log lines
        """
        if level is not None:
            if level not in DebugLogger.LEVEL_VALUES:
                raise ValueError(f"Unknown log level {level!r}")
            cls.LOG_LEVEL = level
        if enabled is not None:
            cls.ENABLE_LOGGING = enabled
        if categories:
            cls.CATEGORIES = {**cls.CATEGORIES, **categories}
        if stream is not None:
            cls.STREAM = stream


# ===========================================================
# ANSI Colors
# ===========================================================

class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = "\033[0m"
    WHITE = "\033[97m"
    GREEN = "\033[92m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    BLUE = "\033[94m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


# ===========================================================
# Debug Logger
# ===========================================================

class DebugLogger:
    """Static logger; every public method is safe to call before configuration."""

    LINE_LENGTH = 59

    LEVEL_VALUES = {
        "NONE": 0,
        "ERROR": 1,
        "WARN": 2,
        "INFO": 3,
        "VERBOSE": 4,
    }

    # tag -> (level, color)
    KINDS = {
        "INIT": ("INFO", Colors.WHITE),
        "SYSTEM": ("INFO", Colors.MAGENTA),
        "STATE": ("INFO", Colors.CYAN),
        "ACTION": ("INFO", Colors.GREEN),
        "TRACE": ("VERBOSE", Colors.BLUE),
        "WARN": ("WARN", Colors.YELLOW),
        "FAIL": ("ERROR", Colors.RED),
    }

    _clock = None
    _throttle_counts = {}

    # ===========================================================
    # Simulation Clock
    # ===========================================================

    @classmethod
    def bind_clock(cls, provider):
        """
        Prefix log lines with simulation time.

        Args:
            provider: Callable returning (run_id, tick), or None to unbind
        """
        cls._clock = provider

    @classmethod
    def unbind_clock(cls, provider=None):
        """Drop the clock, only if it is still the given provider when one is passed."""
        if provider is None or cls._clock == provider:
            cls._clock = None

    # ===========================================================
    # Filtering
    # ===========================================================

    @staticmethod
    def is_enabled(category: str, level: str = "INFO") -> bool:
        """True if a message of this category and level would be written."""
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        if not LoggerConfig.CATEGORIES.get(category, False):
            return False
        wanted = DebugLogger.LEVEL_VALUES.get(level, 3)
        allowed = DebugLogger.LEVEL_VALUES.get(LoggerConfig.LOG_LEVEL, 3)
        return wanted <= allowed

    @classmethod
    def _throttled(cls, key) -> bool:
        """Let the 1st, 2nd, 4th, 8th... occurrence of key through."""
        count = cls._throttle_counts.get(key, 0) + 1
        cls._throttle_counts[key] = count
        return count & (count - 1) != 0

    @classmethod
    def reset_throttle(cls):
        cls._throttle_counts.clear()

    # ===========================================================
    # Output
    # ===========================================================

    @staticmethod
    def _write(text: str):
        stream = LoggerConfig.STREAM or sys.stdout
        print(text, file=stream)

    @staticmethod
    def _paint(text: str, color: str) -> str:
        if not LoggerConfig.USE_COLOR:
            return text
        return f"{color}{text}{Colors.RESET}"

    @staticmethod
    def _caller() -> str:
        """Class name of the calling method, else the PascalCased module name."""
        try:
            frame = sys._getframe(4)
        except ValueError:
            return "Unknown"

        local_vars = frame.f_locals
        if "self" in local_vars:
            return type(local_vars["self"]).__name__
        if "cls" in local_vars and isinstance(local_vars["cls"], type):
            return local_vars["cls"].__name__

        module = frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1]
        module = module[:-3] if module.endswith(".py") else module
        return "".join(part.capitalize() for part in module.split("_"))

    @classmethod
    def _prefix(cls, tag: str) -> str:
        parts = []
        if LoggerConfig.SHOW_TIMESTAMP:
            parts.append(f"[{datetime.now().strftime('%H:%M:%S')}]")
        if LoggerConfig.SHOW_CLOCK and cls._clock is not None:
            run_id, tick = cls._clock()
            parts.append(f"[run {run_id} t={tick}]")
        parts.append(f"[{cls._caller()}][{tag}]")
        return " ".join(parts) + " "

    @classmethod
    def _log(cls, tag: str, msg: str, category: str, throttle_key=None):
        level, color = cls.KINDS[tag]
        if not cls.is_enabled(category, level):
            return
        if throttle_key is not None and cls._throttled(throttle_key):
            return

        line = cls._prefix(tag) + msg
        if throttle_key is not None:
            count = cls._throttle_counts[throttle_key]
            if count > 1:
                line += f" (x{count})"
        cls._write(cls._paint(line, color))

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @classmethod
    def init(cls, msg: str = "", category: str = "system"):
        """Initialization log. Empty message prints a blank line."""
        if not msg.strip():
            if cls.is_enabled(category):
                cls._write("")
            return
        cls._log("INIT", msg, category)

    @classmethod
    def system(cls, msg: str, category: str = "system"):
        cls._log("SYSTEM", msg, category)

    @classmethod
    def state(cls, msg: str, category: str = "system"):
        """State transition (run started, speed changed, game over...)."""
        cls._log("STATE", msg, category)

    @classmethod
    def action(cls, msg: str, category: str = "system"):
        cls._log("ACTION", msg, category)

    @classmethod
    def trace(cls, msg: str, category: str = "collision"):
        """Per-tick detail, only at VERBOSE."""
        cls._log("TRACE", msg, category)

    @classmethod
    def warn(cls, msg: str, category: str = "system", throttle_key=None):
        """
        Recoverable problem.

        Args:
            throttle_key: Messages sharing a key are thinned out to powers of two
        """
        cls._log("WARN", msg, category, throttle_key)

    @classmethod
    def fail(cls, msg: str, category: str = "system"):
        """Failure that was caught and degraded."""
        cls._log("FAIL", msg, category)

    # ===========================================================
    # Section Formatting
    # ===========================================================

    @classmethod
    def section(cls, title: str):
        """Print a boxed section header."""
        if not cls.is_enabled("system"):
            return
        rule = "─" * cls.LINE_LENGTH
        title_line = f"[{title}]".center(cls.LINE_LENGTH)
        cls._write(cls._paint(f"\n{rule}\n{title_line}\n", Colors.WHITE))

    @classmethod
    def init_entry(cls, module: str, status: str = "OK"):
        """Print a dotted startup entry: '> Module ........ [OK]'."""
        if not cls.is_enabled("system"):
            return
        status_color = {
            "OK": Colors.GREEN,
            "LOADING": Colors.CYAN,
            "FAIL": Colors.RED,
        }.get(status.upper(), Colors.WHITE)

        label = f"> {module}"
        badge = f"[{status}]"
        dots = max(cls.LINE_LENGTH - len(label) - len(badge) - 2, 1)
        cls._write(f"{label} {'.' * dots} " + cls._paint(badge, status_color))

    @classmethod
    def init_sub(cls, detail: str, level: int = 1):
        """Print an indented detail under the last entry."""
        if not cls.is_enabled("system"):
            return
        cls._write(f"{' ' * (level * 4)}• {detail}")
