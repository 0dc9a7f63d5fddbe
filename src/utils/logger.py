import sys
import threading
from datetime import datetime
from typing import Optional, TextIO
from models.enums import LogLevel, LogCategory

# === ANSI COLORS ===
class Colors:
    """ANSI escape codes for colored terminal output"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_WHITE = '\033[97m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_GREEN = '\033[92m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.TRANSITION: Colors.MAGENTA,
    LogCategory.CLOCK: Colors.BRIGHT_BLUE,
    LogCategory.INTERPOLATION: Colors.BRIGHT_MAGENTA,
    LogCategory.PROPERTY: Colors.BRIGHT_GREEN,
    LogCategory.DISPATCH: Colors.BRIGHT_YELLOW,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

LEVEL_SYMBOLS = {
    LogLevel.DEBUG: '·',
    LogLevel.INFO: '✓',
    LogLevel.WARN: '⚠',
    LogLevel.ERROR: '✗',
}

LEVEL_COLORS = {
    LogLevel.DEBUG: Colors.DIM,
    LogLevel.INFO: Colors.GREEN,
    LogLevel.WARN: Colors.YELLOW,
    LogLevel.ERROR: Colors.RED,
}

LEVEL_PRIORITY = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}

CATEGORY_WIDTH = max(len(c.name) for c in LogCategory)
DETAIL_INDENT = " " * 15


# === CORE LOGGER ===
class Logger:
    """
    Structured console logger

    Format:
    [HH:MM:SS.mmm] CATEGORY sym Message
                   ├─ key: value
                   └─ key: value

    Entries logged from a thread other than the main one (clock threads)
    carry the thread name:

    [14:23:45.120] TRANSITION    ✓ Transition completed  <TransitionClock>
                   ├─ ticks: 50
                   └─ elapsed_ms: 503.2

    Each entry is written under a lock so detail lines of concurrent
    entries never interleave.
    """

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        stream: Optional[TextIO] = None
    ):
        """
        Args:
            min_level: Minimum log level to display
            use_colors: Enable ANSI color codes (disable for file output)
            stream: Output stream (default: sys.stdout at write time)
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream
        self._write_lock = threading.Lock()

    def is_enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_PRIORITY[level] >= LEVEL_PRIORITY[self.min_level]

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _header(self, category: LogCategory, level: LogLevel, message: str) -> str:
        timestamp = datetime.now().strftime('[%H:%M:%S.%f')[:-3] + ']'
        cat = self._colorize(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE))
        sym = self._colorize(LEVEL_SYMBOLS[level], LEVEL_COLORS[level])
        msg = self._colorize(message, LEVEL_COLORS[level])

        thread = threading.current_thread()
        if thread is not threading.main_thread():
            msg += self._colorize(f"  <{thread.name}>", Colors.DIM)

        return f"{timestamp} {cat} {sym} {msg}"

    def _detail_lines(self, details: list) -> list:
        lines = []
        for i, detail in enumerate(details):
            tree = "└─" if i == len(details) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._colorize(tree, Colors.DIM)} {detail}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Log a structured message

        Args:
            category: Log category (TRANSITION, CLOCK, etc.)
            message: Main message text
            level: Log level (DEBUG, INFO, WARN, ERROR)
            details: Detail strings shown below the message
            **kwargs: Key-value pairs shown as details after `details`

        Example:
            logger.log(LogCategory.PROPERTY, "Resolved property", target="Panel", name="width")
        """
        if not self.is_enabled_for(level):
            return

        all_details = list(details or [])
        all_details.extend(f"{k}: {v}" for k, v in kwargs.items())

        entry = "\n".join([self._header(category, level, message)] + self._detail_lines(all_details))

        with self._write_lock:
            print(entry, file=self.stream or sys.stdout)

    # === Level helpers ===
    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Logger bound to one category"""
        return BoundLogger(self, category)


class BoundLogger:
    """Logger bound to a default category; calls may still override it"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    @property
    def category(self) -> LogCategory:
        return self._category

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._base.is_enabled_for(level)

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


# === Global instance helpers ===
_logger = Logger()

def get_logger() -> Logger:
    return _logger

def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)

def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True, stream: Optional[TextIO] = None):
    """
    Reconfigure the process-wide logger in place

    Module-level bound loggers keep pointing at the same instance, so they
    pick up the new settings immediately.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    _logger.stream = stream
