"""
Structured category logger

Prints one colored line per record plus tree-style key/value details:

    [14:23:45] STATE      ✓ Player state swapped
               ├─ player: button
               └─ state: idle → hover

Listeners receive every emitted record as plain text (no ANSI codes).
"""

from datetime import datetime
from typing import Callable, List, Optional

from lottie_player.models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes used by the logger"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.PLAYBACK: Colors.BRIGHT_YELLOW,
    LogCategory.STATE: Colors.BRIGHT_CYAN,
    LogCategory.TRANSITION: Colors.MAGENTA,
    LogCategory.ASSET: Colors.BRIGHT_BLUE,
    LogCategory.ENGINE: Colors.BRIGHT_GREEN,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
    LogCategory.GENERAL: Colors.WHITE,
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

LEVEL_ORDER = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR]

DETAIL_INDENT = " " * 11

# (timestamp_iso, level_name, category_name, message)
LogListener = Callable[[str, str, str, str], None]


class Logger:
    """
    Category logger for players, the engine and config loading.

    Args:
        min_level: Records below this level are dropped
        use_colors: ANSI colors on stdout (disable when piping to a file)
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors
        self._listeners: List[LogListener] = []

    def enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(self.min_level)

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def _headline(self, category: LogCategory, level: LogLevel, message: str) -> str:
        stamp = datetime.now().strftime('[%H:%M:%S]')
        cat = self._paint(category.name.ljust(10), CATEGORY_COLORS.get(category, Colors.WHITE))
        color = LEVEL_COLORS.get(level, Colors.WHITE)
        sym = self._paint(LEVEL_SYMBOLS.get(level, '·'), color)
        return f"{stamp} {cat} {sym} {self._paint(message, color)}"

    def _detail_lines(self, details: List[str]) -> List[str]:
        lines = []
        for i, detail in enumerate(details):
            branch = "└─" if i == len(details) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {detail}")
        return lines

    def add_listener(self, listener: LogListener) -> None:
        """Receive every emitted record as (timestamp, level, category, message)"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: LogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **fields
    ):
        """
        Emit one record.

        Args:
            category: Subsystem the record belongs to
            message: Headline text
            level: Severity
            details: Preformatted detail lines
            **fields: Extra key/value pairs, rendered as "key: value" details
        """
        if not self.enabled_for(level):
            return

        all_details = list(details or [])
        all_details.extend(f"{key}: {value}" for key, value in fields.items())

        print(self._headline(category, level, message))
        for line in self._detail_lines(all_details):
            print(line)

        if self._listeners:
            text = f"{message} ({', '.join(all_details)})" if all_details else message
            stamp = datetime.now().isoformat()
            for listener in list(self._listeners):
                listener(stamp, level.name, category.name, text)

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Logger with a default category, e.g. one per module"""
        return BoundLogger(self, category)


class BoundLogger:
    """Logger bound to a default category; `category=` overrides it per call"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Reconfigure the shared logger in place.

    Bound loggers and listeners created earlier keep working.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
