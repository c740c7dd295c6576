import logging
import sys
import threading


class AppLogger:
    """
    Application logger. Writes through the standard logging module to stdout
    and keeps a copy of every line so the dashboard can show the run history.
    """
    def __init__(self, logger_name="rankboard"):
        self.logger = logging.getLogger(logger_name)
        self.logger.propagate = False

        # Captured lines for the "System Logs" panel
        self.logs = []
        self._lock = threading.Lock()

        # Clear any existing handlers to avoid duplicates
        if self.logger.handlers:
            for handler in self.logger.handlers[:]:
                self.logger.removeHandler(handler)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO)

    def log(self, message: str):
        """Logs an info message and captures it."""
        self.logger.info(message)
        with self._lock:
            self.logs.append(f"INFO: {message}")

    def warning(self, message: str):
        """Logs a warning message and captures it."""
        self.logger.warning(message)
        with self._lock:
            self.logs.append(f"WARNING: {message}")

    warn = warning

    def error(self, message: str):
        """Logs an error message and captures it."""
        self.logger.error(message)
        with self._lock:
            self.logs.append(f"ERROR: {message}")

    def get_full_log(self) -> str:
        """Returns the full history of captured logs as a single string."""
        with self._lock:
            return "\n".join(self.logs)

    def clear(self):
        with self._lock:
            self.logs = []
