import logging
import logging.handlers
import os
from datetime import datetime


class DynamicDailyFileHandler(logging.handlers.WatchedFileHandler):
    """
    A file handler that automatically creates new log files when the day changes.
    """
    def __init__(self, base_log_dir, encoding='utf-8'):
        self.base_log_dir = base_log_dir
        self.current_date = None
        initial_filename = self._get_current_log_path()
        super().__init__(initial_filename, encoding=encoding, delay=True)

    def _get_current_log_path(self):
        """Generate the current log file path based on today's date."""
        now = datetime.now()
        logs_folder = os.path.join(self.base_log_dir, now.strftime("%Y"), now.strftime("%m"))
        os.makedirs(logs_folder, exist_ok=True)

        return os.path.join(logs_folder, f"log-{now.strftime('%Y-%m-%d')}.log")

    def emit(self, record):
        try:
            today = datetime.now().strftime("%Y-%m-%d")

            if self.current_date != today:
                if self.stream and not self.stream.closed:
                    self.stream.close()

                self.current_date = today
                self.baseFilename = self._get_current_log_path()
                self.stream = self._open()

            super().emit(record)

        except Exception:
            self.handleError(record)


def get_base_log_dir():
    """Get the base log directory from environment or default."""
    base_log_dir = os.environ.get("APP_LOG_DIR")
    if base_log_dir is None:
        base_log_dir = os.path.abspath(
            os.path.join(os.path.dirname(__file__), '../../storage/logs')
        )
    return base_log_dir


def _file_logging_enabled():
    return os.environ.get("APP_LOG_TO_FILE", "true").strip().lower() in ("1", "true", "yes")


Log = logging.getLogger("fletoads")
Log.setLevel(logging.DEBUG)

if not Log.handlers:
    formatter = logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s', datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    Log.addHandler(console_handler)

    if _file_logging_enabled():
        file_handler = DynamicDailyFileHandler(get_base_log_dir(), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        Log.addHandler(file_handler)

__all__ = ["Log"]
