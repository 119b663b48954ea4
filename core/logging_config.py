import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from core.config import settings

class StationTimeFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        # Convert UTC to the station's civil time
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        local = dt.astimezone(ZoneInfo(settings.station_timezone))
        return local.strftime("%Y-%m-%d %H:%M:%S %Z")

    def format(self, record: logging.LogRecord) -> str:
        # Extract just the module name from the logger path
        record.name = record.name.split('.')[-1]
        return super().format(record)

def setup_logging() -> None:
    formatter = StationTimeFormatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s"
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Configure console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Remove existing handlers and add our custom handler
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
