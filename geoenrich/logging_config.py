import logging
import logging.config
import os
import yaml
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional

# Below DEBUG; used for per-field noise such as values that are not IPs
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_FORMATS = ("json", "text")

TEXT_FORMATTER = {
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "datefmt": "%Y-%m-%d %H:%M:%S"
}

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message', 'component',
])


class JsonFormatter(logging.Formatter):
    """JSON formatter with structured fields"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "component": getattr(record, 'component', 'geoenrich')
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def _default_config(log_level: str, log_format: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "text": dict(TEXT_FORMATTER)
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": log_format,
                "stream": "ext://sys.stdout"
            }
        },
        "loggers": {
            "geoenrich": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            }
        },
        "root": {
            "level": log_level,
            "handlers": ["console"]
        }
    }


def setup_logging(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Setup logging configuration from YAML file or environment"""

    # Read environment overrides
    log_format = os.getenv("LOG_FORMAT", "json").strip().lower()
    if log_format not in LOG_FORMATS:
        log_format = "json"
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    config_path = config_path or os.getenv("LOGGING_CONFIG", "LOGGING.yaml")

    config = None
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger("geoenrich").warning(f"Could not load {config_path}: {e}")

    # Fallback to basic config if YAML not available
    if not config:
        config = _default_config(log_level, log_format)

    if log_format == "text":
        formatters = config.setdefault("formatters", {})
        formatters.setdefault("text", dict(TEXT_FORMATTER))
        for handler in config.get("handlers", {}).values():
            if "formatter" in handler:
                handler["formatter"] = "text"

    for logger in config.get("loggers", {}).values():
        logger["level"] = log_level

    logging.config.dictConfig(config)
    return config
