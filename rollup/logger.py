"""
Structured Logging for the release rollup.
Outputs JSON-formatted progress lines on stdout.
"""

import json
import sys
import logging
from datetime import datetime, timezone

# Configure package logger
logger = logging.getLogger("ReleaseRollup")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler(sys.stdout)
logger.addHandler(handler)
logger.propagate = False

class JsonFormatter(logging.Formatter):
    """JSON formatter that dynamically extracts all extra fields."""

    # Standard LogRecord attributes to exclude (these are Python logging internals)
    STANDARD_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
        'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
        'exc_text', 'stack_info', 'asctime', 'taskName'
    }

    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }

        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and not key.startswith('_'):
                try:
                    json.dumps(value)
                    log_record[key] = value
                except (TypeError, ValueError):
                    # Non-serializable (e.g., enums, exceptions)
                    log_record[key] = str(value)

        return json.dumps(log_record)

handler.setFormatter(JsonFormatter())

def get_logger(stage: str = "SYSTEM"):
    return StageLogger(stage)

class StageLogger:
    def __init__(self, stage):
        self.stage = stage
        self.logger = logging.getLogger("ReleaseRollup")

    def _extra(self, work_item_id, fields):
        extra = {"stage": self.stage}
        if work_item_id is not None: extra["work_item_id"] = work_item_id
        extra.update(fields)
        return extra

    def info(self, msg, work_item_id=None, **kwargs):
        self.logger.info(msg, extra=self._extra(work_item_id, kwargs))

    def warning(self, msg, work_item_id=None, **kwargs):
        self.logger.warning(msg, extra=self._extra(work_item_id, kwargs))

    def error(self, msg, work_item_id=None, **kwargs):
        self.logger.error(msg, extra=self._extra(work_item_id, kwargs))
