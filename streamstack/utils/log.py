from __future__ import annotations
import json, logging, sys
from typing import Any, Dict

# attributes every LogRecord carries; anything else came in through `extra=`
_RECORD_FIELDS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

def _jsonable(v: Any) -> Any:
    # numpy scalars and arrays show up in layout extras
    if hasattr(v, "tolist"):
        return v.tolist()
    return str(v)

class JsonFormatter(logging.Formatter):
    """One JSON object per line, timestamps to the millisecond."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": f"{self.formatTime(record, '%Y-%m-%dT%H:%M:%S')}.{int(record.msecs):03d}",
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        payload.update({k: v for k, v in record.__dict__.items() if k not in _RECORD_FIELDS})
        return json.dumps(payload, separators=(",", ":"), default=_jsonable)

def get_logger(name: str = "streamstack", level: str = "INFO", structured_json: bool = True) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    if structured_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
