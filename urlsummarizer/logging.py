import base64
import json
import os
import sys
import time
from typing import Any, Dict, Iterable

LEVELS = {"debug": 10, "info": 20, "warn": 30, "warning": 30, "error": 40}
_REDACT_KEYS = {"api_key", "openai_api_key", "authorization", "password", "secret", "token", "access_token"}


def _safe_default(o: Any) -> Any:
    """Fallback serializer for values json can't handle natively."""
    if isinstance(o, (bytes, bytearray)):
        try:
            return o.decode("utf-8")
        except UnicodeDecodeError:
            return {"__b64__": base64.b64encode(bytes(o)).decode("ascii")}
    if isinstance(o, (set, frozenset)):
        return list(o)
    if isinstance(o, BaseException):
        return {"type": o.__class__.__name__, "message": str(o)}
    return str(o)


def _scrub(obj: Any, redact_keys: Iterable[str]) -> Any:
    """Recursively replace values of sensitive keys (case-insensitive)."""
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if isinstance(k, str) and k.lower() in redact_keys:
                out[k] = "[REDACTED]"
            else:
                out[k] = _scrub(v, redact_keys)
        return out
    if isinstance(obj, (list, tuple)):
        return [_scrub(v, redact_keys) for v in obj]
    return obj


class JsonLogger:
    """One JSON object per line on stdout: ``logger.info("fetch.done", url=...)``."""

    def __init__(self, level: str = "info", use_stderr: bool = False) -> None:
        self.level = LEVELS.get(level.lower(), 20)
        self.use_stderr = use_stderr
        self._pid = os.getpid()

    def set_level(self, level: str) -> None:
        self.level = LEVELS.get(level.lower(), 20)

    def _emit(self, level_name: str, event: str, **fields: Any) -> None:
        if LEVELS.get(level_name, 20) < self.level:
            return
        rec: Dict[str, Any] = {
            "ts": int(time.time() * 1000),
            "event": event,
            "level": "WARN" if level_name == "warning" else level_name.upper(),
            "pid": self._pid,
        }
        rec.update(fields)
        rec = _scrub(rec, _REDACT_KEYS)

        out = sys.stderr if self.use_stderr else sys.stdout
        try:
            out.write(json.dumps(rec, default=_safe_default, ensure_ascii=False) + "\n")
        except (TypeError, ValueError) as e:
            # never take the request down because a field wouldn't serialize
            fallback = {
                "ts": rec.get("ts"),
                "event": "logger.error",
                "level": "ERROR",
                "orig_event": event,
                "error": str(e),
                "data_repr": repr(rec),
            }
            out.write(json.dumps(fallback, ensure_ascii=False) + "\n")
        out.flush()

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("info", event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    # compatibility with std logging API
    def warning(self, event: str, **fields: Any) -> None:
        self._emit("warn", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("error", event, **fields)


logger = JsonLogger(os.environ.get("LOG_LEVEL", "info"))
__all__ = ["logger", "JsonLogger"]
