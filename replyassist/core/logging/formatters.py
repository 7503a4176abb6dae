import json
import logging
from datetime import datetime
from typing import Any

from .constants import (
    LEVEL_STYLES,
    LOG_TZ,
    MODULE_ABBREV,
    MODULE_COLORS,
    Colors,
    _COLORS,
    get_request_id,
)


def _module_display(name: str) -> str:
    name_parts = name.split(".")
    prefix = name_parts[0].lower()
    mod_abbrev = MODULE_ABBREV.get(prefix, prefix[:3].upper())

    if len(name_parts) > 1:
        submod = ".".join(name_parts[1:])
        if len(submod) > 9:
            submod = submod[:8] + "…"
        display = f"{mod_abbrev}|{submod}"
    else:
        display = mod_abbrev

    if len(display) > 14:
        display = display[:13] + "…"
    return display


class SmartFormatter(logging.Formatter):

    HIGHLIGHT_KEYS = {
        "model": "MODEL",
        "models": "MODEL",
        "score": "SCORE",
        "confidence": "SCORE",
        "top_score": "SCORE",
        "error": "ERROR",
        "err": "ERROR",
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and Colors._enabled()

    def _c(self, key: str) -> str:
        if not self.use_colors:
            return ""
        return _COLORS.get(key, "")

    def _format_value(self, value: Any, max_len: int = 60) -> str:
        if value is None:
            return "null"

        if isinstance(value, bool):
            return "yes" if value else "no"

        if isinstance(value, float):
            return f"{value:.4f}".rstrip("0").rstrip(".") or "0"

        if isinstance(value, int):
            return str(value)

        if isinstance(value, (list, tuple)):
            if len(value) == 0:
                return "[]"
            if len(value) <= 3:
                return f"[{', '.join(str(v) for v in value)}]"
            return f"[{len(value)} items]"

        if isinstance(value, dict):
            if len(value) == 0:
                return "{}"
            return f"{{{len(value)} keys}}"

        s = str(value)
        if len(s) > max_len:
            return s[:max_len - 3] + "..."
        return s

    def format(self, record: logging.LogRecord) -> str:
        label, color_key = LEVEL_STYLES.get(record.levelname, (record.levelname[:5], "INFO"))

        c_reset = self._c("RESET")
        c_time = self._c("TIME")
        c_level = self._c(color_key)
        c_sep = self._c("SEPARATOR")
        c_key = self._c("KEY")
        c_value = self._c("VALUE")
        c_module = ""
        if self.use_colors:
            prefix = record.name.split(".")[0].lower()
            c_module = MODULE_COLORS.get(prefix, _COLORS["MODULE"])

        now = datetime.now(LOG_TZ)
        timestamp = now.strftime("%H:%M:%S") + f".{now.microsecond // 1000:03d}"

        line = " ".join([
            f"{c_time}{timestamp}{c_reset}",
            f"{c_level}{label}{c_reset}",
            f"[{c_module}{_module_display(record.name):14}{c_reset}]",
            record.getMessage(),
        ])

        extra = getattr(record, "extra_data", None)
        if extra:
            extras = []
            for key, value in extra.items():
                highlight = self.HIGHLIGHT_KEYS.get(key.lower())
                key_color = self._c(highlight) if highlight else c_key
                extras.append(f"{key_color}{key}{c_reset}={c_value}{self._format_value(value)}{c_reset}")
            line += f" {c_sep}│{c_reset} " + " ".join(extras)

        if record.exc_info:
            line += f"\n{c_level}{self.formatException(record.exc_info)}{c_reset}"

        return line


class PlainFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        now = datetime.now(LOG_TZ)
        timestamp = now.strftime("%Y-%m-%d %H:%M:%S.") + f"{now.microsecond // 1000:03d}"

        req_id = get_request_id()
        req_prefix = f"{req_id[:8]}│" if req_id else ""

        line = f"{timestamp} {record.levelname:7} [{req_prefix}{_module_display(record.name):14}] {record.getMessage()}"

        extra = getattr(record, "extra_data", None)
        if extra:
            extras = []
            for k, v in extra.items():
                if isinstance(v, (list, tuple)) and len(v) > 3:
                    v = f"[{len(v)} items]"
                elif isinstance(v, dict) and len(v) > 0:
                    v = f"{{{len(v)} keys}}"
                extras.append(f"{k}={v}")
            line += " │ " + " ".join(extras)

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


class JsonFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(LOG_TZ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        req_id = get_request_id()
        if req_id:
            payload["req"] = req_id

        extra = getattr(record, "extra_data", None)
        if extra:
            payload.update(extra)

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)
