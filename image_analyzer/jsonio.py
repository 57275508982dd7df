# image_analyzer/jsonio.py
from __future__ import annotations
import json, logging, sys
from typing import Any, Dict, Optional

from .models.outcome import RunReport

def enable_json_logging():
    """Send logs to stderr and keep only errors, so stdout carries just the JSON payload."""
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    logging.basicConfig(stream=sys.stderr, level=logging.ERROR)

def _emit(payload: Dict[str, Any]) -> None:
    # Paths and other odd values are written as strings
    print(json.dumps(payload, ensure_ascii=False, default=str), file=sys.stdout)
    sys.stdout.flush()

def report(command: str, run: RunReport, meta: Optional[Dict[str, Any]] = None) -> int:
    """Emit a run report; the return value doubles as the process exit code."""
    code = 130 if run.interrupted else 0
    payload: Dict[str, Any] = {
        "result": "interrupted" if run.interrupted else "success",
        "command": command,
        "data": run.to_dict(),
    }
    if meta:
        payload["meta"] = meta
    _emit(payload)
    return code

def error(command: str, message: str, debug: Optional[Dict[str, Any]] = None, code: int = 1) -> int:
    payload: Dict[str, Any] = {"result": "error", "command": command, "error": message}
    if debug:
        payload["debug"] = debug
    _emit(payload)
    return code
