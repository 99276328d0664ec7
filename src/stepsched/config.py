from __future__ import annotations
import os


def _flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


STRATEGY = os.environ.get("STEPSCHED_STRATEGY", "scan")
STRICT = _flag(os.environ.get("STEPSCHED_STRICT", "1"))
SEPARATOR = os.environ.get("STEPSCHED_SEPARATOR", "")
PLAN_FILE = os.environ.get("STEPSCHED_PLAN", "stepsched_plan.py")
