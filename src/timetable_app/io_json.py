"""
JSON serialisation / deserialisation for planning Rules and plan exports.

Uses only the Python standard-library json module. Basic structural
validation is applied before domain objects are built, so a hand-edited
rules file fails with a readable ConfigError instead of a KeyError deep in
the planner.

Reference: Python docs — json
https://docs.python.org/3/library/json.html

Bundled defaults are read with importlib.resources so they work from an
installed wheel as well as from a source checkout.
Reference: https://docs.python.org/3/library/importlib.resources.html
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

from timetable_app.models import Rules


class ConfigError(ValueError):
    """Raised when a rules or timetable file is structurally invalid."""


def _as_list(obj: Any, ctx: str) -> List[Any]:
    if not isinstance(obj, list):
        raise ConfigError(f"Expected a JSON array in {ctx}, got {type(obj).__name__}")
    return obj


def _as_dict(obj: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigError(
            f"Expected a JSON object in {ctx}, got {type(obj).__name__}"
        )
    return obj


def _as_int(obj: Any, ctx: str) -> int:
    # bool is an int subclass; "true" as a period index is a mistake
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise ConfigError(f"Expected an integer in {ctx}, got {obj!r}")
    return obj


def read_bundled_text(name: str) -> str:
    return resources.files("timetable_app").joinpath("data", name).read_text(encoding="utf-8")


def rules_from_dict(raw: Any) -> Rules:
    raw = _as_dict(raw, "root")

    special_raw     = _as_list(raw.get("special_teachers") or [], "special_teachers")
    earliest_raw    = _as_dict(raw.get("earliest_period") or {}, "earliest_period")
    corrections_raw = _as_dict(raw.get("data_corrections") or {}, "data_corrections")

    rules = Rules(
        special_teachers = [str(t) for t in special_raw],
        earliest_period  = {
            str(t): _as_int(p, f"earliest_period[{t!r}]")
            for t, p in earliest_raw.items()
        },
        data_corrections = {str(k): str(v) for k, v in corrections_raw.items()},
        refresh_interval_seconds = _as_int(
            raw.get("refresh_interval_seconds", 30), "refresh_interval_seconds"
        ),
    )
    try:
        rules.validate()
    except ValueError as e:
        raise ConfigError(str(e)) from e
    return rules


def load_rules(path: Optional[str | Path] = None) -> Rules:
    """Load Rules from a JSON file, or the bundled defaults when path is None."""
    if path is None:
        raw = json.loads(read_bundled_text("rules.json"))
    else:
        with Path(path).open("r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    return rules_from_dict(raw)


def save_rules(rules: Rules, path: str | Path) -> None:
    """Serialise Rules to JSON, creating parent directories if needed."""
    rules.validate()
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(rules.to_dict(), f, ensure_ascii=False, indent=2, sort_keys=True)
