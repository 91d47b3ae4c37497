# tech_matcher/roster.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from tech_matcher.errors import InvalidInputError, RosterError
from tech_matcher.models import TechnicianProfile, parse_user_record

logger = logging.getLogger(__name__)


def _read_records(p: Path) -> List[Any]:
    try:
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise RosterError(f"Could not decode roster {p}: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("users", data.get("technicians"))
    if not isinstance(data, list):
        raise RosterError(f"Roster must be a list of user records (or {{'users': [...]}}): {p}")
    return data


def technicians_from_records(records: List[Any]) -> List[TechnicianProfile]:
    """
    Keep active, approved technicians out of a dump of user documents.
    Records that cannot be parsed at all are skipped with a warning.
    """
    out: List[TechnicianProfile] = []
    skipped = 0
    for i, record in enumerate(records):
        try:
            user = parse_user_record(record)
        except (ValidationError, InvalidInputError) as e:
            skipped += 1
            logger.warning("Skipping roster record #%d: %s", i, str(e).splitlines()[0])
            continue

        if not isinstance(user, TechnicianProfile):
            continue
        if not (user.is_active and user.is_approved):
            continue
        out.append(user)

    if skipped:
        logger.warning("Skipped %d unparseable roster records", skipped)
    return out


def load_roster(path: str | Path) -> List[TechnicianProfile]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Roster file not found: {p}")

    records = _read_records(p)
    technicians = technicians_from_records(records)
    logger.info("Loaded %d technicians from %s (%d records)", len(technicians), p, len(records))
    return technicians


def roster_summary(technicians: List[TechnicianProfile]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for tech in technicians:
        key = tech.availability_status.value
        summary[key] = summary.get(key, 0) + 1
    return summary
