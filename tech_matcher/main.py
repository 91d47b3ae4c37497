# tech_matcher/main.py
from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from tech_matcher.config import Config, default_config, load_config
from tech_matcher.labels import explain, level_label
from tech_matcher.logger import configure_logging
from tech_matcher.models import JobComplexity, JobRequirements, Recommendation
from tech_matcher.ranking import recommend_assignments
from tech_matcher.roster import load_roster, roster_summary

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[1]

CSV_FIELDS = [
    "rank",
    "score",
    "technician_id",
    "display_name",
    "level",
    "availability",
    "current_workload",
    "capacity",
    "has_required_skills",
    "matching_skills",
    "missing_skills",
    "reasons",
]


def _resolve(path: str | Path) -> Path:
    p = Path(path)
    return p if p.is_absolute() else (REPO_ROOT / p).resolve()


def _to_rows(recs: List[Recommendation], requirements: JobRequirements, explain_rows: bool) -> List[Dict[str, Any]]:
    rows = []
    for rec in recs:
        row = rec.model_dump(mode="json")
        row["level"] = level_label(rec.level)
        row["reasons"] = explain(rec, requirements) if explain_rows else []
        rows.append(row)
    return rows


def _write_results(rows: List[Dict[str, Any]], out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)

    out_json = out_dir / "results.json"
    out_csv = out_dir / "results.csv"

    out_json.write_text(json.dumps(rows, indent=2), encoding="utf-8")

    with out_csv.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for r in rows:
            row = dict(r)
            row["matching_skills"] = ", ".join(r.get("matching_skills", []))
            row["missing_skills"] = ", ".join(r.get("missing_skills", []))
            row["reasons"] = "; ".join(r.get("reasons", []))
            writer.writerow({k: row.get(k, "") for k in CSV_FIELDS})

    logger.info("Wrote %d recommendations -> %s", len(rows), out_json)
    logger.info("Wrote CSV -> %s", out_csv)


def run(
    roster_path: str,
    required_skills: Sequence[str],
    service_area: str,
    complexity: str = "moderate",
    config_path: Optional[str] = None,
    top_n: Optional[int] = None,
    out_dir: Optional[str] = None,
) -> List[Recommendation]:
    cfg: Config = load_config(_resolve(config_path)) if config_path else default_config()
    configure_logging(cfg.logging.level, _resolve(cfg.logging.log_dir) if cfg.logging.log_dir else None)

    if config_path:
        logger.info("Using config file: %s", _resolve(config_path))

    technicians = load_roster(_resolve(roster_path))
    logger.info("Roster availability: %s", roster_summary(technicians))

    requirements = JobRequirements(
        required_skills=list(required_skills),
        service_area=service_area,
        complexity=complexity,
    )

    recs = recommend_assignments(
        technicians,
        requirements,
        max_results=top_n if top_n is not None else cfg.matching.max_results,
        policy=cfg.scoring,
        default_max_jobs_per_day=cfg.matching.default_max_jobs_per_day,
    )
    if not recs:
        logger.warning("No available technician for %s in %s", list(requirements.required_skills), requirements.service_area)

    rows = _to_rows(recs, requirements, cfg.output.explain)
    _write_results(rows, _resolve(out_dir or cfg.output.dir))
    return recs


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer (got {value})")
    return n


def cli(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Rank technicians for a job")
    parser.add_argument("--config", default=None, help="YAML config (defaults to built-in policy)")
    parser.add_argument("--roster", required=True, help="JSON/YAML dump of user records")
    parser.add_argument("--skill", action="append", default=[], help="Required skill tag (repeatable)")
    parser.add_argument("--area", required=True, help="Service area of the job")
    parser.add_argument("--complexity", default="moderate", choices=[c.value for c in JobComplexity])
    parser.add_argument("--top", type=_positive_int, default=None)
    parser.add_argument("--out", default=None, help="Output directory for results.json / results.csv")
    args = parser.parse_args(argv)

    run(
        roster_path=args.roster,
        required_skills=args.skill,
        service_area=args.area,
        complexity=args.complexity,
        config_path=args.config,
        top_n=args.top,
        out_dir=args.out,
    )


if __name__ == "__main__":
    cli()
