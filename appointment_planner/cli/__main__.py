from __future__ import annotations

import argparse
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from ..config.candidate_loader import load_candidate
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, setup_logging
from ..services.date_normalizer import parse_filter_date
from ..services.feasibility import evaluate
from ..services.orchestrator import (
    ProcessingError,
    build_dataset,
    load_sources,
    local_today,
    write_dataset,
)
from ..services.summary import render_summary_line
from ..sheets.reader import SourceUnavailableError

"""CLI entrypoint.

Flow:
- Load .env (overrides the process environment) and config/planner.yml
- Load the schedule / contact / settings sources
- Build the round registry and calendar feed, write data.json
- Optionally evaluate a candidate file against the registry
- Print the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_INFEASIBLE = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv.

    override=True: .env 값이 기존 환경 변수보다 우선 (스프레드시트 ID, FILTER_DATE).
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _iso_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {text}") from e


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Appointment schedule planner")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config YAML path")
    p.add_argument("--filter-date", default=None, help="Only rounds/events on this day (env: FILTER_DATE)")
    p.add_argument("--output", type=Path, default=None, help="Override output_path")
    p.add_argument("--candidate", type=Path, default=None, help="Candidate YAML to evaluate")
    p.add_argument("--today", type=_iso_date, default=None, help="Reference date (YYYY-MM-DD)")
    p.add_argument("--inspect-data", action="store_true", help="Print the first rows of every source then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(cfg) -> int:
    schedule, contacts, settings = load_sources(cfg)
    for spec, rows in zip((cfg.schedule_source, cfg.contacts_source, cfg.settings_source), (schedule, contacts, settings)):
        if spec is None:
            continue
        print(f"SOURCE: {spec.name} ({spec.label}) rows={len(rows)}")
        for r in rows[:3]:
            # Timestamp / date 는 isoformat 으로 표시
            print("    ", [(v.isoformat() if hasattr(v, "isoformat") else v) for v in r])
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # None 일 때만 sys.argv 를 읽는다 (테스트에서 main([]) 호출)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    today = args.today or local_today(cfg)

    if args.inspect_data:
        try:
            return _inspect_data(cfg)
        except SourceUnavailableError as e:
            logger.error(f"source: {e}")
            return EXIT_FATAL

    candidate = None
    if args.candidate is not None:
        try:
            candidate = load_candidate(args.candidate)
        except ConfigError as e:
            logger.error(f"candidate: {e}")
            return EXIT_FATAL

    filter_text = args.filter_date or os.getenv("FILTER_DATE")
    filter_date = parse_filter_date(filter_text, today=today)

    try:
        result = build_dataset(cfg, filter_date=filter_date, today=today)
    except SourceUnavailableError as e:
        logger.error(f"source: {e}")
        return EXIT_FATAL

    output_path = args.output or Path(cfg.output_path)
    try:
        write_dataset(result.dataset, output_path)
    except ProcessingError as e:
        logger.error(f"output: {e}")
        return EXIT_FATAL
    logger.info(f"wrote {output_path}")

    exit_code = EXIT_SUCCESS
    if candidate is not None:
        feasibility = evaluate(candidate, result.dataset.schedules, today=today)
        for line in feasibility.explanation_lines:
            print(line)
        if not feasibility.is_possible:
            exit_code = EXIT_INFEASIBLE

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix
    log_summary(summary_line[len("SUMMARY "):])
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
