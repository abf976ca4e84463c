"""CLI entrypoint for the hard-waste pickup date resolver."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import TextIO

from hardwaste.common.config_loader import apply_cli_overrides, load_run_config
from hardwaste.common.constants import EXIT_HARD_FAIL, EXIT_SUCCESS, GEOJSON_PATH
from hardwaste.common.errors import PipelineError
from hardwaste.common.http import HttpClient
from hardwaste.common.logging import build_logger, log_event, log_failure
from hardwaste.common.time_utils import elapsed_ms, generate_run_id
from hardwaste.discovery.regions import enumerate_regions
from hardwaste.discovery.streets import enumerate_search_queries
from hardwaste.harvest.runner import run_pickup_harvest
from hardwaste.pipeline.aggregate import aggregate_results
from hardwaste.pipeline.export import write_geojson
from hardwaste.pipeline.reports import build_run_summary, print_results


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", default=None)
    parser.add_argument("--overlay-config", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--max-streets-per-region", type=int, default=None)
    parser.add_argument("--geojson", nargs="?", const=GEOJSON_PATH, default=None)
    return parser.parse_args(argv)


def _stage_start(logger, run_id: str, stage: str) -> float:
    log_event(logger, "stage start", run_id=run_id, stage=stage, event="STAGE_START", status="ok")
    return time.monotonic()


def _stage_end(logger, run_id: str, stage: str, started_at: float, count: int) -> None:
    log_event(
        logger,
        "stage end",
        run_id=run_id,
        stage=stage,
        event="STAGE_END",
        status="ok",
        duration_ms=elapsed_ms(started_at),
        count=count,
    )


def _run_pipeline(cfg: dict, client: HttpClient, logger, run_id: str, out: TextIO) -> None:
    started = _stage_start(logger, run_id, "regions")
    regions = enumerate_regions(cfg["source"], http_client=client)
    _stage_end(logger, run_id, "regions", started, len(regions))

    started = _stage_start(logger, run_id, "streets")
    queries = enumerate_search_queries(
        regions,
        max_per_region=cfg["streets"]["max_per_region"],
        http_client=client,
        logger=logger,
    )
    _stage_end(logger, run_id, "streets", started, len(queries))

    started = _stage_start(logger, run_id, "harvest")
    harvest = run_pickup_harvest(queries, cfg["source"], http_client=client, logger=logger)
    _stage_end(logger, run_id, "harvest", started, len(harvest["records"]))

    started = _stage_start(logger, run_id, "aggregate")
    results = aggregate_results(harvest["records"])
    _stage_end(logger, run_id, "aggregate", started, len(results))

    if cfg["export"]["geojson_enabled"]:
        out_path = write_geojson(harvest["records"], Path(cfg["export"]["geojson_path"]))
        log_event(
            logger,
            f"geojson written to {out_path}",
            run_id=run_id,
            stage="export",
            event="EXPORT_WRITTEN",
            status="ok",
            count=len(harvest["records"]),
        )

    summary = build_run_summary(run_id, region_count=len(regions), harvest=harvest, results=results)
    log_event(logger, f"run complete: {summary}", run_id=run_id, event="RUN_END", status="ok", count=len(results))
    print_results(results, out)


def run_command(
    args: argparse.Namespace,
    *,
    http_client: HttpClient | None = None,
    out: TextIO | None = None,
) -> int:
    run_id = args.run_id or generate_run_id()
    logger = build_logger(run_id, log_dir=Path(args.log_dir) if args.log_dir else None, level=args.log_level)

    try:
        cfg = load_run_config(
            Path(args.config) if args.config else None,
            overlay_path=Path(args.overlay_config) if args.overlay_config else None,
        )
        cfg = apply_cli_overrides(
            cfg,
            max_streets_per_region=args.max_streets_per_region,
            geojson_path=args.geojson,
        )

        owns_client = http_client is None
        client = http_client or HttpClient.from_config(cfg["http"])
        try:
            _run_pipeline(cfg, client, logger, run_id, out or sys.stdout)
        finally:
            if owns_client:
                client.close()
    except PipelineError as exc:
        log_failure(
            logger,
            f"run failed: {exc}",
            run_id=run_id,
            stage=getattr(exc, "stage", None),
            subject=getattr(exc, "subject", None),
            event="RUN_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except Exception as exc:
        log_failure(
            logger,
            f"unexpected failure: {exc!r}",
            run_id=run_id,
            event="RUN_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        return EXIT_HARD_FAIL

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
