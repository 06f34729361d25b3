from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, default_config_path, load_config
from ..logging.init import log_summary, setup_logging
from ..models.config_models import AppConfig
from ..services.cache import ForecastCache
from ..services.frame import records_to_frame
from ..services.orchestrator import ProcessingError, process_all
from ..services.summary import render_summary_line

"""Command line entry point for batch ingestion and data inspection.

Flow:
- Load .env (SURFCAST_CONFIG may point at another config file)
- Load and validate the YAML config
- Run the pipeline over every configured source
- Print the SUMMARY line and exit with the contract exit code

The pipeline itself stays a library function; this is a thin developer
tool around it.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_ROWS = 5


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="surfcast", description="Surf forecast CSV ingestion"
    )
    p.add_argument("--config", type=Path, default=None, help="Path to YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print resolved columns & first records per source, then exit",
    )
    return p.parse_args(argv)


def _inspect_data(cfg: AppConfig) -> int:
    result = process_all(cfg, cache=ForecastCache(cfg.cache_ttl_seconds))
    if not result.results:
        print("inspect: no sources")
        return EXIT_SUCCESS_ALL
    for source, loaded in result.results.items():
        print(f"SOURCE: {source}")
        if loaded.columns is not None:
            print(f"  columns={loaded.columns.as_dict()}")
        for diag in loaded.diagnostics:
            print(f"  diagnostic={diag.error_type}: {diag.message}")
        print(f"  records={len(loaded.records)} skipped={dict(loaded.skipped)}")
        if loaded.records:
            df = records_to_frame(loaded.records[:INSPECT_ROWS])
            print(df.drop(columns=["swells"]).to_string(index=False))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    config_path = args.config if args.config is not None else default_config_path()
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Loading forecasts from: {directory}")

    try:
        if args.inspect_data:
            return _inspect_data(cfg)
        result = process_all(cfg, cache=ForecastCache(cfg.cache_ttl_seconds))
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_sources = result.ok_sources + result.failed_sources
    summary_line = render_summary_line(total_sources, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_sources > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
