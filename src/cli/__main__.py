from __future__ import annotations

import argparse
import sys
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import DEFAULT_CONFIG_PATH, ConfigError, LeadsConfig, load_config
from src.delimited.writer import write_export
from src.logging.init import enable_debug, get_logger, log_summary, setup_logging
from src.models.ingestion_result import IngestionResult
from src.models.query_state import ALL, SortKey
from src.services.display import render_facets, render_lead_line, render_page_status
from src.services.ingestion import LeadLoader
from src.services.query import LeadBrowser
from src.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (LEADS_SOURCE 等) and config/leads.yml
- Ingest the configured source (optionally retrying on failure)
- Apply search / filters / sort, print the requested page
- Optionally export the filtered view to CSV
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_INGESTION_FAILED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv.

    override=True により .env の値で既存環境変数を上書き。
    失敗時は警告を出すのみで続行。
    """
    if not path.exists():
        return
    try:
        load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        get_logger().warning(f"failed to load {path}: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Business leads catalog: ingest, browse and export leads")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--search", default="", help="Case-insensitive search term")
    p.add_argument("--industry", default=ALL, help="Exact primary industry filter")
    p.add_argument("--country", default=ALL, help="Exact country filter")
    p.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortKey.NAME.value,
        help="Sort order (default: name; original = ingestion order)",
    )
    p.add_argument("--page", type=int, default=1, help="Page number (clamped to available pages)")
    p.add_argument("--export", action="store_true", help="Write the filtered view as CSV")
    p.add_argument("--facets", action="store_true", help="Print available industries and countries")
    p.add_argument("--full-description", action="store_true", help="Do not truncate descriptions")
    p.add_argument("--inspect-data", action="store_true", help="Print header position & first rows then exit")
    p.add_argument("--retries", type=int, default=0, help="Re-run ingestion up to N times on failure")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _load_with_retries(cfg: LeadsConfig, retries: int) -> IngestionResult:
    logger = get_logger()
    loader = LeadLoader(cfg)
    result = loader.load()
    attempt = 0
    while not result.ok and attempt < retries:
        attempt += 1
        logger.info(f"retrying ingestion ({attempt}/{retries})")
        result = loader.load()
    return result


def _inspect_data(result: IngestionResult) -> int:
    print(f"SOURCE: {result.source}")
    print(f"  header_row={result.header_index} rows={result.raw_row_count} records={len(result.records)}")
    for lead in result.records[:3]:
        print("    sample=", asdict(lead))
    return EXIT_SUCCESS


def _browse(cfg: LeadsConfig, result: IngestionResult, args: argparse.Namespace) -> None:
    logger = get_logger()
    browser = LeadBrowser(result.records, page_size=cfg.page_size)
    browser.update(
        search=args.search,
        industry=args.industry,
        country=args.country,
        sort_key=SortKey(args.sort),
    )
    page = browser.go_to(args.page)
    for lead in page.items:
        print(render_lead_line(lead, full_description=args.full_description))
    print(render_page_status(page))

    if args.facets:
        for line in render_facets(browser.facets()):
            print(line)

    if args.export:
        view = browser.view
        path = write_export(view, Path(cfg.export_directory))
        logger.info(f"exported {len(view)} leads -> {path}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: 空リスト [] が与えられた場合 (テストで cli_main([]) 呼び出し) に
    #       sys.argv[1:] が混入しないよう None のときのみシステム引数を読む。
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    logger.info(f"Loading business leads from: {cfg.source}")
    result = _load_with_retries(cfg, max(args.retries, 0))

    if not result.ok:
        # 空状態: 取り込み失敗と「0 件」を区別して表示
        logger.warning("no business leads available (ingestion failed); run again or pass --retries N")
        log_summary(render_summary_line(result)[len("SUMMARY "):])
        return EXIT_INGESTION_FAILED

    if args.inspect_data:
        code = _inspect_data(result)
    else:
        _browse(cfg, result, args)
        code = EXIT_SUCCESS

    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
