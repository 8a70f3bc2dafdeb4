"""Command line interface for nestedcsv."""
from __future__ import annotations

import argparse
import csv
import json
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from . import database, pipeline, reporting, sample
from .errors import PipelineError
from .observers import LoggingObserver
from .settings import (
    BATCH_SIZE_ENV,
    DB_PATH_ENV,
    DEFAULT_DB_PATH,
    resolve_batch_size,
)

DEFAULT_DB = Path(os.environ.get(DB_PATH_ENV, DEFAULT_DB_PATH))


def _ensure_db(db_path: Path) -> None:
    if not db_path.exists():
        database.init_db(db_path)


def _open_connection(db_path: Path):
    _ensure_db(db_path)
    conn = database.get_connection(db_path)
    database.run_migrations(conn)
    return conn


def _print_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> None:
    if not rows:
        print("(no data)")
        return
    widths = [len(header) for header in headers]
    for row in rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(f"{value}"))
    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator = "-+-".join("-" * widths[idx] for idx in range(len(headers)))
    print(header_line)
    print(separator)
    for row in rows:
        print(" | ".join(str(value).ljust(widths[idx]) for idx, value in enumerate(row)))


def _json_cell(value: object) -> str:
    return "" if value is None else json.dumps(value)


def init_db_command(args: argparse.Namespace) -> None:
    database.init_db(args.db)
    print(f"Database ready at {args.db}")


def load_data_command(args: argparse.Namespace) -> None:
    try:
        batch_size = resolve_batch_size(
            args.batch_size if args.batch_size is not None else os.environ.get(BATCH_SIZE_ENV)
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    conn = _open_connection(args.db)
    try:
        summary = pipeline.process_file(
            conn,
            args.path,
            batch_size=batch_size,
            observer=LoggingObserver(),
        )
    except PipelineError as exc:
        raise SystemExit(f"Error in processing pipeline: {exc}") from exc
    finally:
        conn.close()
    print(summary)
    print(reporting.format_distribution(summary.distribution))


def report_command(args: argparse.Namespace) -> None:
    conn = _open_connection(args.db)
    try:
        distribution = reporting.age_distribution(conn)
    finally:
        conn.close()

    if args.output:
        with Path(args.output).open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(["age_group", "percentage"])
            if distribution is not None:
                writer.writerows(distribution.percentages.items())
        print(f"Report written to {args.output}")
    else:
        print(reporting.format_distribution(distribution))


def users_command(args: argparse.Namespace) -> None:
    conn = _open_connection(args.db)
    try:
        users = database.fetch_users(conn, limit=args.limit)
    finally:
        conn.close()

    rows = [
        (
            user["id"],
            user["name"],
            user["age"],
            _json_cell(user["address"]),
            _json_cell(user["additional_info"]),
        )
        for user in users
    ]
    _print_table(["id", "name", "age", "address", "additional_info"], rows)


def generate_sample_command(args: argparse.Namespace) -> None:
    try:
        path = sample.generate_sample(args.path, args.rows, seed=args.seed)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    size_mb = path.stat().st_size / (1024 * 1024)
    print(f"Generated {args.rows} records in {path} ({size_mb:.2f} MB)")


def clear_command(args: argparse.Namespace) -> None:
    conn = _open_connection(args.db)
    try:
        deleted = database.delete_users(conn)
    finally:
        conn.close()
    print(f"Deleted {deleted} records from database")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load dotted-header CSV files into a users table")
    parser.add_argument("--db", type=Path, default=DEFAULT_DB, help="Location of the SQLite database")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Initialise the database")
    init_parser.set_defaults(func=init_db_command)

    load_parser = subparsers.add_parser("load-data", help="Parse, transform and load a CSV file")
    load_parser.add_argument("path", type=Path, help="Path to a CSV file")
    load_parser.add_argument(
        "--batch-size",
        type=int,
        help=f"Rows per insert statement (defaults to {BATCH_SIZE_ENV} or 1000)",
    )
    load_parser.set_defaults(func=load_data_command)

    report_parser = subparsers.add_parser("report", help="Print the age distribution of loaded users")
    report_parser.add_argument("--output", help="Optional path to write CSV output")
    report_parser.set_defaults(func=report_command)

    users_parser = subparsers.add_parser("users", help="List loaded users")
    users_parser.add_argument("--limit", type=int, default=100, help="Maximum rows to show")
    users_parser.set_defaults(func=users_command)

    clear_parser = subparsers.add_parser("clear", help="Delete every loaded user")
    clear_parser.set_defaults(func=clear_command)

    sample_parser = subparsers.add_parser("generate-sample", help="Write a large random sample CSV")
    sample_parser.add_argument("path", type=Path, help="Where to write the CSV file")
    sample_parser.add_argument(
        "--rows",
        type=int,
        default=sample.DEFAULT_ROWS,
        help=f"Number of data rows (default: {sample.DEFAULT_ROWS})",
    )
    sample_parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    sample_parser.set_defaults(func=generate_sample_command)

    return parser


def main(argv: Iterable[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
