import argparse
from pathlib import Path

from . import __version__
from .csrf import fetch_token
from .env import Settings, get_settings, load_env
from .pipeline import run_details, run_listing


def _settings_from_env() -> Settings:
    try:
        return get_settings()
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")


def cmd_token(args: argparse.Namespace) -> None:
    settings = _settings_from_env()
    token = fetch_token(settings.job_url, timeout=settings.timeout)
    if not token:
        raise SystemExit("Could not fetch token.")
    print(f"Token: {token}")


def cmd_listing(args: argparse.Namespace) -> None:
    settings = _settings_from_env()
    if args.output:
        settings.listing_path = Path(args.output)
    if args.company:
        settings.company = args.company

    count = run_listing(settings)
    print(f"Done. jobs={count} output={settings.listing_path}")


def cmd_details(args: argparse.Namespace) -> None:
    settings = _settings_from_env()
    if args.input:
        settings.listing_path = Path(args.input)
    if args.output:
        settings.details_path = Path(args.output)
    if args.column:
        settings.id_column = args.column
    if args.workers is not None:
        if args.workers < 0:
            raise SystemExit("--workers must be >= 0")
        settings.max_workers = args.workers or None
    if args.timeout is not None:
        settings.timeout = args.timeout

    if not settings.listing_path.exists():
        raise SystemExit(f"Input file not found: {settings.listing_path}")

    result = run_details(settings)
    print(
        f"Done. launched={result.launched} fetched={len(result.records)} "
        f"failed={result.failed} output={settings.details_path}"
    )


def main():
    # Load .env if present (VACANCYFETCH_* settings)
    load_env()
    parser = argparse.ArgumentParser(prog="vacancyfetch", description="Fetch vacancy listings and details to CSV")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    tok = subparsers.add_parser("token", help="Fetch and print the anti-forgery token")
    tok.set_defaults(func=cmd_token)

    lst = subparsers.add_parser("listing", help="Fetch the bulk vacancy listing and write it to CSV")
    lst.add_argument("--output", help="Listing CSV path (default: data/all_jobs.csv)")
    lst.add_argument("--company", help="Company filter sent to the portal (default: all)")
    lst.set_defaults(func=cmd_listing)

    det = subparsers.add_parser("details", help="Fetch details for every vacancy in a listing CSV")
    det.add_argument("--input", help="Listing CSV path (default: data/all_jobs.csv)")
    det.add_argument("--output", help="Details CSV path (default: data/details.csv)")
    det.add_argument("--column", help="Identifier column name (default: vacancy_id)")
    det.add_argument("--workers", type=int, help="Concurrent requests (default 16, 0 = one per vacancy)")
    det.add_argument("--timeout", type=float, help="Per-request timeout in seconds (default: none)")
    det.set_defaults(func=cmd_details)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
