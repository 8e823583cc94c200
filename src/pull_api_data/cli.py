"""CLI entry-point for pull-api-data."""

import argparse
import datetime
import os
import pathlib
import sys

import dotenv

from pull_api_data.client import DEFAULT_TIMEOUT, DEFAULT_URL, ForecastClient, ForecastQuery
from pull_api_data.config_file import ConfigFile, ConfigFileNotFound, ConfigKeyNotFound

_ENV_PATH = pathlib.Path.cwd() / ".env"
_DEFAULT_CONF_DIR = "conf"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pull raw data from a forecast API described by conf/NAME.conf.",
    )
    parser.add_argument(
        "name", help="API name; reads NAME.conf from the config directory",
    )
    parser.add_argument(
        "base_date", nargs="?", metavar="YYYYMMDD",
        help="Forecast base date (default: today)",
    )
    parser.add_argument(
        "base_time", nargs="?", metavar="hhmm",
        help="Forecast base time (default: BASE_TIME from the config, else 0600)",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the parsed configuration and exit without a request",
    )
    return parser.parse_args(argv)


def _load_config(path: pathlib.Path) -> ConfigFile:
    try:
        return ConfigFile(path)
    except ConfigFileNotFound as exc:
        print(f"Unknown API name, no config at {exc.filename}", file=sys.stderr)
        sys.exit(1)


def _build_request(
    config: ConfigFile, args: argparse.Namespace,
) -> tuple[ForecastQuery, ForecastClient]:
    """Read the required KEY and NUMOFVAR plus optional settings from *config*."""
    try:
        query = ForecastQuery(
            service_key=config.read("KEY", str),
            base_date=args.base_date or datetime.date.today().strftime("%Y%m%d"),
            base_time=args.base_time or config.read("BASE_TIME", default="0600"),
            nx=config.read("NX", default=60),
            ny=config.read("NY", default=127),
            num_of_rows=config.read("NUMOFVAR", int),
            response_type=config.read("TYPE", default="xml"),
        )
        client = ForecastClient(
            config.read("URL", default=DEFAULT_URL),
            timeout=config.read("TIMEOUT", default=DEFAULT_TIMEOUT),
        )
    except ConfigKeyNotFound as exc:
        print(f"Missing required key '{exc.key}' in config.", file=sys.stderr)
        sys.exit(1)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    return query, client


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    dotenv.load_dotenv(_ENV_PATH)
    conf_dir = pathlib.Path(os.getenv("PULL_API_DATA_CONF_DIR", _DEFAULT_CONF_DIR))

    name = args.name.lstrip("-")
    if not name:
        print("API name is required.", file=sys.stderr)
        sys.exit(1)

    config = _load_config(conf_dir / f"{name}.conf")
    if args.show_config:
        print(config.dumps(), end="")
        return

    query, client = _build_request(config, args)
    print(client.fetch(query))
