"""Daily cron entry: send today's birthday and work-anniversary emails."""
from __future__ import annotations

import argparse
import importlib
import sys

from dotenv import load_dotenv

from hr_portal.common.datetime_utils import parse_iso_date
from hr_portal.config import get_settings_module
from hr_portal.container import build_container
from hr_portal.core.exceptions import DomainError
from hr_portal.main import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--date", help="Run as if today were this ISO date (YYYY-MM-DD)")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    try:
        today = parse_iso_date(args.date) if args.date else None
        report = container.notification_service.run(today)
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(
        f"OK: {report.message} birthdays={report.birthdays} anniversaries={report.anniversaries} "
        f"failed={report.failed} skipped={report.skipped}"
    )
    return 0 if report.failed == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
