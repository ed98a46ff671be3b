"""Example: drive the service layer directly (no Flask).

Controllers stay thin; check-in, classification and summaries live in services.
"""

import importlib
from datetime import timedelta

from dotenv import load_dotenv

from shift_compliance.common.datetime_utils import now_utc
from shift_compliance.config import get_settings_module
from shift_compliance.container import EngineOptions, build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, options=EngineOptions.from_settings(settings))

    today = now_utc().date()
    summary = container.report_service.summarize(1, today - timedelta(days=29), today)
    print(summary.as_dict())
    print(container.attendance_service.leave_balance(1))


if __name__ == "__main__":
    main()
