"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; attendance rules and summaries live in services.
"""

import importlib
import logging
from datetime import date

from config import get_settings_module

from src.employee_hq.employee_hq.container import build_container

logger = logging.getLogger("example_usage")


def main():
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for profile in container.profile_service.list_profiles():
        summary = container.report_service.monthly_summary(profile.user_id, today=date.today())
        logger.info("%s %s: %s", profile.employee_id, profile.name, summary)


if __name__ == "__main__":
    main()
