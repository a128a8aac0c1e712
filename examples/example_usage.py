"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from field_tracker.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    view = container.attendance_service.status(1)
    print("checked in:", view.is_checked_in)
    for day in container.attendance_service.summary(1, 7):
        print(day.attendance_date, day.total_sessions, day.total_hours_worked)


if __name__ == "__main__":
    main()
