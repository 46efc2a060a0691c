"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from datetime import datetime

from src.work_tracker.work_tracker.container import build_container
from src.work_tracker.work_tracker.storage.kv import MemoryKeyValueStore


def main():
    container = build_container(kv_store=MemoryKeyValueStore(), seed_sample_data=True)

    result = container.session_service.login("jane@company.com", "password123")
    user = result.user

    now = datetime.now().replace(hour=8, minute=45)
    container.timesheet_service.check_in(user.user_id, "08:45", now=now)
    entry = container.timesheet_service.check_out(user.user_id, "17:15", now=now)
    print(f"{user.name}: {entry.total_hours}h on {entry.work_date}")

    summary = container.timesheet_service.dashboard(user.user_id, now.date())
    print(f"Month {summary.month}: {summary.month_total}/{summary.required_hours}h ({summary.percentage:.1f}%)")


if __name__ == "__main__":
    main()
