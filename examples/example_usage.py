"""Example: drive the service layer directly (no Flask).

Prints today's sheet, checks a roll number in, and prints the refreshed sheet.
"""

import importlib
import sys

from config import get_settings_module

from src.attendance_ledger.attendance_ledger.common.datetime_utils import today_local
from src.attendance_ledger.attendance_ledger.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    today = today_local()

    sheet = container.attendance_service.day_sheet(today)
    print({row.student.roll_num: row.effective.label for row in sheet.rows})

    if len(sys.argv) > 1:
        result = container.attendance_service.check_in(sys.argv[1], today)
        print(f"Marked PRESENT: {result.student.name}")
        print({row.student.roll_num: row.effective.label for row in result.sheet.rows})


if __name__ == "__main__":
    main()
