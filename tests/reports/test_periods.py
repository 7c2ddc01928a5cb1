from datetime import date

from src.halaqah_tracker.halaqah_tracker.core.enums import ReportCadence
from src.halaqah_tracker.halaqah_tracker.reports.periods import period_for


def test_daily_period_label():
    period = period_for(ReportCadence.DAILY, date(2024, 6, 3))

    assert period.label == "Senin, 3 Juni 2024"
    assert period.start == period.end == date(2024, 6, 3)


def test_weekly_period_runs_monday_to_sunday():
    period = period_for(ReportCadence.WEEKLY, date(2024, 6, 5))

    assert (period.start, period.end) == (date(2024, 6, 3), date(2024, 6, 9))
    assert period.label == "3 Jun - 9 Jun 2024"
    assert period.contains("2024-06-09")
    assert not period.contains("2024-06-10")


def test_monthly_period_covers_whole_month():
    period = period_for(ReportCadence.MONTHLY, date(2024, 2, 14))

    assert (period.start, period.end) == (date(2024, 2, 1), date(2024, 2, 29))
    assert period.label == "Februari 2024"
    assert period.month_key == "2024-02"


def test_monthly_period_in_december():
    period = period_for(ReportCadence.MONTHLY, date(2023, 12, 31))

    assert period.end == date(2023, 12, 31)
