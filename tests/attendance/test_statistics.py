from src.smart_attendance.smart_attendance.attendance.statistics import AttendanceStats, attendance_percentage
from src.smart_attendance.smart_attendance.core.enums import AttendanceStatus


def test_percentage_is_zero_without_marks():
    assert attendance_percentage(0, 0) == 0.0
    assert AttendanceStats().percentage == 0.0


def test_percentage_rounds_to_one_decimal():
    assert attendance_percentage(2, 3) == 66.7
    assert attendance_percentage(1, 3) == 33.3
    assert attendance_percentage(5, 5) == 100.0


def test_stats_from_statuses():
    stats = AttendanceStats.from_statuses(
        [AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.PRESENT, AttendanceStatus.ABSENT]
    )

    assert stats.to_dict() == {"total": 4, "present": 2, "absent": 1, "late": 1, "percentage": 50.0}
