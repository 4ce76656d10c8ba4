from datetime import datetime, time

from src.candi_qr.candi_qr.attendance.factory import AttendanceStrategyFactory
from src.candi_qr.candi_qr.attendance.strategies.late_strategy import LateStrategy
from src.candi_qr.candi_qr.attendance.strategies.on_time_strategy import OnTimeStrategy
from src.candi_qr.candi_qr.attendance.strategies.requested_status_strategy import RequestedStatusStrategy
from src.candi_qr.candi_qr.core.enums import AttendanceStatus


def test_factory_checkin_on_time_within_grace():
    now = datetime(2025, 1, 6, 7, 15, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, start=time(7, 0), grace_minutes=15)

    assert isinstance(strategy, OnTimeStrategy)
    assert strategy.decide_checkin(now=now, start=time(7, 0), grace_minutes=15).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_after_grace():
    now = datetime(2025, 1, 6, 7, 15, 1)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, start=time(7, 0), grace_minutes=15)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=now, start=time(7, 0), grace_minutes=15).status == AttendanceStatus.LATE


def test_factory_without_start_time_is_on_time():
    strategy = AttendanceStrategyFactory().for_checkin(now=datetime(2025, 1, 6, 12, 0), start=None, grace_minutes=0)

    assert isinstance(strategy, OnTimeStrategy)


def test_factory_requested_status_wins_over_clock():
    now = datetime(2025, 1, 6, 9, 0)

    strategy = AttendanceStrategyFactory().for_checkin(
        now=now, start=time(7, 0), grace_minutes=15, requested=AttendanceStatus.SICK
    )
    decision = strategy.decide_checkin(now=now, start=time(7, 0), grace_minutes=15)

    assert isinstance(strategy, RequestedStatusStrategy)
    assert decision.status == AttendanceStatus.SICK
    assert decision.note == "Status dari pemindai: Sakit"


def test_factory_requested_present_still_checks_lateness():
    strategy = AttendanceStrategyFactory().for_checkin(
        now=datetime(2025, 1, 6, 9, 0), start=time(7, 0), grace_minutes=15, requested=AttendanceStatus.PRESENT
    )

    assert isinstance(strategy, LateStrategy)
