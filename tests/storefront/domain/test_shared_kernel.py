"""Tests for the clock adapters and money helpers."""

from datetime import date

import pytest
from storefront.shared.clock import FixedClock, SystemClock, current_clock, use_clock
from storefront.shared.money import format_amount, round_half_up


class TestClock:
    def test_system_clock_reports_today(self):
        assert SystemClock().today() == date.today()

    def test_fixed_clock_is_fixed(self):
        clock = FixedClock(date(2026, 3, 10))
        assert clock.today() == date(2026, 3, 10)
        assert clock.today() == date(2026, 3, 10)

    def test_fixed_clock_advances(self):
        clock = FixedClock(date(2026, 3, 10))
        clock.advance(days=3)
        assert clock.today() == date(2026, 3, 13)

    def test_domain_clock_is_the_installed_one(self, clock):
        assert current_clock() is clock

    def test_use_clock_returns_the_replaced_clock(self, clock):
        other = FixedClock(date(2030, 1, 1))
        previous = use_clock(other)
        try:
            assert previous is clock
            assert current_clock().today() == date(2030, 1, 1)
        finally:
            use_clock(previous)


class TestRounding:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(40.0, 40.0), (10.5, 11.0), (10.4, 10.0), (2.5, 3.0), (0.49, 0.0)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_round_half_up_to_places(self):
        assert round_half_up(1.25, 1) == 1.3

    def test_format_amount(self):
        assert format_amount(400.0) == "400"
        assert format_amount(1.5, 1) == "1.5"
        assert format_amount(2, 1) == "2.0"
        assert format_amount(0.05, 1) == "0.1"
