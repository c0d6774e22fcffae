"""
Tests for scheduling/scheduler.py

Tests range scheduling end to end: reference scenarios, ordering,
blackouts, overrides, DST and the range limit.
"""

import unittest
from datetime import date, datetime, time, timedelta

import pytz

from care_scheduling.care_scheduling.scheduling.exceptions import DateRangeTooLong, InvalidTimezone
from care_scheduling.care_scheduling.scheduling.models import (
	DateOverride,
	ExistingBooking,
	OutOfOfficePeriod,
	OverrideWindow,
	WeeklyWindow,
)
from care_scheduling.care_scheduling.scheduling.scheduler import compute_slots

LAGOS = pytz.timezone("Africa/Lagos")
MONDAY = date(2026, 1, 5)


def lagos(hour, minute=0, day=MONDAY):
	return LAGOS.localize(datetime.combine(day, time(hour, minute)))


def fixed_clock(instant):
	return lambda: instant


# Domingo anterior: todo el lunes está en el futuro
BEFORE = fixed_clock(lagos(12, 0, day=date(2026, 1, 4)))


class TestScheduler(unittest.TestCase):
	"""Tests for compute_slots."""

	def setUp(self):
		self.weekly = [WeeklyWindow(day_of_week=1, start_time="09:00", end_time="12:00")]

	def compute(self, **kwargs):
		params = {
			"start_date": MONDAY,
			"end_date": MONDAY,
			"weekly_schedule": self.weekly,
			"bookings": [],
			"duration_minutes": 60,
			"timezone": "Africa/Lagos",
			"clock": BEFORE,
		}
		params.update(kwargs)
		return compute_slots(**params)

	def starts(self, slots):
		return [(slot.start, slot.end) for slot in slots]

	def test_weekly_schedule(self):
		"""Monday 09:00-12:00, 60 minutes: three slots."""
		result = self.compute()
		self.assertEqual(
			self.starts(result),
			[(lagos(9), lagos(10)), (lagos(10), lagos(11)), (lagos(11), lagos(12))]
		)

	def test_booking_removes_slot(self):
		"""Booking 10:00-11:00 removes the middle slot."""
		booking = ExistingBooking(start_time=lagos(10), end_time=lagos(11), status="CONFIRMED")
		result = self.compute(bookings=[booking])
		self.assertEqual(self.starts(result), [(lagos(9), lagos(10)), (lagos(11), lagos(12))])

	def test_unavailable_override(self):
		override = DateOverride(override_date=MONDAY, is_unavailable=True)
		self.assertEqual(self.compute(date_overrides=[override]), [])

	def test_out_of_office_beats_custom_override(self):
		"""OOO wins over an override with custom windows for the same date."""
		override = DateOverride(
			override_date=MONDAY,
			windows=[OverrideWindow(start_time="14:00", end_time="16:00")]
		)
		ooo = OutOfOfficePeriod(start_date=MONDAY, end_date=MONDAY)
		self.assertEqual(self.compute(date_overrides=[override], ooo_periods=[ooo]), [])

	def test_now_mid_window(self):
		"""With now at 10:30 only 11:00-12:00 remains."""
		result = self.compute(clock=fixed_clock(lagos(10, 30)))
		self.assertEqual(self.starts(result), [(lagos(11), lagos(12))])

	def test_custom_override_never_merges(self):
		"""Custom 10:00-11:00 suppresses weekly 13:00-15:00 on that date."""
		self.weekly.append(WeeklyWindow(day_of_week=1, start_time="13:00", end_time="15:00"))
		override = DateOverride(
			override_date=MONDAY,
			windows=[OverrideWindow(start_time="10:00", end_time="11:00")]
		)
		result = self.compute(date_overrides=[override])
		self.assertEqual(self.starts(result), [(lagos(10), lagos(11))])

	def test_range_sorted_and_no_double_booking(self):
		"""Test global ordering and the no-overlap property over a week."""
		self.weekly = [
			WeeklyWindow(day_of_week=day, start_time="15:00", end_time="17:00")
			for day in range(7)
		] + [
			WeeklyWindow(day_of_week=day, start_time="08:00", end_time="10:00")
			for day in range(7)
		]
		bookings = [
			ExistingBooking(start_time=lagos(16, day=date(2026, 1, 6)), end_time=lagos(17, day=date(2026, 1, 6))),
			ExistingBooking(start_time=lagos(8, 30, day=date(2026, 1, 8)), end_time=lagos(9, 15, day=date(2026, 1, 8))),
		]
		result = self.compute(
			start_date=MONDAY,
			end_date=date(2026, 1, 11),
			bookings=bookings,
			duration_minutes=30
		)

		starts = [slot.start for slot in result]
		self.assertEqual(starts, sorted(starts))
		# 7 días x 8 slots, menos 2 + 2 por las citas
		self.assertEqual(len(result), 7 * 8 - 4)

		for slot in result:
			self.assertEqual(slot.end - slot.start, timedelta(minutes=30))
			for booking in bookings:
				self.assertFalse(slot.start < booking.end_time and slot.end > booking.start_time)

	def test_blackout_covers_every_date_in_period(self):
		self.weekly = [WeeklyWindow(day_of_week=day, start_time="09:00", end_time="10:00") for day in range(7)]
		ooo = OutOfOfficePeriod(start_date=date(2026, 1, 6), end_date=date(2026, 1, 8))

		result = self.compute(end_date=date(2026, 1, 10), ooo_periods=[ooo])

		local_dates = [slot.start.astimezone(LAGOS).date() for slot in result]
		self.assertEqual(local_dates, [MONDAY, date(2026, 1, 9), date(2026, 1, 10)])

	def test_empty_when_no_schedule(self):
		self.assertEqual(self.compute(weekly_schedule=[]), [])

	def test_inverted_range_is_empty(self):
		self.assertEqual(self.compute(start_date=date(2026, 1, 6), end_date=MONDAY), [])

	def test_string_dates_accepted(self):
		self.assertEqual(len(self.compute(start_date="2026-01-05", end_date="2026-01-05")), 3)

	def test_deterministic(self):
		"""Test that identical inputs give identical, identically ordered output."""
		bookings = [ExistingBooking(start_time=lagos(10), end_time=lagos(11))]
		self.assertEqual(self.compute(bookings=bookings), self.compute(bookings=bookings))

	def test_input_order_does_not_matter(self):
		weekly = [
			WeeklyWindow(day_of_week=1, start_time="14:00", end_time="15:00"),
			WeeklyWindow(day_of_week=1, start_time="09:00", end_time="10:00"),
		]
		forward = self.compute(weekly_schedule=weekly)
		backward = self.compute(weekly_schedule=list(reversed(weekly)))
		self.assertEqual(forward, backward)

	def test_overlapping_weekly_windows_emit_slot_once(self):
		self.weekly.append(WeeklyWindow(day_of_week=1, start_time="10:00", end_time="11:00"))
		result = self.compute()
		self.assertEqual(len(result), 3)

	def test_dst_range_iterates_calendar_days(self):
		"""Test that each local date is visited once across the DST change."""
		new_york = pytz.timezone("America/New_York")
		weekly = [WeeklyWindow(day_of_week=day, start_time="09:00", end_time="10:00") for day in range(7)]

		result = compute_slots(
			"2026-03-07", "2026-03-09", weekly, [], 60, "America/New_York",
			clock=fixed_clock(pytz.UTC.localize(datetime(2026, 1, 1)))
		)

		self.assertEqual(len(result), 3)
		self.assertEqual([slot.start.astimezone(new_york).hour for slot in result], [9, 9, 9])
		self.assertEqual(
			[slot.start.astimezone(pytz.UTC).hour for slot in result],
			[14, 13, 13]
		)

	def test_max_range_days(self):
		with self.assertRaises(DateRangeTooLong) as ctx:
			self.compute(end_date=MONDAY + timedelta(days=10), max_range_days=7)
		self.assertEqual(ctx.exception.days, 11)

		self.assertEqual(len(self.compute(end_date=MONDAY + timedelta(days=6), max_range_days=7)), 3)

	def test_invalid_timezone(self):
		with self.assertRaises(InvalidTimezone):
			self.compute(timezone="Nowhere/City")


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
