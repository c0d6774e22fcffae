"""
Tests for scheduling/overlap.py

Tests half-open overlap detection against existing bookings.
"""

import unittest
from datetime import datetime

import pytz

from care_scheduling.care_scheduling.scheduling.models import ExistingBooking
from care_scheduling.care_scheduling.scheduling.overlap import (
	find_overlapping_bookings,
	has_conflict,
	intervals_overlap,
)


def utc(hour, minute=0):
	return pytz.UTC.localize(datetime(2026, 1, 5, hour, minute))


class TestOverlap(unittest.TestCase):
	"""Tests for overlap detection functions."""

	def setUp(self):
		self.booking = ExistingBooking(start_time=utc(10), end_time=utc(11), status="CONFIRMED")

	def test_no_overlap(self):
		"""Test disjoint intervals."""
		self.assertFalse(intervals_overlap(utc(8), utc(9), utc(10), utc(11)))
		self.assertFalse(has_conflict(utc(12), utc(13), [self.booking]))

	def test_adjacent_intervals_do_not_conflict(self):
		"""Test that back-to-back intervals (end == start) are allowed."""
		self.assertFalse(has_conflict(utc(9), utc(10), [self.booking]))
		self.assertFalse(has_conflict(utc(11), utc(12), [self.booking]))

	def test_partial_overlap(self):
		"""Test intervals that overlap on one side."""
		self.assertTrue(has_conflict(utc(9, 30), utc(10, 30), [self.booking]))
		self.assertTrue(has_conflict(utc(10, 30), utc(11, 30), [self.booking]))

	def test_containment(self):
		"""Test one interval fully containing the other."""
		self.assertTrue(has_conflict(utc(9), utc(12), [self.booking]))
		self.assertTrue(has_conflict(utc(10, 15), utc(10, 45), [self.booking]))

	def test_overlap_across_offsets(self):
		"""Test that comparison is by instant, not by wall clock."""
		lagos = pytz.timezone("Africa/Lagos")
		# 11:00 Lagos == 10:00 UTC
		slot_start = lagos.localize(datetime(2026, 1, 5, 11, 0))
		slot_end = lagos.localize(datetime(2026, 1, 5, 12, 0))
		self.assertTrue(has_conflict(slot_start, slot_end, [self.booking]))

	def test_find_overlapping_bookings(self):
		"""Test that only the overlapping bookings are returned."""
		other = ExistingBooking(start_time=utc(14), end_time=utc(15), status="PENDING")
		result = find_overlapping_bookings(utc(10, 30), utc(14, 30), [self.booking, other])
		self.assertEqual(result, [self.booking, other])

		result = find_overlapping_bookings(utc(11), utc(14), [self.booking, other])
		self.assertEqual(result, [])

	def test_no_bookings(self):
		self.assertFalse(has_conflict(utc(9), utc(10), []))


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
