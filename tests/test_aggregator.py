import sys
import os
import unittest
from datetime import datetime, timezone

# Add the parent directory to sys.path to import the clockixl package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from clockixl.reports.aggregator import ResultSet, aggregate
from clockixl.reports.time_entry import NormalizedRecord, RawInterval, normalize

def make_record(day: str, millis: int = 3600000, task: str = "Task") -> NormalizedRecord:
    return NormalizedRecord(day, "Project", task, millis, "09:00:00 AM", "10:00:00 AM")

class TestAggregate(unittest.TestCase):
    """Test sorting and totalling of records."""

    def test_sorts_by_date_descending(self):
        """Newest dates come first."""
        records = [make_record("2024-01-05"), make_record("2024-01-10"), make_record("2024-01-01")]
        result = aggregate(records)
        self.assertEqual([r.date for r in result.records], ["2024-01-10", "2024-01-05", "2024-01-01"])

    def test_same_date_keeps_input_order(self):
        """Records of the same day keep the order they arrived in."""
        records = [
            make_record("2024-01-05", task="first"),
            make_record("2024-01-06", task="other day"),
            make_record("2024-01-05", task="second"),
            make_record("2024-01-05", task="third"),
        ]
        result = aggregate(records)
        self.assertEqual([r.task for r in result.records], ["other day", "first", "second", "third"])

    def test_does_not_mutate_input(self):
        """The caller's list is left as it was."""
        records = [make_record("2024-01-01"), make_record("2024-01-02")]
        snapshot = list(records)
        aggregate(records)
        self.assertEqual(records, snapshot)

    def test_accepts_generators(self):
        result = aggregate(make_record(f"2024-01-0{i}") for i in range(1, 4))
        self.assertEqual(result.count, 3)

    def test_total_is_rounded_once(self):
        """Three 20-minute records add up to exactly one hour."""
        records = [make_record("2024-01-01", 20 * 60 * 1000) for _ in range(3)]
        result = aggregate(records)
        self.assertEqual([r.duration_label for r in result.records], ["0.33h"] * 3)
        self.assertEqual(result.total_millis, 3600000)
        self.assertEqual(result.total_duration_label, "1.00h")

    def test_total_rounds_ties_up(self):
        """Five 7.5-minute records total 0.625h, shown as 0.63h."""
        records = [make_record("2024-01-01", 450000) for _ in range(5)]
        self.assertEqual(aggregate(records).total_duration_label, "0.63h")

    def test_empty(self):
        result = aggregate([])
        self.assertTrue(result.is_empty)
        self.assertEqual(result.count, 0)
        self.assertEqual(result.total_duration_label, "0.00h")
        self.assertEqual(ResultSet().total_millis, 0)

    def test_malformed_records_are_counted_in_total(self):
        """Negative durations stay in the total and are listed as malformed."""
        records = [make_record("2024-01-01", 3600000), make_record("2024-01-02", -1800000)]
        result = aggregate(records)
        self.assertEqual(result.total_duration_label, "0.50h")
        self.assertEqual(len(result.malformed), 1)
        self.assertEqual(result.malformed[0].date, "2024-01-02")

    def test_end_to_end_normalize_and_aggregate(self):
        """A finished and a running interval are labelled, ordered and totalled."""
        utc = timezone.utc
        now = datetime(2024, 3, 2, 8, 15, tzinfo=utc)
        design = RawInterval(start=datetime(2024, 3, 1, 9, tzinfo=utc),
                             end=datetime(2024, 3, 1, 10, 30, tzinfo=utc), description="Design")
        running = RawInterval(start=datetime(2024, 3, 2, 8, tzinfo=utc))

        records = [normalize(design, now, utc), normalize(running, now, utc)]
        self.assertEqual([r.duration_label for r in records], ["1.50h", "0.25h"])

        result = aggregate(records)
        self.assertEqual([r.date for r in result.records], ["2024-03-02", "2024-03-01"])
        self.assertTrue(result.records[0].is_open)
        self.assertEqual(result.records[1].task, "Design")
        self.assertEqual(result.total_duration_label, "1.75h")

if __name__ == '__main__':
    unittest.main()
