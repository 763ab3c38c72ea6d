"""ReportGenerator class for rendering a result set as text tables."""
from io import StringIO

from tabulate import tabulate

from .aggregator import ResultSet
from .spreadsheet import HEADERS

HIDDEN_TASK = "—"

class ReportGenerator:
    """Class for rendering a fetched result set."""

    def __init__(self, result_set: ResultSet, date_range_str: str, include_task: bool = True):
        """Initialize a ReportGenerator.

        Args:
            result_set: Aggregated records
            date_range_str: String representing the date range
            include_task: Whether to show task descriptions
        """
        self.result_set = result_set
        self.date_range_str = date_range_str
        self.include_task = include_task

    def generate_report(self) -> str:
        """Generate the entries table followed by the totals table.

        Returns:
            Report as a GitHub-flavoured Markdown string
        """
        output = StringIO()
        self._generate_entries_table(output)
        self._generate_totals_table(output)
        return output.getvalue()

    def _generate_entries_table(self, output: StringIO):
        rows = [record.to_row(self.include_task, blank=HIDDEN_TASK) for record in self.result_set.records]
        print(f"\n### Time Entries {self.date_range_str}:", file=output)
        print(tabulate(rows, headers=HEADERS, tablefmt="github"), file=output)

    def _generate_totals_table(self, output: StringIO):
        totals_table = [
            ["Records", self.result_set.count],
            ["ΣDuration", self.result_set.total_duration_label],
        ]
        malformed = len(self.result_set.malformed)
        if malformed:
            totals_table.append(["Ends before start", malformed])

        print(f"\n### Totals {self.date_range_str}:", file=output)
        print(tabulate(totals_table, headers=["Total", "Value"], tablefmt="github"), file=output)
        print(file=output)  # Extra newline
