"""Tests for PDF and debug output."""

import pytest

from conftest import SINCE, UNTIL, entry, narrow_view
from oncallsummary.coverage.reconciler import CoverageReconciler
from oncallsummary.domain.models import EngineerOverview
from oncallsummary.output.debug_generator import DebugGenerator
from oncallsummary.output.pdf_generator import PDFGenerator
from oncallsummary.output.summary_reporter import NO_COVERAGE_LINE, SummaryReporter


@pytest.fixture
def result(two_day_source):
    return CoverageReconciler(two_day_source).reconcile("ACDC", SINCE, UNTIL)


class RecordingCanvas:
    """Stands in for a reportlab canvas and keeps every drawn string."""

    def __init__(self):
        self.strings = []

    def drawString(self, x, y, text):
        self.strings.append(text)

    def __getattr__(self, name):
        return lambda *args, **kwargs: None


class TestPDFGenerator:
    """Tests for PDFGenerator."""

    def test_generate_to_buffer(self, result):
        buffer = PDFGenerator().generate_to_buffer(
            result.overviews, subtitle=f"{SINCE} to {UNTIL}", footer="5 records"
        )
        assert buffer.read(5) == b"%PDF-"

    def test_generate_to_file(self, result, tmp_path):
        path = tmp_path / "oncall.pdf"
        PDFGenerator().generate(result.overviews, path)

        assert path.read_bytes().startswith(b"%PDF-")

    def test_many_engineers_paginate(self, tmp_path):
        overviews = {}
        for i in range(80):
            name = f"Engineer {i}"
            overviews[name] = EngineerOverview(
                engineer=name, shifts={"Primary": [60 * i]}, overrides={"Primary": [15]}
            )
        path = tmp_path / "big.pdf"
        PDFGenerator().generate(overviews, path)

        assert path.stat().st_size > 0

    def test_empty_summary(self):
        buffer = PDFGenerator().generate_to_buffer({})
        assert buffer.read(5) == b"%PDF-"

    def test_no_coverage_line_shown_by_default(self, result):
        canvas = RecordingCanvas()
        PDFGenerator()._draw_pages(canvas, result.overviews, "title", "", "")

        assert "Dave" in canvas.strings
        assert NO_COVERAGE_LINE in canvas.strings

    def test_hide_empty_omits_no_coverage_line(self, result):
        """Hiding empty engineers in the text summary hides them in the PDF too."""
        canvas = RecordingCanvas()
        generator = PDFGenerator(reporter=SummaryReporter(show_empty=False))
        generator._draw_pages(canvas, result.overviews, "title", "", "")

        assert "Dave" in canvas.strings
        assert NO_COVERAGE_LINE not in canvas.strings


class TestDebugGenerator:
    """Tests for DebugGenerator."""

    def test_lists_records_and_shares(self, result):
        content = DebugGenerator().generate_to_string(result)

        assert "schedule PSCHED1" in content
        assert "Records: 5" in content
        assert "Complete: yes" in content
        assert "Primary: 1440 min normal, 1440 min override (50.0% override)" in content
        assert "Secondary: 2160 min normal, 0 min override (0.0% override)" in content

    def test_lists_skips_and_failures(self, two_day_source):
        day1 = ("2018-06-01T00:00:00+00:00", "2018-06-02T00:00:00+00:00")
        two_day_source.views[day1] = narrow_view("Primary", entry("Alice", "bad", "worse"))
        del two_day_source.views[("2018-06-02T00:00:00+00:00", "2018-06-03T00:00:00+00:00")]
        two_day_source.engineers.remove("Bob")
        result = CoverageReconciler(two_day_source).reconcile("ACDC", SINCE, UNTIL)

        content = DebugGenerator().generate_to_string(result)

        assert "Complete: NO" in content
        assert "SKIPPED ENTRIES (1)" in content
        assert "[invalid_timestamp] Primary / Alice" in content
        assert "DROPPED RECORDS - UNKNOWN ENGINEER (1)" in content
        assert "Bob: 2160 min on Secondary" in content
        assert "FAILED WINDOWS (1)" in content

    def test_generate_writes_file(self, result, tmp_path):
        path = tmp_path / "debug.txt"
        content = DebugGenerator().generate(result, path)

        assert path.read_text() == content
