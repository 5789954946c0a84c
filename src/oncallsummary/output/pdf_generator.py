"""PDF generation for on-call summaries.

This module creates a printable PDF showing:
- One row per engineer and layer with hours, shift and override counts
- A bar per row comparing normal-turn minutes to override minutes
- A footer listing how much data was left out of the totals
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from oncallsummary.domain.models import EngineerOverview, LayerSummary
from oncallsummary.domain.policies import minutes_to_hours
from oncallsummary.output.summary_reporter import NO_COVERAGE_LINE, SummaryReporter

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "shift": (0.4, 0.7, 0.4),  # Green
    "override": (0.8, 0.6, 0.2),  # Orange
    "row_alt": (0.95, 0.95, 0.95),  # Light gray
    "empty": (0.6, 0.6, 0.6),  # Gray text
}


class PDFGenerator:
    """Generates printable PDF on-call summaries.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(result.overviews, "oncall.pdf", title="ACDC")
    """

    def __init__(
        self,
        reporter: Optional[SummaryReporter] = None,
        page_width: float = 612,  # Letter portrait width (8.5")
        page_height: float = 792,  # Letter portrait height (11")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.reporter = reporter or SummaryReporter()
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        overviews: dict[str, EngineerOverview],
        output_path: Union[str, Path],
        title: str = "On-call Summary",
        subtitle: str = "",
        footer: str = "",
    ) -> None:
        """Generate the PDF summary and save to file.

        Args:
            overviews: Engineer -> accumulated coverage.
            output_path: Path to save the PDF.
            title: Page title.
            subtitle: Line under the title, e.g. the reporting window.
            footer: Note printed at the bottom of the last page.
        """
        try:
            from reportlab.lib.pagesizes import letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        c = canvas.Canvas(str(output_path), pagesize=letter)
        self._draw_pages(c, overviews, title, subtitle, footer)
        c.save()

    def generate_to_buffer(
        self,
        overviews: dict[str, EngineerOverview],
        title: str = "On-call Summary",
        subtitle: str = "",
        footer: str = "",
    ) -> BytesIO:
        """Generate the PDF summary and return it as a bytes buffer."""
        try:
            from reportlab.lib.pagesizes import letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=letter)
        self._draw_pages(c, overviews, title, subtitle, footer)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_pages(
        self,
        c,
        overviews: dict[str, EngineerOverview],
        title: str,
        subtitle: str,
        footer: str,
    ) -> None:
        """Draw summary rows, starting a new page whenever one fills up."""
        row_height = 18
        header_height = 70
        top = self.page_height - self.margin - header_height
        bottom = self.margin + 30

        # Scale bars against the largest layer total across everyone
        rows = []
        for overview in overviews.values():
            rows.append((overview, self.reporter.summarize(overview)))
        max_minutes = max(
            (s.total_minutes + s.override_minutes for _, summaries in rows for s in summaries),
            default=0,
        ) or 1

        page_num = 1
        self._draw_header(c, title, subtitle, page_num)
        y = top

        for overview, summaries in rows:
            needed = row_height * (1 + max(1, len(summaries)))
            if y - needed < bottom:
                c.showPage()
                page_num += 1
                self._draw_header(c, title, subtitle, page_num)
                y = top

            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica-Bold", 10)
            c.drawString(self.margin, y, overview.engineer[:60])
            y -= row_height

            if not overview.has_coverage and self.reporter.show_empty:
                c.setFillColorRGB(*COLORS["empty"])
                c.setFont("Helvetica-Oblique", 9)
                c.drawString(self.margin + 15, y, NO_COVERAGE_LINE)
                y -= row_height

            for index, summary in enumerate(summaries):
                if index % 2:
                    c.setFillColorRGB(*COLORS["row_alt"])
                    c.rect(self.margin, y - 4, self.page_width - 2 * self.margin,
                           row_height, fill=1, stroke=0)
                self._draw_layer_row(c, summary, y, max_minutes)
                y -= row_height

        if footer:
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 8)
            c.drawString(self.margin, self.margin, footer)

        c.showPage()

    def _draw_header(self, c, title: str, subtitle: str, page_num: int) -> None:
        """Draw page header with title, window and column labels."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(self.margin, self.page_height - self.margin - 20, title)

        if subtitle:
            c.setFont("Helvetica", 10)
            c.drawString(self.margin, self.page_height - self.margin - 35, subtitle)

        c.setFont("Helvetica-Bold", 8)
        label_y = self.page_height - self.margin - 55
        c.drawString(self.margin + 15, label_y, "Layer")
        c.drawString(self.margin + 180, label_y, "Time")
        c.drawString(self.margin + 250, label_y, "Shifts")
        c.drawString(self.margin + 300, label_y, "Overrides")
        c.drawString(self.margin + 360, label_y, "Shift vs override minutes")

        c.setFont("Helvetica", 8)
        c.drawRightString(
            self.page_width - self.margin,
            self.page_height - self.margin - 20,
            f"Page {page_num}",
        )

    def _draw_layer_row(self, c, summary: LayerSummary, y: float, max_minutes: int) -> None:
        """Draw a single layer's totals and its shift/override bar."""
        hours, minutes = minutes_to_hours(summary.total_minutes)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        c.drawString(self.margin + 15, y, summary.layer_name[:30])
        c.drawString(self.margin + 180, y, f"{hours} h {minutes} min")
        c.drawString(self.margin + 250, y, str(summary.shift_count))
        c.drawString(self.margin + 300, y, str(summary.override_count))

        bar_x = self.margin + 360
        bar_width = self.page_width - self.margin - bar_x
        shift_w = bar_width * summary.total_minutes / max_minutes
        override_w = bar_width * summary.override_minutes / max_minutes

        c.setFillColorRGB(*COLORS["shift"])
        c.rect(bar_x, y - 2, shift_w, 10, fill=1, stroke=0)
        c.setFillColorRGB(*COLORS["override"])
        c.rect(bar_x + shift_w, y - 2, override_w, 10, fill=1, stroke=0)
