"""Plain-text on-call summary.

One block per engineer, one line per layer, a blank line between
engineers:

    Engineer: Alice
    Primary: 1 h 0 min in 1 shift(s) and 0 override(s)
"""

import sys
from typing import Optional, TextIO

from oncallsummary.domain.models import EngineerOverview, LayerSummary
from oncallsummary.domain.policies import minutes_to_hours

NO_COVERAGE_LINE = "No coverage recorded"


class SummaryReporter:
    """Renders per-engineer, per-layer coverage totals.

    Hours and minutes count normal rotation turns only; override coverage
    contributes to the override count.

    Example:
        >>> reporter = SummaryReporter()
        >>> reporter.report(result.overviews)
    """

    def __init__(
        self,
        include_override_only_layers: bool = True,
        show_empty: bool = True,
    ):
        """Initialize reporter.

        Args:
            include_override_only_layers: Also report layers an engineer only
                ever covered as an override. If False, only layers with at
                least one normal turn are reported.
            show_empty: Print a "no coverage" line for engineers without
                any coverage instead of a bare header.
        """
        self.include_override_only_layers = include_override_only_layers
        self.show_empty = show_empty

    def summarize(self, overview: EngineerOverview) -> list[LayerSummary]:
        """Compute the reported totals for one engineer."""
        return [
            LayerSummary(
                engineer=overview.engineer,
                layer_name=layer_name,
                total_minutes=overview.shift_minutes(layer_name),
                shift_count=overview.shift_count(layer_name),
                override_count=overview.override_count(layer_name),
                override_minutes=overview.override_minutes(layer_name),
            )
            for layer_name in overview.layer_names(self.include_override_only_layers)
        ]

    def format_layer(self, summary: LayerSummary) -> str:
        hours, minutes = minutes_to_hours(summary.total_minutes)
        return (
            f"{summary.layer_name}: {hours} h {minutes} min in "
            f"{summary.shift_count} shift(s) and {summary.override_count} override(s)"
        )

    def render_lines(self, overviews: dict[str, EngineerOverview]) -> list[str]:
        """Render the summary as a list of lines."""
        lines = []

        for engineer, overview in overviews.items():
            lines.append(f"Engineer: {engineer}")
            summaries = self.summarize(overview)
            for summary in summaries:
                lines.append(self.format_layer(summary))
            if not overview.has_coverage and self.show_empty:
                lines.append(NO_COVERAGE_LINE)
            lines.append("")

        return lines

    def render(self, overviews: dict[str, EngineerOverview]) -> str:
        return "\n".join(self.render_lines(overviews))

    def report(
        self,
        overviews: dict[str, EngineerOverview],
        stream: Optional[TextIO] = None,
    ) -> None:
        """Write the summary to a stream (stdout by default)."""
        stream = stream or sys.stdout
        for line in self.render_lines(overviews):
            print(line, file=stream)
