"""Debug text output for reconciliation analysis.

This module creates text-based debug output to audit:
- Every extracted coverage record and how it was classified
- Override share per layer
- Entries skipped during extraction, records dropped during aggregation
  and windows that could not be fetched
"""

from collections import defaultdict
from pathlib import Path
from typing import Union

from oncallsummary.coverage.reconciler import ReconciliationResult


class DebugGenerator:
    """Generates debug text output for a reconciliation run.

    Creates human-readable text files showing what went into the totals
    and, just as important, what did not.
    """

    def generate(
        self,
        result: ReconciliationResult,
        output_path: Union[str, Path],
    ) -> str:
        """Generate debug text output and save to file.

        Args:
            result: The reconciliation result to analyze.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(result)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(self, result: ReconciliationResult) -> str:
        """Generate debug text output and return as string."""
        return self._generate_content(result)

    def _generate_content(self, result: ReconciliationResult) -> str:
        """Generate the full debug content."""
        lines = []

        # Header
        lines.append("=" * 80)
        lines.append(f"ON-CALL RECONCILIATION DEBUG OUTPUT - schedule {result.schedule_id}")
        lines.append("=" * 80)
        lines.append("")

        for key, value in result.get_stats().items():
            lines.append(f"{key.replace('_', ' ').capitalize()}: {value}")
        lines.append(f"Complete: {'yes' if result.is_complete else 'NO'}")
        lines.append("")

        # Detailed per-record view
        lines.append("-" * 80)
        lines.append("EXTRACTED RECORDS (fold order)")
        lines.append("-" * 80)
        lines.append(f"{'#':>4} {'Engineer':<28} {'Layer':<20} {'Minutes':>8} {'Kind':>9}")
        lines.append("-" * 80)

        for i, record in enumerate(result.records, 1):
            kind = "override" if record.is_override else "shift"
            lines.append(
                f"{i:>4} {record.engineer[:28]:<28} {record.layer_name[:20]:<20} "
                f"{record.duration_minutes:>8} {kind:>9}"
            )

        lines.append("")

        # Override share per layer
        lines.append("-" * 80)
        lines.append("OVERRIDE SHARE BY LAYER")
        lines.append("-" * 80)

        shift_minutes = defaultdict(int)
        override_minutes = defaultdict(int)
        for record in result.records:
            if record.is_override:
                override_minutes[record.layer_name] += record.duration_minutes
            else:
                shift_minutes[record.layer_name] += record.duration_minutes

        for layer_name in sorted(set(shift_minutes) | set(override_minutes)):
            normal = shift_minutes[layer_name]
            override = override_minutes[layer_name]
            total = normal + override
            share = 100 * override / total if total else 0.0
            lines.append(
                f"{layer_name}: {normal} min normal, {override} min override "
                f"({share:.1f}% override)"
            )

        lines.append("")

        lines.append("-" * 80)
        lines.append(f"SKIPPED ENTRIES ({len(result.skipped)})")
        lines.append("-" * 80)
        for skipped in result.skipped:
            lines.append(f"  {skipped}")

        lines.append("")

        lines.append("-" * 80)
        lines.append(f"DROPPED RECORDS - UNKNOWN ENGINEER ({len(result.dropped)})")
        lines.append("-" * 80)
        for record in result.dropped:
            lines.append(
                f"  {record.engineer}: {record.duration_minutes} min on {record.layer_name}"
            )

        lines.append("")

        lines.append("-" * 80)
        lines.append(f"FAILED WINDOWS ({len(result.failed_windows)})")
        lines.append("-" * 80)
        for since, until in result.failed_windows:
            lines.append(f"  {since} -> {until}")

        lines.append("")
        lines.append("=" * 80)
        lines.append("END OF DEBUG OUTPUT")
        lines.append("=" * 80)

        return "\n".join(lines)
