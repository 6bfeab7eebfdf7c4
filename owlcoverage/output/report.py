"""Report generation for OWL Coverage.

This module renders an AnalysisResult as plain text, Markdown, JSON, or
an HTML dashboard. Reports only format the result; no analysis happens
here.
"""

import json
from datetime import datetime
from html import escape
from typing import Any

from owlcoverage.core.models import AnalysisResult, ClassRecord, LoadFailure

UNDEFINED_NOTE = "No formal definition, subclass relationships, or axioms defined"
NO_DEFINED_MESSAGE = "No defined classes found"
PERFECT_COVERAGE_TITLE = "Perfect Coverage!"
PERFECT_COVERAGE_MESSAGE = "All classes have formal definitions"
ERROR_TITLE = "Error loading ontology"


def plural(count: int, word: str) -> str:
    """Format a count with a naively pluralized noun."""
    return f"{count} {word}{'' if count == 1 else 's'}"


class ReportGenerator:
    """Generates coverage reports.

    Supports plain text, Markdown, HTML, and JSON output formats with
    configurable detail levels.
    """

    FLAG_LABELS = {
        "equivalence": "Has equivalent class",
        "disjointness": "Disjoint axioms",
    }

    def __init__(
        self,
        include_timestamps: bool = True,
        show_parents: bool = True,
        title: str = "Ontology Coverage Analysis",
    ) -> None:
        """Initialize the report generator.

        Args:
            include_timestamps: Whether to include a generation timestamp.
            show_parents: Whether to list named parents of defined classes.
            title: Report heading.
        """
        self.include_timestamps = include_timestamps
        self.show_parents = show_parents
        self.title = title

    def generate_summary(self, result: AnalysisResult) -> str:
        """Generate a one-line summary of the result.

        Args:
            result: The analysis result.

        Returns:
            One-line summary string.
        """
        noun = "class" if result.total_classes == 1 else "classes"
        return (
            f"{result.defined_count} of {result.total_classes} {noun} defined "
            f"({result.coverage_percent}% coverage, "
            f"{result.undefined_count} missing)"
        )

    def describe(self, record: ClassRecord) -> list[str]:
        """Short badges for a defined class (restrictions and axiom flags)."""
        badges = []
        if record.restriction_count > 0:
            badges.append(plural(record.restriction_count, "restriction"))
        if record.has_equivalence:
            badges.append(self.FLAG_LABELS["equivalence"])
        if record.has_disjointness:
            badges.append(self.FLAG_LABELS["disjointness"])
        return badges

    def generate_text(self, result: AnalysisResult) -> str:
        """Generate a plain-text report.

        Args:
            result: The analysis result.

        Returns:
            Plain-text report.
        """
        lines = [self.title, "=" * len(self.title), ""]
        if result.source:
            lines.append(f"Source: {result.source}")
        lines.append(f"Coverage: {result.coverage_percent}%")
        lines.append(f"Missing: {result.missing_percent}%")
        lines.append(
            f"{result.defined_count} of {result.total_classes} classes "
            "have formal definitions"
        )
        lines.append("")

        lines.append(f"Defined Classes ({result.defined_count})")
        lines.append("-" * 20)
        if not result.defined_classes:
            lines.append(f"  {NO_DEFINED_MESSAGE}")
        for record in result.defined_classes:
            badges = self.describe(record)
            line = f"  {record.name}"
            if badges:
                line += f"  [{', '.join(badges)}]"
            lines.append(line)
            if self.show_parents and record.parents:
                lines.append(f"      subclass of: {', '.join(record.parents)}")
        lines.append("")

        lines.append(f"Missing Definitions ({result.undefined_count})")
        lines.append("-" * 20)
        if not result.undefined_classes:
            lines.append(f"  {PERFECT_COVERAGE_TITLE} {PERFECT_COVERAGE_MESSAGE}")
        for record in result.undefined_classes:
            lines.append(f"  {record.name}: {UNDEFINED_NOTE}")

        if self.include_timestamps:
            lines.append("")
            lines.append(f"Generated: {datetime.now().isoformat(timespec='seconds')}")

        return "\n".join(lines) + "\n"

    def generate_markdown(self, result: AnalysisResult) -> str:
        """Generate a Markdown report.

        Args:
            result: The analysis result.

        Returns:
            Markdown-formatted report.
        """
        lines = [f"# {self.title}", ""]

        lines.append("## Coverage Overview")
        lines.append("")
        if result.source:
            lines.append(f"- **Source**: `{result.source}`")
        if result.ontology_iri:
            lines.append(f"- **Ontology IRI**: `{result.ontology_iri}`")
        lines.append(f"- **Total Classes**: {result.total_classes}")
        lines.append(
            f"- **Defined Classes**: {result.defined_count} "
            f"({result.coverage_percent}%)"
        )
        lines.append(
            f"- **Missing Definitions**: {result.undefined_count} "
            f"({result.missing_percent}%)"
        )
        if self.include_timestamps:
            lines.append(f"- **Generated**: {datetime.now().isoformat()}")
        lines.append("")

        lines.append("## Defined Classes")
        lines.append("")
        if not result.defined_classes:
            lines.append(f"*{NO_DEFINED_MESSAGE}*")
            lines.append("")
        for record in result.defined_classes:
            lines.append(f"### {record.name}")
            lines.append("")
            if self.show_parents and record.parents:
                parents = ", ".join(f"`{p}`" for p in record.parents)
                lines.append(f"- **Subclass of**: {parents}")
            for badge in self.describe(record):
                lines.append(f"- {badge}")
            lines.append("")

        lines.append("## Missing Definitions")
        lines.append("")
        if not result.undefined_classes:
            lines.append(f"**{PERFECT_COVERAGE_TITLE}** {PERFECT_COVERAGE_MESSAGE}")
            lines.append("")
        for record in result.undefined_classes:
            lines.append(f"- **{record.name}**: {UNDEFINED_NOTE}")
        if result.undefined_classes:
            lines.append("")

        return "\n".join(lines)

    def generate_json(self, result: AnalysisResult) -> str:
        """Generate a JSON report.

        Args:
            result: The analysis result.

        Returns:
            JSON-formatted report string.
        """
        data = self._result_to_dict(result)
        if self.include_timestamps:
            data["generated_at"] = datetime.now().isoformat()
        return json.dumps(data, indent=2)

    def generate_html(self, result: AnalysisResult) -> str:
        """Generate the HTML coverage dashboard.

        Args:
            result: The analysis result.

        Returns:
            HTML document string.
        """
        title = escape(self.title)
        parts = self._html_head(title)
        parts.extend(
            [
                f"<h1>{title}</h1>",
                self._html_source_line(result),
                "",
                "<div class='overview'>",
                "<div class='card defined'>",
                "<h3>Defined Classes "
                f"<span class='badge'>{result.coverage_percent}%</span></h3>",
                f"<div class='count'>{result.defined_count}</div>",
                "<div class='bar'><div class='fill defined' "
                f"style='width: {result.coverage_percent}%'></div></div>",
                f"<p>{result.defined_count} of {result.total_classes} classes "
                "have formal definitions</p>",
                "</div>",
                "<div class='card missing'>",
                "<h3>Missing Definitions "
                f"<span class='badge'>{result.missing_percent}%</span></h3>",
                f"<div class='count'>{result.undefined_count}</div>",
                "<div class='bar'><div class='fill missing' "
                f"style='width: {result.missing_percent}%'></div></div>",
                "<p>Classes that could benefit from additional axioms</p>",
                "</div>",
                "</div>",
                "",
                "<div class='lists'>",
                "<div class='list'>",
                "<h2>Defined Classes</h2>",
            ]
        )

        for record in result.defined_classes:
            parts.extend(self._format_defined_html(record))
        if not result.defined_classes:
            parts.append(f"<div class='empty'><p>{NO_DEFINED_MESSAGE}</p></div>")

        parts.extend(["</div>", "<div class='list'>", "<h2>Missing Definitions</h2>"])

        for record in result.undefined_classes:
            parts.extend(
                [
                    "<div class='entry undefined'>",
                    f"<h4>{escape(record.name)}</h4>",
                    f"<p>{UNDEFINED_NOTE}</p>",
                    "</div>",
                ]
            )
        if not result.undefined_classes:
            parts.extend(
                [
                    "<div class='empty perfect'>",
                    f"<p><strong>{PERFECT_COVERAGE_TITLE}</strong></p>",
                    f"<p>{PERFECT_COVERAGE_MESSAGE}</p>",
                    "</div>",
                ]
            )

        parts.extend(["</div>", "</div>", "</body>", "</html>"])
        return "\n".join(parts)

    def generate_failure_markdown(self, failure: LoadFailure) -> str:
        """Render the terminal error state for a malformed document."""
        lines = [f"# {self.title}", "", f"**{ERROR_TITLE}**", ""]
        if failure.source:
            lines.append(f"- **Source**: `{failure.source}`")
        lines.append(f"- **Reason**: {failure.message}")
        return "\n".join(lines) + "\n"

    def generate_failure_html(self, failure: LoadFailure) -> str:
        """Render the terminal error state as an HTML page."""
        title = escape(self.title)
        parts = self._html_head(title)
        parts.extend(
            [
                f"<h1>{title}</h1>",
                "<div class='error'>",
                f"<p><strong>{ERROR_TITLE}</strong></p>",
                f"<p>{escape(failure.message)}</p>",
                "</div>",
                "</body>",
                "</html>",
            ]
        )
        return "\n".join(parts)

    def _format_defined_html(self, record: ClassRecord) -> list[str]:
        lines = ["<div class='entry defined'>", f"<h4>{escape(record.name)}</h4>"]

        if self.show_parents and record.parents:
            tags = "".join(
                f"<span class='parent'>{escape(p)}</span>" for p in record.parents
            )
            lines.append(f"<p class='parents'><em>Subclass of:</em> {tags}</p>")

        badges = self.describe(record)
        if badges:
            spans = "".join(f"<span class='flag'>{escape(b)}</span>" for b in badges)
            lines.append(f"<p class='flags'>{spans}</p>")

        lines.append("</div>")
        return lines

    def _html_source_line(self, result: AnalysisResult) -> str:
        details = []
        if result.source:
            details.append(f"Source: <code>{escape(result.source)}</code>")
        if result.ontology_iri:
            details.append(f"Ontology: <code>{escape(result.ontology_iri)}</code>")
        if self.include_timestamps:
            details.append(f"Generated {datetime.now().isoformat(timespec='seconds')}")
        return f"<p class='meta'>{' | '.join(details)}</p>"

    def _html_head(self, title: str) -> list[str]:
        return [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            "<meta charset='utf-8'>",
            f"<title>{title}</title>",
            "<style>",
            self._get_html_styles(),
            "</style>",
            "</head>",
            "<body>",
        ]

    def _record_to_dict(self, record: ClassRecord) -> dict[str, Any]:
        return {
            "name": record.name,
            "is_defined": record.is_defined,
            "parents": list(record.parents),
            "restriction_count": record.restriction_count,
            "has_equivalence": record.has_equivalence,
            "has_disjointness": record.has_disjointness,
        }

    def _result_to_dict(self, result: AnalysisResult) -> dict[str, Any]:
        """Convert an AnalysisResult to a dictionary for JSON serialization.

        Args:
            result: The analysis result.

        Returns:
            Dictionary representation.
        """
        return {
            "source": result.source,
            "ontology_iri": result.ontology_iri,
            "total_classes": result.total_classes,
            "defined_count": result.defined_count,
            "undefined_count": result.undefined_count,
            "coverage_percent": result.coverage_percent,
            "missing_percent": result.missing_percent,
            "defined_classes": [
                self._record_to_dict(r) for r in result.defined_classes
            ],
            "undefined_classes": [
                self._record_to_dict(r) for r in result.undefined_classes
            ],
        }

    def _get_html_styles(self) -> str:
        """Get CSS styles for the HTML dashboard.

        Returns:
            CSS style string.
        """
        return """
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    max-width: 1100px;
    margin: 0 auto;
    padding: 20px;
    line-height: 1.5;
    background: #eef2ff;
}
h1, h2, h3, h4 { color: #111827; }
code {
    background: #f4f4f4;
    padding: 2px 6px;
    border-radius: 3px;
}
.meta { color: #4b5563; }
.overview, .lists {
    display: grid;
    grid-template-columns: 1fr 1fr;
    gap: 20px;
    margin: 20px 0;
}
.card, .list {
    background: #fff;
    border-radius: 12px;
    padding: 20px;
    box-shadow: 0 2px 6px rgba(0, 0, 0, 0.08);
}
.card.defined { border: 2px solid #bbf7d0; }
.card.missing { border: 2px solid #fed7aa; }
.count { font-size: 2.5em; font-weight: bold; }
.badge {
    float: right;
    padding: 2px 10px;
    border-radius: 999px;
    background: #f3f4f6;
}
.bar {
    width: 100%;
    height: 12px;
    background: #e5e7eb;
    border-radius: 999px;
}
.fill { height: 12px; border-radius: 999px; }
.fill.defined { background: #16a34a; }
.fill.missing { background: #ea580c; }
.list { max-height: 600px; overflow-y: auto; }
.entry {
    border: 2px solid #e5e7eb;
    border-radius: 8px;
    padding: 10px 15px;
    margin: 10px 0;
}
.entry.undefined { border-color: #fed7aa; background: #fff7ed; }
.parent, .flag {
    display: inline-block;
    margin: 2px 4px 2px 0;
    padding: 2px 8px;
    border-radius: 4px;
}
.parent { background: #dbeafe; color: #1e40af; }
.flag { background: #f3e8ff; color: #6b21a8; }
.empty { text-align: center; color: #6b7280; padding: 40px 0; }
.empty.perfect { color: #16a34a; }
.error { color: #dc2626; text-align: center; padding: 40px 0; }
"""
