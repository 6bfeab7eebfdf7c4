"""Output generation for OWL Coverage.

This module provides report formatting and Turtle export.
"""

from owlcoverage.output.report import ReportGenerator
from owlcoverage.output.turtle import TurtleExporter

__all__ = [
    "ReportGenerator",
    "TurtleExporter",
]
