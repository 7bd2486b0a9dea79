"""Results layer: metrics accumulation, patient export, summary report."""

from edsim.results.collector import ResultsCollector, patients_to_dataframe
from edsim.results.report import format_summary

__all__ = [
    "ResultsCollector",
    "patients_to_dataframe",
    "format_summary",
]
