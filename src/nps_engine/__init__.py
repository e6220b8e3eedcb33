"""
Note-density (NPS) analysis for rhythm-game charts.

Contains the onset window-count primitive, the average / block / frequency
density metrics, a MIDI onset reader and a small reporting CLI.
"""

from .density import (
    DensitySample,
    calculate_avg_nps,
    calculate_by_frequency,
    calculate_distribution,
)

__all__ = [
    "DensitySample",
    "calculate_avg_nps",
    "calculate_by_frequency",
    "calculate_distribution",
]
