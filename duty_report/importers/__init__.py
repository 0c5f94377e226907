"""
Import providers package for the Duty Report dashboard.

Re-exports the provider interfaces and the concrete providers so downstream
code can import from `duty_report.importers` directly.
"""

from duty_report.importers.abstract import AbstractImportProvider, ImportProvider
from duty_report.importers.simulated import SimulatedFileImporter
from duty_report.importers.static import StaticImporter

__all__ = [
    # Abstracts
    "AbstractImportProvider",
    "ImportProvider",
    # Concrete providers
    "SimulatedFileImporter",
    "StaticImporter",
]
