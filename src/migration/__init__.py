"""
Migration of extracted products to PrestaShop.

Modules:
    orchestrator - Per-product pipeline under a bounded worker pool
    report - Outcome aggregation and JSON report
"""

from .orchestrator import MigrationOrchestrator, SharedOptionGroup
from .report import MigrationReport, write_report

__all__ = [
    'MigrationOrchestrator',
    'SharedOptionGroup',
    'MigrationReport',
    'write_report',
]
