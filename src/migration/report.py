"""
Migration Report

Aggregates per-product outcomes into the final summary.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from ..models import MigrationOutcome

logger = logging.getLogger(__name__)


@dataclass
class MigrationReport:
    """Outcomes of a migration run, in product submission order."""
    outcomes: List[MigrationOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[MigrationOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[MigrationOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def summary_lines(self) -> List[str]:
        """Human-readable summary: counts, then one line per failed product."""
        lines = [f"Done. OK={len(self.succeeded)} / KO={len(self.failed)}"]
        for outcome in self.failed:
            lines.append(f"  FAILED {outcome.sku}: {outcome.error}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": datetime.now().isoformat(),
            "total": len(self.outcomes),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "products": [
                {
                    "sku": o.sku,
                    "status": o.status.value,
                    "stage": o.stage.value,
                    "error": o.error,
                    "product_id": o.product_id,
                    "images_attempted": o.images_attempted,
                    "images_succeeded": o.images_succeeded,
                    "combination_ids": [c.id for c in o.combinations],
                    "warnings": o.warnings,
                }
                for o in self.outcomes
            ],
        }


def write_report(report: MigrationReport, path: Union[str, Path]) -> None:
    """Write the report as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Report written to %s", path)
