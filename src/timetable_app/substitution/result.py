from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models import UNASSIGNED, DayPlan, Vacancy


@dataclass(frozen=True)
class PlanRow:
    vacancy:    Vacancy
    substitute: Optional[str] = None

    @property
    def display_substitute(self) -> str:
        return self.substitute or UNASSIGNED


@dataclass
class PlanResult:
    status:   str                          # OK/PARTIAL/REJECTED
    day:      str
    plan:     DayPlan       = field(default_factory=DayPlan)
    rows:     List[PlanRow] = field(default_factory=list)
    warnings: List[str]     = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != "REJECTED"

    def unassigned(self) -> List[PlanRow]:
        return [r for r in self.rows if r.substitute is None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status":   self.status,
            "day":      self.day,
            "plan":     self.plan.to_dict(),
            "rows": [
                {
                    "period_index":     r.vacancy.period_index,
                    "class_name":       r.vacancy.class_name,
                    "subject":          r.vacancy.subject,
                    "original_teacher": r.vacancy.original_teacher,
                    "substitute":       r.substitute,
                }
                for r in self.rows
            ],
            "warnings": list(self.warnings),
        }
