from __future__ import annotations

from typing import Iterable, List

from ..models import Vacancy
from .index import ScheduleIndex


def extract_vacancies(index: ScheduleIndex, day: str,
                      absent_teachers: Iterable[str]) -> List[Vacancy]:
    """Every period an absent teacher leaves uncovered on `day`.

    Order is absentee input order, then period order. Earlier vacancies get
    first pick of the lightest-loaded substitutes, so this order is part of
    the planner's result.
    """
    vacancies: List[Vacancy] = []
    for teacher in absent_teachers:
        for period_index, commitment in enumerate(index.schedule(teacher, day)):
            if commitment is None:
                continue
            vacancies.append(Vacancy(
                class_name       = commitment.class_name,
                period_index     = period_index,
                subject          = commitment.subject,
                original_teacher = teacher,
            ))
    return vacancies
