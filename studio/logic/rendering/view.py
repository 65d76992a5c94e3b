"""Plan -> JSON view model rendered by the coach page.

Every exercise either carries its image or is flagged ``pending`` so the page
can draw a placeholder.
"""
from typing import Any, Dict, Optional

from studio.domain.Plan import Plan


def plan_view(plan: Optional[Plan]) -> Dict[str, Any]:
    """Project a snapshot into the structure consumed by the page.

    Returns ``{'plan': None}`` when nothing has been generated yet, otherwise:
    {
      'plan': {
        'plan_id', 'title', 'introduction', 'finalMessage',
        'nutritionAdvice': {'protein', 'hydration', 'sleep'},
        'weeks': [ {'week', 'days': [ {'day', 'exercises': [ {..., 'image', 'pending'} ]} ]} ],
      },
      'progress': {'total': int, 'ready': int}
    }
    """
    if plan is None:
        return {'plan': None, 'progress': {'total': 0, 'ready': 0}}

    total = ready = 0
    weeks = []
    for week in plan.weeks:
        days = []
        for day in week.days:
            exercises = []
            for ex in day.exercises:
                item = ex.to_dict()
                item['pending'] = ex.pending
                exercises.append(item)
                total += 1
                ready += 0 if ex.pending else 1
            days.append({'day': day.day, 'exercises': exercises})
        weeks.append({'week': week.week, 'days': days})

    return {
        'plan': {
            'plan_id': plan.plan_id,
            'title': plan.title,
            'introduction': plan.introduction,
            'weeks': weeks,
            'nutritionAdvice': plan.nutrition.to_dict(),
            'finalMessage': plan.final_message,
        },
        'progress': {'total': total, 'ready': ready},
    }


__all__ = ["plan_view"]
