"""
Placement Statistics - aggregate accepted applications for recruiters.

Output shape (per academic year):
{
    "2024-25": {
        "branch_wise": {"CSE": 3, "ECE": 1},
        "placements": [
            {"student_name": "...", "role": "SDE Intern",
             "posted_by": "Acme", "branch": "CSE", "academic_year": "2024-25"}
        ]
    }
}

Academic years start in June: an offer dated 2025-03 belongs to 2024-25.
"""

from datetime import datetime
from typing import Dict, Iterable, List

ACADEMIC_YEAR_START_MONTH = 6
PLACED_STATUSES = ["accepted"]
UNKNOWN = "Unknown"


def academic_year(when: datetime) -> str:
    """'2024-25' style label for the academic year containing `when`."""
    start = when.year if when.month >= ACADEMIC_YEAR_START_MONTH else when.year - 1
    return f"{start}-{(start + 1) % 100:02d}"


def compute_placement_stats(applications: Iterable[dict]) -> Dict[str, dict]:
    """
    Group placed applications by academic year, then branch.

    Applications without a placed status are ignored. Missing
    snapshot fields are reported as "Unknown".
    """
    stats: Dict[str, dict] = {}

    for app in applications:
        if (app.get("status") or "").lower() not in PLACED_STATUSES:
            continue

        applied_at = app.get("applied_at")
        year = academic_year(applied_at) if isinstance(applied_at, datetime) else UNKNOWN
        branch = (app.get("student_branch") or "").strip() or UNKNOWN

        bucket = stats.setdefault(year, {"branch_wise": {}, "placements": []})
        bucket["branch_wise"][branch] = bucket["branch_wise"].get(branch, 0) + 1
        bucket["placements"].append({
            "student_name": app.get("student_name") or UNKNOWN,
            "role": app.get("job_title") or UNKNOWN,
            "posted_by": app.get("company") or UNKNOWN,
            "branch": branch,
            "academic_year": year,
        })

    return stats


def total_placements(stats: Dict[str, dict]) -> int:
    return sum(len(bucket["placements"]) for bucket in stats.values())


def years_sorted(stats: Dict[str, dict]) -> List[str]:
    """Academic years, most recent first, "Unknown" last."""
    years = sorted((y for y in stats if y != UNKNOWN), reverse=True)
    if UNKNOWN in stats:
        years.append(UNKNOWN)
    return years
