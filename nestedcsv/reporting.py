"""Age distribution report over the loaded users."""
from __future__ import annotations

from dataclasses import dataclass
from sqlite3 import Connection
from typing import Dict, Iterable, Optional

from . import database

AGE_GROUPS = ("< 20", "20 to 40", "40 to 60", "> 60")

REPORT_WIDTH = 60
LABEL_WIDTH = 28


@dataclass(frozen=True)
class AgeDistribution:
    percentages: Dict[str, str]
    total: int


def age_group(age: int) -> str:
    """Return the report bucket for ``age``; 60 itself counts as ``> 60``."""
    if age < 20:
        return "< 20"
    if age < 40:
        return "20 to 40"
    if age < 60:
        return "40 to 60"
    return "> 60"


def distribution_from_ages(ages: Iterable[int]) -> Optional[AgeDistribution]:
    counts = {group: 0 for group in AGE_GROUPS}
    total = 0
    for age in ages:
        counts[age_group(age)] += 1
        total += 1
    if total == 0:
        return None
    percentages = {group: f"{counts[group] / total * 100:.2f}" for group in AGE_GROUPS}
    return AgeDistribution(percentages=percentages, total=total)


def age_distribution(conn: Connection) -> Optional[AgeDistribution]:
    """Return the percentage of users per age group, or ``None`` when empty."""
    return distribution_from_ages(database.fetch_ages(conn))


def format_distribution(distribution: Optional[AgeDistribution]) -> str:
    if distribution is None:
        return "No data available for age distribution"
    lines = [
        "=" * REPORT_WIDTH,
        "AGE DISTRIBUTION REPORT".center(REPORT_WIDTH).rstrip(),
        "=" * REPORT_WIDTH,
        "Age-Group".ljust(LABEL_WIDTH) + "% Distribution",
        "-" * REPORT_WIDTH,
    ]
    for group, percentage in distribution.percentages.items():
        lines.append(f"{group.ljust(LABEL_WIDTH)}{percentage}%")
    lines.append("-" * REPORT_WIDTH)
    lines.append(f"Total Users: {distribution.total}")
    lines.append("=" * REPORT_WIDTH)
    return "\n".join(lines)
