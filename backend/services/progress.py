"""Goal progress math and the status sentence shown above the bar."""

from dataclasses import dataclass

GOAL_COUNT = 2_500_000


def progress_percentage(count: int, goal: int = GOAL_COUNT) -> int:
    """Whole percent of the goal reached, clamped to 100."""
    return min(100, count * 100 // goal)


@dataclass(frozen=True)
class Progress:
    count: int
    goal: int
    percentage: int

    @property
    def reached(self) -> bool:
        return self.percentage >= 100


def build_progress(count: int, goal: int = GOAL_COUNT) -> Progress:
    return Progress(count=count, goal=goal, percentage=progress_percentage(count, goal))


def format_count(value: int) -> str:
    return f"{value:,}"
