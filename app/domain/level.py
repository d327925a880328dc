"""
Level system: experience curve, level-up engine and presentation lookups.

Required cumulative experience for level N (N > 1):

    N * 100 + (N - 1) * 50

  Level 1:    0 EXP
  Level 2:  250 EXP
  Level 3:  400 EXP
  Level 4:  550 EXP
  Level 5:  700 EXP
  ...

All functions are pure; persistence lives in app.application.levels.
"""
import math
from dataclasses import dataclass

# (min level, title): checked top-down
_LEVEL_TITLES = [
    (50, "전설의 지식인"),
    (40, "지식의 대가"),
    (30, "지혜로운 멘토"),
    (25, "경험 많은"),
    (20, "전문가"),
    (15, "숙련자"),
    (10, "열정적인"),
    (5,  "중급자"),
    (3,  "입문자"),
]
DEFAULT_LEVEL_TITLE = "새로운 멤버"

_LEVEL_COLORS = [
    (50, "#FFD700"),  # gold
    (40, "#C0C0C0"),  # silver
    (30, "#CD7F32"),  # bronze
    (20, "#8A2BE2"),
    (15, "#FF4500"),
    (10, "#32CD32"),
    (5,  "#1E90FF"),
]
DEFAULT_LEVEL_COLOR = "#808080"


@dataclass(frozen=True)
class LevelUpResult:
    """Outcome of a single experience addition."""
    new_level: int
    new_experience: int
    leveled_up: bool
    levels_gained: int
    message: str | None = None


def required_experience(level: int) -> int:
    """Cumulative experience needed to reach `level`."""
    if level <= 1:
        return 0
    return level * 100 + (level - 1) * 50


def experience_to_next_level(current_level: int, current_experience: int) -> int:
    return max(0, required_experience(current_level + 1) - current_experience)


def progress_percentage(current_level: int, current_experience: int) -> int:
    """
    Progress inside the current level, 0..100.

    Rounds half up (42.5 -> 43) and clamps to the 0..100 range.
    """
    floor_exp = required_experience(current_level)
    span = required_experience(current_level + 1) - floor_exp
    percent = math.floor((current_experience - floor_exp) / span * 100 + 0.5)
    return max(0, min(100, percent))


def add_experience(current_level: int, current_experience: int, delta: int) -> LevelUpResult:
    """
    Add experience and apply every level-up it unlocks.

    A single large reward can cross several thresholds; the loop keeps
    climbing until required(level) <= experience < required(level + 1).

    Args:
        current_level:      stored level (>= 1)
        current_experience: stored cumulative experience (>= 0)
        delta:              reward to add (>= 0)

    Returns:
        LevelUpResult with message set when at least one level was gained.
    """
    new_experience = current_experience + delta
    new_level = current_level
    levels_gained = 0

    while new_experience >= required_experience(new_level + 1):
        new_level += 1
        levels_gained += 1

    leveled_up = levels_gained > 0
    return LevelUpResult(
        new_level=new_level,
        new_experience=new_experience,
        leveled_up=leveled_up,
        levels_gained=levels_gained,
        message=level_up_message(new_level, levels_gained) if leveled_up else None,
    )


def level_title(level: int) -> str:
    """Return the rank title shown next to the user's level."""
    for threshold, title in _LEVEL_TITLES:
        if level >= threshold:
            return title
    return DEFAULT_LEVEL_TITLE


def level_color(level: int) -> str:
    for threshold, color in _LEVEL_COLORS:
        if level >= threshold:
            return color
    return DEFAULT_LEVEL_COLOR


def level_up_message(level: int, levels_gained: int) -> str:
    title = level_title(level)
    if levels_gained == 1:
        return f'🎉 레벨업! Level {level} 달성! "{title}" 칭호를 획득했습니다!'
    return f'🎉 대단해요! Level {level} 달성! "{title}" 칭호를 획득했습니다!'
