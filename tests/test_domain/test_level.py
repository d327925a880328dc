"""
Tests for the experience curve and level-up engine
"""
import pytest

from app.domain.level import (
    DEFAULT_LEVEL_COLOR,
    DEFAULT_LEVEL_TITLE,
    add_experience,
    experience_to_next_level,
    level_color,
    level_title,
    level_up_message,
    progress_percentage,
    required_experience,
)


# ---------------------------------------------------------------------------
# required_experience
# ---------------------------------------------------------------------------

class TestRequiredExperience:
    def test_level_1_needs_nothing(self):
        assert required_experience(1) == 0

    def test_zero_and_negative_levels_need_nothing(self):
        assert required_experience(0) == 0
        assert required_experience(-3) == 0

    @pytest.mark.parametrize("level,expected", [
        (2, 250),
        (3, 400),
        (4, 550),
        (5, 700),
        (8, 1150),
        (10, 1450),
    ])
    def test_curve_values(self, level, expected):
        assert required_experience(level) == expected

    def test_strictly_increasing_from_level_1(self):
        values = [required_experience(n) for n in range(1, 60)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_step_is_150_after_level_2(self):
        for n in range(2, 30):
            assert required_experience(n + 1) - required_experience(n) == 150


# ---------------------------------------------------------------------------
# experience_to_next_level / progress_percentage
# ---------------------------------------------------------------------------

class TestProgress:
    def test_to_next_from_fresh_user(self):
        assert experience_to_next_level(1, 0) == 250

    def test_to_next_never_negative(self):
        # stored state ahead of its level (should not happen, but must not go < 0)
        assert experience_to_next_level(1, 9999) == 0

    def test_progress_at_level_floor_is_zero(self):
        assert progress_percentage(2, 250) == 0

    def test_progress_halfway_level_1(self):
        assert progress_percentage(1, 125) == 50

    def test_progress_halfway_level_2(self):
        assert progress_percentage(2, 325) == 50

    def test_progress_rounds_to_nearest(self):
        # 1/250 = 0.4% -> 0, 2/250 = 0.8% -> 1
        assert progress_percentage(1, 1) == 0
        assert progress_percentage(1, 2) == 1

    def test_progress_clamped(self):
        assert progress_percentage(1, 5000) == 100
        assert progress_percentage(3, 0) == 0


# ---------------------------------------------------------------------------
# add_experience
# ---------------------------------------------------------------------------

class TestAddExperience:
    def test_small_gain_no_level_up(self):
        result = add_experience(1, 0, 20)
        assert result.new_level == 1
        assert result.new_experience == 20
        assert result.leveled_up is False
        assert result.levels_gained == 0
        assert result.message is None

    def test_exact_threshold_levels_up(self):
        result = add_experience(1, 230, 20)
        assert result.new_level == 2
        assert result.new_experience == 250
        assert result.leveled_up is True
        assert result.levels_gained == 1

    def test_one_below_threshold_stays(self):
        result = add_experience(1, 229, 20)
        assert result.new_level == 1
        assert result.leveled_up is False

    def test_single_threshold_crossing_level_4_to_5(self):
        below = required_experience(5) - 1
        result = add_experience(4, below, 30)
        assert result.leveled_up is True
        assert result.levels_gained == 1
        assert result.new_level == 5

    def test_large_gain_crosses_several_levels(self):
        result = add_experience(1, 0, 1200)
        # required(8) = 1150 <= 1200 < required(9) = 1300
        assert result.new_level == 8
        assert result.levels_gained == 7
        assert result.new_experience == 1200
        assert result.message.startswith("🎉 대단해요!")

    def test_zero_delta_is_noop(self):
        result = add_experience(3, 410, 0)
        assert result.new_level == 3
        assert result.new_experience == 410
        assert result.leveled_up is False
        assert result.levels_gained == 0
        assert result.message is None

    def test_result_level_is_consistent_with_curve(self):
        for start_exp in (0, 100, 249, 250, 1000):
            for delta in (0, 1, 20, 30, 151, 999):
                start_level = 1
                while start_exp >= required_experience(start_level + 1):
                    start_level += 1
                r = add_experience(start_level, start_exp, delta)
                assert required_experience(r.new_level) <= r.new_experience
                assert r.new_experience < required_experience(r.new_level + 1)
                assert r.new_level >= start_level
                assert r.levels_gained == r.new_level - start_level

    def test_result_is_frozen(self):
        result = add_experience(1, 0, 10)
        with pytest.raises(AttributeError):
            result.new_level = 99


# ---------------------------------------------------------------------------
# Titles, colors, messages
# ---------------------------------------------------------------------------

class TestPresentation:
    @pytest.mark.parametrize("level,title", [
        (1, DEFAULT_LEVEL_TITLE),
        (2, DEFAULT_LEVEL_TITLE),
        (3, "입문자"),
        (5, "중급자"),
        (10, "열정적인"),
        (15, "숙련자"),
        (20, "전문가"),
        (25, "경험 많은"),
        (30, "지혜로운 멘토"),
        (40, "지식의 대가"),
        (50, "전설의 지식인"),
        (99, "전설의 지식인"),
    ])
    def test_level_title(self, level, title):
        assert level_title(level) == title

    @pytest.mark.parametrize("level,color", [
        (1, DEFAULT_LEVEL_COLOR),
        (4, DEFAULT_LEVEL_COLOR),
        (5, "#1E90FF"),
        (10, "#32CD32"),
        (50, "#FFD700"),
    ])
    def test_level_color(self, level, color):
        assert level_color(level) == color

    def test_single_level_message(self):
        assert level_up_message(3, 1) == '🎉 레벨업! Level 3 달성! "입문자" 칭호를 획득했습니다!'

    def test_multi_level_message(self):
        assert level_up_message(5, 2) == '🎉 대단해요! Level 5 달성! "중급자" 칭호를 획득했습니다!'
