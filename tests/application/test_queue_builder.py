"""Tests for priority ordering, daily load and study queue building."""

from datetime import timedelta

import pytest

from vocab_srs.application.queue_builder import (
    build_study_queue,
    priority_score,
    recommend_daily_load,
    sort_by_priority,
)
from vocab_srs.domain.errors import InvalidInputError
from vocab_srs.domain.models import Difficulty

DAY = timedelta(days=1)


@pytest.fixture
def due_deck(make_card, t0):
    """Build n cards that fell due one minute apart, plus optional future cards."""

    def _deck(n_due: int, n_future: int = 0):
        due = [
            make_card(id=f"due{i}", next_review=t0 - timedelta(minutes=i)) for i in range(n_due)
        ]
        future = [
            make_card(id=f"later{i}", next_review=t0 + (i + 1) * DAY) for i in range(n_future)
        ]
        return due + future

    return _deck


class TestPriorityScore:
    def test_components(self, make_card, t0):
        card = make_card(next_review=t0 - timedelta(seconds=2), mistake_count=3, easiness_factor=2.0)

        # 2000ms + 3 x 0.1 + (3.0 - 2.0) x 0.05
        assert priority_score(card, t0) == pytest.approx(2000.35)

    def test_overdue_milliseconds_dominate_penalties(self, make_card, t0):
        barely_overdue = make_card(id="a", next_review=t0 - timedelta(milliseconds=1))
        many_mistakes = make_card(id="b", next_review=t0, mistake_count=5, easiness_factor=1.3)

        assert priority_score(barely_overdue, t0) > priority_score(many_mistakes, t0)


class TestSortByPriority:
    def test_filters_cards_not_yet_due(self, due_deck, t0):
        ordered = sort_by_priority(due_deck(3, n_future=2), t0)

        assert [c.id for c in ordered] == ["due2", "due1", "due0"]

    def test_most_overdue_first(self, make_card, t0):
        cards = [
            make_card(id="recent", next_review=t0 - timedelta(hours=1)),
            make_card(id="oldest", next_review=t0 - 5 * DAY),
            make_card(id="middle", next_review=t0 - DAY),
        ]

        assert [c.id for c in sort_by_priority(cards, t0)] == ["oldest", "middle", "recent"]

    def test_mistakes_break_equal_overdue(self, make_card, t0):
        cards = [
            make_card(id="clean", next_review=t0, mistake_count=0),
            make_card(id="shaky", next_review=t0, mistake_count=2),
        ]

        assert [c.id for c in sort_by_priority(cards, t0)] == ["shaky", "clean"]

    def test_low_easiness_breaks_equal_mistakes(self, make_card, t0):
        cards = [
            make_card(id="easy", next_review=t0, easiness_factor=2.5),
            make_card(id="hard", next_review=t0, easiness_factor=1.5),
        ]

        assert [c.id for c in sort_by_priority(cards, t0)] == ["hard", "easy"]

    def test_full_ties_keep_input_order(self, make_card, t0):
        cards = [make_card(id=f"c{i}", next_review=t0 - DAY) for i in range(5)]

        assert [c.id for c in sort_by_priority(cards, t0)] == ["c0", "c1", "c2", "c3", "c4"]

    def test_scores_are_non_increasing(self, make_card, t0):
        cards = [
            make_card(
                id=f"c{i}",
                next_review=t0 - timedelta(hours=(i * 7) % 11),
                mistake_count=i % 4,
                easiness_factor=1.3 + (i % 5) * 0.3,
            )
            for i in range(20)
        ]

        scores = [priority_score(c, t0) for c in sort_by_priority(cards, t0)]

        assert scores == sorted(scores, reverse=True)

    def test_empty(self, t0):
        assert sort_by_priority([], t0) == []


class TestRecommendDailyLoad:
    def test_large_backlog_boosts_target(self, due_deck, t0):
        # 40 > 1.5 x 25, so min(round(25 x 1.3), 40) = 33
        assert recommend_daily_load(due_deck(40), Difficulty.INTERMEDIATE, t0) == 33

    def test_boost_rounds_half_up(self, due_deck, t0):
        # 15 x 1.3 = 19.5
        assert recommend_daily_load(due_deck(30), "beginner", t0) == 20

    def test_boost_capped_by_backlog(self, due_deck, t0):
        # 23 > 22.5 but round(19.5) = 20 < 23
        assert recommend_daily_load(due_deck(23), "beginner", t0) == 20

    def test_small_backlog_uses_reduced_target(self, due_deck, t0):
        # 2 < 7.5, so max(round(15 x 0.7), 2) = 11
        assert recommend_daily_load(due_deck(2), "beginner", t0) == 11

    def test_empty_backlog(self, due_deck, t0):
        assert recommend_daily_load(due_deck(0, n_future=4), "advanced", t0) == 25

    def test_normal_backlog_capped_at_base(self, due_deck, t0):
        assert recommend_daily_load(due_deck(12), "beginner", t0) == 12
        assert recommend_daily_load(due_deck(20), "beginner", t0) == 15
        assert recommend_daily_load(due_deck(35), "advanced", t0) == 35

    def test_future_cards_do_not_count(self, due_deck, t0):
        assert recommend_daily_load(due_deck(12, n_future=30), "intermediate", t0) == 18

    def test_rejects_unknown_level(self, due_deck, t0):
        with pytest.raises(InvalidInputError):
            recommend_daily_load(due_deck(3), "expert", t0)


class TestBuildStudyQueue:
    def test_truncates_to_daily_target(self, due_deck, t0):
        queue = build_study_queue(due_deck(40, n_future=5), Difficulty.INTERMEDIATE, t0)

        assert queue.backlog == 40
        assert queue.daily_target == 33
        assert len(queue.cards) == 33
        # Most overdue first
        assert queue.cards[0].id == "due39"
        assert queue.cards[-1].id == "due7"

    def test_small_backlog_returns_everything_due(self, due_deck, t0):
        queue = build_study_queue(due_deck(4, n_future=2), "beginner", t0)

        assert queue.backlog == 4
        assert queue.daily_target == 11
        assert [c.id for c in queue.cards] == ["due3", "due2", "due1", "due0"]

    def test_queue_is_immutable(self, due_deck, t0):
        queue = build_study_queue(due_deck(3), "beginner", t0)

        assert isinstance(queue.cards, tuple)
        with pytest.raises(AttributeError):
            queue.cards.append(queue.cards[0])
