"""Unit tests for the progress analytics engine."""

import pytest
from factories import NOW, make_attempt, make_problem

from practicehub.schemas.attempt import AttemptRecord
from practicehub.schemas.problem import Difficulty
from practicehub.services.analytics import (
    InsightThresholds,
    ProblemIndex,
    ProgressAnalytics,
    build_report,
    percentage,
)
from practicehub.services.catalog import SUBJECTS, generate_catalog
from practicehub.services.simulator import simulate_progress


# ── Helpers ────────────────────────────────────────────────────────────────────


def _catalog_with_scores(n_completed: int, n_correct: int):
    problems = generate_catalog()
    attempts = [
        make_attempt(p, score=1 if i < n_correct else 0, hours_ago=i + 1)
        for i, p in enumerate(problems[:n_completed])
    ]
    return problems, attempts


# ── Overall ────────────────────────────────────────────────────────────────────


class TestOverall:
    def test_example_accuracy_and_completion(self):
        problems, attempts = _catalog_with_scores(67, 47)
        engine = ProgressAnalytics(problems, attempts)
        assert engine.overall_accuracy() == pytest.approx(47 / 67 * 100)
        assert round(engine.overall_accuracy(), 1) == 70.1
        assert engine.overall_completion() == pytest.approx(67 / 225 * 100)

    def test_empty_inputs_are_zero(self):
        engine = ProgressAnalytics([], [])
        assert engine.overall_completion() == 0
        assert engine.overall_accuracy() == 0

    def test_no_problems_with_attempts_is_zero_completion(self):
        p = make_problem("P0001")
        engine = ProgressAnalytics([], [make_attempt(p)])
        assert engine.overall_completion() == 0
        assert engine.overall_accuracy() == 100

    def test_repeat_attempts_do_not_push_completion_past_100(self):
        p = make_problem("P0001")
        attempts = [make_attempt(p, score=1), make_attempt(p, score=0, hours_ago=2)]
        engine = ProgressAnalytics([p], attempts)
        assert engine.overall_completion() == 100
        assert engine.overall_accuracy() == 50

    def test_percentage_bounds(self):
        assert percentage(0, 0) == 0
        assert percentage(5, 0) == 0
        assert percentage(1, 4) == 25
        assert percentage(9, 4) == 100


# ── Subjects ───────────────────────────────────────────────────────────────────


class TestSubjects:
    def test_subject_completion_exact_for_any_subset(self):
        problems = generate_catalog()
        snapshot = simulate_progress(problems, seed=7, now=NOW)
        subset = snapshot.completed_problems[::3]
        engine = ProgressAnalytics(problems, subset)
        for stats in engine.subjects_progress():
            total = sum(1 for p in problems if p.subject == stats.subject)
            completed = sum(1 for a in subset if a.subject == stats.subject)
            assert stats.total == total == 45
            assert stats.completed == completed
            assert stats.completion == completed / total * 100

    def test_subjects_follow_catalog_order(self):
        engine = ProgressAnalytics(generate_catalog(), [])
        assert [s.subject for s in engine.subjects_progress()] == SUBJECTS

    def test_unknown_subject_is_all_zero(self):
        engine = ProgressAnalytics(generate_catalog(), [])
        stats = engine.subject_progress("Astrology")
        assert (stats.total, stats.completed, stats.completion, stats.accuracy) == (0, 0, 0, 0)

    def test_subject_accuracy(self):
        a = make_problem("P1", subject="Programming", topic="Algorithms")
        b = make_problem("P2", subject="Programming", topic="Algorithms")
        engine = ProgressAnalytics([a, b], [make_attempt(a, 1), make_attempt(b, 0)])
        stats = engine.subject_progress("Programming")
        assert stats.completion == 100
        assert stats.accuracy == 50


# ── Topics ─────────────────────────────────────────────────────────────────────


class TestTopics:
    def test_every_catalog_topic_reported(self):
        engine = ProgressAnalytics(generate_catalog(), [])
        topics = engine.topic_analysis()
        assert len(topics) == 15
        assert topics[0].topic == "Calculus"
        assert topics[0].subject == "Mathematics"
        assert all(t.total == 15 and t.completed == 0 for t in topics)
        assert all(t.average_attempts == 0 for t in topics)

    def test_attempts_matched_through_problem_not_tag(self):
        p = make_problem("P1", subject="Mathematics", topic="Calculus")
        # tag disagrees with the referenced problem
        attempt = AttemptRecord(
            problem_id="P1", subject="Mathematics", topic="Grammars", score=1, attempted_at=NOW
        )
        engine = ProgressAnalytics([p], [attempt])
        (calculus,) = engine.topic_analysis()
        assert calculus.completed == 1

    def test_average_attempts_counts_attempts_per_completed_problem(self):
        p1 = make_problem("P1")
        p2 = make_problem("P2")
        p3 = make_problem("P3")
        attempts = [
            make_attempt(p1, 0, hours_ago=3),
            make_attempt(p1, 1, hours_ago=2),
            make_attempt(p1, 1, hours_ago=1),
            make_attempt(p2, 1),
        ]
        (topic,) = ProgressAnalytics([p1, p2, p3], attempts).topic_analysis()
        assert topic.completed == 2
        assert topic.completion == pytest.approx(2 / 3 * 100)
        assert topic.average_attempts == 2.0
        assert topic.accuracy == 75

    def test_same_topic_name_in_two_subjects_kept_apart(self):
        a = make_problem("P1", subject="Mathematics", topic="Basics")
        b = make_problem("P2", subject="Programming", topic="Basics")
        topics = ProgressAnalytics([a, b], [make_attempt(a)]).topic_analysis()
        assert [(t.subject, t.completed) for t in topics] == [("Mathematics", 1), ("Programming", 0)]


# ── Difficulty & recency ───────────────────────────────────────────────────────


class TestDifficultyAndRecency:
    def test_histogram_has_fixed_keys_and_skips_unknown_ids(self):
        easy = make_problem("P1", difficulty=Difficulty.EASY)
        hard = make_problem("P2", difficulty=Difficulty.HARD)
        ghost = make_problem("GONE")
        attempts = [make_attempt(easy), make_attempt(hard), make_attempt(hard), make_attempt(ghost)]
        stats = ProgressAnalytics([easy, hard], attempts).difficulty_stats()
        assert stats == {Difficulty.EASY: 1, Difficulty.MEDIUM: 0, Difficulty.HARD: 2}

    def test_histogram_empty(self):
        assert set(ProgressAnalytics([], []).difficulty_stats()) == set(Difficulty)

    def test_recent_activity_sorted_and_limited(self):
        problems, attempts = _catalog_with_scores(12, 6)
        recent = ProgressAnalytics(problems, attempts).recent_activity()
        assert len(recent) == 5
        stamps = [r.attempt.attempted_at for r in recent]
        assert stamps == sorted(stamps, reverse=True)
        # hours_ago = index + 1, so the newest is the first problem
        assert recent[0].attempt.problem_id == "P0001"
        assert recent[0].problem_details.id == "P0001"

    def test_recent_activity_fewer_than_limit(self):
        p = make_problem("P1")
        recent = ProgressAnalytics([p], [make_attempt(p)]).recent_activity()
        assert len(recent) == 1

    def test_recent_activity_unknown_problem_is_none(self):
        ghost = make_problem("GONE")
        (entry,) = ProgressAnalytics([], [make_attempt(ghost)]).recent_activity()
        assert entry.problem_details is None

    def test_recent_activity_mixes_naive_and_aware_timestamps(self):
        p = make_problem("P1")
        naive = AttemptRecord(problem_id="P1", score=1, attempted_at=NOW.replace(tzinfo=None))
        older = make_attempt(p, hours_ago=5)
        recent = ProgressAnalytics([p], [older, naive]).recent_activity()
        assert recent[0].attempt == naive


# ── Insights ───────────────────────────────────────────────────────────────────


class TestInsights:
    def _topic(self, name: str, subject: str = "Mathematics", n: int = 10):
        return [make_problem(f"{name}{i}", subject=subject, topic=name) for i in range(n)]

    def test_classification(self):
        weak = self._topic("Weak")
        strong = self._topic("Strong")
        middling = self._topic("Middling")
        untouched = self._topic("Untouched")
        attempts = (
            [make_attempt(p, 1 if i < 1 else 0) for i, p in enumerate(weak[:5])]  # 20%
            + [make_attempt(p, 1) for p in strong[:5]]  # 100%
            + [make_attempt(p, 1 if i < 7 else 0) for i, p in enumerate(middling[:10])]  # 70%
        )
        problems = weak + strong + middling + untouched
        insights = ProgressAnalytics(problems, attempts).performance_insights()

        assert [t.topic for t in insights.needs_improvement] == ["Weak"]
        assert insights.needs_improvement[0].reason == "Low accuracy"
        assert "Weak" in insights.needs_improvement[0].suggestion
        assert [t.topic for t in insights.good_progress] == ["Strong"]
        assert insights.good_progress[0].suggestion == "Keep up the good work!"

        by_type = {s.type: s for s in insights.suggestions}
        assert [t.topic for t in by_type["unattempted"].topics] == ["Untouched"]
        assert "low_completion" not in by_type  # 50% / 100% completion
        # subject accuracy = (1 + 5 + 7) / 20 = 65%
        assert "subject_improvement" not in by_type

    def test_low_completion_and_weak_subject(self):
        topic = self._topic("Sparse", subject="Digital Logic", n=10)
        attempts = [make_attempt(topic[0], 0), make_attempt(topic[1], 0)]  # 20% complete, 0% accurate
        insights = ProgressAnalytics(topic, attempts).performance_insights()
        by_type = {s.type: s for s in insights.suggestions}
        assert [t.topic for t in by_type["low_completion"].topics] == ["Sparse"]
        assert [s.subject for s in by_type["subject_improvement"].subjects] == ["Digital Logic"]
        # the same topic is also flagged for low accuracy
        assert [t.topic for t in insights.needs_improvement] == ["Sparse"]

    def test_no_suggestions_when_lists_empty(self):
        p = make_problem("P1")
        insights = ProgressAnalytics([p], [make_attempt(p, 1)]).performance_insights()
        assert insights.suggestions == []

    def test_topic_never_in_both_lists(self):
        problems = generate_catalog()
        for seed in range(5):
            attempts = simulate_progress(problems, seed=seed, now=NOW).completed_problems
            insights = ProgressAnalytics(problems, attempts).performance_insights()
            weak = {(t.subject, t.topic) for t in insights.needs_improvement}
            strong = {(t.subject, t.topic) for t in insights.good_progress}
            assert not weak & strong

    def test_custom_thresholds(self):
        p1, p2 = make_problem("P1"), make_problem("P2")
        attempts = [make_attempt(p1, 1), make_attempt(p2, 0)]  # 50%
        lenient = InsightThresholds(low_accuracy=40, high_accuracy=45)
        insights = ProgressAnalytics([p1, p2], attempts).performance_insights(lenient)
        assert insights.needs_improvement == []
        assert [t.topic for t in insights.good_progress] == ["Calculus"]


# ── Report ─────────────────────────────────────────────────────────────────────


class TestReport:
    def test_report_on_simulated_history(self):
        problems = generate_catalog()
        snapshot = simulate_progress(problems, seed=11, now=NOW)
        report = build_report(problems, snapshot.completed_problems)
        assert report.total_problems == 225
        assert report.completed_problems == 67
        assert 0 <= report.overall_completion <= 100
        assert 0 <= report.overall_accuracy <= 100
        assert len(report.subjects) == 5
        assert len(report.topics) == 15
        assert sum(report.difficulty.values()) == 67
        assert len(report.recent_activity) == 5
        assert report.unresolved_problem_ids == []

    def test_report_lists_unresolved_ids_once(self):
        p = make_problem("P1")
        ghost = make_problem("GONE")
        report = build_report([p], [make_attempt(ghost), make_attempt(ghost, hours_ago=2)])
        assert report.unresolved_problem_ids == ["GONE"]

    def test_report_is_idempotent(self):
        problems, attempts = _catalog_with_scores(30, 20)
        assert build_report(problems, attempts) == build_report(problems, attempts)

    def test_report_serialises_difficulty_keys_as_labels(self):
        report = build_report([], [])
        dumped = report.model_dump(mode="json")
        assert dumped["difficulty"] == {"Easy": 0, "Medium": 0, "Hard": 0}


def test_problem_index_lookup():
    p = make_problem("P1")
    index = ProblemIndex([p])
    assert "P1" in index
    assert index.get("P1") is p
    assert index.get("nope") is None
    assert len(index) == 1
