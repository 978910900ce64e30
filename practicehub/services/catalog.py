"""Deterministic synthetic problem catalog.

Used for demos, for seeding an empty database and as a fixture source for
analytics. Every call returns the same 225 problems in the same order.
"""

from practicehub.schemas.problem import Difficulty, OptionRead, ProblemRead, QuestionType

SUBJECT_TOPICS: dict[str, list[str]] = {
    "Mathematics": ["Calculus", "Probability", "Linear Algebra"],
    "Digital Logic": ["Boolean Algebra", "Logic Gates", "Circuits"],
    "Computer Organization": ["CPU Architecture", "Memory Systems", "I/O Systems"],
    "Programming": ["Time Complexity", "Data Structures", "Algorithms"],
    "Theory of Computation": ["Automata Theory", "Grammars", "Turing Machines"],
}
SUBJECTS: list[str] = list(SUBJECT_TOPICS)

DIFFICULTIES: tuple[Difficulty, ...] = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)
PROBLEMS_PER_TOPIC = 15
OPTION_LABELS = ("Option A", "Option B", "Option C", "Option D")


def problem_id(seq: int) -> str:
    """``1`` → ``"P0001"``."""
    return f"P{seq:04d}"


def _options() -> list[OptionRead]:
    # First option is the correct one
    return [
        OptionRead(text=label, display_text=label, is_correct=(i == 0))
        for i, label in enumerate(OPTION_LABELS)
    ]


def generate_catalog() -> list[ProblemRead]:
    """Build the full catalog, subjects × topics × PROBLEMS_PER_TOPIC.

    Ids come from a single counter shared across all topics, so difficulty
    (``DIFFICULTIES[seq % 3]``) cycles over the whole catalog rather than
    restarting per topic.
    """
    problems: list[ProblemRead] = []
    seq = 1
    for subject, topics in SUBJECT_TOPICS.items():
        for topic in topics:
            for i in range(PROBLEMS_PER_TOPIC):
                problems.append(
                    ProblemRead(
                        id=problem_id(seq),
                        subject=subject,
                        topic=topic,
                        title=f"{topic} - Problem {i + 1}",
                        description=f"This is a practice problem for {topic}",
                        difficulty=DIFFICULTIES[seq % 3],
                        question_type=QuestionType.MCQ,
                        options=_options(),
                    )
                )
                seq += 1
    return problems
