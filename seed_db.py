"""One-time DB setup: create tables, load the practice catalog and demo users."""
from datetime import timezone

from practicehub.core.security import hash_password
from practicehub.db.models import (
    DifficultyEnum,
    Problem,
    ProblemOption,
    QuestionTypeEnum,
    User,
    UserProblemAttempt,
)
from practicehub.db.session import Base, get_engine, get_session_factory
from practicehub.services.catalog import generate_catalog
from practicehub.services.simulator import simulate_progress

# 1. Create all tables
engine = get_engine()
Base.metadata.create_all(bind=engine)
print("✅ All tables created")

catalog = generate_catalog()

session_factory = get_session_factory()
with session_factory() as db:
    # 2. Practice catalog
    if db.query(Problem.id).first() is None:
        for p in catalog:
            db.add(
                Problem(
                    id=p.id,
                    subject=p.subject,
                    topic=p.topic,
                    title=p.title,
                    description=p.description,
                    difficulty=DifficultyEnum(p.difficulty.value),
                    question_type=QuestionTypeEnum(p.question_type.value),
                    options=[
                        ProblemOption(
                            option_text=o.text,
                            display_text=o.display_text,
                            is_correct=o.is_correct,
                            order_index=i,
                        )
                        for i, o in enumerate(p.options)
                    ],
                )
            )
        db.commit()
        print(f"✅ Loaded {len(catalog)} problems")
    else:
        print("  Problems already loaded")

    # 3. Demo student with a simulated history
    student = db.query(User).filter(User.email == "student@example.com").first()
    if not student:
        student = User(
            name="Student User",
            profile_name="demo_student",
            email="student@example.com",
            password=hash_password("student123"),
            user_type="student",
        )
        db.add(student)
        db.commit()
        db.refresh(student)

        snapshot = simulate_progress(catalog, seed=42)
        for a in snapshot.completed_problems:
            db.add(
                UserProblemAttempt(
                    user_id=student.id,
                    problem_id=a.problem_id,
                    attempt_number=1,
                    selected_options=["Option A"] if a.score else ["Option B"],
                    is_correct=bool(a.score),
                    score=float(a.score),
                    attempted_at=a.attempted_at.astimezone(timezone.utc),
                )
            )
        db.commit()
        print(
            f"✅ Created student: student@example.com / student123 "
            f"({len(snapshot.completed_problems)} attempts)"
        )
    else:
        print("  Student user already exists")

print("\n🎉 Database is ready to use!")
print("   Student: student@example.com / student123")
