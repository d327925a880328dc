"""
Question feed readmodel: active questions with their active answers and images.

All functions accept a SQLAlchemy Session and return plain dicts/lists.
Hidden content and content by non-active authors is excluded.
"""
from collections import defaultdict

from sqlalchemy.orm import Session

from app.infrastructure.db.models import Answer, Image, Question, User


def _author(user: User) -> dict:
    return {"id": user.id, "name": user.display_name, "level": user.level}


def _images_by_entity(db: Session, entity_type: str, entity_ids: list[int]) -> dict[int, list[str]]:
    result: dict[int, list[str]] = defaultdict(list)
    if not entity_ids:
        return result
    rows = (
        db.query(Image.entity_id, Image.url)
        .filter(Image.entity_type == entity_type, Image.entity_id.in_(entity_ids))
        .order_by(Image.id)
        .all()
    )
    for entity_id, url in rows:
        result[entity_id].append(url)
    return result


def get_images(db: Session, entity_type: str, entity_id: int) -> list[str]:
    return _images_by_entity(db, entity_type, [entity_id]).get(entity_id, [])


def get_active_answers(db: Session, question_ids: list[int]) -> dict[int, list[dict]]:
    """Active answers grouped by question_id, oldest first."""
    grouped: dict[int, list[dict]] = defaultdict(list)
    if not question_ids:
        return grouped

    rows = (
        db.query(Answer, User)
        .join(User, Answer.user_id == User.id)
        .filter(
            Answer.question_id.in_(question_ids),
            Answer.status == "active",
            User.status == "active",
        )
        .order_by(Answer.created_at.asc(), Answer.id.asc())
        .all()
    )
    images = _images_by_entity(db, "answer", [a.id for a, _ in rows])

    for answer, user in rows:
        grouped[answer.question_id].append({
            "id": answer.id,
            "content": answer.content,
            "author": _author(user),
            "images": images.get(answer.id, []),
            "created_at": answer.created_at,
            "status": answer.status,
        })
    return grouped


def get_active_questions(db: Session) -> list[dict]:
    """Feed for GET /api/v1/questions, newest first."""
    rows = (
        db.query(Question, User)
        .join(User, Question.user_id == User.id)
        .filter(Question.status == "active", User.status == "active")
        .order_by(Question.created_at.desc(), Question.id.desc())
        .all()
    )
    question_ids = [q.id for q, _ in rows]
    answers = get_active_answers(db, question_ids)
    images = _images_by_entity(db, "question", question_ids)

    return [
        {
            "id": question.id,
            "title": question.title,
            "content": question.content,
            "author": _author(user),
            "images": images.get(question.id, []),
            "answers": answers.get(question.id, []),
            "created_at": question.created_at,
            "status": question.status,
        }
        for question, user in rows
    ]
