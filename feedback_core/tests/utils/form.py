from typing import Any, Dict, List


def sample_questions() -> List[Dict[str, Any]]:
    return [
        {
            "question_text": "Pick one",
            "question_type": "radio",
            "options": ["A", "B"],
            "required": True,
        },
        {"question_text": "Anything else?", "question_type": "textarea"},
    ]


def answers_for(form: Dict[str, Any], *values: Any) -> List[Dict[str, Any]]:
    """Pair ``values`` with the form's questions in order."""
    questions = sorted(form["questions"], key=lambda q: q["order"])
    return [
        {"question_id": q["id"], "answer": v} for q, v in zip(questions, values)
    ]
