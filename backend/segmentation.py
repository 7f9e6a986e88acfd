"""
Split generated study material Markdown into the pieces each study layout shows.

Tasks generated with structured output already carry these pieces in
``Task.materials``. The extractors below recover them from plain Markdown for
summaries that were written by hand or generated before materials existed.
They never raise on unexpected formatting; unrecognized text is skipped.
"""

import re
from typing import Any, Dict, List, Optional

KEY_POINT_MARKERS = ("- ", "* ")
QUICK_REFERENCE_MARKERS = ("• ", "- ")

_QUESTION = re.compile(r"^(?:[-*•]\s+)?(?:\*\*)?Q:(?:\*\*)?\s*(.*)$")
_ANSWER = re.compile(r"^(?:[-*•]\s+)?(?:\*\*)?A:(?:\*\*)?\s*(.*)$")
_INLINE_ANSWER = re.compile(r"\s(?:\*\*)?A:(?:\*\*)?\s*")
_PROBLEM_PREFIX = (
    r"^\s*(?:#{1,6}\s*|\d+[.)]\s*|[-*]\s+)?(?:\*\*)?"
    r"(?:(?i:problem|exercise)|(?:\w+\s+){1,3}(?:Problem|Exercise|PROBLEM|EXERCISE))"
)
_PROBLEM_HEADING = re.compile(_PROBLEM_PREFIX + r"\b")
_PROBLEM_LABEL = re.compile(_PROBLEM_PREFIX + r"\s*\d*\s*[:.)]?\s*(?:\*\*)?\s*")


def _bullets(text: str, markers) -> List[str]:
    points = []
    for line in text.splitlines():
        for marker in markers:
            if line.startswith(marker):
                point = line[len(marker):].strip()
                if point:
                    points.append(point)
                break
    return points


def extract_key_points(text: str) -> List[str]:
    """Top-level bullet lines ("- " or "* ") with the marker removed"""
    return _bullets(text or "", KEY_POINT_MARKERS)


def extract_quick_reference(text: str) -> List[str]:
    """Top-level "• " or "- " lines with the marker removed"""
    return _bullets(text or "", QUICK_REFERENCE_MARKERS)


def extract_flashcards(text: str) -> List[Dict[str, str]]:
    """
    Pair each "Q:" with the following "A:", on the same line or a later one.

    Blank lines may separate a question from its answer. A blank line or a
    heading after an answer closes the card. Questions without an answer
    are dropped.
    """
    cards = []
    question = None
    answer = None
    current = None

    def flush():
        nonlocal question, answer, current
        if question and answer:
            cards.append({"question": question.strip(), "answer": answer.strip()})
        question = answer = current = None

    for raw in (text or "").splitlines():
        line = raw.strip()

        q_match = _QUESTION.match(line)
        if q_match:
            flush()
            parts = _INLINE_ANSWER.split(q_match.group(1), maxsplit=1)
            question = parts[0]
            if len(parts) > 1:
                answer = parts[1]
                current = "a"
            else:
                current = "q"
            continue

        a_match = _ANSWER.match(line)
        if a_match:
            if question is not None:
                answer = a_match.group(1)
                current = "a"
            continue

        if not line or line.startswith("#"):
            if current == "a" or line.startswith("#"):
                flush()
            continue

        if current == "q":
            question = f"{question}\n{line}" if question else line
        elif current == "a":
            answer = f"{answer}\n{line}" if answer else line

    flush()
    return cards


def extract_problems(text: str) -> List[Dict[str, str]]:
    """
    Problem/solution pairs in source order.

    A section starts at a line whose first words include "Problem" or
    "Exercise" (optionally as a Markdown heading, numbered item or in bold,
    e.g. "## Practice Problem 1" or "1. Problem:") and runs to the next such
    line. The first "Solution:" marker splits question from solution.
    """
    sections = []
    current = None
    for line in (text or "").splitlines():
        if _PROBLEM_HEADING.match(line):
            current = [_PROBLEM_LABEL.sub("", line, count=1)]
            sections.append(current)
        elif current is not None:
            current.append(line)

    problems = []
    for lines in sections:
        body = "\n".join(lines).strip()
        parts = _SOLUTION.split(body, maxsplit=1)
        question = parts[0].strip()
        solution = parts[1].strip() if len(parts) > 1 else ""
        if question:
            problems.append({"question": question, "solution": solution})
    return problems


def parse_summary(task_type: str, summary: str) -> Dict[str, Any]:
    """Heuristic materials for a Markdown summary, shaped like structured output"""
    if task_type == "practice":
        return {"problems": extract_problems(summary)}
    if task_type == "review":
        return {
            "summary": summary,
            "quick_reference": extract_quick_reference(summary),
            "flashcards": extract_flashcards(summary),
        }
    return {"overview": summary, "key_points": extract_key_points(summary)}


def materials_for_task(task) -> Optional[Dict[str, Any]]:
    """Stored structured materials, else whatever the summary text yields"""
    if task.materials:
        return task.materials
    if task.summary:
        return parse_summary(task.task_type, task.summary)
    return None


def render_markdown(task_type: str, materials: Dict[str, Any]) -> str:
    """Markdown for structured materials, in the layout the extractors read"""
    if task_type == "practice":
        blocks = [
            f"### Problem {i}\n{p['question'].strip()}\n\nSolution:\n{p['solution'].strip()}"
            for i, p in enumerate(materials.get("problems", []), 1)
        ]
        return "\n\n".join(blocks)

    if task_type == "review":
        parts = ["## Quick Review", materials.get("summary", "").strip()]
        reference = materials.get("quick_reference", [])
        if reference:
            parts.append("\n".join(f"• {item}" for item in reference))
        cards = materials.get("flashcards", [])
        if cards:
            parts.append("## Flashcards")
            parts.extend(f"Q: {c['question'].strip()}\nA: {c['answer'].strip()}" for c in cards)
        return "\n\n".join(p for p in parts if p)

    parts = [materials.get("overview", "").strip()]
    key_points = materials.get("key_points", [])
    if key_points:
        parts.append("## Key Points\n" + "\n".join(f"- {point}" for point in key_points))
    return "\n\n".join(p for p in parts if p)
