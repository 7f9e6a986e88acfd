"""Helper functions shared by the Streamlit pages"""

from collections import OrderedDict
from datetime import datetime
from typing import Any, Dict, List

WEEKDAY_OPTIONS = OrderedDict([
    ("mon", "Monday"),
    ("tue", "Tuesday"),
    ("wed", "Wednesday"),
    ("thu", "Thursday"),
    ("fri", "Friday"),
    ("sat", "Saturday"),
    ("sun", "Sunday"),
])

TASK_TYPE_ICONS = {"learn": "📘", "practice": "✏️", "review": "🔁"}


def parse_api_datetime(value: str) -> datetime:
    """API datetimes are ISO-8601 strings"""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def block_progress(block: Dict[str, Any]) -> Dict[str, int]:
    """Completed/total task counts and percentage for a study block"""
    tasks = block.get("tasks", [])
    total = len(tasks)
    completed = sum(1 for t in tasks if t.get("completed"))
    percent = round(completed * 100 / total) if total else 0
    return {"completed": completed, "total": total, "percent": percent}


def group_tasks_by_date(tasks: List[Dict[str, Any]]) -> "OrderedDict[str, List[Dict[str, Any]]]":
    """Group tasks under their due date (YYYY-MM-DD), keeping due-date order"""
    grouped = OrderedDict()
    for task in sorted(tasks, key=lambda t: (t["dueDate"], t["id"])):
        day = parse_api_datetime(task["dueDate"]).strftime("%Y-%m-%d")
        grouped.setdefault(day, []).append(task)
    return grouped


def days_remaining(block: Dict[str, Any], today=None) -> int:
    """Days until the block's test date (0 once it has passed)"""
    today = today or datetime.now().date()
    end = parse_api_datetime(block["endDate"]).date()
    return max((end - today).days, 0)
