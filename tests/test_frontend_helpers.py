from datetime import date

from frontend.utils.helpers import block_progress, days_remaining, group_tasks_by_date


def test_block_progress():
    block = {"tasks": [{"completed": True}, {"completed": False}, {"completed": True}]}
    assert block_progress(block) == {"completed": 2, "total": 3, "percent": 67}
    assert block_progress({"tasks": []}) == {"completed": 0, "total": 0, "percent": 0}


def test_group_tasks_by_date():
    tasks = [
        {"id": 3, "dueDate": "2026-11-03T00:00:00"},
        {"id": 1, "dueDate": "2026-11-02T00:00:00"},
        {"id": 2, "dueDate": "2026-11-02T00:00:00"},
    ]
    grouped = group_tasks_by_date(tasks)
    assert list(grouped) == ["2026-11-02", "2026-11-03"]
    assert [t["id"] for t in grouped["2026-11-02"]] == [1, 2]


def test_days_remaining():
    block = {"endDate": "2026-11-20T00:00:00"}
    assert days_remaining(block, today=date(2026, 11, 10)) == 10
    assert days_remaining(block, today=date(2026, 12, 1)) == 0
