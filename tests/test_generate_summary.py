import json

from backend.models import Task
from tests.conftest import set_responses


def _task(seed_block, user_id, task_type):
    block = seed_block(user_id, tasks=[{"title": f"{task_type} task", "task_type": task_type}])
    return block.tasks[0].id


def test_learn_summary(client, seed_block, fake_llm, db):
    task_id = _task(seed_block, client.user_id, "learn")
    set_responses(fake_llm, json.dumps({
        "overview": "# Photosynthesis\nPlants turn light into sugar.",
        "key_points": ["Light reactions make ATP", "Calvin cycle fixes CO2"],
    }))

    response = client.post(f"/api/tasks/{task_id}/generate-summary")
    assert response.status_code == 200
    body = response.json()
    assert body["materials"]["key_points"] == ["Light reactions make ATP", "Calvin cycle fixes CO2"]
    assert "- Light reactions make ATP" in body["summary"]

    db.expire_all()
    task = db.get(Task, task_id)
    assert task.summary == body["summary"]
    assert task.materials == body["materials"]
    assert task.last_summary_date is not None


def test_practice_summary(client, seed_block, fake_llm):
    task_id = _task(seed_block, client.user_id, "practice")
    problems = [
        {"question": "Balance H2 + O2 -> H2O", "solution": "2H2 + O2 -> 2H2O"},
        {"question": "Name CH4", "solution": "Methane"},
    ]
    set_responses(fake_llm, json.dumps({"problems": problems}))

    body = client.post(f"/api/tasks/{task_id}/generate-summary").json()
    assert body["materials"]["problems"] == problems
    assert body["summary"].count("Solution:") == 2

    task = client.get(f"/api/tasks/{task_id}").json()["task"]
    assert task["materials"]["problems"] == problems


def test_review_summary_regenerates(client, seed_block, fake_llm):
    task_id = _task(seed_block, client.user_id, "review")
    first = {"summary": "v1", "quick_reference": ["a"], "flashcards": [{"question": "Q1", "answer": "A1"}]}
    second = {"summary": "v2", "quick_reference": ["b"], "flashcards": [{"question": "Q2", "answer": "A2"}]}

    set_responses(fake_llm, json.dumps(first))
    client.post(f"/api/tasks/{task_id}/generate-summary")
    set_responses(fake_llm, json.dumps(second))
    body = client.post(f"/api/tasks/{task_id}/generate-summary").json()

    assert body["materials"] == second
    assert "Q: Q2" in body["summary"]
    assert client.get(f"/api/tasks/{task_id}").json()["task"]["materials"] == second


def test_unparsable_summary_is_500_and_keeps_old(client, seed_block, fake_llm, db):
    block = seed_block(client.user_id, tasks=[{"task_type": "review", "summary": "keep me"}])
    task_id = block.tasks[0].id
    set_responses(fake_llm, "Sorry, I can't help with that.")

    response = client.post(f"/api/tasks/{task_id}/generate-summary")
    assert response.status_code == 500
    assert response.json() == {"error": "Error generating summary"}

    db.expire_all()
    assert db.get(Task, task_id).summary == "keep me"


def test_summary_for_missing_task_is_404(client, fake_llm):
    response = client.post("/api/tasks/4242/generate-summary")
    assert response.status_code == 404
    assert fake_llm.calls == 0
