from datetime import datetime

import pytest

from backend.models import StudyBlock
from backend.scheduler import PlanGenerationError, StudyPlanScheduler
from tests.conftest import CountingChatModel, plan_json


@pytest.fixture
def block():
    return StudyBlock(
        id=7,
        user_id=1,
        title="Organic Chemistry",
        start_date=datetime(2026, 10, 1),
        end_date=datetime(2026, 10, 31),
        total_hours=3,
        days_of_week=["mon", "thu"],
        content="Alkanes {and} alkenes",
    )


def test_prompt_variables(block):
    scheduler = StudyPlanScheduler(CountingChatModel(responses=["{}"]))
    variables = scheduler._prompt_variables(block)

    assert variables["days"] == "Monday, Thursday"
    assert variables["start_date"] == "2026-10-01"
    assert variables["end_date"] == "2026-10-31"
    assert variables["total_hours"] == 3


def test_content_with_braces_reaches_model(block):
    llm = CountingChatModel(responses=[
        plan_json({"title": "Alkanes", "description": "", "taskType": "learn", "dueDate": "2026-10-05"})
    ])
    tasks = StudyPlanScheduler(llm).generate_plan(block)

    assert [t.title for t in tasks] == ["Alkanes"]
    assert tasks[0].dueDate.isoformat() == "2026-10-05"


def test_empty_object_is_rejected(block):
    with pytest.raises(PlanGenerationError):
        StudyPlanScheduler(CountingChatModel(responses=["{}"])).generate_plan(block)
