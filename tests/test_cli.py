from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool
from typer.testing import CliRunner

import cli
from backend.config import settings
from backend.models import Task, User
from tests.conftest import plan_json, set_responses

runner = CliRunner()


@pytest.fixture
def user(db, monkeypatch, session_factory):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)
    user = User(email="alice@example.com", password_hash="x", name="Alice")
    db.add(user)
    db.commit()
    return user


def test_init_creates_tables(monkeypatch):
    fresh = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    monkeypatch.setattr("backend.database.engine", fresh)

    result = runner.invoke(cli.app, ["init"])
    assert result.exit_code == 0
    assert "Database initialized" in result.output
    assert {"users", "study_blocks", "tasks", "plan_generations"} <= set(inspect(fresh).get_table_names())
    fresh.dispose()


def test_unknown_user_exits_with_error(user):
    result = runner.invoke(cli.app, ["list-blocks", "--email", "nobody@example.com"])
    assert result.exit_code == 1
    assert "No user with email nobody@example.com" in result.output


def test_list_blocks_shows_progress(user, seed_block):
    seed_block(user.id, title="Biology", tasks=[{"completed": True}, {}])

    result = runner.invoke(cli.app, ["list-blocks", "--email", user.email])
    assert result.exit_code == 0
    assert "Biology" in result.output
    assert "1/2 (50%)" in result.output


def test_generate_plan_stores_tasks(user, seed_block, fake_llm, monkeypatch, db):
    block = seed_block(user.id, title="Biology")
    set_responses(fake_llm, plan_json(
        {"title": "Leaves", "description": "", "taskType": "learn", "dueDate": "2026-10-06"},
        {"title": "Cell quiz", "description": "", "taskType": "review", "dueDate": "2026-10-08"},
    ))
    monkeypatch.setattr(cli, "get_llm", lambda: fake_llm)

    result = runner.invoke(cli.app, ["generate-plan", "--email", user.email, "--block-id", str(block.id)])
    assert result.exit_code == 0
    assert "2 tasks created" in result.output
    assert db.query(Task).filter_by(study_block_id=block.id).count() == 2


def test_generate_plan_for_foreign_block(user, seed_block, fake_llm, monkeypatch, db):
    other = User(email="bob@example.com", password_hash="x")
    db.add(other)
    db.commit()
    block = seed_block(other.id)
    monkeypatch.setattr(cli, "get_llm", lambda: fake_llm)

    result = runner.invoke(cli.app, ["generate-plan", "--email", user.email, "--block-id", str(block.id)])
    assert result.exit_code == 1
    assert "not found" in result.output
    assert fake_llm.calls == 0


def test_generate_plan_without_provider_key(user, seed_block, monkeypatch, db):
    block = seed_block(user.id)
    monkeypatch.setattr(settings, "ai_provider", "claude")
    monkeypatch.setattr(settings, "claude_api_key", None)

    result = runner.invoke(cli.app, ["generate-plan", "--email", user.email, "--block-id", str(block.id)])
    assert result.exit_code == 1
    assert "CLAUDE_API_KEY not set" in result.output
    assert not isinstance(result.exception, ValueError)
    assert db.query(Task).count() == 0


def test_generate_summary_without_provider_key(user, seed_block, monkeypatch):
    block = seed_block(user.id, tasks=[{"title": "Leaves"}])
    monkeypatch.setattr(settings, "ai_provider", "claude")
    monkeypatch.setattr(settings, "claude_api_key", None)

    result = runner.invoke(cli.app, ["generate-summary", "--email", user.email, "--task-id", str(block.tasks[0].id)])
    assert result.exit_code == 1
    assert "CLAUDE_API_KEY not set" in result.output


def test_today_lists_tasks_due_that_day(user, seed_block):
    seed_block(user.id, title="Biology", tasks=[
        {"title": "Leaves", "due_date": datetime(2026, 10, 5)},
        {"title": "Roots", "due_date": datetime(2026, 10, 6)},
    ])

    result = runner.invoke(cli.app, ["today", "--email", user.email, "--day", "2026-10-05"])
    assert result.exit_code == 0
    assert "Leaves" in result.output
    assert "Roots" not in result.output

    result = runner.invoke(cli.app, ["today", "--email", user.email, "--day", "2026-10-07"])
    assert result.exit_code == 0
    assert "Nothing due on 2026-10-07" in result.output


def test_today_rejects_invalid_day(user):
    result = runner.invoke(cli.app, ["today", "--email", user.email, "--day", "2026-13-01"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
