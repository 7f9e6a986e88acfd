import typer
from rich.console import Console
from rich.table import Table
from rich.markdown import Markdown
from typing import Optional, List
from datetime import datetime, date

from backend.auth import register_user
from backend.database import SessionLocal, init_db
from backend.crud import (
    get_user_by_email, get_study_blocks, get_study_block,
    create_plan_tasks, get_task, save_task_summary,
    get_tasks_due_on, get_block_progress
)
from backend.errors import AppError
from backend.llm import get_llm
from backend.logging_config import configure_logging
from backend.scheduler import StudyPlanScheduler
from backend.study_materials import StudyMaterialGenerator

app = typer.Typer(help="Study Planner CLI - AI-generated study plans from your course material")
console = Console()


def _require_user(db, email: str):
    user = get_user_by_email(db, email)
    if not user:
        console.print(f"[red]✗[/red] No user with email {email}")
        raise typer.Exit(code=1)
    return user


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    configure_logging("DEBUG" if verbose else None)


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")

@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from backend.database import engine, Base
    import backend.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")

@app.command()
def create_user(
    email: str = typer.Option(..., prompt="Email"),
    name: str = typer.Option("", prompt="Name"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True)
):
    """Create a user account"""
    db = SessionLocal()
    try:
        user = register_user(db, email, password, name or None)
        console.print(f"[green]✓[/green] User created! ID: {user.id}")
    except AppError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload on code changes")
):
    """Run the HTTP API with uvicorn"""
    import uvicorn
    uvicorn.run("backend.main:create_app", factory=True, host=host, port=port, reload=reload)

@app.command()
def list_blocks(email: str = typer.Option(..., prompt="User email")):
    """List a user's study blocks with progress"""
    db = SessionLocal()
    try:
        user = _require_user(db, email)
        blocks = get_study_blocks(db, user.id)
        if not blocks:
            console.print(f"[yellow]No study blocks for {email}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Test Date", style="yellow")
        table.add_column("Hours/Day", justify="right")
        table.add_column("Days")
        table.add_column("Progress", style="blue", justify="right")

        for block in blocks:
            progress = get_block_progress(block)
            table.add_row(
                str(block.id),
                block.title,
                block.end_date.strftime("%Y-%m-%d"),
                f"{block.total_hours:g}",
                ", ".join(block.days_of_week),
                f"{progress['completed']}/{progress['total']} ({progress['percent']}%)"
            )

        console.print(table)
    finally:
        db.close()

@app.command()
def generate_plan(
    email: str = typer.Option(..., prompt="User email"),
    block_id: int = typer.Option(..., prompt="Study block ID")
):
    """Generate the task list for a study block"""
    db = SessionLocal()
    try:
        user = _require_user(db, email)
        block = get_study_block(db, block_id, user.id)
        if not block:
            console.print(f"[red]✗[/red] Study block {block_id} not found")
            raise typer.Exit(code=1)

        console.print(f"[yellow]Generating plan for '{block.title}' (this may take a moment)...[/yellow]")
        tasks = StudyPlanScheduler(get_llm()).generate_plan(block)
        generation = create_plan_tasks(db, block, tasks)

        console.print(f"\n[green]✓[/green] [bold]{len(generation.tasks)} tasks created![/bold]\n")
        _print_tasks(generation.tasks)
    except AppError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command()
def generate_summary(
    email: str = typer.Option(..., prompt="User email"),
    task_id: int = typer.Option(..., prompt="Task ID")
):
    """Generate study materials for a task and print them"""
    db = SessionLocal()
    try:
        user = _require_user(db, email)
        task = get_task(db, task_id, user.id)
        if not task:
            console.print(f"[red]✗[/red] Task {task_id} not found")
            raise typer.Exit(code=1)

        console.print(f"[yellow]Generating {task.task_type} materials...[/yellow]")
        summary, materials = StudyMaterialGenerator(get_llm()).generate(task)
        save_task_summary(db, task, summary, materials)
        console.print(Markdown(summary))
    except AppError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command()
def today(
    email: str = typer.Option(..., prompt="User email"),
    day: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Day (YYYY-MM-DD), default: today")
):
    """Show tasks due today"""
    db = SessionLocal()
    try:
        user = _require_user(db, email)
        target = day.date() if day else date.today()
        tasks = get_tasks_due_on(db, user.id, target)
        if not tasks:
            console.print(f"[yellow]Nothing due on {target}[/yellow]")
            return
        _print_tasks(tasks, show_block=True)
    finally:
        db.close()


def _print_tasks(tasks: List, show_block: bool = False):
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Due", style="yellow", width=12)
    table.add_column("Type", style="blue")
    table.add_column("Title", style="green")
    if show_block:
        table.add_column("Block")
    table.add_column("Done", justify="center")

    for task in tasks:
        row = [str(task.id), task.due_date.strftime("%Y-%m-%d"), task.task_type, task.title]
        if show_block:
            row.append(task.study_block.title)
        row.append("✓" if task.completed else "")
        table.add_row(*row)

    console.print(table)

if __name__ == "__main__":
    app()
