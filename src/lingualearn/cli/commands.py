"""CLI commands for lingualearn.

Commands:
- languages: List available languages
- lessons: Show the lessons of a language
- register: Create the learner account
- status: Show streak, level and XP
- vocab / add-word / review: Manage saved vocabulary
- practice: Work through a lesson interactively

Every command resumes the stored session first, so streaks update on
each invocation exactly as they do on app start.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.table import Table

from lingualearn.config.languages import get_language
from lingualearn.core.catalog import ExerciseType
from lingualearn.core.engine import ProgressEngine
from lingualearn.core.navigator import Screen
from lingualearn.core.notifications import Notification, Severity
from lingualearn.utils.validators import ValidationError, validate_registration

app = typer.Typer(
    name="lingua",
    help="Track language-learning progress: lessons, XP, streaks and vocabulary.",
    no_args_is_help=True,
)

console = Console()

SEVERITY_STYLES = {
    Severity.INFO: "blue",
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


def _print_notification(notification: Notification) -> None:
    style = SEVERITY_STYLES[notification.severity]
    marker = "✗" if notification.severity is Severity.ERROR else "•"
    console.print(f"[{style}]{marker} {notification.message}[/{style}]")


@contextmanager
def _session() -> Iterator[ProgressEngine]:
    """Resume the stored session and echo notifications while it is open."""
    engine = ProgressEngine.from_config()
    engine.notifications.add_listener(_print_notification)
    try:
        engine.resume()
        yield engine
    finally:
        engine.notifications.remove_listener(_print_notification)
        engine.notifications.clear()


def _require_user_or_exit(engine: ProgressEngine) -> None:
    if engine.user is None:
        console.print("[red]✗ No learner registered.[/red]")
        console.print("  Run first: lingua register USERNAME --email EMAIL")
        raise typer.Exit(code=1)


def _require_language_or_exit(engine: ProgressEngine, language: str | None) -> str:
    """Select `language` if given, else keep the stored selection."""
    if language and language != engine.current_language:
        if not engine.select_language(language):
            raise typer.Exit(code=1)
    if engine.current_language is None:
        console.print("[red]✗ No language selected.[/red]")
        console.print("  Use --language, e.g. --language Spanish")
        raise typer.Exit(code=1)
    return engine.current_language


@app.command()
def languages() -> None:
    """List available languages."""
    with _session() as engine:
        table = Table(title="Languages")
        table.add_column("", width=2)
        table.add_column("Language")
        table.add_column("Locale", style="dim")
        table.add_column("Level", justify="right")

        for name in engine.languages:
            info = get_language(name)
            progress = engine.user.get_progress(name) if engine.user else None
            table.add_row(
                info.flag if info else "",
                name,
                info.locale if info else "",
                str(progress.level) if progress else "-",
            )
        console.print(table)


@app.command()
def lessons(
    language: str = typer.Argument(..., help="Language name, e.g. 'Spanish'"),
) -> None:
    """Show the lessons of a language grouped by category."""
    with _session() as engine:
        categories = engine.lessons_for(language)
        if not categories:
            console.print(f"[red]✗ Language {language} not available[/red]")
            console.print(f"  Available: {', '.join(engine.languages)}")
            raise typer.Exit(code=1)

        progress = engine.user.get_progress(language) if engine.user else None
        for category, items in categories.items():
            console.print(f"\n[bold]{category}[/bold]")
            for lesson in items:
                done = progress is not None and progress.has_completed(lesson.id)
                mark = "[green]✓[/green]" if done else " "
                console.print(
                    f"  {mark} {lesson.title:<16} [dim]{lesson.difficulty.value:<12} {lesson.id}[/dim]"
                )


@app.command()
def register(
    username: str = typer.Argument(..., help="Learner name"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(
        "", "--password", "-p", help="Password (not stored)", prompt=True, hide_input=True
    ),
) -> None:
    """Create the learner account, replacing any stored one."""
    try:
        validate_registration(username, email, password)
    except ValidationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1)

    with _session() as engine:
        engine.register_user(username, password, email)


@app.command()
def status() -> None:
    """Show streak, level and XP for every started language."""
    with _session() as engine:
        _require_user_or_exit(engine)
        user = engine.user
        step = engine.rules.level_step_xp

        console.print(f"[bold]{user.username}[/bold] [dim]<{user.email}>[/dim]")
        console.print(f"  [dim]streak:[/dim]   {user.streak} day(s)")
        console.print(f"  [dim]language:[/dim] {user.selected_language or '-'}")

        if not user.progress:
            console.print("\n[yellow]No language started yet.[/yellow]")
            return

        table = Table()
        table.add_column("Language")
        table.add_column("Level", justify="right")
        table.add_column("XP", justify="right")
        table.add_column("Next level", justify="right")
        table.add_column("Lessons", justify="right")
        table.add_column("Words", justify="right")
        for language, progress in user.progress.items():
            table.add_row(
                language,
                str(progress.level),
                str(progress.xp),
                f"{progress.xp_to_next_level(step)} XP",
                str(len(progress.completed_lessons)),
                str(len(progress.vocabulary)),
            )
        console.print(table)


@app.command()
def vocab(
    language: str | None = typer.Option(None, "--language", "-l", help="Language (default: selected)"),
) -> None:
    """List saved vocabulary."""
    with _session() as engine:
        _require_user_or_exit(engine)
        current = _require_language_or_exit(engine, language)
        progress = engine.current_progress
        entries = progress.vocabulary if progress else []
        if not entries:
            console.print(f"[yellow]No words saved for {current} yet.[/yellow]")
            return

        due = {index for index, _ in engine.due_vocabulary()}
        table = Table(title=f"{current} vocabulary")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Word")
        table.add_column("Translation")
        table.add_column("Context", style="dim")
        table.add_column("Mastery", justify="right")
        table.add_column("Due")
        for index, entry in enumerate(entries):
            table.add_row(
                str(index),
                entry.word,
                entry.translation,
                entry.context,
                f"{entry.mastery_level}/5",
                "[yellow]yes[/yellow]" if index in due else "",
            )
        console.print(table)


@app.command(name="add-word")
def add_word(
    word: str = typer.Argument(..., help="Word in the target language"),
    translation: str = typer.Argument(..., help="Translation"),
    context: str = typer.Option("", "--context", "-c", help="Example sentence"),
    language: str | None = typer.Option(None, "--language", "-l", help="Language (default: selected)"),
) -> None:
    """Save a word to the vocabulary of a language."""
    with _session() as engine:
        _require_user_or_exit(engine)
        _require_language_or_exit(engine, language)
        if engine.add_vocabulary_word(word, translation, context) is None:
            raise typer.Exit(code=1)


@app.command()
def review(
    language: str | None = typer.Option(None, "--language", "-l", help="Language (default: selected)"),
) -> None:
    """Review the words that are due."""
    with _session() as engine:
        _require_user_or_exit(engine)
        _require_language_or_exit(engine, language)
        due = engine.due_vocabulary()
        if not due:
            console.print("[green]Nothing to review. Come back later![/green]")
            return

        console.print(f"[blue]{len(due)} word(s) to review[/blue]\n")
        for index, entry in due:
            console.print(f"[bold]{entry.word}[/bold]")
            typer.prompt("  Translation", default="", show_default=False)
            console.print(f"  [dim]answer:[/dim] {entry.translation}")
            remembered = typer.confirm("  Did you remember it?", default=True)
            engine.review_vocabulary_word(index, remembered)


@app.command()
def practice(
    category: str = typer.Argument(..., help="Category, e.g. 'Basics'"),
    number: int = typer.Argument(..., help="Lesson number within the category (1-5)"),
    language: str | None = typer.Option(None, "--language", "-l", help="Language (default: selected)"),
) -> None:
    """Work through a lesson one exercise at a time."""
    with _session() as engine:
        _require_user_or_exit(engine)
        current = _require_language_or_exit(engine, language)

        lesson = engine.start_lesson(category, f"{current}-{category}-{number}")
        if lesson is None:
            raise typer.Exit(code=1)

        while engine.screen is Screen.LESSON and engine.current_exercise is not None:
            exercise = engine.current_exercise
            console.print(f"\n[bold]{exercise.prompt}[/bold] [dim]({exercise.type.value})[/dim]")

            answer: int | str | None
            if exercise.type is ExerciseType.MULTIPLE_CHOICE:
                for i, option in enumerate(exercise.options or []):
                    console.print(f"  {i}) {option}")
                answer = typer.prompt("  Choice", type=int)
            elif exercise.type is ExerciseType.TRANSLATION:
                answer = typer.prompt("  Translation")
            else:
                typer.confirm("  Done?", default=True)
                answer = None

            engine.submit_answer(exercise.id, answer)

        progress = engine.current_progress
        if progress is not None:
            console.print(
                f"\n[green]✓ {lesson.title} finished[/green]  "
                f"[dim]level {progress.level} · {progress.xp} XP[/dim]"
            )


if __name__ == "__main__":
    app()
