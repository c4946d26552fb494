"""Click CLI for storyquest — read stories and manage the content cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click
import openai
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from storyquest.config.hierarchy import load_config_hierarchy
from storyquest.errors.exceptions import StoryQuestError
from storyquest.types import Character, ReaderProfile, Story, StoryResult

if TYPE_CHECKING:
    from storyquest.cache.storage import SqliteStore

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(default_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def _open_store(ctx: click.Context) -> SqliteStore:
    from storyquest.cache.storage import SqliteStore

    store_path = ctx.obj.get("store_path")
    return SqliteStore(Path(store_path) if store_path else None)


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


@click.group()
@click.version_option(package_name="storyquest")
@click.option("--store", "store_path", type=click.Path(dir_okay=False), default=None,
              help="Path of the local store database.")
@click.pass_context
def cli(ctx: click.Context, store_path: str | None) -> None:
    """storyquest — AI science stories for young readers."""
    config = load_config_hierarchy(store_path=store_path)
    ctx.obj = {"config": config, "store_path": config.get("store_path")}


@cli.command()
@click.option("--user", "owner", required=True, help="Reader id.")
@click.option("--character", type=click.Choice([c.value for c in Character]), default=None,
              help="Companion character. Defaults to the saved profile.")
@click.option("--age", type=click.IntRange(6, 10), default=None,
              help="Reader age. Defaults to the saved profile.")
@click.option("--gender", type=str, default=None, help="Defaults to the saved profile.")
@click.option("--story-number", type=int, default=1, show_default=True)
@click.option("--no-cache", is_flag=True, default=False, help="Skip the content cache.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
@click.pass_context
def read(
    ctx: click.Context,
    owner: str,
    character: str | None,
    age: int | None,
    gender: str | None,
    story_number: int,
    no_cache: bool,
    verbose: int,
) -> None:
    """Generate (or reuse) the next story for a reader.

    Profile options given here are saved for the reader, so later runs
    only need --user.
    """
    config = ctx.obj["config"]
    _setup_logging(verbose, config.get("log_level", "WARNING"))

    from storyquest.cache.manager import ContentCache
    from storyquest.generation.client import OpenAIGenerationClient
    from storyquest.story.history import StoryHistory
    from storyquest.story.profile import ProfileStore
    from storyquest.story.service import StoryService

    store = _open_store(ctx)
    try:
        profiles = ProfileStore(store)
        profile = _resolve_profile(profiles.get(owner), character, age, gender)
        profiles.save(owner, profile)

        try:
            generator = OpenAIGenerationClient(
                api_key=config.get("api_key"),
                base_url=config.get("base_url"),
                image_model=config["image_model"],
                max_retries=config["max_retries"],
            )
        except openai.OpenAIError as e:
            _fail(f"Cannot create the generation client: {e}")

        use_cache = not (no_cache or config.get("cache_disabled"))
        service = StoryService(
            generator=generator,
            history_factory=lambda reader: StoryHistory(store, reader),
            cache=ContentCache(store) if use_cache else None,
            text_model=config["text_model"],
            story_max_tokens=config["story_max_tokens"],
            quiz_max_tokens=config["quiz_max_tokens"],
            image_size=config["image_size"],
            image_quality=config["image_quality"],
            story_cache_probability=config["story_cache_probability"],
        )

        async def _run() -> StoryResult:
            try:
                return await service.read_story(owner, profile.character, profile, story_number)
            finally:
                await generator.close()

        result = asyncio.run(_run())
    except StoryQuestError as e:
        _fail(str(e))
    finally:
        store.close()

    _print_story(result)


def _resolve_profile(
    saved: ReaderProfile | None,
    character: str | None,
    age: int | None,
    gender: str | None,
) -> ReaderProfile:
    if saved is not None:
        character = character or saved.character
        age = age if age is not None else saved.age
        gender = gender or saved.gender
    if character is None or age is None or gender is None:
        raise click.UsageError(
            "No saved profile for this reader. Pass --character, --age and --gender."
        )
    return ReaderProfile(character=Character(character), age=age, gender=gender)


def _print_questions(story: Story, reveal: bool = False) -> None:
    for i, q in enumerate(story.questions):
        console.print()
        console.print(f"[cyan]{i + 1}. {q.question}[/cyan]")
        picked = story.answers[i] if story.answers and i < len(story.answers) else None
        for j, (letter, option) in enumerate(zip("ABCD", q.options, strict=False)):
            marks = ""
            if reveal and j == q.correct_answer:
                marks += " [green](correct)[/green]"
            if reveal and j == picked:
                marks += " [yellow](your answer)[/yellow]"
            console.print(f"   {letter}) {option}{marks}")
        if reveal and q.explanation:
            console.print(f"   [dim]{q.explanation}[/dim]")


def _print_story(result: StoryResult) -> None:
    story = result.story
    console.print(f"[bold]{story.title}[/bold]")
    console.print(f"[dim]Story id: {story.id}[/dim]")
    if story.mood_image:
        console.print(f"[dim]Illustration: {story.mood_image}[/dim]")
    console.print()
    console.print(story.content)
    _print_questions(story)

    sources = []
    if result.story_from_cache:
        sources.append("story")
    if result.image_from_cache:
        sources.append("image")
    if sources:
        error_console.print(f"[green]From cache:[/green] {', '.join(sources)}")


def _score_line(story: Story) -> str:
    from storyquest.story.history import score_answers

    if story.answers is None:
        return "-"
    return f"{score_answers(story.questions, story.answers)}/{len(story.questions)}"


@cli.command()
@click.option("--user", "owner", required=True, help="Reader id.")
@click.option("--story-id", required=True, help="Id printed when the story was read.")
@click.argument("answers", nargs=-1, required=True, type=click.IntRange(0, 3))
@click.pass_context
def answer(ctx: click.Context, owner: str, story_id: str, answers: tuple[int, ...]) -> None:
    """Submit quiz answers (option numbers 0-3, one per question) and show the score."""
    from storyquest.cache.expiry import utc_now
    from storyquest.story.history import StoryHistory

    store = _open_store(ctx)
    try:
        history = StoryHistory(store, owner)
        story = history.get(story_id)
        if story is None:
            _fail(f"No story '{story_id}' for reader '{owner}'")
        if len(answers) != len(story.questions):
            raise click.BadParameter(
                f"expected {len(story.questions)} answers, got {len(answers)}",
                param_hint="ANSWERS",
            )
        story = history.complete(story_id, list(answers), utc_now())
    finally:
        store.close()

    _print_questions(story, reveal=True)
    console.print()
    console.print(f"[bold]Score: {_score_line(story)}[/bold]")


@cli.command("history")
@click.option("--user", "owner", required=True, help="Reader id.")
@click.option("--story-id", default=None, help="Show one story in full.")
@click.pass_context
def history(ctx: click.Context, owner: str, story_id: str | None) -> None:
    """List the stories a reader has been shown, or show one of them."""
    from storyquest.story.history import StoryHistory

    store = _open_store(ctx)
    try:
        stories = StoryHistory(store, owner).list()
    finally:
        store.close()

    if story_id is not None:
        story = next((s for s in stories if s.id == story_id), None)
        if story is None:
            _fail(f"No story '{story_id}' for reader '{owner}'")
        _print_story_detail(story)
        return

    table = Table(title=f"Stories for {owner}", show_header=True)
    table.add_column("#", style="cyan")
    table.add_column("Id", style="dim")
    table.add_column("Title")
    table.add_column("Topic")
    table.add_column("Score", no_wrap=True)
    table.add_column("Created")

    for story in stories:
        table.add_row(
            str(story.story_number),
            story.id,
            story.title,
            story.science_topic,
            _score_line(story),
            story.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


def _print_story_detail(story: Story) -> None:
    console.print(f"[bold]Adventure #{story.story_number}: {story.title}[/bold]")
    console.print(f"Topic: {story.science_topic}")
    console.print(f"Created: {story.created_at.strftime('%Y-%m-%d %H:%M')}")
    if story.completed_at is not None:
        console.print(f"Completed: {story.completed_at.strftime('%Y-%m-%d %H:%M')}")
    if story.mood_image:
        console.print(f"Illustration: {story.mood_image}")
    console.print()
    console.print(story.content)
    _print_questions(story, reveal=True)
    if story.answers is not None:
        console.print()
        console.print(f"[bold]Score: {_score_line(story)}[/bold]")


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@click.pass_context
def cache_stats(ctx: click.Context) -> None:
    """Show cache statistics."""
    from storyquest.cache.manager import ContentCache

    store = _open_store(ctx)
    try:
        stats = ContentCache(store).stats()
    finally:
        store.close()

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Stories", str(stats.total_stories))
    table.add_row("Images", str(stats.total_images))
    table.add_row("Size", stats.cache_size)
    table.add_row("Oldest entry", stats.oldest_entry)
    table.add_row("Newest entry", stats.newest_entry)

    console.print(table)


@cache.command("clear")
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
@click.pass_context
def cache_clear(ctx: click.Context) -> None:
    """Clear all cached stories and images."""
    from storyquest.cache.manager import ContentCache

    store = _open_store(ctx)
    try:
        ContentCache(store).clear_all()
    finally:
        store.close()
    console.print("[green]Cache cleared.[/green]")


@cache.command("clear-expired")
@click.pass_context
def cache_clear_expired(ctx: click.Context) -> None:
    """Remove expired stories and images."""
    from storyquest.cache.manager import ContentCache

    store = _open_store(ctx)
    try:
        removed = ContentCache(store).clear_expired()
    finally:
        store.close()
    console.print(f"[green]Removed {removed} expired entries.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
