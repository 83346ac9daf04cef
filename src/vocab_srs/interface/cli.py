"""vocab-srs CLI: schedule simulation, session planning and configuration commands."""

import asyncio
import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, NoReturn

import typer
import yaml
from pydantic import ValidationError

from vocab_srs.application.config import resolve_config
from vocab_srs.application.factory import get_card_repository, get_session_service
from vocab_srs.application.scheduler import initialize, learning_stage, update
from vocab_srs.application.stats.service import StudySessionService
from vocab_srs.domain.errors import SchedulingError
from vocab_srs.domain.models import ReviewResult, SpacedRepetitionCard
from vocab_srs.infrastructure.adapters.deck_file import load_deck
from vocab_srs.infrastructure.clock import FixedClock, SystemClock

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="vocab-srs: spaced-repetition scheduling for vocabulary cards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage vocab-srs configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _config_error(e: ValidationError) -> NoReturn:
    typer.secho(f"Invalid option: {e.errors()[0]['msg']}", fg="red", err=True)
    raise typer.Exit(1)


def _parse_timestamp(value: str, flag: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        typer.secho(f"Invalid {flag} timestamp: {value!r}", fg="red", err=True)
        raise typer.Exit(1) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _card_step(card: SpacedRepetitionCard, quality: int | None) -> dict:
    return {
        "quality": quality,
        "easiness_factor": card.easiness_factor,
        "interval": card.interval,
        "repetitions": card.repetitions,
        "study_streak": card.study_streak,
        "mistake_count": card.mistake_count,
        "stage": learning_stage(card).value,
        "next_review": card.next_review.isoformat(),
    }


def _emit(payload: dict, fmt: str) -> None:
    if fmt == "yaml":
        typer.echo(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True))
    else:
        typer.echo(json.dumps(payload, indent=2))


async def _plan(service: StudySessionService, user_id: str, level: str):
    queue = await service.build_session(user_id, level)
    stats = await service.get_statistics(user_id)
    return queue, stats


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity. Repeat for more detail. Defaults to config.",
        ),
    ] = 0,
):
    """Global settings for vocab-srs."""
    ctx.ensure_object(dict)
    if not verbose:
        try:
            verbose = resolve_config().verbose
        except ValidationError as e:
            _config_error(e)
    ctx.obj["verbose"] = verbose
    logging.getLogger("vocab_srs").setLevel(_LOG_LEVELS.get(verbose, logging.DEBUG))


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def simulate(
    difficulty: Annotated[str, typer.Argument(help="beginner, intermediate or advanced.")],
    qualities: Annotated[list[int], typer.Argument(help="Quality ratings (0-5), in order.")],
    category: Annotated[str, typer.Option(help="Content category label.")] = "vocabulary",
    start: Annotated[
        str | None, typer.Option(help="ISO timestamp the card is created at. Defaults to now.")
    ] = None,
    response_time_ms: Annotated[
        int | None, typer.Option(help="Response time applied to every review.")
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", help="Output format: json or yaml. Defaults to config."),
    ] = None,
):
    """[bold green]Replay[/bold green] a series of reviews on a fresh card.

    Each review happens at the moment the card becomes due. A rating of 3
    or more counts as a correct answer.
    """
    try:
        config = resolve_config({"output_format": output_format})
    except ValidationError as e:
        _config_error(e)
    now = _parse_timestamp(start, "--start") if start else SystemClock().now()

    try:
        card = initialize("simulated", "cli", difficulty, category, now)
        steps = [_card_step(card, None)]
        for quality in qualities:
            result = ReviewResult(
                quality=quality,
                was_correct=quality >= 3,
                response_time_ms=response_time_ms,
            )
            card = update(card, result, card.next_review)
            steps.append(_card_step(card, quality))
    except SchedulingError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from None

    logger.info(f"Simulated {len(qualities)} reviews for a {difficulty} {category} card")
    _emit(
        {
            "difficulty": card.difficulty_level.value,
            "category": category,
            "created_at": card.created_at.isoformat(),
            "steps": steps,
        },
        config.output_format,
    )


@app.command()
def session(
    deck: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="YAML file listing the cards.")
    ],
    user: Annotated[str, typer.Option("--user", help="Learner whose cards are planned.")],
    level: Annotated[
        str | None, typer.Option(help="Learner level, which sets the daily load. Defaults to config.")
    ] = None,
    at: Annotated[
        str | None, typer.Option(help="ISO timestamp to plan for. Defaults to now.")
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", help="Output format: json or yaml. Defaults to config."),
    ] = None,
):
    """[bold green]Plan[/bold green] today's reviews for one learner.

    Prints the priority-ordered queue, truncated to the recommended daily
    load, along with statistics over every card the learner owns.
    """
    try:
        config = resolve_config({"learner_level": level, "output_format": output_format})
    except ValidationError as e:
        _config_error(e)
    clock = FixedClock(_parse_timestamp(at, "--at")) if at else SystemClock()

    try:
        cards = load_deck(deck)
    except SchedulingError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from None

    service = get_session_service(
        config, card_repo=get_card_repository(config, cards), clock=clock
    )
    queue, stats = asyncio.run(_plan(service, user, config.learner_level))

    _emit(
        {
            "user_id": user,
            "level": config.learner_level,
            "as_of": clock.now().isoformat(),
            "daily_target": queue.daily_target,
            "backlog": queue.backlog,
            "queue": [
                {
                    "id": card.id,
                    "phrase_id": card.phrase_id,
                    "category": card.category,
                    "stage": learning_stage(card).value,
                    "next_review": card.next_review.isoformat(),
                }
                for card in queue.cards
            ],
            "statistics": dataclasses.asdict(stats),
        },
        config.output_format,
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    typer.echo(json.dumps(config.model_dump(), indent=2))
