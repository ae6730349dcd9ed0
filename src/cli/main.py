"""
Typer CLI for subnet-trainer.

Commands:
    subnet-trainer binary     - Drill binary / hex / decimal conversions
    subnet-trainer subnet     - Drill subnetting, VLSM, wildcard and IPv6 questions
    subnet-trainer calc       - Show the arithmetic for an address and prefix
    subnet-trainer progress   - Show mastery per area and recent sessions

Usage:
    subnet-trainer --help
    subnet-trainer binary --type bin2dec --difficulty easy --count 5
    subnet-trainer subnet --type vlsm --difficulty medium --locale nl
    subnet-trainer calc 192.168.1.130/26
    subnet-trainer calc 10.4.7.1 --mask 255.255.240.0
"""

from __future__ import annotations

import sys
import time
from typing import Optional

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from config import get_settings
from src.delivery.phrases import PhraseTable, get_phrase_table
from src.delivery.renderer import render
from src.generation.binary_generator import generate_binary_question
from src.generation.errors import InvalidParameterError
from src.generation.models import ConversionType, Difficulty, SubnetType, parse_choice
from src.generation.subnet_generator import generate_subnetting_question
from src.grading.answer_checker import check_answer, check_binary_answer
from src.netmath import ipv4

app = typer.Typer(
    help="subnet-trainer CLI: number conversion and IP subnetting drills",
    no_args_is_help=True,
)

console = Console()

STYLES = {
    "correct": "bold green",
    "incorrect": "bold red",
    "info": "bold cyan",
}


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    Practice binary conversions and IP subnetting in the terminal.

    Every drill is recorded as a practice session; see `progress`.
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else get_settings().log_level)


def _fail(message: str) -> None:
    rprint(f"[red]✗ {escape(message)}[/red]")
    raise typer.Exit(code=2)


def _resolve_phrases(locale: Optional[str]) -> PhraseTable:
    try:
        return get_phrase_table(locale)
    except InvalidParameterError as exc:
        _fail(str(exc))


def _show_feedback(correct: bool, expected: str, explanation: str) -> None:
    if correct:
        console.print(f"[{STYLES['correct']}]✓ Correct[/{STYLES['correct']}]")
        return
    console.print(
        Panel(
            f"[bold]Expected:[/bold] {escape(expected)}\n\n{escape(explanation)}",
            title="Explanation",
            title_align="left",
            border_style=STYLES["incorrect"],
            padding=(1, 2),
        )
    )


def _record_session(
    topic: str, subtype: str, score: int, total: int, difficulty: str, started: float
) -> None:
    """Store the drill; a database failure is reported but does not lose the score display."""
    from src.db.database import init_db, session_scope
    from src.study.session_store import PracticeSessionStore

    try:
        init_db()
        with session_scope() as session:
            PracticeSessionStore(session).record(
                topic=topic,
                subtype=subtype,
                score=score,
                total_questions=total,
                difficulty=difficulty,
                time_spent_seconds=int(time.monotonic() - started),
            )
    except Exception as exc:
        logger.exception("Failed to record practice session")
        rprint(f"[yellow]⚠[/yellow] Session not saved: {escape(str(exc))}")


def _display_summary(score: int, total: int, started: float) -> None:
    percent = round(100 * score / total) if total else 0
    console.print(
        Panel(
            f"[bold]Drill Complete![/bold]\n\n"
            f"Score: {score}/{total} ({percent}%)\n"
            f"Duration: {time.monotonic() - started:.0f} seconds",
            title="Summary",
            border_style="green",
        )
    )


# ========================================
# DRILL COMMANDS
# ========================================


@app.command("binary")
def binary_drill(
    conversion_type: str = typer.Option(
        "bin2dec", "--type", "-t", help="bin2dec, bin2hex, hex2bin, dec2bin, dec2hex, hex2dec"
    ),
    difficulty: str = typer.Option("easy", "--difficulty", "-d", help="easy, medium, hard"),
    count: Optional[int] = typer.Option(
        None, "--count", "-n", min=1, help="Number of questions (default: from config)"
    ),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Prompt language (en, nl)"),
) -> None:
    """
    Drill number-base conversions.

    Examples:
        subnet-trainer binary --type hex2bin --difficulty medium
        subnet-trainer binary -t dec2hex -d hard -n 3
    """
    try:
        conversion = parse_choice(ConversionType, conversion_type, "conversion type")
        level = parse_choice(Difficulty, difficulty, "difficulty")
    except InvalidParameterError as exc:
        _fail(str(exc))
    phrases = _resolve_phrases(locale)
    total = count or get_settings().cli_questions_per_session

    rprint(f"\n[{STYLES['info']}]Conversion drill: {conversion.value} ({level.value})[/{STYLES['info']}]\n")
    started = time.monotonic()
    score = 0
    for number in range(1, total + 1):
        question = generate_binary_question(conversion, level, phrases=phrases)
        console.print(f"[dim]{number}/{total}[/dim] {escape(question.question)}")
        user_answer = Prompt.ask("Answer", default="", show_default=False)

        correct = check_binary_answer(user_answer, question.answer)
        score += correct
        _show_feedback(correct, question.answer, render(question.explanation, phrases))

    _display_summary(score, total, started)
    _record_session("binary", conversion.value, score, total, level.value, started)


@app.command("subnet")
def subnet_drill(
    subnet_type: str = typer.Option(
        "basic",
        "--type",
        "-t",
        help="basic, vlsm, wildcard, network, subnets-count, hosts-per-subnet, summarization, ipv6",
    ),
    difficulty: str = typer.Option("easy", "--difficulty", "-d", help="easy, medium, hard"),
    count: Optional[int] = typer.Option(
        None, "--count", "-n", min=1, help="Number of questions (default: from config)"
    ),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Prompt language (en, nl)"),
) -> None:
    """
    Drill IP addressing questions.

    A question counts as correct only when every answer field is correct.

    Examples:
        subnet-trainer subnet --type vlsm --difficulty medium
        subnet-trainer subnet -t ipv6 -d hard -n 3 -l nl
    """
    try:
        kind = parse_choice(SubnetType, subnet_type, "subnet type")
        level = parse_choice(Difficulty, difficulty, "difficulty")
    except InvalidParameterError as exc:
        _fail(str(exc))
    phrases = _resolve_phrases(locale)
    total = count or get_settings().cli_questions_per_session

    rprint(f"\n[{STYLES['info']}]Subnetting drill: {kind.value} ({level.value})[/{STYLES['info']}]\n")
    started = time.monotonic()
    score = 0
    for number in range(1, total + 1):
        question = generate_subnetting_question(kind, level, phrases=phrases)
        console.print(Panel(escape(question.question_text), title=f"{number}/{total}", border_style="cyan"))

        all_correct = True
        for answer_field in question.answer_fields:
            user_answer = Prompt.ask(escape(answer_field.label), default="", show_default=False)
            correct = check_answer(answer_field, user_answer, question.question_text)
            all_correct = all_correct and correct
            if not correct:
                console.print(f"  [red]✗[/red] expected {escape(answer_field.answer)}")

        score += all_correct
        _show_feedback(
            all_correct,
            ", ".join(answer_field.answer for answer_field in question.answer_fields),
            render(question.explanation, phrases),
        )

    _display_summary(score, total, started)
    _record_session("subnet", kind.value, score, total, level.value, started)


# ========================================
# CALCULATOR
# ========================================


def _parse_target(target: str, mask: Optional[str]) -> tuple[str, str]:
    """Split `address/prefix` or `address/mask`, or combine an address with --mask."""
    address, _, suffix = target.partition("/")
    if suffix and mask:
        raise ValueError("Give either a /prefix or --mask, not both")
    suffix = suffix or mask
    if not suffix:
        raise ValueError("Missing prefix: use a.b.c.d/nn or --mask")
    if "." in suffix:
        if not ipv4.is_contiguous_mask(suffix):
            raise ValueError(f"Not a contiguous subnet mask: {suffix}")
        return ipv4.format_ipv4(ipv4.parse_ipv4(address)), suffix
    if not suffix.isdigit() or not 0 <= int(suffix) <= ipv4.ADDRESS_BITS:
        raise ValueError(f"Invalid prefix length: /{suffix}")
    return ipv4.format_ipv4(ipv4.parse_ipv4(address)), ipv4.prefix_to_mask(int(suffix))


@app.command("calc")
def calc(
    target: str = typer.Argument(..., help="Address with prefix or mask, e.g. 192.168.1.130/26"),
    mask: Optional[str] = typer.Option(None, "--mask", "-m", help="Dotted-decimal subnet mask"),
) -> None:
    """
    Show network, broadcast, host range and mask forms for an address.

    Examples:
        subnet-trainer calc 192.168.1.130/26
        subnet-trainer calc 172.16.35.9 --mask 255.255.240.0
    """
    try:
        address, subnet_mask = _parse_target(target, mask)
    except ValueError as exc:
        _fail(str(exc))

    prefix = ipv4.mask_to_prefix(subnet_mask)
    network = ipv4.network_address(address, subnet_mask)
    broadcast = ipv4.broadcast_address(network, subnet_mask)

    table = Table(title=f"{address}/{prefix}", show_header=True)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="bold")

    table.add_row("Subnet mask", subnet_mask)
    table.add_row("CIDR", f"/{prefix}")
    table.add_row("Wildcard mask", ipv4.wildcard_mask(subnet_mask))
    table.add_row("Network address", network)
    table.add_row("Broadcast address", broadcast)
    if prefix <= 30:
        table.add_row("First host", ipv4.first_host(network))
        table.add_row("Last host", ipv4.last_host(broadcast))
    else:
        table.add_row("First host", "-")
        table.add_row("Last host", "-")
    table.add_row("Usable hosts", str(max(0, ipv4.usable_host_count(prefix))))
    table.add_row("Total addresses", str(ipv4.total_address_count(prefix)))
    if 0 < prefix < ipv4.ADDRESS_BITS:
        table.add_row("Interesting octet", str(ipv4.interesting_octet(subnet_mask)))
        table.add_row("Block size", str(ipv4.subnet_increment(subnet_mask)))

    console.print(table)


# ========================================
# PROGRESS
# ========================================


@app.command("progress")
def progress(
    user_id: Optional[int] = typer.Option(None, "--user", help="Limit to one user id"),
) -> None:
    """Show mastery per area and the most recent practice sessions."""
    from src.db.database import init_db, session_scope
    from src.study.session_store import PracticeSessionStore

    init_db()
    with session_scope() as session:
        summary = PracticeSessionStore(session).progress(user_id=user_id)

        table = Table(title="Mastery", show_header=True)
        table.add_column("Area", style="cyan")
        table.add_column("Correct", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Mastery", justify="right", style="bold")
        for name, area in (
            ("Binary", summary.binary),
            ("Subnetting", summary.subnetting),
            ("VLSM", summary.vlsm),
        ):
            table.add_row(name, str(area.correct), str(area.total), f"{area.mastery}%")
        console.print(table)

        if not summary.recent_activity:
            rprint("\n[dim]No practice sessions yet. Start with `subnet-trainer binary`.[/dim]")
            return

        recent = Table(title="Recent Activity", show_header=True)
        recent.add_column("When", style="dim")
        recent.add_column("Topic", style="cyan")
        recent.add_column("Subtype")
        recent.add_column("Difficulty")
        recent.add_column("Score", justify="right", style="bold")
        for entry in summary.recent_activity:
            recent.add_row(
                f"{entry['timestamp']:%Y-%m-%d %H:%M}" if entry["timestamp"] else "-",
                entry["topic"],
                entry["subtype"],
                entry["difficulty"],
                f"{entry['score']}/{entry['total_questions']}",
            )
        console.print(recent)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
