# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help, usage and error text for Optbind parse results, rendered with Rich.

Functions:
- format_error: One-line English message for a `ParsingError`.
- render_errors: Print the meaningful errors of a failed `ParseResult`.
- get_usage: Usage line for a `SpecificationModel`.
- render_help: Usage, description, positional values and options of a model.
- render_verbs: The verbs available to `CommandLineParser.parse_verbs()`.
- render_result: Print whatever a failed result calls for (help, version or errors).

Layout is intentionally simple: one line per option, with the help text in a
second column.
"""
from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.markup import escape

from optbind.console import console as default_console
from optbind.errors import (
    BadFormatConversionError,
    BadFormatTokenError,
    BadVerbSelectedError,
    HelpRequestedError,
    HelpVerbRequestedError,
    MissingRequiredOptionError,
    MissingValueOptionError,
    MutuallyExclusiveSetError,
    NoVerbSelectedError,
    ParsingError,
    SequenceOutOfRangeError,
    UnknownOptionError,
    VersionRequestedError,
)
from optbind.parser.parse_result import ParseResult
from optbind.parser.specification import SpecificationModel
from optbind.utils import get_program_invocation
from optbind.version import __version__

COLUMN_WIDTH = 30


def format_error(error: ParsingError) -> str:
    """Return a one-line message naming the offending option or token."""
    match error:
        case BadFormatTokenError(token=token):
            return f"Token '{token}' is not recognized."
        case UnknownOptionError(token=token):
            return f"Option '{token}' is unknown."
        case MissingValueOptionError(name_info=name_info):
            return f"Option '{name_info}' has no value."
        case BadFormatConversionError(name_info=name_info):
            return f"Option '{name_info}' is defined with a bad format."
        case MissingRequiredOptionError(name_info=name_info):
            return f"Required option '{name_info}' is missing."
        case SequenceOutOfRangeError(name_info=name_info):
            return (
                f"A sequence option '{name_info}' is defined with fewer or more "
                "items than required."
            )
        case MutuallyExclusiveSetError(name_info=name_info, set_name=set_name):
            return (
                f"Option '{name_info}' is not compatible with the other options "
                f"of set '{set_name}'."
            )
        case NoVerbSelectedError():
            return "No verb selected."
        case BadVerbSelectedError(token=token):
            return f"Verb '{token}' is not recognized."
        case HelpVerbRequestedError(verb=verb, matched=matched):
            if verb and not matched:
                return f"Help requested for unknown verb '{verb}'."
            return "Help requested."
        case HelpRequestedError():
            return "Help requested."
        case VersionRequestedError():
            return "Version requested."
    return f"Unknown error: {error!r}"


def render_errors(
    result: ParseResult | Sequence[ParsingError], console: Console | None = None
) -> None:
    """Print every error that describes bad input."""
    console = console or default_console
    errors = result.errors if isinstance(result, ParseResult) else tuple(result)
    meaningful = [error for error in errors if not error.stops_processing]
    if not meaningful:
        return
    console.print("[bold red]ERROR(S):[/bold red]")
    for error in meaningful:
        console.print(f"  {escape(format_error(error))}")


def get_options_text(model: SpecificationModel, plain_text: bool = False) -> str:
    """Render all specifications as a compact usage fragment."""
    options_list = []
    for spec in model.options:
        flag = spec.flags[0]
        choice_text = spec.get_choice_text()
        text = f"{flag} {choice_text}" if choice_text else flag
        options_list.append(text if spec.required else f"[{text}]")

    for spec in model.values:
        choice_text = spec.get_choice_text()
        options_list.append(choice_text if spec.required else f"[{choice_text}]")

    joined = " ".join(options_list)
    return joined if plain_text else escape(joined)


def get_usage(model: SpecificationModel, plain_text: bool = False) -> str:
    """Return the usage line: program, verb and option syntax."""
    program = model.program or get_program_invocation()
    parts = [program]
    if model.verb:
        parts.append(model.verb)
    options_text = get_options_text(model, plain_text)
    if options_text:
        parts.append(options_text)
    return " ".join(parts)


def _print_row(console: Console, left: str, help_text: str) -> None:
    row = f"  {escape(left):<{COLUMN_WIDTH}} "
    if help_text and len(left) > COLUMN_WIDTH:
        help_text = f"\n{'':<{COLUMN_WIDTH + 3}}{help_text}"
    console.print(f"{row}{escape(help_text)}")


def render_help(
    model: SpecificationModel,
    heading: str | None = None,
    console: Console | None = None,
    auto_help: bool = True,
    auto_version: bool = True,
) -> None:
    """
    Print formatted help text for a model using Rich output.

    Includes an optional heading, the usage line, the description, positional
    values and options, plus the built-in `--help`/`--version` entries.
    """
    console = console or default_console
    if heading:
        console.print(f"[bold]{escape(heading)}[/bold]\n")
    console.print(f"[bold]usage: {get_usage(model)}[/bold]\n")

    if model.help_text:
        console.print(escape(model.help_text) + "\n")

    if model.values:
        console.print("[bold]positional:[/bold]")
        for spec in model.values:
            help_text = spec.help + (" (required)" if spec.required else "")
            _print_row(console, spec.get_choice_text(), help_text.strip())

    console.print("[bold]options:[/bold]")
    for spec in model.options:
        flags = ", ".join(spec.flags)
        choice_text = spec.get_choice_text()
        left = f"{flags} {choice_text}" if choice_text else flags
        details = []
        if spec.required:
            details.append("required")
        if spec.default not in (None, False, [], ()):
            details.append(f"default: {spec.default}")
        if spec.mutually_exclusive_set:
            details.append(f"set: {spec.mutually_exclusive_set}")
        help_text = spec.help
        if details:
            help_text = f"{help_text} ({', '.join(details)})".strip()
        _print_row(console, left, help_text)
    if auto_help and not model.has_name("help"):
        _print_row(console, "--help", "Display this help screen.")
    if auto_version and not model.has_name("version"):
        _print_row(console, "--version", "Display version information.")


def render_verbs(
    models: Sequence[SpecificationModel],
    heading: str | None = None,
    console: Console | None = None,
) -> None:
    """Print the available verbs and their descriptions."""
    console = console or default_console
    if heading:
        console.print(f"[bold]{escape(heading)}[/bold]\n")
    console.print(f"[bold]usage: {escape(get_program_invocation())} VERB [options][/bold]\n")
    console.print("[bold]verbs:[/bold]")
    for model in models:
        summary = model.help_text.splitlines()[0] if model.help_text else ""
        _print_row(console, model.verb or "", summary)
    _print_row(console, "help", "Display more information on a specific verb.")


def render_version(program: str | None = None, console: Console | None = None) -> None:
    console = console or default_console
    console.print(f"{escape(program or get_program_invocation())} {__version__}")


def render_result(
    result: ParseResult,
    model: SpecificationModel | Sequence[SpecificationModel],
    heading: str | None = None,
    console: Console | None = None,
) -> None:
    """Print help, version or error text for a failed result; do nothing on success."""
    if result.succeeded:
        return
    console = console or default_console
    models = [model] if isinstance(model, SpecificationModel) else list(model)
    first = result.errors[0]
    match first:
        case HelpVerbRequestedError(verb=verb, matched=True):
            chosen = next(candidate for candidate in models if candidate.verb == verb)
            render_help(chosen, heading, console)
        case HelpVerbRequestedError() | NoVerbSelectedError() | BadVerbSelectedError():
            render_verbs(models, heading, console)
            render_errors(result, console)
        case HelpRequestedError():
            if len(models) == 1:
                render_help(models[0], heading, console)
            else:
                render_verbs(models, heading, console)
        case VersionRequestedError():
            render_version(models[0].program if models else None, console)
        case _:
            if len(models) == 1:
                console.print(f"[bold]usage: {get_usage(models[0])}[/bold]\n")
            render_errors(result, console)
