"""Command-line interface for ollama-bridge."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Iterable, NoReturn

import click
import requests

from .adapters import PlatformError
from .config import CONFIG_FILENAME, BridgeConfig, ConfigError, load_config, save_config
from .logging import setup_logging
from .platform import create_platform
from .result import TextResult, ToolCallResult
from .structured_output import RESPONSE_FORMAT, build_response_format
from .util import parse_assignment


def _parse_options(assignments: Iterable[str]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for item in assignments:
        try:
            key, value = parse_assignment(item)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--option") from exc
        options[key] = value
    return options


def _print_tool_calls(result: ToolCallResult) -> None:
    for call in result.tool_calls:
        click.echo(f"[tool] {call.name}({json.dumps(call.arguments)})")


def _fail(exc: Exception) -> NoReturn:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", count=True, help="Lower the log threshold one level per -v")
@click.option("-q", "--quiet", is_flag=True, help="Suppress all output except errors")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """Send chat and embedding requests to a local Ollama server."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as exc:
        click.echo(f"[warn] {exc} Using defaults.", err=True)
        config = BridgeConfig.from_dict({})
    ctx.obj["config"] = config

    setup_logging(level=config.log_level, verbose=verbose, quiet=quiet)


@cli.command()
@click.argument("prompt")
@click.option("--model", default=None, help="Chat model (defaults to chat_model from config).")
@click.option("--system", default=None, help="System message prepended to the conversation.")
@click.option("--stream/--no-stream", default=False, show_default=True)
@click.option("--think/--no-think", default=None, help="Toggle model thinking where supported.")
@click.option("--schema", "schema_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON schema file constraining the answer.")
@click.option("-o", "--option", "assignments", multiple=True, help="Extra option as key=value.")
@click.pass_obj
def chat(
    obj: dict,
    prompt: str,
    model: str | None,
    system: str | None,
    stream: bool,
    think: bool | None,
    schema_path: Path | None,
    assignments: tuple[str, ...],
) -> None:
    """Send PROMPT to a chat model and print the answer."""
    config: BridgeConfig = obj["config"]
    model_name = model or config.chat_model

    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    options = {**config.options, **_parse_options(assignments), "stream": stream}
    if think is not None:
        options["think"] = think
    if schema_path is not None:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        options[RESPONSE_FORMAT] = build_response_format(schema, name=schema_path.stem)

    platform = create_platform(config.effective_host_url)
    try:
        deferred = platform.invoke(model_name, {"model": model_name, "messages": messages}, options)
        deferred.raw_result.get_object().raise_for_status()
        if stream:
            for chunk in deferred.as_stream():
                if isinstance(chunk, ToolCallResult):
                    _print_tool_calls(chunk)
                else:
                    click.echo(chunk, nl=False)
            click.echo()
            return
        result = deferred.get_result()
    except (PlatformError, requests.RequestException) as exc:
        _fail(exc)

    if isinstance(result, ToolCallResult):
        _print_tool_calls(result)
    elif isinstance(result, TextResult):
        click.echo(result.content)


@cli.command()
@click.argument("texts", nargs=-1, required=True)
@click.option("--model", default=None, help="Embedding model (defaults to embedding_model from config).")
@click.option("--dimensions", type=int, default=None, help="Truncate vectors to this many dimensions.")
@click.option("--truncate/--no-truncate", default=None, help="Let the server truncate over-long input.")
@click.option("-o", "--option", "assignments", multiple=True, help="Extra option as key=value.")
@click.option("--json", "as_json", is_flag=True, help="Print the vectors as JSON.")
@click.pass_obj
def embed(
    obj: dict,
    texts: tuple[str, ...],
    model: str | None,
    dimensions: int | None,
    truncate: bool | None,
    assignments: tuple[str, ...],
    as_json: bool,
) -> None:
    """Embed one or more TEXTS and summarize the vectors."""
    config: BridgeConfig = obj["config"]
    model_name = model or config.embedding_model

    options = {**config.options, **_parse_options(assignments)}
    if dimensions is not None:
        options["dimensions"] = dimensions
    if truncate is not None:
        options["truncate"] = truncate

    payload: str | list[str] = texts[0] if len(texts) == 1 else list(texts)
    platform = create_platform(config.effective_host_url)
    try:
        deferred = platform.invoke(model_name, payload, options)
        deferred.raw_result.get_object().raise_for_status()
        vectors = deferred.as_vectors()
    except (PlatformError, requests.RequestException, TypeError) as exc:
        _fail(exc)

    if as_json:
        click.echo(json.dumps(vectors))
        return
    size = len(vectors[0]) if vectors else 0
    click.echo(f"{len(vectors)} vector(s) of dimension {size} from {model_name}")


@cli.command()
@click.option("--host-url", default="http://localhost:11434", show_default=True)
@click.option("--chat-model", default="llama3.2", show_default=True)
@click.option("--embedding-model", default="nomic-embed-text", show_default=True)
def setup(host_url: str, chat_model: str, embedding_model: str) -> None:
    """Write a baseline .ollama-bridge.yml configuration."""
    config_path = Path(CONFIG_FILENAME)
    if config_path.exists() and not click.confirm(f"{CONFIG_FILENAME} exists. Overwrite?", default=False):
        click.echo("Aborted.")
        return

    config = BridgeConfig.from_dict(
        {"host_url": host_url, "chat_model": chat_model, "embedding_model": embedding_model}
    )
    save_config(config)
    click.echo(f"Saved configuration to {config_path}")


@cli.command()
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.pass_obj
def config(obj: dict, output_format: str) -> None:
    """Show current ollama-bridge configuration."""
    cfg: BridgeConfig = obj["config"]

    if output_format == "json":
        click.echo(json.dumps(cfg.raw, indent=2))
        return

    click.echo("ollama-bridge Configuration:")
    click.echo(f"  Host URL:        {cfg.effective_host_url}")
    click.echo(f"  Chat Model:      {cfg.chat_model}")
    click.echo(f"  Embedding Model: {cfg.embedding_model}")
    click.echo(f"  Log Level:       {cfg.log_level}")
    if cfg.options:
        click.echo("\nDefault Options:")
        for key, value in cfg.options.items():
            click.echo(f"  {key}: {value}")


def main() -> None:
    """Console script entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == "__main__":
    main()
