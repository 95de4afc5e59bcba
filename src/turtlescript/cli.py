"""CLI for turtlescript."""

import json
import time
from pathlib import Path

import click
from pydantic import ValidationError

from .config import Config
from .errors import ParseError
from .instructions import Parser, Program
from .turtle import Interpreter, StepOutcome

config_option = click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON config file",
)


def _load_config(config_path: Path | None) -> Config:
    if config_path is None:
        return Config()
    try:
        return Config.load(config_path)
    except (ValidationError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Invalid config {config_path}: {e}") from e


def _load_program(path: Path, config: Config) -> Program:
    try:
        return Parser.from_config(config.language).parse(path.read_text(encoding="utf-8"))
    except (ParseError, UnicodeDecodeError) as e:
        raise click.ClickException(f"{path}: {e}") from e


@click.group()
def main():
    """turtlescript - Step a turtle through a drawing program."""
    pass


@main.command()
@click.argument("program_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
def check(program_file: Path, config_path: Path | None):
    """Validate a program without running it."""
    program = _load_program(program_file, _load_config(config_path))
    click.echo(click.style(f"OK: {len(program)} instructions", fg="green"))


@main.command()
@click.argument("program_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
def show(program_file: Path, config_path: Path | None):
    """Print the parsed program."""
    program = _load_program(program_file, _load_config(config_path))
    for i, instruction in enumerate(program):
        click.echo(f"{i:4d}  {instruction}")


@main.command()
@click.argument("program_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--steps", "-n", type=click.IntRange(min=0), help="Steps to run (default: one pass)")
@click.option("--loop/--single-pass", default=None, help="Override the configured end-of-program mode")
@click.option("--width", type=click.FloatRange(min=0, min_open=True))
@click.option("--height", type=click.FloatRange(min=0, min_open=True))
@click.option("--trace", is_flag=True, help="Echo each instruction as it runs")
@click.option("--watch", is_flag=True, help="Pace steps with the configured interval")
@config_option
def run(
    program_file: Path,
    steps: int | None,
    loop: bool | None,
    width: float | None,
    height: float | None,
    trace: bool,
    watch: bool,
    config_path: Path | None,
):
    """Run a program headlessly and print the final turtle state."""
    config = _load_config(config_path)
    program = _load_program(program_file, config)

    interpreter = Interpreter.from_config(program, config)
    if loop is not None:
        interpreter.looping = loop
    if width is not None or height is not None:
        interpreter.viewport.resize(
            width if width is not None else config.viewport.width,
            height if height is not None else config.viewport.height,
        )

    if steps is None:
        steps = len(program)

    for _ in range(steps):
        pc = interpreter.program_counter
        instruction = interpreter.current_instruction
        if interpreter.step() is StepOutcome.HALTED:
            if trace:
                click.echo(click.style("halted", fg="yellow"))
            break
        if trace:
            x, y = interpreter.position
            click.echo(f"[{pc}] {instruction}  -> ({x:.2f}, {y:.2f}) {interpreter.heading.value}")
        if watch:
            time.sleep(config.run.step_interval_ms / 1000)

    click.echo(json.dumps(interpreter.snapshot().to_dict(), indent=2))


@main.command("init-config")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def init_config(path: Path):
    """Write the default configuration."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Config().save(path)
    click.echo(f"Saved: {path}")


if __name__ == "__main__":
    main()
