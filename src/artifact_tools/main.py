"""CLI entrypoint for artifact-tools."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import rich_click as click

from artifact_tools import __version__
from artifact_tools.attrs.controllers import AttrExtractCommand, AttrsCliController
from artifact_tools.config import Settings
from artifact_tools.deps.controllers import (
    DepsCliController,
    FilterArtifactsCommand,
    WriteTransitiveDepsCommand,
)
from artifact_tools.errors import ArtifactToolsError

click.rich_click.USE_MARKDOWN = True
ATTRS_CONTROLLER = AttrsCliController()
DEPS_CONTROLLER = DepsCliController()

T = TypeVar("T")


@click.group()
@click.version_option(version=__version__, prog_name="artifact-tools")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level. Defaults to ARTIFACT_TOOLS_LOG_LEVEL or WARNING.",
)
def artifact_tools(log_level: str | None) -> None:
    """Build helpers for resource attributes and dependency filtering."""

    settings = Settings.from_env(log_level=log_level)
    _run(settings.validate)
    logging.basicConfig(
        level=settings.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@artifact_tools.group()
def attrs() -> None:
    """Resource attribute commands."""


@attrs.command("extract")
@click.argument("input_path", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("output_path", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--entry",
    default=None,
    help="Class entry inside the jar. Defaults to ARTIFACT_TOOLS_ATTR_ENTRY.",
)
def attrs_extract(input_path: Path, output_path: Path, entry: str | None) -> None:
    """Write `int attr <name> 0x<hex>` lines for the attr constants of a compiled jar."""

    _emit_lines(
        _run(
            lambda: ATTRS_CONTROLLER.extract(
                AttrExtractCommand(
                    input_path=input_path,
                    output_path=output_path,
                    entry=entry,
                ),
            ),
        ),
    )


@artifact_tools.group()
def deps() -> None:
    """Dependency identity list commands."""


@deps.command("write-transitive")
@click.argument("manifest_path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.argument("output_path", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--line-separator",
    type=click.Choice(["lf", "crlf", "native"], case_sensitive=False),
    default=None,
    help="Line separator. Defaults to ARTIFACT_TOOLS_LINE_SEPARATOR or native.",
)
def deps_write_transitive(
    manifest_path: Path,
    output_path: Path,
    line_separator: str | None,
) -> None:
    """Write the identity list of all artifacts in a resolved collection manifest."""

    _emit_lines(
        _run(
            lambda: DEPS_CONTROLLER.write_transitive(
                WriteTransitiveDepsCommand(
                    manifest_path=manifest_path,
                    output_path=output_path,
                    line_separator=line_separator,
                ),
            ),
        ),
    )


@deps.command("filter")
@click.argument("manifest_path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.option(
    "--exclude",
    "exclusion_files",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Identity list file to exclude. Can be repeated; missing files are ignored.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write kept artifact files here instead of printing kept identities.",
)
def deps_filter(
    manifest_path: Path,
    exclusion_files: tuple[Path, ...],
    output_path: Path | None,
) -> None:
    """Drop artifacts whose identity appears in any exclusion list."""

    _emit_lines(
        _run(
            lambda: DEPS_CONTROLLER.filter(
                FilterArtifactsCommand(
                    manifest_path=manifest_path,
                    exclusion_files=exclusion_files,
                    output_path=output_path,
                ),
            ),
        ),
    )


def _run(action: Callable[[], T]) -> T:
    try:
        return action()
    except (ArtifactToolsError, OSError, ValueError, TypeError) as exc:
        raise click.ClickException(str(exc)) from exc


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    artifact_tools()
