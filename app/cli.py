from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.excalidraw.repository import FileSystemExcalidrawRepository
from adapters.excalidraw.url_encoder import build_document_url
from app.config import AppSettings, load_settings
from domain.models import ExcalidrawDocument
from domain.services.duplicate_selection import DuplicateSelection
from domain.services.groups import select_groups_for_selected_elements
from domain.services.selection import get_non_deleted_elements

app = typer.Typer(no_args_is_help=True)
console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("duplicate")
def duplicate(
    scene_path: Path = typer.Argument(..., help="Excalidraw scene to duplicate the selection of."),
    output: Optional[Path] = typer.Option(
        None, help="Where to write the result. Defaults to overwriting the input scene.",
    ),
    select: List[str] = typer.Option(
        [], "--select", "-s", help="Element ids to select instead of the saved selection.",
    ),
    grid_size: Optional[int] = typer.Option(
        None, min=1, help="Grid unit; duplicates are offset by half of it.",
    ),
    url: bool = typer.Option(False, "--url", help="Print an Excalidraw link to the result."),
    config: Optional[Path] = typer.Option(None, help="Path to a YAML settings file."),
) -> None:
    settings = _load_settings_or_exit(config)
    configure_logging(settings.editor.log_level)
    repo = FileSystemExcalidrawRepository()

    if not scene_path.exists():
        console.print(f"[red]File not found:[/] {scene_path}")
        raise typer.Exit(code=1)
    try:
        document = repo.load(scene_path)
    except ValueError as exc:
        console.print(f"[red]Invalid scene:[/] {exc}")
        raise typer.Exit(code=1) from exc

    app_state = dict(document.app_state)
    if select:
        app_state["selectedElementIds"] = {element_id: True for element_id in select}
        app_state = select_groups_for_selected_elements(
            app_state, get_non_deleted_elements(document.elements)
        )

    action = DuplicateSelection(grid_size=grid_size or settings.editor.grid_size)
    result = action.perform(document.elements, app_state)
    if result is None:
        console.print(f"[yellow]Nothing selected in {scene_path}, scene left unchanged.[/]")
        raise typer.Exit(code=0)

    duplicated = ExcalidrawDocument(
        elements=result.elements, app_state=result.app_state, files=document.files
    )
    target_path = output or scene_path
    repo.save(duplicated, target_path)
    added = len(result.elements) - len(document.elements)
    console.print(f"[green]Wrote[/] {target_path} ([bold]{added}[/] new elements)")

    if url:
        link = build_document_url(
            settings.editor.excalidraw_base_url,
            duplicated,
            settings.editor.excalidraw_max_url_length,
        )
        if link is None:
            console.print("[yellow]Scene is too large to share as a link.[/]")
        else:
            console.print(link, soft_wrap=True)


@app.command("validate")
def validate(
    scene_path: Path = typer.Argument(
        ..., help="Excalidraw scene, or a directory of .excalidraw/.json scenes, to validate."
    ),
) -> None:
    if not scene_path.exists():
        console.print(f"[red]File not found:[/] {scene_path}")
        raise typer.Exit(code=1)

    repo = FileSystemExcalidrawRepository()
    try:
        if scene_path.is_dir():
            loaded = repo.load_all_with_paths(scene_path)
        else:
            loaded = [(scene_path, repo.load(scene_path))]
    except ValueError as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if not loaded:
        console.print(f"[yellow]No scenes found in {scene_path}.[/]")
        return
    for path, document in loaded:
        console.print(f"[green]Valid scene with {len(document.elements)} elements:[/] {path}")


def _load_settings_or_exit(config: Path | None) -> AppSettings:
    try:
        return load_settings(config)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Invalid configuration:[/] {exc}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
