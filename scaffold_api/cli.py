"""Command line interface: run the service or render a scaffold locally."""

import asyncio
from datetime import UTC, datetime
import json
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.tree import Tree
import typer

from shared.logging import setup_logging

from .archive import archive_slug, build_zip
from .config import get_settings
from .delays import FEATURE_WEIGHTS, NoDelay
from .generator import FileNode, build_file_tree, registered_features, registered_stacks
from .generator.registry import get_feature_provider, get_stack_provider
from .orchestrator import GenerationOrchestrator
from .schemas import GenerateRequest, Project, ProjectStatus, Stack
from .store import InMemoryProjectStore

app = typer.Typer(help="Scaffold API")
console = Console()


@app.callback()
def callback():
    """
    Scaffold API CLI
    """


@app.command()
def serve(
    host: str = typer.Option(None, help="Bind address (default: HOST setting)"),
    port: int = typer.Option(None, help="Port (default: PORT setting)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP service."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "scaffold_api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


async def render_project(request: GenerateRequest) -> Project:
    """Run one generation without delay and return the finished project."""
    store = InMemoryProjectStore()
    orchestrator = GenerationOrchestrator(store, NoDelay())
    ticket = await orchestrator.submit(request)
    await ticket.task
    project = await store.get_by_id(ticket.project_id)
    await store.close()
    return project


def write_files(project: Project, output_dir: Path, force: bool = False) -> list[str]:
    """Write generated files under output_dir. Existing files are kept unless force."""
    written = []
    for file in project.files or []:
        dest = output_dir / file.path
        if dest.exists() and not force:
            console.print(f"[yellow]skip[/yellow] {file.path} (exists)")
            continue
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(file.content, encoding="utf-8")
        written.append(file.path)
    return written


def _add_nodes(branch: Tree, nodes: list[FileNode]) -> None:
    for node in nodes:
        if node.is_dir:
            _add_nodes(branch.add(f"[bold blue]{node.name}/[/bold blue]"), node.children)
        else:
            branch.add(f"{node.name} [dim]({node.language})[/dim]")


@app.command()
def render(
    name: str = typer.Option(..., "--name", "-n", help="Project name"),
    description: str = typer.Option(..., "--description", "-d", help="What the app does"),
    stack: Stack = typer.Option(Stack.REACT_NODE, "--stack", "-s"),
    auth: bool = typer.Option(False, "--auth", help="Authentication"),
    crud: bool = typer.Option(False, "--crud", help="CRUD routes and dashboard"),
    payments: bool = typer.Option(False, "--payments", help="Payments"),
    database: bool = typer.Option(False, "--database", help="Database models"),
    api: bool = typer.Option(False, "--api", help="API"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write files here"),
    zip_path: Path | None = typer.Option(None, "--zip", help="Write a ZIP archive here"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
    json_output: bool = typer.Option(False, "--json", help="Output files as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log generation events"),
):
    """Generate a scaffold locally."""
    settings = get_settings()
    options = settings.logging_options(service_name="scaffold-cli", log_format="console")
    if not verbose:
        options["log_level"] = "WARNING"
    setup_logging(**options)

    try:
        request = GenerateRequest(
            name=name,
            description=description,
            stack=stack,
            features={
                "auth": auth,
                "crud": crud,
                "payments": payments,
                "database": database,
                "api": api,
            },
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            console.print(f"[bold red]Error:[/bold red] {field}: {err['msg']}")
        raise typer.Exit(code=1) from None

    project = asyncio.run(render_project(request))
    if project is None or project.status != ProjectStatus.COMPLETED:
        console.print("[bold red]Error:[/bold red] generation failed")
        raise typer.Exit(code=1)

    if json_output:
        files = [f.model_dump() for f in project.files]
        typer.echo(json.dumps(files, indent=2))
        return

    if output is not None:
        written = write_files(project, output, force=force)
        console.print(f"[bold green]✓ Wrote {len(written)} files to {output}[/bold green]")

    if zip_path is not None:
        slug = archive_slug(project.name)
        zip_path.write_bytes(build_zip(slug, project.files))
        console.print(f"[bold green]✓ Archive written to {zip_path}[/bold green]")

    tree = Tree(f"[bold magenta]{project.name}[/bold magenta] [dim]{project.stack.value}[/dim]")
    _add_nodes(tree, build_file_tree(project.files))
    console.print(tree)


@app.command()
def stacks():
    """List stacks and features."""
    stack_table = Table(title="Stacks")
    stack_table.add_column("Stack", style="cyan")
    stack_table.add_column("Extra files")
    for stack in registered_stacks():
        sample = _sample_project(stack)
        extra = [f.path for f in get_stack_provider(stack)(sample)]
        stack_table.add_row(stack.value, ", ".join(extra) or "-")
    console.print(stack_table)

    feature_table = Table(title="Features")
    feature_table.add_column("Feature", style="cyan")
    feature_table.add_column("Weight", justify="right")
    feature_table.add_column("Files")
    registered = set(registered_features())
    sample = _sample_project(Stack.REACT_NODE)
    for feature, weight in FEATURE_WEIGHTS.items():
        files = []
        if feature in registered:
            files = [f.path for f in get_feature_provider(feature)(sample)]
        feature_table.add_row(feature, str(weight), ", ".join(files) or "-")
    console.print(feature_table)


def _sample_project(stack: Stack) -> Project:
    now = datetime.now(UTC)
    return Project(
        id="sample",
        name="Sample",
        description="Sample project",
        stack=stack,
        features={name: True for name in FEATURE_WEIGHTS},
        status=ProjectStatus.GENERATING,
        created_at=now,
        updated_at=now,
    )


if __name__ == "__main__":
    app()
