"""CLI application entry point."""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.table import Table

from skill_hub.api.http import create_app
from skill_hub.api.mcp import run_mcp_server
from skill_hub.config.loader import load_config
from skill_hub.config.schema import ContentMode, SkillHubConfig
from skill_hub.core.exceptions import SkillHubError
from skill_hub.core.manifest import SkillEntry, SkillManifest, dump_manifest
from skill_hub.core.registry import SkillRegistry
from skill_hub.fetch.cache import ContentCache
from skill_hub.service import SkillService
from skill_hub.utils.logging import configure_logging
from skill_hub.utils.output import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from skill_hub.utils.paths import ensure_dir, expand_path

app = typer.Typer(
    name="skill-hub",
    help="Browse, validate and serve a curated collection of Markdown skills",
    no_args_is_help=True,
)

# Cache subcommand group
cache_app = typer.Typer(
    name="cache",
    help="Manage the remote content cache",
    no_args_is_help=True,
)
app.add_typer(cache_app, name="cache")


ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config file (merged over the default search)",
)
RootOption = typer.Option(
    None,
    "--root",
    "-r",
    help="Registry root containing skills.json (overrides config)",
)


# Template for init command
TEMPLATE_CONFIG = """version: "1.0"

registry:
  root: "."
  manifest: "skills.json"
  # auto: prefer skills/<id>/SKILL.md, fall back to the entry url
  mode: auto

cache:
  dir: "~/.cache/skill-hub"
  ttl_seconds: 86400

server:
  host: "127.0.0.1"
  port: 8000
  # api_token: "change-me"
"""

STUB_SKILL = """---
{front_matter}---

# {name}

{description}
"""


def render_stub(entry: SkillEntry) -> str:
    """Render a SKILL.md stub whose front matter matches the entry."""
    front_matter = yaml.safe_dump(
        {"name": entry.id, "description": entry.description},
        sort_keys=False,
        allow_unicode=True,
    )
    return STUB_SKILL.format(
        front_matter=front_matter, name=entry.name, description=entry.description
    )


def get_config(config: Optional[Path]) -> SkillHubConfig:
    """Load configuration, exiting with a message on failure.

    Args:
        config: Config path from --config flag

    Returns:
        Validated configuration
    """
    try:
        cfg = load_config(config)
    except ValidationError as e:
        print_error("Configuration validation failed:")
        console.print(e)
        raise typer.Exit(1)
    except Exception as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    configure_logging(cfg.logging.level)
    return cfg


def get_root(cfg: SkillHubConfig, root: Optional[Path]) -> Path:
    """Resolve the registry root, --root winning over configuration."""
    if root is not None:
        return root.expanduser().resolve()
    return expand_path(cfg.registry.root)


def open_registry(cfg: SkillHubConfig, root: Optional[Path]) -> SkillRegistry:
    """Create and load the registry, exiting on a corrupt manifest."""
    registry = SkillRegistry(get_root(cfg, root), manifest_name=cfg.registry.manifest)
    try:
        registry.load()
    except SkillHubError as e:
        print_error(str(e))
        raise typer.Exit(1)
    return registry


def open_service(
    cfg: SkillHubConfig, root: Optional[Path], mode: Optional[ContentMode] = None
) -> SkillService:
    """Build the skill service, exiting on a corrupt manifest."""
    if mode is not None:
        cfg.registry.mode = mode
    try:
        return SkillService.from_config(
            cfg, root=get_root(cfg, root), github_token=os.getenv("GITHUB_TOKEN")
        )
    except SkillHubError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None,
        help="Directory to scaffold as a registry root (default: current directory)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing skills.json and config",
    ),
):
    """Create a registry root with skills.json, skills/ and skill-hub.yaml."""
    try:
        root = path if path is not None else Path.cwd()
        manifest_path = root / SkillRegistry.MANIFEST_FILENAME
        config_path = root / "skill-hub.yaml"

        if manifest_path.exists() and not force:
            print_error(f"Manifest already exists: {manifest_path}")
            print_info("Use --force to overwrite")
            raise typer.Exit(1)

        ensure_dir(root / SkillRegistry.SKILLS_DIRNAME)
        dump_manifest(SkillManifest(), manifest_path)
        print_success(f"Created manifest: {manifest_path}")

        if not config_path.exists() or force:
            config_path.write_text(TEMPLATE_CONFIG)
            print_success(f"Created config file: {config_path}")

        print_info("Add skills with 'skill-hub add'")

    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Failed to initialize registry: {e}")
        raise typer.Exit(1)


@app.command("list")
def list_skills(
    tag: Optional[str] = typer.Option(None, "--tag", help="Only skills with this tag"),
    verified: bool = typer.Option(False, "--verified", help="Only verified skills"),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """List skills in the manifest."""
    cfg = get_config(config)
    registry = open_registry(cfg, root)

    entries = registry.list_skills(tag=tag, verified_only=verified)
    if not entries:
        print_info("No skills found")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="green", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Tags")
    table.add_column("Verified")
    table.add_column("Added")

    for entry in entries:
        table.add_row(
            entry.id,
            entry.name,
            entry.description,
            ", ".join(entry.tags),
            "[green]✓[/green]" if entry.verified else "",
            entry.added_at.isoformat(),
        )

    console.print(table)


@app.command()
def show(
    skill_id: str = typer.Argument(..., metavar="ID", help="Skill id"),
    remote: bool = typer.Option(
        False, "--remote", help="Fetch from the entry url even if a local copy exists"
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the content cache"),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Print a skill's raw SKILL.md to stdout."""
    cfg = get_config(config)
    service = open_service(cfg, root, mode=ContentMode.REMOTE if remote else None)

    try:
        content = asyncio.run(service.get_skill(skill_id, force_refresh=refresh))
    except SkillHubError as e:
        print_error(str(e))
        raise typer.Exit(1)

    typer.echo(content, nl=not content.endswith("\n"))


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in id, name, description and tags"),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Search skills by text."""
    cfg = get_config(config)
    registry = open_registry(cfg, root)

    results = registry.search(query)
    if not results:
        print_info(f"No skills match '{query}'")
        return

    for entry in results:
        console.print(f"[green]{entry.id}[/green]  {entry.name} - {entry.description}")


@app.command()
def add(
    skill_id: str = typer.Argument(..., metavar="ID", help="Unique slug for the skill"),
    name: str = typer.Option(..., "--name", help="Display name"),
    description: str = typer.Option(..., "--description", help="One-line summary"),
    url: str = typer.Option(..., "--url", help="Location of the full SKILL.md"),
    author: str = typer.Option(..., "--author", help="Attribution"),
    tags: Optional[list[str]] = typer.Option(
        None, "--tag", help="Tag (repeat for several)"
    ),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Append a new, unverified skill to the manifest.

    Creates a skills/<id>/SKILL.md stub when none exists.
    """
    cfg = get_config(config)
    registry = open_registry(cfg, root)

    try:
        entry = SkillEntry.create(
            id=skill_id,
            name=name,
            description=description,
            url=url,
            author=author,
            tags=tags or [],
        )
    except ValidationError as e:
        print_error("Invalid skill entry:")
        console.print(e)
        raise typer.Exit(1)

    try:
        registry.add_skill(entry)
    except SkillHubError as e:
        print_error(str(e))
        raise typer.Exit(1)

    registry.save()
    print_success(f"Added skill '{entry.id}' to {registry.manifest_path}")

    skill_path = registry.skill_path(entry.id)
    if not skill_path.exists():
        ensure_dir(skill_path.parent)
        skill_path.write_text(render_stub(entry), encoding="utf-8")
        print_info(f"Created stub: {skill_path}")


@app.command()
def verify(
    skill_id: str = typer.Argument(..., metavar="ID", help="Skill id"),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Mark a reviewed skill as verified."""
    cfg = get_config(config)
    registry = open_registry(cfg, root)

    try:
        was_verified = registry.get_skill(skill_id).verified
        registry.verify_skill(skill_id)
    except SkillHubError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if was_verified:
        print_warning(f"Skill '{skill_id}' is already verified")
        return

    registry.save()
    print_success(f"Verified skill '{skill_id}'")


@app.command()
def validate(
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
    content: bool = typer.Option(
        True, "--content/--no-content", help="Check skills/<id>/SKILL.md files"
    ),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Validate the manifest and skill documents."""
    cfg = get_config(config)
    registry = SkillRegistry(get_root(cfg, root), manifest_name=cfg.registry.manifest)

    print_info(f"Validating registry: {registry.root}")
    report = registry.validate(check_content=content)

    for issue in report.issues:
        prefix = f"{issue.skill_id}: " if issue.skill_id else ""
        if issue.severity == "error":
            print_error(f"{prefix}{issue.message}")
        else:
            print_warning(f"{prefix}{issue.message}")

    failed = not report.ok or (strict and report.warnings)
    if failed:
        print_error(
            f"Validation failed: {len(report.errors)} error(s), "
            f"{len(report.warnings)} warning(s)"
        )
        raise typer.Exit(1)

    print_success(
        f"Registry is valid: {report.checked} skill(s), {len(report.warnings)} warning(s)"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Serve the HTTP API."""
    import uvicorn

    cfg = get_config(config)
    service = open_service(cfg, root)

    bind_host = host or cfg.server.host
    bind_port = port or cfg.server.port
    print_info(f"Serving {len(service.registry)} skill(s) on http://{bind_host}:{bind_port}")

    uvicorn.run(
        create_app(service, api_token=cfg.server.api_token),
        host=bind_host,
        port=bind_port,
        log_level=cfg.logging.level.lower(),
    )


@app.command()
def mcp(
    config: Optional[Path] = ConfigOption,
    root: Optional[Path] = RootOption,
):
    """Run the MCP server over stdio."""
    cfg = get_config(config)
    service = open_service(cfg, root)
    run_mcp_server(service)


@cache_app.command("clear")
def cache_clear(
    config: Optional[Path] = ConfigOption,
):
    """Remove every cached skill document."""
    cfg = get_config(config)

    try:
        cache = ContentCache(expand_path(cfg.cache.dir), ttl_seconds=cfg.cache.ttl_seconds)
        removed = cache.clear()
    except OSError as e:
        print_error(f"Failed to clear cache: {e}")
        raise typer.Exit(1)

    print_success(f"Removed {removed} cached document(s) from {cache.cache_dir}")


if __name__ == "__main__":
    app()
