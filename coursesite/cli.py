# cli.py - CLI for coursesite
"""
coursesite CLI - Serve and maintain a markdown course site

COMMANDS:
    Site:
        coursesite init [--force]                  Write a coursesite.yaml template
        coursesite serve [--host H] [--port P]     Run the web server
        coursesite validate [--verbose]            Check structure and content

    Lessons:
        coursesite lessons [--json] [--all]        List lessons in navigation order
        coursesite show SLUG [--html]              Render one lesson's page data

    Content scripts:
        coursesite survey-links [--choices FILE | --fetch] [--dry-run]
                                                   Append feedback form links
        coursesite objectives [--output FILE]      Write the objectives table

    Other:
        coursesite version                         Show version information

EXAMPLES:
    # Serve the site from the current directory
    coursesite serve --port 5173

    # Check a lesson renders
    coursesite show intro-to-cryptography

    # Preview survey links without touching files
    coursesite survey-links --choices survey-choices.yaml --dry-run
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from coursesite import __version__
from coursesite.config_utils import SiteConfig, create_config_template, get_config
from coursesite.content import ContentStore
from coursesite.course_structure import CourseStructure, load_course_structure
from coursesite.errors import CourseSiteError, NotFoundError
from coursesite.icons import (
    SUCCESS, ERROR, SKIP, TRACK, UNIT, LAB, LINK, SERVER, status_icon, lesson_icon,
)
from coursesite.logging_utils import setup_logging
from coursesite.pages import load_page
from coursesite.resolver import iter_resolved_lessons


# ============================================================================
# Configuration & Utilities
# ============================================================================

class SiteContext:
    """Shared context for CLI commands"""

    def __init__(self, site_dir: Optional[Path] = None):
        self.config: SiteConfig = get_config(site_dir)
        self.site_root = self.config.site_root
        self.store = ContentStore(self.config.content_path)

    def load_structure(self) -> CourseStructure:
        """Load the course structure or exit with the formatted error"""
        try:
            return load_course_structure(self.config.structure_path)
        except CourseSiteError as e:
            click.echo(str(e), err=True)
            sys.exit(1)


# ============================================================================
# Click Group Setup
# ============================================================================

@click.group()
@click.option('--site-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Site root (default: COURSESITE_ROOT or current directory)')
@click.option('--verbose', '-v', count=True, help='Increase log output (-v info, -vv debug)')
@click.pass_context
def cli(ctx, site_dir: Optional[Path], verbose: int):
    """
    coursesite - Markdown course lessons as a website

    Serves lessons listed in course-structure.json from content/<slug>.md.
    """
    setup_logging(verbose)
    try:
        ctx.obj = SiteContext(site_dir)
    except CourseSiteError as e:
        click.echo(str(e), err=True)
        sys.exit(1)


# ============================================================================
# Site Commands
# ============================================================================

@cli.command()
@click.option('--force', is_flag=True, help='Overwrite an existing coursesite.yaml')
@click.pass_obj
def init(ctx: SiteContext, force: bool):
    """
    Write a commented coursesite.yaml into the site root
    """
    target = ctx.site_root / "coursesite.yaml"
    if target.exists() and not force:
        click.echo(f"[!] {target.name} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    target.write_text(create_config_template(), encoding="utf-8")
    click.echo(f"{SUCCESS} Wrote {target}")


@cli.command()
@click.option('--host', help='Interface to bind (default from config: 127.0.0.1)')
@click.option('--port', type=int, help='Port to listen on (default from config: 8000)')
@click.pass_obj
def serve(ctx: SiteContext, host: Optional[str], port: Optional[int]):
    """
    Run the web server

    Examples:
        coursesite serve                 # http://127.0.0.1:8000
        coursesite serve --port 5173     # Different port
        coursesite serve --host 0.0.0.0  # Listen on all interfaces
    """
    import uvicorn

    from coursesite.web import create_app

    structure = ctx.load_structure()
    app = create_app(ctx.config, structure)

    host = host or ctx.config.host
    port = port or ctx.config.port
    click.echo(f"{SERVER} Serving {ctx.site_root} on http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")
    uvicorn.run(app, host=host, port=port)


@cli.command()
@click.option('--verbose', is_flag=True, help='Also show informational notes')
@click.pass_obj
def validate(ctx: SiteContext, verbose: bool):
    """
    Validate the course structure and lesson files

    Checks for:
    - Malformed course structure
    - Duplicate lesson slugs
    - Lessons without content files
    - Invalid front matter YAML
    - Content files no lesson refers to

    Examples:
        coursesite validate             # Check for issues
        coursesite validate --verbose   # Include hidden-lesson notes
    """
    from coursesite.validate import validate_site, print_results

    click.echo(f"[*] Validating site: {ctx.site_root}")

    result = validate_site(ctx.config)
    print_results(result, verbose=verbose)

    # Exit with error code if invalid
    if not result.is_valid:
        sys.exit(1)


# ============================================================================
# Lessons
# ============================================================================

@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('--all', 'show_all', is_flag=True, help='Include hidden lessons')
@click.pass_obj
def lessons(ctx: SiteContext, as_json: bool, show_all: bool):
    """
    List lessons in navigation order

    Examples:
        coursesite lessons           # Visible lessons with prev/next
        coursesite lessons --all     # Grouped by track and unit, hidden included
        coursesite lessons --json    # JSON output
    """
    structure = ctx.load_structure()

    if as_json:
        items = [
            {
                "slug": item.lesson.slug,
                "title": item.lesson.title,
                "previousSlug": item.previous_slug,
                "nextSlug": item.next_slug,
                "hasContent": ctx.store.exists(item.lesson.slug),
            }
            for item in iter_resolved_lessons(structure)
        ]
        click.echo(json.dumps(items, indent=2))
        return

    if show_all:
        for track in structure.tracks:
            click.echo(f"\n{TRACK} {track.title.upper()}")
            for unit in track.units:
                click.echo(f"  {UNIT} {unit.title}")
                for lesson in unit.lessons:
                    lab = f" {LAB}" if lesson.lab else ""
                    click.echo(f"    {lesson_icon(lesson.hidden)} {lesson.slug}: {lesson.title}{lab}")
        return

    resolved = list(iter_resolved_lessons(structure))
    if not resolved:
        click.echo("No lessons found.")
        return

    for item in resolved:
        status = status_icon(ctx.store.exists(item.lesson.slug))
        click.echo(f"{status} {item.lesson.slug}: {item.lesson.title}")
        click.echo(f"     prev: {item.previous_slug or '-'}  next: {item.next_slug or '-'}")


@cli.command()
@click.argument('slug')
@click.option('--html', 'html_only', is_flag=True, help='Print only the rendered HTML')
@click.pass_obj
def show(ctx: SiteContext, slug: str, html_only: bool):
    """
    Render one lesson and print its page data

    Examples:
        coursesite show pda           # JSON: title, content, nextSlug, previousSlug
        coursesite show pda --html    # Just the HTML
    """
    structure = ctx.load_structure()
    try:
        page = load_page(structure, ctx.store, slug, ctx.config)
    except NotFoundError:
        click.echo(f"[x] Not found: {slug}", err=True)
        sys.exit(1)
    except CourseSiteError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if html_only:
        click.echo(page.content)
    else:
        click.echo(json.dumps(page.model_dump(by_alias=True), indent=2))


# ============================================================================
# Content Scripts
# ============================================================================

@cli.command('survey-links')
@click.option('--choices', 'choices_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML/JSON list of {id, ref, label} form choices')
@click.option('--fetch', is_flag=True, help='Fetch choices from the public form definition')
@click.option('--form-id', help='Form ID (default from config)')
@click.option('--dry-run', '-n', is_flag=True, help='Preview without writing files')
@click.pass_obj
def survey_links(ctx: SiteContext, choices_file: Optional[Path], fetch: bool,
                 form_id: Optional[str], dry_run: bool):
    """
    Append a feedback form link to each lesson

    Each form choice's label is a lesson slug; its ref preselects that
    lesson in the form. Lessons that already have their link are skipped.

    Examples:
        coursesite survey-links --choices survey-choices.yaml
        coursesite survey-links --fetch --dry-run
    """
    from coursesite.survey_links import append_survey_links, fetch_choices, load_choices

    if bool(choices_file) == fetch:
        click.echo("[!] Use exactly one of --choices FILE or --fetch", err=True)
        sys.exit(1)

    form_id = form_id or ctx.config.survey_form_id
    try:
        choices = load_choices(choices_file) if choices_file else fetch_choices(form_id)
    except CourseSiteError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    result = append_survey_links(ctx.store, choices, form_id, dry_run=dry_run)

    verb = "Would append" if dry_run else "Appended"
    click.echo(f"{SUCCESS} {verb} {len(result.appended)} link(s)")
    if result.already_linked:
        click.echo(f"{LINK} Already linked: {', '.join(result.already_linked)}")
    if result.missing:
        click.echo(f"{SKIP} No content file for: {', '.join(result.missing)}")


@cli.command()
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output file (default: course-objectives-and-links.md in the site root)')
@click.pass_obj
def objectives(ctx: SiteContext, output: Optional[Path]):
    """
    Write a table of lesson titles, links, objectives and summaries
    """
    from coursesite.objectives import DEFAULT_OUTPUT, write_objectives_table

    if not ctx.store.content_dir.is_dir():
        click.echo(f"[x] No content directory at {ctx.store.content_dir}", err=True)
        sys.exit(1)

    output = output or ctx.site_root / DEFAULT_OUTPUT
    try:
        report = write_objectives_table(ctx.store, ctx.config.site_url, output)
    except CourseSiteError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    click.echo(f"{SUCCESS} Wrote {len(report.rows)} row(s) to {output}")
    for name in report.skipped:
        click.echo(f"{ERROR} Bad formatting in {name}")


# ============================================================================
# Version
# ============================================================================

@cli.command()
def version():
    """Show coursesite version"""
    click.echo(f"coursesite v{__version__}")
    click.echo("Markdown course lessons as a website")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
