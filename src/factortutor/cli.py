"""CLI entry point for FactorTutor."""

import click

from factortutor.config.settings import Settings, configure_logging

PROBLEM_TYPES = ["plain", "gcf", "perfectSquare"]


def _load_catalog(ctx: click.Context):
    from factortutor.courses.registry import load_problem_catalog

    return load_problem_catalog(ctx.obj["settings"])


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """FactorTutor: trinomial factoring lessons and answer checking."""
    ctx.ensure_object(dict)
    settings = Settings.load()
    configure_logging("DEBUG" if verbose else settings.get_log_level())
    ctx.obj["settings"] = settings


@main.command()
@click.pass_context
def problems(ctx: click.Context) -> None:
    """List practice problems."""
    catalog = _load_catalog(ctx)
    for p in catalog.problems:
        click.echo(f"  {p.id}: {p.question} [{p.type.value}]")


@main.command()
@click.argument("answer")
@click.option("--problem", "problem_id", type=int, help="Problem id from the catalog")
@click.option("--correct", help="Canonical answer to grade against")
@click.option("--type", "problem_type", type=click.Choice(PROBLEM_TYPES), default="plain",
              show_default=True, help="Problem type when using --correct")
@click.pass_context
def check(ctx: click.Context, answer: str, problem_id, correct, problem_type: str) -> None:
    """Grade ANSWER. Exits 0 when correct, 1 when incorrect."""
    from factortutor.engine.checker import answers_equivalent

    if (problem_id is None) == (correct is None):
        raise click.UsageError("Give exactly one of --problem or --correct.")

    if problem_id is not None:
        catalog = _load_catalog(ctx)
        try:
            problem = catalog.get_problem(problem_id)
        except KeyError:
            raise click.BadParameter(f"no problem {problem_id}", param_hint="--problem")
        correct, problem_type = problem.correct_answer, problem.type

    if answers_equivalent(answer, correct, problem_type):
        click.echo("Correct!")
        return
    click.echo(f"Incorrect. The correct answer is: {correct}")
    ctx.exit(1)


@main.command()
@click.pass_context
def slides(ctx: click.Context) -> None:
    """List lesson slides."""
    catalog = _load_catalog(ctx)
    for i, s in enumerate(catalog.slides, 1):
        click.echo(f"  {i}. {s.title}")


@main.command()
@click.argument("number", type=int)
@click.option("--simple", is_flag=True, help="Show the simplified explanation")
@click.pass_context
def show(ctx: click.Context, number: int, simple: bool) -> None:
    """Show slide NUMBER (1-based)."""
    from factortutor.engine.formatter import format_content, render_plain

    catalog = _load_catalog(ctx)
    if not 1 <= number <= len(catalog.slides):
        raise click.BadParameter(f"choose 1-{len(catalog.slides)}", param_hint="NUMBER")
    slide = catalog.slides[number - 1]
    text = slide.simple_alt_content if simple and slide.simple_alt_content else slide.content
    click.secho(slide.title, bold=True)
    click.echo()
    click.echo(render_plain(format_content(text)))


@main.command("format")
@click.option("--html", "as_html", is_flag=True, help="Emit HTML instead of plain text")
def format_cmd(as_html: bool) -> None:
    """Format marked-up lesson text read from stdin."""
    from factortutor.engine.formatter import format_content, render_html, render_plain

    blocks = format_content(click.get_text_stream("stdin").read())
    click.echo(render_html(blocks) if as_html else render_plain(blocks))


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show where the catalog is loaded from."""
    catalog = _load_catalog(ctx)
    click.echo(f"Catalog: {catalog.course.id} ({catalog.source})")
    click.echo(f"Slides: {len(catalog.slides)}  Problems: {len(catalog.problems)}")
