"""
fsm-engine CLI
"""
import click
from pathlib import Path

from .config import Settings, configure_logging
from .core.parser import TemplateParser
from .exceptions import FSMEngineError


def _load(template_file):
    try:
        return TemplateParser().parse_file(Path(template_file))
    except FSMEngineError as e:
        raise click.ClickException(str(e))


@click.group()
@click.option('--log-level', default=None, help='Override FSM_ENGINE_LOG_LEVEL')
@click.pass_context
def cli(ctx, log_level):
    """State machine template tools"""
    settings = Settings.from_env()
    if log_level:
        settings.log_level = log_level.upper()
    configure_logging(settings)
    ctx.obj = settings


@cli.command()
@click.argument('template_file', type=click.Path(exists=True, dir_okay=False))
def validate(template_file):
    """Check that a template file compiles and has a single initial state"""
    template = _load(template_file)
    try:
        machine = template.instantiate()
    except FSMEngineError as e:
        raise click.ClickException(str(e))

    transitions = sum(
        len(bucket)
        for targets in template.transitions.values()
        for bucket in targets.values()
    )
    finals = [state.name for state in template.states.values() if state.final]
    click.echo(f"{template_file}: {len(template.states)} states, {transitions} transitions")
    click.echo(f"initial state: {machine.current_state}")
    click.echo(f"final states: {', '.join(finals) if finals else '-'}")


@cli.command()
@click.argument('template_file', type=click.Path(exists=True, dir_okay=False))
@click.option('-o', '--output', type=click.Path(dir_okay=False), help='Write to a file instead of stdout')
def draw(template_file, output):
    """Render a template as a Graphviz digraph"""
    text = _load(template_file).draw()
    if output:
        Path(output).write_text(text + "\n", encoding='utf-8')
        click.echo(f"Wrote {output}")
    else:
        click.echo(text)


@cli.command()
@click.argument('template_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'fmt', type=click.Choice(['yaml', 'json']), default=None,
              help='Output format, defaults to FSM_ENGINE_EXPORT_FORMAT')
@click.pass_obj
def export(settings, template_file, fmt):
    """Print a normalised copy of a template file"""
    template = _load(template_file)
    fmt = fmt or settings.export_format
    try:
        click.echo(TemplateParser().serialize(template, fmt=fmt, name=Path(template_file).stem))
    except FSMEngineError as e:
        raise click.ClickException(str(e))


def main():
    """Main entry point"""
    cli()


if __name__ == '__main__':
    main()
