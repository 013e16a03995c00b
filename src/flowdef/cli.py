"""
flowdef CLI
"""
import sys
from dataclasses import replace
from datetime import datetime

import click

from .config import load_config, configure_logging
from .core.parser import WorkflowParser
from .core.registry import default_registry
from .core.data_types import DateDataType
from .models.relative_time import parse_backwards_compatible_string, parse_time_in_day
from .exceptions import FlowdefError, WorkflowValidationError


@click.group()
@click.pass_context
def cli(ctx):
    """Workflow definition typing and relative time tools"""
    config = load_config()
    configure_logging(config)
    ctx.obj = config


@cli.command()
@click.argument('workflow_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def validate(config, workflow_file):
    """Validate a workflow definition file"""
    parser = WorkflowParser(validate_schema=config.validate_schema)
    try:
        workflow = parser.parse_file(workflow_file)
    except WorkflowValidationError as e:
        click.echo(f"Invalid workflow: {workflow_file}", err=True)
        for error in e.errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)
    except FlowdefError as e:
        click.echo(f"Failed to parse {workflow_file}: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"Workflow '{workflow.name}' is valid "
        f"({len(workflow.variables)} variables, {len(workflow.timers)} timers)"
    )


@cli.command()
@click.argument('expression')
@click.option('--base', default=None, help='Base time (ISO-8601), defaults to now')
@click.option('--at', 'at_time', default=None, help='Time of day, H:MM')
def resolve(expression, base, at_time):
    """Resolve a relative time such as "5 days" """
    try:
        relative_time = parse_backwards_compatible_string(expression)
        at = parse_time_in_day(at_time)
        if at is not None:
            relative_time = replace(relative_time, at=at)
        base_time = DateDataType().convert_json_to_internal_value(base) if base else datetime.now()
    except FlowdefError as e:
        raise click.BadParameter(str(e))

    click.echo(relative_time.resolve(base_time).isoformat())


@cli.command()
def types():
    """List registered type names"""
    for name in default_registry().type_names():
        click.echo(name)


def main():
    """Main entry point"""
    cli()


if __name__ == '__main__':
    main()
