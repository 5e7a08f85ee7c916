import os
import logging
import sys
import typing as t
from pathlib import Path

import click
import colorama
import yaml

from starscope.cli import conf
from starscope.cli.cliutils import echo_err
from starscope.cli.log import configure_logging
from starscope.scope import ChildScope, RootScope
from starscope.template import compile_template
from starscope.utils.error import StarscopeError

colorama.init()

log = logging.getLogger("starscope.start")


def valid_directory(ctx, param, val):
    if not os.path.isdir(val):
        raise click.BadParameter("should be a directory")
    return val


def parse_scalar(raw: str) -> t.Any:
    if not raw:
        return ""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def parse_assignment(ctx, param, values) -> t.List[t.Tuple[str, t.Any]]:
    assignments = []
    for val in values:
        name, sep, raw = val.partition('=')
        if not sep or not name:
            raise click.BadParameter(f"expected 'name=value', got '{val}'")
        assignments.append((name, parse_scalar(raw)))
    return assignments


def child_scope(root: RootScope,
                assignments: t.List[t.Tuple[str, t.Any]],
                removals: t.Iterable[str]) -> ChildScope:
    scope = root.scope()
    for name in removals:
        scope.remove(name)
    for name, value in assignments:
        scope.set(name, value)
    return scope


def scope_options(fn):
    fn = click.option('--unset', 'removals', multiple=True, metavar='NAME',
                      help="hide a configured variable")(fn)
    fn = click.option('--set', 'assignments', multiple=True, metavar='NAME=VALUE',
                      callback=parse_assignment,
                      help="override a variable (value parsed as YAML)")(fn)
    return fn


@click.group()
@click.option('--project', envvar='STARSCOPE_PROJECT', default=os.getcwd(), callback=valid_directory)
@click.option('--verbose/--no-verbose', default=False)
@click.pass_context
def cli(ctx, project, verbose):
    try:
        ctx.obj = conf.load(Path(project).absolute())
    except StarscopeError as e:
        echo_err(str(e))
        sys.exit(1)
    configure_logging(ctx.obj.logging, verbose)
    log.debug(f"Loaded configuration from '{project}'")


@cli.command()
@click.argument('template', required=False)
@click.option('--file', '-f', 'template_file', type=click.File('r'),
              help="read the template from a file")
@scope_options
@click.pass_obj
def render(config: conf.Configuration, template, template_file, assignments, removals):
    """Render TEMPLATE against the configured variables."""
    if template_file is not None:
        if template is not None:
            raise click.UsageError("provide either a TEMPLATE or --file, not both")
        template = template_file.read()
    if template is None:
        raise click.UsageError("provide a TEMPLATE or --file")

    try:
        root = config.root_scope()
        compiled = compile_template(template)
        with child_scope(root, assignments, removals) as scope:
            click.echo(compiled.render(scope))
    except StarscopeError as e:
        echo_err(str(e))
        sys.exit(1)


@cli.command()
@scope_options
@click.pass_obj
def keys(config: conf.Configuration, assignments, removals):
    """List the variable names visible to templates."""
    try:
        root = config.root_scope()
        with child_scope(root, assignments, removals) as scope:
            for name in sorted(scope.keys()):
                click.echo(name)
    except StarscopeError as e:
        echo_err(str(e))
        sys.exit(1)


if __name__ == '__main__':
    cli()
