#!/usr/bin/env python3

import dataclasses
import json

import click

from gitrs.cli_utils import standard_command, add_common_options
from gitrs.core import find_repository, init_repository
from gitrs.domain.layout import RepositoryLayout
from gitrs.exit_codes import NoRepositoryFoundError, ReadError
from gitrs.render import render_repository


def split_segments(args):
    """Accept both `objects ab cd` and `objects/ab/cd` forms."""
    segments = []
    for arg in args:
        segments.extend(part for part in arg.split('/') if part)
    if not segments:
        raise click.UsageError("At least one path segment is required")
    return segments


def discover(start, config):
    layout = RepositoryLayout.from_config(config)
    repo = find_repository(start, layout)
    if repo is None:
        raise NoRepositoryFoundError(
            f"Not a gitrs repository (or any of the parent directories): {start}"
        )
    return repo


@click.group()
@click.version_option(package_name='gitrs')
def cli():
    """gitrs - Control-directory storage for a small version-control system.

    Creates repositories, locates the enclosing repository of a directory,
    and stores compressed content inside the control directory.
    """
    pass


@cli.command('init')
@click.argument('path', default='.', type=click.Path(file_okay=True, dir_okay=True))
@click.option('-b', '--branch', default=None, help='Default branch written to HEAD')
@click.option('--control-dir', default=None, help='Name of the control directory')
@add_common_options('verbose', 'quiet')
@standard_command
def init_cmd(path, branch, control_dir, config):
    """Create an empty repository at PATH (default: current directory).

    \b
    Examples:
        gitrs init                 # Initialize the current directory
        gitrs init ~/proj -b main  # New repository with branch 'main'
    """
    layout = RepositoryLayout.from_config(config)
    overrides = {}
    if branch:
        overrides['default_branch'] = branch
    if control_dir:
        overrides['control_dir_name'] = control_dir
    if overrides:
        try:
            layout = dataclasses.replace(layout, **overrides)
        except ValueError as e:
            raise click.BadParameter(str(e))

    return init_repository(path, layout)


@cli.command('root')
@click.argument('path', default='.', type=click.Path())
@click.option('--table', is_flag=True, help='Display as formatted table')
@add_common_options('verbose', 'quiet')
@standard_command
def root_cmd(path, table, config):
    """Print the repository enclosing PATH (default: current directory)."""
    repo = discover(path, config)
    if table:
        render_repository(repo)
        return None
    return repo


@cli.command('write')
@click.argument('segments', nargs=-1, required=True)
@click.option('-i', '--input', 'source', type=click.File('rb'), default='-',
              help='File to read the payload from (default: stdin)')
@click.option('-l', '--level', type=click.IntRange(-1, 9), default=None,
              help='zlib compression level (default from config)')
@click.option('-C', '--repo-dir', default='.', type=click.Path(),
              help='Directory to start repository discovery from')
@add_common_options('verbose', 'quiet')
@standard_command
def write_cmd(segments, source, level, repo_dir, config):
    """Compress a payload and store it at SEGMENTS in the control directory.

    \b
    Examples:
        echo hello | gitrs write objects/ab/cdef
        gitrs write -i blob.bin objects ab cdef
    """
    repo = discover(repo_dir, config)
    if level is None:
        level = config['storage']['compression_level']
    path = repo.upsert_file(split_segments(segments), source.read(), level=level)
    return {'path': str(path)}


@cli.command('cat')
@click.argument('segments', nargs=-1, required=True)
@click.option('-C', '--repo-dir', default='.', type=click.Path(),
              help='Directory to start repository discovery from')
@add_common_options('verbose', 'quiet')
@standard_command
def cat_cmd(segments, repo_dir, config):
    """Decompress the content stored at SEGMENTS to stdout."""
    repo = discover(repo_dir, config)
    segments = split_segments(segments)
    data = repo.read_file(segments)
    if data is None:
        raise ReadError(f"No content at {'/'.join(segments)}", repo.path(*segments))
    stdout = click.get_binary_stream('stdout')
    stdout.write(data)
    stdout.flush()
    return None


@cli.group('config')
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command('show')
@click.option('--pretty', is_flag=True, help='Display as formatted JSON instead of single-line JSONL')
@click.option('--path', is_flag=True, help='Show the config file path being used')
@add_common_options('verbose', 'quiet')
@standard_command
def show_config(pretty, path, config):
    """Show the current configuration with all merges applied."""
    from gitrs.config import get_config_path

    if path:
        return {"config_path": str(get_config_path())}

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
        return None
    return config


def main():
    cli()

if __name__ == "__main__":
    main()
