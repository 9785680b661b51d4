"""
Command Line Interface for imagedesc.
"""
import logging

import click
from pydantic import ValidationError

from ..exceptions import DescriptorError
from ..MODELS.wire import ZERO_TIME, format_timestamp
from ..PARSERS.image_parser import ImageParser
from ..PARSERS.manifest_parser import ManifestParser
from ..UTILS.consistency import check_consistency
from ..UTILS.digest import calculate_digest
from ..UTILS.settings import load_settings


@click.group()
@click.option('--env-file', default='.env', help='Settings file')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
              help='Override the configured log level')
@click.pass_context
def cli(ctx, env_file, log_level):
    """
    imagedesc - inspect image configuration descriptors.

    Reads descriptors and archive indexes exactly as they are stored.
    """
    ctx.ensure_object(dict)
    try:
        settings = load_settings(env_file)
    except ValidationError as e:
        raise click.UsageError(f"Invalid settings: {e}")
    if log_level:
        settings = settings.model_copy(update={'log_level': log_level.upper()})
    logging.basicConfig(level=settings.log_level, format='%(levelname)s %(name)s: %(message)s')
    ctx.obj['settings'] = settings


def _load(ctx, path, strict=None):
    if strict is None:
        strict = ctx.obj['settings'].strict_history
    try:
        return ImageParser(strict=strict).parse(path)
    except DescriptorError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def inspect(ctx, path):
    """Show a summary of a descriptor."""
    image = _load(ctx, path)
    created = format_timestamp(image.created) if image.created != ZERO_TIME else '-'

    click.echo(f"{'DIGEST':15} {calculate_digest(image.raw_json())}")
    if image.id:
        click.echo(f"{'ID':15} {image.id}")
    if image.parent:
        click.echo(f"{'PARENT':15} {image.parent}")
    click.echo(f"{'CREATED':15} {created}")
    click.echo(f"{'PLATFORM':15} {image.os or '-'}/{image.architecture or '-'}")
    if image.docker_version:
        click.echo(f"{'DOCKER':15} {image.docker_version}")
    click.echo(f"{'ROOTFS':15} {image.rootfs.type or '-'}")

    click.echo("")
    click.echo("LAYERS")
    for diff_id in image.diff_ids:
        click.echo(f"  {diff_id}")

    if image.history:
        click.echo("")
        click.echo(f"{'HISTORY':7} {'EMPTY':6} COMMAND")
        for i, entry in enumerate(image.history):
            empty = 'yes' if entry.empty_layer else 'no'
            click.echo(f"{i:<7} {empty:6} {entry.created_by}")


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx, path):
    """Compare the build history with the layer chain."""
    image = _load(ctx, path, strict=False)
    report = check_consistency(image)

    click.echo(f"History entries with layers: {report.non_empty_history}")
    click.echo(f"Diff IDs: {report.diff_ids}")
    for diff_id in report.invalid_diff_ids:
        click.echo(f"Malformed diff ID: {diff_id}")

    if not report.consistent:
        click.echo("Inconsistent")
        ctx.exit(1)
    click.echo("Consistent")


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def raw(ctx, path):
    """Write the descriptor exactly as stored."""
    image = _load(ctx, path)
    click.get_binary_stream('stdout').write(image.raw_json())


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def manifest(ctx, path):
    """List the images of an archive index."""
    try:
        manifests = ManifestParser().parse(path)
    except DescriptorError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"{'CONFIG':40} {'LAYERS':6} TAGS")
    click.echo("-" * 60)
    for entry in manifests:
        tags = ', '.join(entry.repo_tags) or '<none>'
        click.echo(f"{entry.config:40} {len(entry.layers):<6} {tags}")


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
