"""Command-line interface for the Ignition coder."""

import asyncio
import logging
import sys
import click
from pathlib import Path
from . import __version__
from .ignition_coder import IgnitionCoder


class AliasedGroup(click.Group):
    """Command group resolving the short command aliases."""

    aliases = {
        "decode": "disassemble",
        "d": "disassemble",
        "div": "disassemble",
        "encode": "assemble",
        "a": "assemble",
        "prod": "assemble",
    }

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


def _configure_logging(verbose: bool) -> None:
    # Warnings and errors reach the user through the command output
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.CRITICAL,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_warnings(warnings) -> None:
    for warning in warnings:
        click.echo(f"Warning: {warning}", err=True)


@click.group(cls=AliasedGroup)
@click.version_option(version=__version__)
def main():
    """Decode and encode Fedora CoreOS Ignition configuration files."""
    pass


@main.command()
@click.argument('ignition_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('target_dir', type=click.Path(file_okay=False, path_type=Path))
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def disassemble(ignition_file: Path, target_dir: Path, verbose: bool):
    """Decode an Ignition file, extracting embedded files (aliases: decode, d, div)."""
    _configure_logging(verbose)
    click.echo(f"Disassembling {ignition_file} into {target_dir}...")

    coder = IgnitionCoder(on_progress=lambda count, reference: click.echo(f"  [{count}] {reference}"))
    result = asyncio.run(coder.disassemble_file(ignition_file, str(target_dir)))
    _print_warnings(result.warnings)

    if not result.success:
        click.echo("❌ Disassemble operation failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        sys.exit(1)

    click.echo(f"✅ Extracted {result.file_count} file(s) to {result.output_directory}")
    click.echo(f"📄 Modified Ignition file saved as: {result.document_path}")


@main.command()
@click.argument('target_file', type=click.Path(dir_okay=False, path_type=Path))
@click.argument('ignition_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--compact', is_flag=True, help='Serialize the output in a compact format')
@click.option('--default', 'strip_defaults', is_flag=True, help='Suppress fields that have default values')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def assemble(target_file: Path, ignition_dir: Path, compact: bool, strip_defaults: bool, verbose: bool):
    """Encode extracted files back into an Ignition file (aliases: encode, a, prod)."""
    _configure_logging(verbose)
    click.echo(f"Assembling {ignition_dir} into {target_file}...")

    coder = IgnitionCoder(compact=compact, strip_defaults=strip_defaults)
    result = asyncio.run(coder.assemble(str(ignition_dir), str(target_file)))
    _print_warnings(result.warnings)

    if not result.success:
        click.echo("❌ Assemble operation failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        sys.exit(1)

    click.echo(f"✅ Encoded {result.file_count} file(s) into {result.output_file}")


if __name__ == '__main__':
    main()
