import json
import logging
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .config import OutputFormat, OutputMode, ScanConfig
from .errors import ScanError
from .output import AtomicWriter, render
from .program import load_program
from .scanner import SchemaScanner

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--format", "-f", "output_format", default=None, type=click.Choice([f.value for f in OutputFormat]))
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option(
    "--annotated-only",
    is_flag=True,
    default=False,
    help="Only collect declarations annotated with +swagger:model",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every synthesized declaration")
@click.argument("manifest", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def schema_synth(config, output_format, force, annotated_only, verbose, manifest, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = ScanConfig.from_dict(json.load(f))
    else:
        config = ScanConfig()

    # CLI flags override the config file
    if output_format is not None:
        config.output.format = OutputFormat(output_format)
    if force:
        config.output.mode = OutputMode.FORCE
    if annotated_only:
        config.annotated_only = True

    try:
        program = load_program(manifest)
        definitions = SchemaScanner(program, config).scan()
    except ScanError as e:
        raise click.ClickException(str(e)) from e

    out = render(definitions, config, reconstruct_command_line(schema_synth))

    path = Path(output)
    writer = AtomicWriter()
    validate = config.output.validate_before_write
    try:
        if config.output.mode == OutputMode.ERROR_IF_EXISTS:
            writer.write_if_not_exists(path, out, config.output.format, validate)
        elif config.output.atomic_write:
            writer.write(path, out, config.output.format, validate)
        else:
            path.write_text(out, encoding="utf-8")
    except (FileExistsError, ScanError) as e:
        raise click.ClickException(str(e)) from e

    logger.info("wrote %d definitions to %s", len(definitions), path)
