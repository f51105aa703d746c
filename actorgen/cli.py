"""CLI entry point for actorgen."""

from __future__ import annotations

import json
from pathlib import Path

import click

from actorgen.codegen import generate
from actorgen.config import load_config
from actorgen.context_builder import build_model
from actorgen.errors import GeneratorError
from actorgen.loader import load_document
from actorgen.logging import configure_logging


@click.command()
@click.argument("openapi_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Generator config file (YAML).")
@click.option("--shared-package", default=None, help="Package name for types shared between actors.")
@click.option("--dump-model", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also write the intermediate model as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Debug output with timestamps.")
@click.option("-q", "--quiet", is_flag=True, help="Only warnings and errors.")
def main(
    openapi_file: Path,
    output_dir: Path,
    config_path: Path | None,
    shared_package: str | None,
    dump_model: Path | None,
    verbose: bool,
    quiet: bool,
):
    """Generate actor packages from an OpenAPI document."""
    configure_logging(verbose=verbose, quiet=quiet)

    try:
        config = load_config(config_path).with_overrides(shared_package=shared_package)
        doc = load_document(openapi_file)
        model = build_model(doc, config)

        if dump_model is not None:
            dump_model.parent.mkdir(parents=True, exist_ok=True)
            dump_model.write_text(json.dumps(model.to_dict(), indent=2) + "\n", encoding="utf-8")

        written = generate(model, output_dir, config)
    except GeneratorError as e:
        raise click.ClickException(str(e)) from e

    if not quiet:
        for path in written:
            click.echo(f"  {path}")
        click.echo(f"Generated {len(model.actors)} actor packages in {output_dir}")
