"""Click CLI for godoc2md."""

import click


@click.group()
def cli():
    """godoc2md: render Go package documentation as README Markdown."""


@cli.command()
@click.argument("package_dir", default=".", type=click.Path(exists=True, file_okay=False))
def init(package_dir):
    """Create a .godoc2md.toml with the default render settings."""
    from pathlib import Path

    from godoc_md.config import create_default_config

    try:
        config_path = create_default_config(Path(package_dir).resolve())
    except FileExistsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Created {config_path}")


@cli.command()
@click.argument("package")
@click.option("--import-path", default=None, help="Import path used for source links.")
@click.option("--tabwidth", "tab_width", type=int, default=None, help="Tab width for printed code.")
@click.option("--template", default=None, type=click.Path(), help="Path to an alternate template file.")
@click.option("--ex/--no-ex", "show_examples", default=None, help="Show examples.")
@click.option("--hashformat", "hash_format", default=None, help="Source link URL hash format, e.g. '#L%d'.")
@click.option("--srclink", "link_format", default=None,
              help="Format for the entire source link, taking (path, line, low, high).")
@click.option("-o", "--output", default=None, type=click.Path(),
              help="Output file path. Writes to stdout if unspecified or '-'.")
@click.option("-u", "--unexported", is_flag=True, help="Include unexported declarations.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def render(package, import_path, tab_width, template, show_examples, hash_format,
           link_format, output, unexported, verbose):
    """Render the documentation of PACKAGE (a directory or an import path)."""
    import logging
    import tomllib
    from pathlib import Path

    from godoc_md.config import ConfigError, build_render_config, load_config
    from godoc_md.corpus.loader import PackageNotFoundError, load_package, resolve_package_dir
    from godoc_md.render import Renderer

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        package_dir, resolved_import = resolve_package_dir(package)
    except PackageNotFoundError as e:
        raise click.ClickException(str(e)) from e

    # Configuration is validated in full before anything is rendered.
    try:
        config = build_render_config(
            load_config(package_dir),
            tab_width=tab_width,
            hash_format=hash_format,
            link_format=link_format,
            show_examples=show_examples,
            template=template,
        )
        renderer = Renderer(config)
    except (ConfigError, tomllib.TOMLDecodeError) as e:
        raise click.UsageError(str(e)) from e

    try:
        pkg = load_package(
            str(package_dir), import_path or resolved_import, include_unexported=unexported,
        )
    except PackageNotFoundError as e:
        raise click.ClickException(str(e)) from e

    text = renderer.render(pkg)
    if output and output != "-":
        out_path = Path(output)
        out_path.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {out_path}", err=True)
    else:
        click.echo(text, nl=False)
