"""Main CLI entry point."""
from pathlib import Path

import click

from headwind.compiler import stringify_properties
from headwind.config import load_config
from headwind.exceptions import HeadwindSyntaxError
from headwind.render import RenderPass
from headwind.stylesheet import Stylesheet


@click.group()
@click.version_option(package_name="headwind")
def cli():
    """Headwind CLI.

    Run 'headwind compile STYLE' to see what an inline style compiles to.
    Run 'headwind build FILE' to rewrite the inline styles of an HTML file.
    """
    pass


@cli.command("compile")
@click.argument('style')
@click.option('--config', 'config_path', default=None, type=click.Path(dir_okay=False), help='Config file (default: ./headwind.config.py)')
def compile_command(style, config_path):
    """Compile a single inline STYLE string."""
    config = load_config(config_path)

    try:
        compiled = config.make_compiler().compile(config.make_parser().parse(style))
    except HeadwindSyntaxError as e:
        raise click.ClickException(str(e))

    stylesheet = Stylesheet()
    stylesheet.merge_rules(compiled.rules)

    click.echo(f"class: {' '.join(compiled.classes)}")
    if compiled.custom_properties:
        click.echo(f"style: {stringify_properties(compiled.custom_properties)}")
    click.echo(stylesheet.drain())


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('-o', '--output', default=None, type=click.Path(dir_okay=False, path_type=Path), help='Output file (default: stdout)')
@click.option('--config', 'config_path', default=None, type=click.Path(dir_okay=False), help='Config file (default: ./headwind.config.py)')
def build(input_file, output, config_path):
    """Rewrite the inline styles of an HTML file into atomic classes."""
    config = load_config(config_path)
    markup = input_file.read_text(encoding='utf-8')

    try:
        with RenderPass(config) as render_pass:
            rendered = render_pass.render(markup)
    except HeadwindSyntaxError as e:
        raise click.ClickException(f"{input_file}: {e}")

    if output is None:
        click.echo(rendered)
        return

    output.write_text(rendered, encoding='utf-8')
    click.echo(f"✅ Wrote {output}")


if __name__ == "__main__":
    cli()
