#!/usr/bin/env python3
"""Command line interface for sqlup."""
import rich_click as click
from rich_click import RichGroup

from . import __version__, app_hooks
from .core.config import ConfigurationError, get_config, load_config, set_config
from .core.logging import set_package_log_level, set_package_log_output

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.SHOW_METAVARS_COLUMN = False
click.rich_click.APPEND_METAVARS_HELP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "#ff5555"
click.rich_click.ERRORS_SUGGESTION = "Try running the '--help' flag for more information."
click.rich_click.MAX_WIDTH = 120
click.rich_click.STYLE_OPTION = "#ff79c6"  # Dracula Pink - for option flags
click.rich_click.STYLE_SWITCH = "#50fa7b"  # Dracula Green - for switches
click.rich_click.STYLE_HEADER_TEXT = "bold yellow"
click.rich_click.STYLE_USAGE = "#BD93F9"  # Purple - for "Usage:" line
click.rich_click.STYLE_HELPTEXT = "#B3B8C0"
click.rich_click.STYLE_COMMAND = "#50fa7b"


@click.group(cls=RichGroup, context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120})
@click.version_option(version=__version__, prog_name="sqlup")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="⚙️ Path to a sqlup.json/.jsonc file")
@click.option("--debug", is_flag=True, help="🐞 Enable debug logging on stderr")
@click.pass_context
def main(ctx, config_path=None, debug=False):
    """🔠 [bold color(6)]sqlup[/bold color(6)] - Uppercase SQL keywords, leaving strings and comments alone

    \b
    [green]   sqlup format query.sql --dialect postgres   [/green] [italic][#B3B8C0]# Capitalize a whole file[/#B3B8C0][/italic]
    [green]   sqlup type query.sql                        [/green] [italic][#B3B8C0]# Replay the file as if typed[/#B3B8C0][/italic]
    [green]   sqlup dialects                              [/green] [italic][#B3B8C0]# Show available dialects[/#B3B8C0][/italic]
    """
    try:
        if config_path:
            set_config(load_config(config_path))
        config = get_config()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    set_package_log_level("DEBUG" if debug else config.log_level)
    # Console handlers already exist on every module logger
    if config.log_output != "console":
        set_package_log_output(config.log_output)
    ctx.ensure_object(dict)


@main.command(name="format")
@click.argument("FILE", required=False)
@click.option("-d", "--dialect", type=str, help="🗄️ SQL dialect (ansi, postgres, mysql, oracle, ms, sqlite)")
@click.option("--start", type=click.IntRange(min=0), default=0, help="First character offset of the region")
@click.option("--end", type=click.IntRange(min=0), default=None, help="End character offset of the region (exclusive)")
@click.option("-i", "--in-place", is_flag=True, help="✏️ Rewrite FILE instead of printing the result")
@click.pass_context
def format_command(ctx, file, dialect, start, end, in_place):
    """📝 Capitalize every keyword in FILE (or stdin)"""
    ctx.exit(app_hooks.on_format(file=file, dialect=dialect, start=start, end=end, in_place=in_place))


@main.command(name="type")
@click.argument("FILE", required=False)
@click.option("-d", "--dialect", type=str, help="🗄️ SQL dialect (ansi, postgres, mysql, oracle, ms, sqlite)")
@click.pass_context
def type_command(ctx, file, dialect):
    """⌨️ Replay FILE (or stdin) one keystroke at a time through the as-you-type mode"""
    ctx.exit(app_hooks.on_type(file=file, dialect=dialect))


@main.command()
@click.option("-d", "--dialect", type=str, help="🗄️ SQL dialect")
@click.option("-m", "--mode", type=str, default="sql", show_default=True, help="Major mode of the buffer (sql, redis)")
@click.option("--json", is_flag=True, help="📋 Output as JSON")
@click.pass_context
def keywords(ctx, dialect, mode, json):
    """🔑 List the keywords that would be capitalized"""
    ctx.exit(app_hooks.on_keywords(dialect=dialect, mode=mode, json=json))


@main.command()
@click.option("--json", is_flag=True, help="📋 Output as JSON")
@click.pass_context
def dialects(ctx, json):
    """🗄️ Show the available SQL dialects"""
    ctx.exit(app_hooks.on_dialects(json=json))


@main.group()
def config():
    """⚙️ Inspect configuration"""
    pass


@config.command(name="show")
@click.option("--json", is_flag=True, help="📋 Output as JSON")
@click.pass_context
def config_show(ctx, json):
    """Show the effective configuration"""
    ctx.exit(app_hooks.on_config_show(json=json))


def cli_entry():
    """Entry point for the installed console script."""
    main()


if __name__ == "__main__":
    cli_entry()
