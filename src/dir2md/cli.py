"""Command-line interface for dir2md."""
import os
import sys
import logging
from typing import Optional, Tuple

import click

from . import __version__
from .adapters import InvalidRootError, validate_root
from .core.generator import SnapshotGenerator
from .core.languages import DEFAULT_TEXT_EXTS
from .core.models import Config
from .core.tokenizer import TokenCounter
from .utils.console import ConsoleManager, THEMES


def setup_logging(debug: bool) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.WARNING
    format_string = '[%(levelname)s] %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def _split_csv(values: Tuple[str, ...]) -> Tuple[str, ...]:
    """Flatten repeated and comma-separated option values."""
    items = []
    for value in values:
        items.extend(part.strip() for part in value.split(','))
    return tuple(item for item in items if item)


@click.command()
@click.argument('directory', required=True)
@click.option('--output', '-o', default='./snapshot.md', show_default=True, help='Output Markdown file')
@click.option('--contents', is_flag=True, help='Include file contents (text/code files only)')
@click.option('--analyze', is_flag=True, help='Add per-file analysis comments')
@click.option('--max-depth', type=click.IntRange(min=0), default=None,
              help='Limit recursion depth (0 = root only)')
@click.option('--max-file-size', type=click.IntRange(min=0), default=500_000, show_default=True,
              help='Skip files larger than this many bytes')
@click.option('--max-lines', type=click.IntRange(min=0), default=1200, show_default=True,
              help='Trim each file to at most N lines')
@click.option('--max-bytes', type=click.IntRange(min=0), default=200_000, show_default=True,
              help='Trim each file to at most N bytes')
@click.option('--max-total-bytes', type=click.IntRange(min=0), default=5_000_000, show_default=True,
              help='Stop inlining once the contents section would exceed N bytes')
@click.option('--ext', 'ext', multiple=True,
              help='Whitelist of extensions, comma-separated (e.g. .js,.ts,.py)')
@click.option('--exclude', multiple=True, help='Comma-separated ignore globs (repeatable)')
@click.option('--no-tokens', is_flag=True, help='Disable token counting of the output')
@click.option('--theme', '-t', type=click.Choice(sorted(THEMES)), default='manhattan',
              help='Terminal color theme')
@click.option('--debug', is_flag=True, help='Enable debug logging and tracebacks')
@click.version_option(version=__version__)
def main(directory: str, output: str, contents: bool, analyze: bool, max_depth: Optional[int],
         max_file_size: int, max_lines: int, max_bytes: int, max_total_bytes: int,
         ext: Tuple[str, ...], exclude: Tuple[str, ...], no_tokens: bool, theme: str,
         debug: bool) -> None:
    """
    Generate a single Markdown snapshot of a directory (tree + optional file contents).

    Examples:

        dir2md .

        dir2md ./project --contents --analyze -o project.md

        dir2md ./project --contents --exclude "dist/**,*.lock" --max-depth 3
    """
    console = ConsoleManager(theme=theme, file=sys.stderr)
    setup_logging(debug)

    try:
        root = validate_root(directory)
    except InvalidRootError as e:
        console.print_error(f"Error: {e}")
        sys.exit(1)

    try:
        config = Config.from_options(
            root,
            ext_whitelist=_split_csv(ext) if ext else DEFAULT_TEXT_EXTS,
            exclude_globs=_split_csv(exclude),
            include_contents=contents,
            analyze=analyze,
            max_depth=max_depth,
            max_file_size=max_file_size,
            max_lines_per_file=max_lines,
            max_bytes_per_file=max_bytes,
            max_total_bytes=max_total_bytes,
        )

        console.print(f"[dim]SCANNING[/dim] [path]{root}[/path]")
        markdown = SnapshotGenerator(config).generate()

        out_path = os.path.abspath(output)
        with open(out_path, 'w', encoding='utf-8', newline='') as f:
            f.write(markdown)

        console.print_success(f"Wrote Markdown to {out_path}")
        console.print(f"[info]SIZE:[/info] [number]{len(markdown.encode('utf-8')):,}[/number] bytes")
        if not no_tokens:
            tokens = TokenCounter().count(markdown)
            console.print(f"[info]TOKENS:[/info] [number]~{tokens:,}[/number]")

    except KeyboardInterrupt:
        console.print_error("PROCESS TERMINATED BY USER")
        sys.exit(1)

    except Exception as e:
        console.print_error(f"CRITICAL ERROR: {e}")
        if debug:
            console.print_exception()
        sys.exit(1)


if __name__ == '__main__':
    main()
