#!/usr/bin/env python3
"""
Document Conversion CLI

Converts extracted text (prose with $...$ and $$...$$ LaTeX math) into a
paragraph/run document tree with equations in Word's linear format, and
extracts that text from images or PDFs with a vision model.

Commands:
    segment   - Show how a text file splits into paragraphs and math
    transpile - Rewrite one LaTeX equation into linear format
    convert   - Convert a text file to a document tree (YAML)
    extract   - Extract text from an image or PDF (optionally convert it too)

Examples:
    python scripts/convert_document.py transpile "\\frac{1}{2}"

    python scripts/convert_document.py transpile "x_{i}^{2}" --trace

    python scripts/convert_document.py convert outs/page_1.txt

    python scripts/convert_document.py extract scans/lecture.pdf --convert
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from documath.contexts.assembly import convert_file, convert_text, save_document
from documath.contexts.extraction import extract_document
from documath.contexts.segmenting import blocks_to_dicts, segment
from documath.contexts.transpiling import find_unrecognized_commands, trace_transpile, transpile
from documath.utils.config import create_literal_config, load_settings

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", "."))

app = typer.Typer(
    help="Convert text with LaTeX math into Word-ready document trees",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


@app.command("segment")
def segment_command(
    input_path: Annotated[Path, typer.Argument(help="UTF-8 text file with $...$ / $$...$$ math")],
):
    """
    Print the content blocks of a text file as YAML.

    Examples:\n

        $ convert_document.py segment outs/page_1.txt
    """
    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    blocks = segment(text)
    typer.echo(OmegaConf.to_yaml(create_literal_config({"blocks": blocks_to_dicts(blocks)})))


@app.command("transpile")
def transpile_command(
    latex: Annotated[str, typer.Argument(help="Equation body without $ delimiters")],
    trace: Annotated[
        bool,
        typer.Option("--trace", "-t", help="Show the equation after every rewrite rule"),
    ] = False,
):
    """
    Rewrite one LaTeX equation into Word's linear equation format.

    Examples:\n

        $ convert_document.py transpile "\\sqrt[3]{x}"

        $ convert_document.py transpile "\\begin{pmatrix}a&b\\\\c&d\\end{pmatrix}" --trace
    """
    if trace:
        for rule_name, output in trace_transpile(latex):
            typer.echo(f"  {rule_name:<30} {output}")
        typer.echo("")

    result = transpile(latex)
    typer.secho(result, bold=True)

    leftover = find_unrecognized_commands(result)
    if leftover:
        typer.secho(
            f"Passed through unchanged: {', '.join(leftover)}", fg=typer.colors.YELLOW, err=True
        )


@app.command("convert")
def convert_command(
    input_path: Annotated[Path, typer.Argument(help="UTF-8 text file with $...$ / $$...$$ math")],
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="YAML output path (default: input with .yaml)"),
    ] = None,
):
    """
    Convert a text file into a document tree saved as YAML.

    Examples:\n

        $ convert_document.py convert outs/page_1.txt

        $ convert_document.py convert outs/page_1.txt -o outs/page_1.tree.yaml
    """
    typer.secho(f"\nConverting: {input_path}\n", fg=typer.colors.BLUE, bold=True)

    result = convert_file(input_path, output_path)

    if result.success:
        typer.secho("✓ Conversion succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Paragraphs: {result.paragraph_count}")
        typer.echo(f"  Equations: {result.equation_count}")
        typer.echo(f"  Time: {result.time_s:.2f}s")
        typer.echo(f"  Output: {display_path(result.output_path)}")
    else:
        typer.secho("✗ Conversion failed", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Time: {result.time_s:.2f}s")
        if result.error:
            typer.echo(f"  Error: {result.error}")

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'convert.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("extract")
def extract_command(
    source_path: Annotated[Path, typer.Argument(help="Image file (png, jpg, webp, gif) or PDF")],
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Text output path (default: source with .txt)"),
    ] = None,
    convert: Annotated[
        bool,
        typer.Option("--convert", "-c", help="Also convert the extracted text to a document tree"),
    ] = False,
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="LLM provider: anthropic, openai or gemini"),
    ] = None,
    model: Annotated[Optional[str], typer.Option("--model", "-m", help="Model name")] = None,
    ocr: Annotated[
        Optional[bool],
        typer.Option("--ocr/--no-ocr", help="Enhanced OCR for low-quality photos (image files only)"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="YAML settings file"),
    ] = None,
):
    """
    Extract text and LaTeX math from an image or PDF.

    Examples:\n

        $ convert_document.py extract scans/board.jpg --ocr

        $ convert_document.py extract notes.pdf --convert --provider anthropic
    """
    settings = load_settings(
        config_path, overrides={"provider": provider, "model": model, "use_ocr": ocr}
    )

    typer.secho(f"\nExtracting: {source_path}\n", fg=typer.colors.BLUE, bold=True)

    result = extract_document(source_path, settings=settings)

    if not result.success:
        typer.secho("✗ Extraction failed", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Time: {result.time_s:.2f}s")
        typer.echo(f"  Error: {result.error}")
        if result.log_dir:
            typer.echo(f"  Log: {display_path(result.log_dir / 'extract.log')}")
        typer.echo("")
        raise typer.Exit(code=1)

    if output_path is None:
        output_path = source_path.with_suffix(".txt")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.text, encoding="utf-8")

    typer.secho("✓ Extraction succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Images: {result.image_count}")
    typer.echo(f"  Time: {result.time_s:.2f}s")
    typer.echo(f"  Text: {display_path(output_path)}")

    if convert:
        tree_path = output_path.with_suffix(".yaml")
        tree = convert_text(result.text)
        save_document(tree, tree_path)
        typer.echo(f"  Document tree: {display_path(tree_path)}")
        typer.echo(f"  Paragraphs: {len(tree.paragraphs)}, equations: {tree.equation_count}")

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'extract.log')}")
    typer.echo("")


if __name__ == "__main__":
    app()
