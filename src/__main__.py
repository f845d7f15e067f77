#!/usr/bin/env python3
"""
mathitem - Render the TeX math in a text document

Reads a plain text (or HTML fragment) document, finds every delimited TeX
expression, carries each one through compile, typeset and insertion, and
writes the rendered document.

Like its sibling ChRIS apps, this uses the chris_plugin "plugin" pattern
as a general purpose python app framework.

Delimiters (configurable via MATHITEM_INLINE_DELIMITERS and
MATHITEM_DISPLAY_DELIMITERS):
    inline:  $...$    \\(...\\)
    display: $$...$$  \\[...\\]

Expressions that fail to parse or render are replaced by an error
indicator; the rest of the document is still rendered.

Usage:
    mathitem inputdir/ outputdir/ --inputFile notes.txt

Examples:
    # Basic render
    mathitem . output/ --inputFile notes.txt

    # Custom output name, verbose
    mathitem . output/ --inputFile notes.txt --outputFile notes.html -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import MathDocument, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="mathitem - render the TeX math in a text document",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Source document (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="index.html",
    type=str,
    help="Rendered document name (relative to outputdir)",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source document
            - htmlOutputFile: Path the rendered document is written to
            - envOK: True if environment is valid

    Exits:
        1 if the source document is not found
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.htmlOutputFile = state.outputdir / state.outputFile
    state.htmlOutputFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source document.

    Returns:
        ProgramState with added field:
            - sourceText: Raw document text

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def math_render(inputstate: ProgramState) -> ProgramState:
    """
    Render every math expression and write the rendered document.

    Returns:
        ProgramState with added fields:
            - mathDocument: The MathDocument used for rendering
            - renderResult: Dict with math, inserted, errors, output_file

    Exits:
        1 if no source text is available or the document cannot be written
    """
    state = inputstate.copy()

    LOG("Rendering math...", level=1)
    if state.sourceText is None:
        print("Error: No source text available", file=sys.stderr)
        sys.exit(1)

    document = MathDocument.document_fromText(state.sourceText)
    result = document.render()

    try:
        state.htmlOutputFile.write_text(document.document.serialize(), encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Wrote {state.htmlOutputFile}", level=2)

    state.mathDocument = document
    state.renderResult = {**result, 'output_file': str(state.htmlOutputFile)}
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering complete!", level=1)
    LOG(f"  Output: {state.renderResult['output_file']}", level=1)
    LOG(f"  Math:   {state.renderResult['math']} found, "
        f"{state.renderResult['inserted']} inserted", level=1)
    if state.renderResult['errors']:
        LOG(f"  Errors: {state.renderResult['errors']} expressions failed", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="mathitem - render TeX math in text documents",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render the math of one document.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. source_read: Read the source document
        3. math_render: Find, compile, typeset and insert all math
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the source document
        outputdir: Directory where the rendered document will be written
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, math_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
