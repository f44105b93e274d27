import argparse
import os
import sys
import time
from pathlib import Path


# ruff: noqa: T201, ANN201
# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from seqdiff.line_differences import LineDifferences, LineEndings
from seqdiff.string_differences import StringDifferences, TextOptions


def print_line_chunks(diffs: LineDifferences):
    """Prints every line of every chunk prefixed with ' ', '-' or '+'."""
    for chunk in diffs:
        if chunk.are_equal:
            for line in chunk.a.splitlines():
                print(" " + line)
            continue
        if chunk.a is not None:
            for line in chunk.a.splitlines():
                print("-" + line)
        if chunk.b is not None:
            for line in chunk.b.splitlines():
                print("+" + line)


def print_string_chunks(diffs: StringDifferences):
    """Prints chunks inline: deletions as [-text-], insertions as {+text+}."""
    for chunk in diffs:
        if chunk.are_equal:
            print(chunk.a, end='')
        elif chunk.a is not None:
            print(f"[-{chunk.a}-]", end='')
        else:
            print(f"{{+{chunk.b}+}}", end='')
    print()


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError:
        print(f"Error: '{path}' is not UTF-8 text.")
        sys.exit(2)


def main() -> None:
    parser = argparse.ArgumentParser(description="Show the aligned chunks between two text files.")
    parser.add_argument("file_a", help="Path to the original file")
    parser.add_argument("file_b", help="Path to the changed file")
    parser.add_argument("--mode", default="lines", choices=["lines", "chars"], help="Diff granularity")
    parser.add_argument("--ignore-case", action="store_true", help="Compare characters case-insensitively (chars mode)")
    parser.add_argument("--ignore-whitespace", action="store_true",
                        help="Treat all whitespace as equal (chars mode)")
    parser.add_argument("--keep-line-endings", action="store_true",
                        help="Compare lines including their terminators (lines mode)")

    args = parser.parse_args()

    path_a = Path(args.file_a)
    path_b = Path(args.file_b)
    for path in (path_a, path_b):
        if not path.exists():
            print(f"Error: '{path}' not found.")
            sys.exit(2)

    content_a = read_text(path_a)
    content_b = read_text(path_b)

    print(f"Diffing {path_a} -> {path_b} by {args.mode}", file=sys.stderr)
    start_time = time.perf_counter()

    if args.mode == "lines":
        line_endings = LineEndings.KEEP if args.keep_line_endings else LineEndings.STRIP
        diffs = LineDifferences(content_a, content_b, line_endings=line_endings)
        print_line_chunks(diffs)
    else:
        options = TextOptions.NONE
        if args.ignore_case:
            options |= TextOptions.IGNORE_CASE
        if args.ignore_whitespace:
            options |= TextOptions.IGNORE_WHITESPACE
        diffs = StringDifferences(content_a, content_b, text_options=options)
        print_string_chunks(diffs)

    end_time = time.perf_counter()
    print(f"{len(diffs)} chunks, edit distance {diffs.edit_distance}, "
          f"time taken: {end_time - start_time:.4f}s", file=sys.stderr)
    sys.exit(0 if diffs.are_equal else 1)


if __name__ == "__main__":
    main()
