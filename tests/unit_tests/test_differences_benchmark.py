import time

import pytest

from seqdiff.differences import Differences
from seqdiff.line_differences import LineDifferences


def create_large_content(num_lines=5000, modification_rate=250):
    """
    Creates two large line lists.
    modification_rate: replacing 1 line every N lines.
    """
    lines_a = [f"This is line number {i} with some static content." for i in range(num_lines)]
    lines_b = list(lines_a)

    modified = 0
    for i in range(0, num_lines, modification_rate):
        lines_b[i] = f"This is line number {i} MODIFIED content."
        modified += 1

    return lines_a, lines_b, modified


@pytest.mark.benchmark
def test_benchmark_and_correctness():
    print("\n\n=== seqdiff Benchmark ===")

    lines_a, lines_b, modified = create_large_content()
    print(f"Diffing {len(lines_a)} lines with {modified} replaced lines...")

    start_time = time.perf_counter()
    differences = Differences(lines_a, lines_b)
    elapsed = time.perf_counter() - start_time
    print(f"Differences time: {elapsed:.4f}s, {len(differences)} chunks")

    # Every replaced line is one deletion plus one insertion.
    assert differences.edit_distance == 2 * modified
    assert [tag for tag, *_ in differences.get_opcodes()].count('replace') == modified

    rebuilt_a = [item for chunk in differences if chunk.a is not None for item in chunk.a]
    rebuilt_b = [item for chunk in differences if chunk.b is not None for item in chunk.b]
    assert rebuilt_a == lines_a
    assert rebuilt_b == lines_b


@pytest.mark.benchmark
def test_benchmark_line_differences():
    lines_a, lines_b, modified = create_large_content()
    content_a = "\n".join(lines_a) + "\n"
    content_b = "\r\n".join(lines_b) + "\r\n"

    start_time = time.perf_counter()
    differences = LineDifferences(content_a, content_b)
    elapsed = time.perf_counter() - start_time
    print(f"\nLineDifferences time: {elapsed:.4f}s")

    # Terminator style is ignored by default, so only the replaced lines differ.
    assert differences.edit_distance == 2 * modified
    assert "".join(chunk.b for chunk in differences if chunk.b is not None) == content_b
