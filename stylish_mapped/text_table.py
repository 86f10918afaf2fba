# stylish_mapped/text_table.py

"""
Render rows of cells as an aligned plain-text table.

Column widths are measured with a caller-supplied `string_length` so cells
carrying ANSI color codes still line up on screen.
"""

from typing import Callable, Sequence


def render_table(
    rows: Sequence[Sequence[object]],
    align: Sequence[str] = (),
    hsep: str = "  ",
    string_length: Callable[[str], int] = len,
) -> str:
    """
    Return `rows` as text, one line per row.

    :param rows: matrix of cells; cells are converted with str()
    :param align: per-column hint, "" or "l" left, "r" right, "c" centered
    :param hsep: separator placed between cells
    :param string_length: width function used to measure cells
    :return: the table, lines joined by newlines, trailing spaces trimmed
    """
    cells = [[str(c) for c in row] for row in rows]
    widths = []
    for row in cells:
        for index, cell in enumerate(row):
            length = string_length(cell)
            if index >= len(widths):
                widths.append(length)
            elif length > widths[index]:
                widths[index] = length

    lines = []
    for row in cells:
        padded = []
        for index, cell in enumerate(row):
            hint = align[index] if index < len(align) else ""
            gap = max(widths[index] - string_length(cell), 0)
            if hint == "r":
                padded.append(" " * gap + cell)
            elif hint == "c":
                left = gap // 2
                padded.append(" " * left + cell + " " * (gap - left))
            else:
                padded.append(cell + " " * gap)
        lines.append(hsep.join(padded).rstrip())
    return "\n".join(lines)
