"""
Book assembly: stitch chapter files into one markdown document.

Each item is followed by a raw LaTeX page break so the next chapter
starts on a new page. In category mode the README categories become
top-level headings and every chapter heading is demoted one level:

    Category (H1) → Chapter (H2) → Sections (H3)
"""

import os
import re

from pdfbook.errors import MissingFileError, UnreadableFileError


# Literal backslash token; pandoc passes it through with +raw_tex
PAGE_BREAK = "\n\n\\newpage\n\n"

FENCE = "```"
HEADING_RE = re.compile(r"^#+\s")


def split_lines(text):
    """Split on "\\n" only; a final newline does not start an empty line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def read_text(path):
    """Read a UTF-8 file, turning read failures into UnreadableFileError."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableFileError(path, e)


def demote_headings(text):
    """
    Demote every ATX heading by one level, skipping fenced code blocks.

    Every emitted line ends with a newline.
    """
    out = []
    in_code = False
    for line in split_lines(text):
        if line.startswith(FENCE):
            in_code = not in_code
        elif not in_code and HEADING_RE.match(line):
            line = "#" + line
        out.append(line + "\n")
    return "".join(out)


def category_block(label):
    return f"# {label}\n\n"


def read_chapter(path):
    if not os.path.isfile(path):
        raise MissingFileError(path)
    return read_text(path)


def iter_chunks(items, include_categories=False):
    """
    Yield the document text item by item, page break included.

    Files are read lazily, so a missing file stops the stream at that item.
    """
    for item in items:
        if item.is_category:
            yield category_block(item.value) + PAGE_BREAK
            continue

        content = read_chapter(item.value)
        if include_categories:
            content = demote_headings(content)
        yield content + PAGE_BREAK


def assemble_book(items, include_categories=False):
    """Return the full assembled document as a string."""
    return "".join(iter_chunks(items, include_categories))


def write_book(items, path, include_categories=False, verbose=False):
    """
    Write the assembled document to `path`, one item at a time.

    On MissingFileError the partially written file is left on disk.
    Returns the number of items written.
    """
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for chunk in iter_chunks(items, include_categories):
            f.write(chunk)
            count += 1
    if verbose:
        print(f"  Assembled {count} items → {path}")
    return count
