"""
Input resolution: decide which chapter files go into the book, and in what order.

Strategies, first non-empty result wins:
    1. Explicit paths from the command line
    2. Links in the index document (README.md)
    3. Chapter files in the project directory matching <prefix>NN.md
"""

import os
import re
from collections import namedtuple

from pdfbook.assemble import read_text, split_lines
from pdfbook.errors import ResolutionError


CATEGORY = "category"
FILE = "file"


class InputItem(namedtuple("InputItem", ["kind", "value"])):
    """A Category label or a File path. Ordering is significant."""

    __slots__ = ()

    @classmethod
    def category(cls, label):
        return cls(CATEGORY, label)

    @classmethod
    def file(cls, path):
        return cls(FILE, path)

    @property
    def is_category(self):
        return self.kind == CATEGORY


def chapter_pattern(prefix):
    """Regex matching a chapter file name like law07.md."""
    return re.compile(re.escape(prefix) + r"[0-9]{2}\.md")


def _link_re(chapter_re):
    return re.compile(r"^- \[(" + chapter_re.pattern + r")\]")


def unique(items):
    """Drop repeated items, keeping the first occurrence."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def parse_index(text, chapter_re, index_heading="索引", include_categories=False):
    """
    Extract chapter items from index document text.

    Plain mode: every `- [lawNN.md](...)` line in the document.
    Category mode: only lines inside the `## <index_heading>` section,
    where `### Label` lines become Category items.
    """
    link_re = _link_re(chapter_re)
    items = []

    if not include_categories:
        for line in split_lines(text):
            match = link_re.match(line)
            if match:
                items.append(InputItem.file(match.group(1)))
        return unique(items)

    in_index = False
    for line in split_lines(text):
        if not in_index:
            if line.startswith(f"## {index_heading}"):
                in_index = True
            continue

        if line.startswith("## "):
            break
        if line.startswith("### "):
            items.append(InputItem.category(line[4:]))
            continue
        match = link_re.match(line)
        if match:
            items.append(InputItem.file(match.group(1)))

    return unique(items)


def read_index(index_path, chapter_re, index_heading="索引", include_categories=False):
    """Parse the index document if it exists. Returns [] otherwise."""
    if not os.path.isfile(index_path):
        return []
    text = read_text(index_path)
    return parse_index(text, chapter_re, index_heading, include_categories)


def glob_chapters(project_dir, chapter_re):
    """Chapter files in project_dir, in code-point order (like LC_ALL=C sort)."""
    if not os.path.isdir(project_dir):
        return []
    names = [
        name
        for name in os.listdir(project_dir)
        if chapter_re.fullmatch(name)
        and os.path.isfile(os.path.join(project_dir, name))
    ]
    return sorted(names)


def resolve_inputs(paths, config):
    """
    Build the ordered input list for one run.

    Relative paths from the index or the directory listing are resolved
    against the project directory; explicit paths are kept as given.
    Raises ResolutionError if nothing is found.
    """
    if paths:
        return tuple(InputItem.file(p) for p in paths)

    chapter_re = chapter_pattern(config.chapter_prefix)
    index = config.index

    items = read_index(
        config.path(index["file"]),
        chapter_re,
        index_heading=index["heading"],
        include_categories=config.include_categories,
    )

    if not items:
        items = [InputItem.file(name) for name in glob_chapters(config.project_dir, chapter_re)]

    if not items:
        raise ResolutionError(
            f"no input files found (expected {config.chapter_prefix}??.md)."
        )

    return tuple(
        item if item.is_category else InputItem.file(config.path(item.value))
        for item in items
    )
