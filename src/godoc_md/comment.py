"""Go doc comment text to Markdown.

Comment text is split into blocks at blank lines. Indented runs become
fenced Go code, isolated capitalized lines become headings, everything else
is kept as paragraph text.
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass

# Characters that never appear in a heading
_NON_HEADING_CHARS = re.compile(r"[;:!?+*/=\[\]{}_^°&§~%#@<\">\\]")


@dataclass
class _Block:
    kind: str  # "para", "heading", "code"
    lines: list[str]


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_indented(line: str) -> bool:
    return line[:1] in (" ", "\t")


def heading_text(line: str) -> str | None:
    """Return the heading text if line qualifies as a heading, else None."""
    line = line.strip()
    if not line or not line[0].isupper():
        return None
    if not line[-1].isalnum():
        return None
    if _NON_HEADING_CHARS.search(line):
        return None
    # apostrophes only in possessives ("Go's"), periods only inside words ("go.mod")
    for i, ch in enumerate(line):
        nxt = line[i + 1:i + 2]
        if ch == "'" and nxt != "s":
            return None
        if ch == "." and (not nxt or nxt.isspace()):
            return None
    return line


def _split_blocks(lines: list[str]) -> list[_Block]:
    blocks: list[_Block] = []
    last_was_blank = False
    i = 0
    while i < len(lines):
        line = lines[i]
        if _is_blank(line):
            last_was_blank = True
            i += 1
            continue

        if _is_indented(line):
            code: list[str] = []
            while i < len(lines) and (_is_indented(lines[i]) or _is_blank(lines[i])):
                code.append(lines[i])
                i += 1
            while code and _is_blank(code[-1]):
                code.pop()
            blocks.append(_Block("code", code))
            last_was_blank = False
            continue

        # a heading sits alone between blank lines and is followed by plain text
        if (
            last_was_blank
            and (not blocks or blocks[-1].kind != "heading")
            and i + 2 < len(lines)
            and _is_blank(lines[i + 1])
            and not _is_blank(lines[i + 2])
            and not _is_indented(lines[i + 2])
        ):
            head = heading_text(line)
            if head is not None:
                blocks.append(_Block("heading", [head]))
                last_was_blank = False
                i += 1
                continue

        para: list[str] = []
        while i < len(lines) and not _is_blank(lines[i]) and not _is_indented(lines[i]):
            para.append(lines[i].strip())
            i += 1
        blocks.append(_Block("para", para))
        last_was_blank = False
    return blocks


def comment_to_markdown(text: str) -> str:
    """Convert doc comment text (comment markers already removed) to Markdown."""
    blocks = _split_blocks(text.expandtabs(4).split("\n"))
    out: list[str] = []
    for block in blocks:
        if block.kind == "heading":
            out.append(f"### {block.lines[0]}\n")
        elif block.kind == "code":
            code = textwrap.dedent("\n".join(block.lines))
            out.append(f"``` go\n{code}\n```\n")
        else:
            out.append("\n".join(block.lines) + "\n")
    return "\n".join(out)
