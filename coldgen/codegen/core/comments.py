"""Block comment rendering shared by all emitters."""

import re
from typing import List, Sequence, Union

DEFAULT_MAX_CHARS_PER_LINE = 80

_LETTER = re.compile(r"[a-zA-Z]")


def _split_line(text: str, max_chars: int) -> List[str]:
    """
    Cut ``text`` into fixed-width chunks.

    A chunk that ends inside a word gets a trailing hyphen.
    """
    chunks = [text[i : i + max_chars] for i in range(0, len(text), max_chars)]
    lines = []
    for index, chunk in enumerate(chunks):
        is_last = index == len(chunks) - 1
        if not is_last and not chunk.endswith(" ") and _LETTER.match(chunks[index + 1]):
            lines.append(f" * {(chunk + '-').strip()}")
        else:
            lines.append(f" * {chunk.strip()}")
    return lines


def comment_block(
    desc: Union[str, Sequence[str], None],
    max_chars: int = DEFAULT_MAX_CHARS_PER_LINE,
) -> List[str]:
    """
    Render a description as ``/** ... */`` comment lines.

    A short single string stays on one line. Longer strings and lists of
    strings become a multi-line block wrapped at ``max_chars``.

    Args:
        desc: Description string or list of lines
        max_chars: Maximum characters of text per comment line

    Returns:
        Comment lines without trailing newlines (empty when there is no text)
    """
    if not desc:
        return []

    if isinstance(desc, str):
        if len(desc) <= max_chars:
            return [f"/** {desc} */"]
        return ["/**"] + _split_line(desc, max_chars) + [" */"]

    body: List[str] = []
    for line in desc:
        if len(line) <= max_chars:
            body.append(f" * {line}")
        else:
            body.extend(_split_line(line, max_chars))
    if not body:
        return ["/** */"]
    return ["/**"] + body + [" */"]

