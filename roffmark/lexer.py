"""Splitting of request lines into words."""

from __future__ import annotations

from .constants import COMMENT_PATTERN, SPACE_PLACEHOLDER


def strip_comment(line: str) -> str:
    r"""Remove a trailing ``\"`` comment from a line.

    Examples:
        strip_comment('text \\" note')  # "text "
    """
    return COMMENT_PATTERN.sub(r"\1", line)


def split_request(text: str) -> list[str]:
    r"""Split a request line into its command name and arguments.

    Words are separated by runs of spaces or tabs. A double quote starts a word
    that runs to the matching close quote; a doubled quote inside it stands for
    a literal ``"``. An escaped space (``\ ``) never splits a word.

    Args:
        text: Request line without its leading ``.`` or ``'``.

    Returns:
        list[str]: Command name followed by its arguments. Empty when the line
            holds only whitespace.

    Examples:
        split_request('SH "SEE ALSO"')  # ["SH", "SEE ALSO"]
        split_request("B foo\\ bar baz")  # ["B", "foo\\ bar", "baz"]
    """
    protected = text.replace("\\ ", SPACE_PLACEHOLDER).rstrip("\r\n")
    words: list[str] = []
    i = 0
    length = len(protected)

    while i < length:
        if protected[i] in " \t":
            i += 1
            continue

        if protected[i] == '"':
            i += 1
            word = []
            while i < length:
                if protected[i] == '"':
                    # "" inside a quoted argument is a literal quote
                    if i + 1 < length and protected[i + 1] == '"':
                        word.append('"')
                        i += 2
                        continue
                    i += 1
                    break
                word.append(protected[i])
                i += 1
            words.append("".join(word))
            continue

        start = i
        while i < length and protected[i] not in " \t":
            i += 1
        words.append(protected[start:i])

    return [word.replace(SPACE_PLACEHOLDER, "\\ ") for word in words]
