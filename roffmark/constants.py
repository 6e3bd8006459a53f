"""Constants used across the roffmark package."""

from __future__ import annotations

import re

# Request lines start with one of these characters.
REQUEST_MARKERS = (".", "'")

# Stands in for a literal backslash until the escape passes are done.
BACKSLASH_PLACEHOLDER = "\x00"
BACKSLASH_ENTITY = "&#92;"

# Protects ``\ `` while a request line is split into words.
SPACE_PLACEHOLDER = "\x01"

# Two-character (``\(xx``) and bracketed (``\[xxx]``) special characters.
SPECIAL_CHARACTERS: dict[str, str] = {
    # Quotes
    "aq": "&#39;",
    "dq": "&quot;",
    "lq": "&ldquo;",
    "rq": "&rdquo;",
    "oq": "&lsquo;",
    "cq": "&rsquo;",
    "Bq": "&bdquo;",
    "bq": "&sbquo;",
    "Fo": "&laquo;",
    "Fc": "&raquo;",
    "fo": "&lsaquo;",
    "fc": "&rsaquo;",
    # Punctuation and dashes
    "em": "&mdash;",
    "en": "&ndash;",
    "hy": "-",
    "mi": "&minus;",
    "ga": "`",
    "aa": "&acute;",
    "ha": "^",
    "ti": "~",
    "ul": "_",
    "rn": "&oline;",
    "ba": "|",
    "br": "|",
    "bb": "&brvbar;",
    "sl": "/",
    "rs": BACKSLASH_PLACEHOLDER,
    "r!": "&iexcl;",
    "r?": "&iquest;",
    "sc": "&sect;",
    "ps": "&para;",
    "dg": "&dagger;",
    "dd": "&Dagger;",
    "bu": "&bull;",
    "ci": "&#9675;",
    "sq": "&#9633;",
    "lz": "&loz;",
    "at": "@",
    "sh": "#",
    "%0": "&permil;",
    "fm": "&prime;",
    "sd": "&Prime;",
    "de": "&deg;",
    "md": "&middot;",
    "pc": "&middot;",
    "OK": "&#10003;",
    "co": "&copy;",
    "rg": "&reg;",
    "tm": "&trade;",
    "ru": "_",
    # Arrows
    "->": "&rarr;",
    "<-": "&larr;",
    "<>": "&harr;",
    "ua": "&uarr;",
    "da": "&darr;",
    "va": "&#8597;",
    "rA": "&rArr;",
    "lA": "&lArr;",
    "hA": "&hArr;",
    "uA": "&uArr;",
    "dA": "&dArr;",
    "vA": "&#8661;",
    # Brackets
    "lB": "[",
    "rB": "]",
    "lC": "{",
    "rC": "}",
    "la": "&lang;",
    "ra": "&rang;",
    "lc": "&lceil;",
    "rc": "&rceil;",
    "lf": "&lfloor;",
    "rf": "&rfloor;",
    # Mathematics
    "pl": "+",
    "-+": "&#8723;",
    "+-": "&plusmn;",
    "mu": "&times;",
    "tmu": "&times;",
    "di": "&divide;",
    "tdi": "&divide;",
    "eq": "=",
    "==": "&equiv;",
    "!=": "&ne;",
    "=~": "&cong;",
    "ap": "&sim;",
    "~~": "&asymp;",
    "~=": "&asymp;",
    "<=": "&le;",
    ">=": "&ge;",
    "<<": "&#8810;",
    ">>": "&#8811;",
    "sr": "&radic;",
    "pt": "&prop;",
    "if": "&infin;",
    "Ah": "&alefsym;",
    "pd": "&part;",
    "gr": "&nabla;",
    "is": "&int;",
    "product": "&prod;",
    "sum": "&sum;",
    "no": "&not;",
    "tno": "&not;",
    "AN": "&and;",
    "OR": "&or;",
    "fa": "&forall;",
    "te": "&exist;",
    "mo": "&isin;",
    "nm": "&notin;",
    "es": "&empty;",
    "ca": "&cap;",
    "cu": "&cup;",
    "sb": "&sub;",
    "sp": "&sup;",
    "ib": "&sube;",
    "ip": "&supe;",
    "st": "&ni;",
    "tf": "&there4;",
    "3d": "&there4;",
    "/_": "&ang;",
    "pp": "&perp;",
    "c*": "&otimes;",
    "c+": "&oplus;",
    "12": "&frac12;",
    "14": "&frac14;",
    "34": "&frac34;",
    "S1": "&sup1;",
    "S2": "&sup2;",
    "S3": "&sup3;",
    # Greek
    "*a": "&alpha;",
    "*b": "&beta;",
    "*g": "&gamma;",
    "*d": "&delta;",
    "*e": "&epsilon;",
    "*l": "&lambda;",
    "*m": "&mu;",
    "*p": "&pi;",
    "*s": "&sigma;",
    "*t": "&tau;",
    "*W": "&Omega;",
    "*S": "&Sigma;",
    "*D": "&Delta;",
    # Currency
    "Do": "$",
    "ct": "&cent;",
    "Eu": "&euro;",
    "eu": "&euro;",
    "Ye": "&yen;",
    "Po": "&pound;",
    "Cs": "&curren;",
    # Cards
    "CL": "&clubs;",
    "SP": "&spades;",
    "HE": "&hearts;",
    "DI": "&diams;",
    # Accented letters commonly found in author names
    ":a": "&auml;",
    ":o": "&ouml;",
    ":u": "&uuml;",
    ":A": "&Auml;",
    ":O": "&Ouml;",
    ":U": "&Uuml;",
    "'e": "&eacute;",
    "`e": "&egrave;",
    "ss": "&szlig;",
    ",c": "&ccedil;",
    "~n": "&ntilde;",
}

# Predefined strings (``\*(xx``, ``\*x``, ``\*[name]``).
PREDEFINED_STRINGS: dict[str, str] = {
    "lq": "&ldquo;",
    "rq": "&rdquo;",
    "Lq": "&ldquo;",
    "Rq": "&rdquo;",
    "R": "&reg;",
    "Tm": "&trade;",
    "S": "",
    "ga": "`",
    "aa": "&acute;",
    "Ba": "|",
    "Le": "&le;",
    "Ge": "&ge;",
    "Pi": "&pi;",
    "Am": "&amp;",
    "Lt": "&lt;",
    "Gt": "&gt;",
}

# Single-character escapes handled after the named tables.
SINGLE_ESCAPES: dict[str, str] = {
    "e": BACKSLASH_PLACEHOLDER,
    " ": "&nbsp;",
    "~": "&nbsp;",
    "0": "&nbsp;",
    "|": "",
    "^": "",
    ",": "",
    "/": "",
    "c": "",
    "%": "",
    ":": "",
    ".": ".",
    "`": "`",
    "'": "&acute;",
}

NAMED_ESCAPE_PATTERN = re.compile(r"\\\((..)")
BRACKETED_ESCAPE_PATTERN = re.compile(r"\\\[([^\]\s]+)\]")
SINGLE_ESCAPE_PATTERN = re.compile(r"\\([e ~0|^,/c%:.`'])")
STRING_ESCAPE_PATTERN = re.compile(r"\\\*(?:\((..)|\[([^\]\s]+)\]|([^(\[]))")
# Named entities the translation itself produces. Any other ``&name;`` in the
# input is literal text and gets its ampersand escaped.
EMITTED_ENTITIES = frozenset(
    re.findall(
        r"&([A-Za-z][A-Za-z0-9]*);",
        "".join(
            [*SPECIAL_CHARACTERS.values(), *PREDEFINED_STRINGS.values(), *SINGLE_ESCAPES.values()]
        ),
    )
) | {"amp", "lt", "gt", "quot"}
LOOSE_AMPERSAND_PATTERN = re.compile(
    r"&(?!(?:#\d+|#[xX][0-9a-fA-F]+|" + "|".join(sorted(EMITTED_ENTITIES)) + r");)"
)
# ``\"`` after an even number of backslashes; group 1 keeps the escaped ones.
COMMENT_PATTERN = re.compile(r'(?<!\\)((?:\\\\)*)\\".*$')

# ``\fB``, ``\f(CW``, ``\f[B]``, ``\f[]``.
FONT_ESCAPE_PATTERN = re.compile(r"\\f(?:\(([A-Za-z0-9]{2})|\[([A-Za-z0-9]*)\]|([A-Za-z0-9]))")
FONT_NAMES = {
    "B": "B",
    "3": "B",
    "C": "B",
    "CW": "B",
    "CB": "B",
    "BI": "B",
    "I": "I",
    "2": "I",
    "CI": "I",
    "R": "R",
    "1": "R",
    "CR": "R",
    "P": "P",
    "": "P",
}

URL_PATTERN = re.compile(
    r"https?://[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)+(?::\d+)?"
    r"(?:/[A-Za-z0-9_~%+-]*)*(?:\.[A-Za-z0-9]+)?(?:#[A-Za-z0-9_-]+)?"
)
# Placeholder hosts used in examples are never linked.
URL_EXCEPTIONS = ("://example.com", "://localhost")

HEADING_ID_SEPARATOR = "_"
HEADING_TAGS = {"SH": "h1", "SS": "h2"}

BULLET_GLYPHS = ("\\(bu", "\\[bu]", "\\(em", "\\(en", "\\(ci", "*", "-", "o")

# Multi-line table cells.
TABLE_CELL_OPEN = "T{"
TABLE_CELL_CLOSE = "T}"
TABLE_CELL_JOINER = " "

SECTION_DESCRIPTIONS = {
    "1": "User Commands",
    "2": "System Calls",
    "3": "Library Functions",
    "4": "Special Files",
    "5": "File Formats",
    "6": "Games",
    "7": "Miscellaneous",
    "8": "System Administration",
}

HTML_PREAMBLE = """<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=UTF-8">
<title>{title}</title>
</head>
<body>"""
HTML_TRAILER = "</body>\n</html>"

FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_LAYOUT = "manpage"
