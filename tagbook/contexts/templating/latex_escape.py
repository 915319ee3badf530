"""
LaTeX escaping for user-supplied and data-derived text.

Titles, category names and filenames can contain characters that LaTeX treats
as markup. escape_latex() neutralizes them so the text typesets literally.
"""

import re

# Reserved characters and their literal-typesetting replacements
LATEX_SPECIAL_CHARACTERS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "_": r"\_",
    "^": r"\^{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "~": r"\textasciitilde{}",
}

# Backslash leads the alternation; replacements are never rescanned
_SPECIAL_CHARACTER_PATTERN = re.compile(
    "|".join(re.escape(char) for char in LATEX_SPECIAL_CHARACTERS)
)


def escape_latex(text: str) -> str:
    """
    Escape LaTeX reserved characters in plain text.

    Substitution is a single left-to-right pass, so the braces and backslashes
    introduced by a replacement (e.g. \\textbackslash{}) are never escaped again.
    Not idempotent: escaping already-escaped text escapes it twice, so escape
    each value exactly once.

    Args:
        text: Plain text (None or empty returns "")

    Returns:
        Text safe to insert into a LaTeX document body

    Examples:
        >>> escape_latex("50% of R&D")
        '50\\\\% of R\\\\&D'
        >>> escape_latex("C:\\\\dir_1")
        'C:\\\\textbackslash{}dir\\\\_1'
    """
    if not text:
        return ""
    return _SPECIAL_CHARACTER_PATTERN.sub(lambda m: LATEX_SPECIAL_CHARACTERS[m.group(0)], text)


# Characters that cannot pass through \detokenize inside a macro argument
_UNDETOKENIZABLE_CHARACTERS = frozenset("\\{}%#")


def latex_path(path: str) -> str:
    """
    Prepare a relative file path for \\includegraphics.

    Paths are wrapped in \\detokenize{} so underscores, carets and tildes reach
    the graphics package literally. A path containing a backslash, a brace, % or
    # cannot be carried that way and falls back to escape_latex().

    The reserved characters left inside \\detokenize{} are literal text, not
    unescaped markup: escaping them instead would make graphicx look for a
    file named with a backslash (Uploads/3f2a\\_cat.png), which does not exist.

    Example:
        >>> latex_path("Uploads/3f2a_cat.png")
        '\\\\detokenize{Uploads/3f2a_cat.png}'
    """
    if not path:
        return ""
    if any(char in _UNDETOKENIZABLE_CHARACTERS for char in path):
        return escape_latex(path)
    return rf"\detokenize{{{path}}}"
