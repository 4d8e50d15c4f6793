# SPDX-License-Identifier: MIT
"""Escaping of values for CMake scripts.

Generated values end up either as unquoted arguments (inside
generator expressions) or as quoted arguments ("..."). CMake's
tokenizer treats whitespace, ';', '#', '"' and '\\' specially in
unquoted arguments; inside $<...> a '>' ends the expression and ','
separates parameters.
"""

from __future__ import annotations

# Order matters: backslash must be escaped before anything that adds one.
_UNQUOTED_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("$", "\\$"),
    (";", "\\;"),
    ("#", "\\#"),
    ("(", "\\("),
    (")", "\\)"),
    (" ", "\\ "),
    ("\t", "\\t"),
    ("\n", "\\n"),
)


def escape_argument(value: str) -> str:
    """Escape a value for use as an unquoted CMake argument.

    Example:
        escape_argument('NAME=Hello World')  ->  'NAME=Hello\\ World'
    """
    for char, replacement in _UNQUOTED_ESCAPES:
        value = value.replace(char, replacement)
    return value


def escape_genex_value(value: str) -> str:
    """Escape a value placed inside a generator expression.

    '>' and ',' are replaced by their $<ANGLE-R> and $<COMMA>
    generator expressions; the result is then escaped as an
    unquoted argument, leaving the inserted $< sequences intact.

    Model values are literal: a '$' in the input is escaped like any
    other reserved character, so "${CMAKE_SOURCE_DIR}/include" or
    "$<TARGET_FILE:x>" reach the compiler as written and are not
    expanded by CMake. Resolve such references before building the
    model.
    """
    parts = []
    for char in value:
        if char == ">":
            parts.append("\0R")
        elif char == ",":
            parts.append("\0C")
        else:
            parts.append(char)
    escaped = escape_argument("".join(parts))
    return escaped.replace("\0R", "$<ANGLE-R>").replace("\0C", "$<COMMA>")


def quote(value: str) -> str:
    """Return value as a quoted CMake argument."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def config_guard(config: str, value: str) -> str:
    """Wrap an already-escaped value in a $<CONFIG:...> guard."""
    return f"$<$<CONFIG:{config}>:{value}>"
