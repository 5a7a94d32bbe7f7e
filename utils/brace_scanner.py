"""String-aware brace matching for locating JSON objects inside free text.

Braces inside double-quoted strings are not structural, and a backslash
escapes the next character inside a string. Single quotes are ordinary
characters, as in JSON.
"""


def find_matching_brace(text, start):
    """Return the index of the `}` closing the `{` at `start`, or -1.

    -1 means the object never closes (truncated input) or `start` does not
    point at an opening brace.
    """
    if start < 0 or start >= len(text) or text[start] != "{":
        return -1

    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i

    return -1


def extract_balanced(text, start):
    """Return the balanced `{...}` substring starting at `start`, or None."""
    end = find_matching_brace(text, start)
    if end == -1:
        return None
    return text[start:end + 1]


def candidate_starts(text, anchor):
    """Positions of `{` before `anchor`, nearest first."""
    positions = []
    i = text.rfind("{", 0, anchor)
    while i != -1:
        positions.append(i)
        i = text.rfind("{", 0, i)
    return positions


def next_start(text, anchor):
    """Position of the first `{` at or after `anchor`, or -1."""
    return text.find("{", anchor)
