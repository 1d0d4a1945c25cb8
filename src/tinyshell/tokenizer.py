"""Tokenize shell input into words, handling quotes and backslash escapes."""

REDIRECT_OUT = ">"
REDIRECT_OUT_FD = "1>"
REDIRECT_APPEND = ">>"
REDIRECT_APPEND_FD = "1>>"
REDIRECT_ERR = "2>"
REDIRECT_ERR_APPEND = "2>>"

_WHITESPACE = (" ", "\t")


class UnterminatedQuoteError(ValueError):
    """Raised in strict mode when a line ends inside quotes or after a backslash."""


def tokenize(line: str, strict: bool = False) -> list[str]:
    """Split a shell input line into words.

    Single quotes keep everything literal, including backslashes. Double
    quotes keep whitespace and single quotes literal. A backslash outside
    single quotes escapes the next character whatever it is.

    Redirect operators are only recognized as separate words, so
    'echo foo>bar' stays two words: ['echo', 'foo>bar'].

    Unterminated quotes and a trailing backslash are ignored unless
    ``strict`` is set, in which case UnterminatedQuoteError is raised.
    """
    words: list[str] = []
    current: list[str] = []
    in_single = False
    in_double = False
    escaped = False

    for ch in line:
        if escaped:
            current.append(ch)
            escaped = False
            continue

        match ch:
            case "'" if not in_double:
                in_single = not in_single
            case '"' if not in_single:
                in_double = not in_double
            case "\\" if not in_single:
                escaped = True
            case _ if ch in _WHITESPACE and not (in_single or in_double):
                if current:
                    words.append("".join(current))
                    current = []
            case _:
                current.append(ch)

    if strict:
        if in_single:
            raise UnterminatedQuoteError("unexpected EOF while looking for matching `''")
        if in_double:
            raise UnterminatedQuoteError('unexpected EOF while looking for matching `"\'')
        if escaped:
            raise UnterminatedQuoteError("unexpected EOF after backslash")

    if current:
        words.append("".join(current))
    return words
