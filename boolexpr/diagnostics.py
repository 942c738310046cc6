from colorama import Fore, Style

ERROR_TAG = "[ERROR]: "


def _paint(text, color, enabled):
    if not enabled or not text:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def format_diagnostic(source, error, color=False):
    """
    Three lines pointing at the span of a ParseError:

        [ERROR]: A && B C
                        ^
        ----------------┆ Expected binary operator or right parenthesis
    """
    start, end = error.start, error.end
    indent = start + len(ERROR_TAG)

    line = (
        _paint(ERROR_TAG, Fore.RED, color)
        + source[:start]
        + _paint(source[start:end], Fore.RED, color)
        + source[end:]
    )
    marker = " " * indent + _paint("^" + "~" * max(end - start - 1, 0), Fore.YELLOW, color)
    pointer = _paint("-" * indent + "┆", Fore.YELLOW, color) + " " + _paint(error.err, Fore.RED, color)

    return "\n".join((line, marker, pointer))
