"""Split one line of delimited text into raw fields."""

from typing import List

DEFAULT_FIELD_SEPARATOR = ","


def tokenize(line: str, field_separator: str = DEFAULT_FIELD_SEPARATOR) -> List[str]:
    """
    Split a line on every occurrence of the field separator

    There is no quoting or escaping. An empty line yields a single empty
    field, which the mapper reports as an empty line.

    Args:
        line: One line of text, without its terminator
        field_separator: One or more characters separating fields

    Returns:
        Ordered list of raw text fields

    Example:
        >>> tokenize("1,Alice,")
        ['1', 'Alice', '']
    """
    return line.split(field_separator)
