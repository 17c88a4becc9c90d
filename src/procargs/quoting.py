def quote(value: str) -> str:
    """
    Renders `value` as a literal that parses back to the same text.

    Single quotes are preferred. A value containing a single quote but no
    double quote is wrapped in double quotes; one containing both has its
    single quotes doubled.
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    return "'" + value.replace("'", "''") + "'"


def unquote(literal: str) -> str:
    """Inverse of `quote`. Text that is not a quoted literal is returned as is."""
    if len(literal) >= 2 and literal[0] == literal[-1] == '"':
        return literal[1:-1]
    if len(literal) >= 2 and literal[0] == literal[-1] == "'":
        return literal[1:-1].replace("''", "'")
    return literal
