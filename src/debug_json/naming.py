"""Field renaming policies applied when a field name is written."""


def _ascii_upper(c: str) -> str:
    if "a" <= c <= "z":
        return c.upper()
    return c


def keep_as_is(name: str) -> str:
    """Identity rename policy."""
    return name


def pascal_case(name: str) -> str:
    """
    Convert a snake_case field name to PascalCase.

    The first character is uppercased (and kept even when it is an
    underscore). Later underscores are dropped and the character following
    one is uppercased. Only ASCII letters change case.

    Args:
        name: Field name as rendered

    Returns:
        Renamed field

    Example:
        >>> pascal_case("hello_world")
        'HelloWorld'
    """
    out = []
    last_was_underscore = False
    for i, c in enumerate(name):
        if i == 0:
            out.append(_ascii_upper(c))
            continue
        if c == "_":
            last_was_underscore = True
            continue
        if last_was_underscore:
            out.append(_ascii_upper(c))
            last_was_underscore = False
            continue
        out.append(c)
    return "".join(out)
