"""Path parameter converters for the host router.

Built-in converters for route path segments like ``{id:int}``.
"""


# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "path": (r".+", str),
}


def convert_params(params: dict[str, str], types: dict[str, str]) -> dict[str, str | int]:
    """Convert captured path segments to their declared types.

    Unknown names pass through as strings.
    """
    converted: dict[str, str | int] = {}
    for name, value in params.items():
        _, target_type = CONVERTERS[types.get(name, "str")]
        converted[name] = target_type(value)
    return converted
