import re

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^\w-]+", flags=re.ASCII)


def slugify(name: str) -> str:
    """Lower-case, whitespace runs to '-', then drop anything outside [A-Za-z0-9_-]."""
    return _NON_SLUG.sub("", _WHITESPACE.sub("-", name.lower()))
