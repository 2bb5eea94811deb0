"""Path template compilation.

Turns ``/users/:id/posts/:post_id`` into an anchored regex plus the
ordered parameter names. Literal text is escaped, so templates never
leak regex syntax into matching.
"""

import re
from dataclasses import dataclass

from tern.errors import RegistrationError

PARAM_MARKER = ":"

# One or more characters, never a slash
SEGMENT_PATTERN = r"([^/]+)"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled path template.

    ``regex`` must match the whole path. ``param_names`` lists the
    capture groups in declaration order.
    """

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    @property
    def is_static(self) -> bool:
        """True if the template has no parameter segments."""
        return not self.param_names

    def match(self, path: str) -> dict[str, str] | None:
        """Return captured parameters if *path* matches, else ``None``."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return dict(zip(self.param_names, m.groups(), strict=True))


def parse_segments(template: str) -> list[tuple[str, bool]]:
    """Split a template into ``(text, is_param)`` pairs.

    Examples::

        "/"             -> [("", False)]
        "/users"        -> [("", False), ("users", False)]
        "/users/:id"    -> [("", False), ("users", False), ("id", True)]

    Raises ``RegistrationError`` for templates that cannot be routed.
    """
    if not template.startswith("/"):
        msg = f"Route path must start with '/': {template!r}"
        raise RegistrationError(msg)

    segments: list[tuple[str, bool]] = []
    seen: set[str] = set()
    for part in template.split("/"):
        if not part.startswith(PARAM_MARKER):
            segments.append((part, False))
            continue

        name = part[len(PARAM_MARKER) :]
        if not name.isidentifier():
            msg = (
                f"Invalid parameter {part!r} in route {template!r}. "
                "Parameter names must be identifiers, e.g. '/users/:id'."
            )
            raise RegistrationError(msg)
        if name in seen:
            msg = f"Duplicate parameter {name!r} in route {template!r}"
            raise RegistrationError(msg)
        seen.add(name)
        segments.append((name, True))
    return segments


def compile_pattern(template: str) -> CompiledPattern:
    """Compile a path template into a ``CompiledPattern``.

    Validation happens here, at registration time, so a bad template
    fails app setup instead of a request.
    """
    segments = parse_segments(template)
    names = tuple(text for text, is_param in segments if is_param)
    source = "/".join(SEGMENT_PATTERN if is_param else re.escape(text) for text, is_param in segments)
    try:
        regex = re.compile(source)
    except re.error as exc:
        msg = f"Route {template!r} does not compile: {exc}"
        raise RegistrationError(msg) from exc
    return CompiledPattern(template=template, regex=regex, param_names=names)
