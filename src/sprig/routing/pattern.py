"""Route template compilation.

A template is literal text plus ``{name}`` placeholders::

    "users/{id}/posts/{slug}"  ->  users/([^/]+)/posts/([^/]+)   names: ("id", "slug")

Each placeholder captures exactly one path segment. Everything else is
matched literally, and the compiled pattern must match the whole path.

Malformed placeholders never raise: an unclosed ``{`` or an empty ``{}``
is not a placeholder, so it is matched as literal text.
"""

import re
from dataclasses import dataclass

# One or more non-"}" characters between braces
PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")

# What a placeholder matches: one segment, never a "/"
SEGMENT_PATTERN = r"([^/]+)"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """An anchored matcher plus its placeholder names in template order.

    ``len(param_names) == regex.groups`` always holds. Names are not
    deduplicated; when a template repeats a name, the last capture wins
    once the captures are folded into a dict.
    """

    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, path: str) -> tuple[str, ...] | None:
        """Return the captured segments if *path* matches in full, else ``None``."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groups()

    def extract(self, path: str) -> dict[str, str] | None:
        """Return ``{name: segment}`` for a full match, else ``None``."""
        groups = self.match(path)
        if groups is None:
            return None
        if not self.param_names:
            return {}
        return dict(zip(self.param_names, groups, strict=True))


def compile_template(template: str) -> CompiledPattern:
    """Compile a route template into a full-match pattern.

    Examples::

        compile_template("users").match("users")             -> ()
        compile_template("users/{id}").match("users/42")     -> ("42",)
        compile_template("users/{id}").match("users/42/x")   -> None
        compile_template("v1.0/{x}").match("v1x0/a")         -> None  (dot is literal)
    """
    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for m in PLACEHOLDER_RE.finditer(template):
        parts.append(re.escape(template[pos : m.start()]))
        parts.append(SEGMENT_PATTERN)
        names.append(m.group(1))
        pos = m.end()
    parts.append(re.escape(template[pos:]))
    return CompiledPattern(regex=re.compile("".join(parts)), param_names=tuple(names))


def template_params(template: str) -> list[str]:
    """Placeholder names of *template* in left-to-right order."""
    return PLACEHOLDER_RE.findall(template)
