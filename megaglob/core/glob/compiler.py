"""
Glob segment compiler.

Translates the glob syntax of a single path segment into an anchored
regular expression. Only ``*`` is a wildcard by default; ``extended``
mode also enables ``?``, character classes and ``{a,b}`` alternation.
"""
import re
from dataclasses import dataclass, field
from functools import lru_cache

# Characters that always lose their regex meaning
ALWAYS_ESCAPED = frozenset('\\/$^+.()=!|')


@dataclass(frozen=True)
class Pattern:
    """
    Compiled matcher for one glob segment.

    Matching is always against the whole candidate name, never a substring.
    """
    source: str
    extended: bool = False
    regex: re.Pattern = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.regex is None:
            object.__setattr__(self, 'regex', _compile_regex(self.source, self.extended))

    def matches(self, name: str) -> bool:
        """Check if the entire name matches this pattern."""
        return self.regex.fullmatch(name) is not None

    def __call__(self, name: str) -> bool:
        return self.matches(name)


def translate(segment: str, extended: bool = False) -> str:
    """
    Translate a glob segment into a regular expression body.

    Args:
        segment: Glob source text for one path level (no '/')
        extended: Enable ``? [ ] { } ,`` as wildcard syntax

    Returns:
        Regular expression string (unanchored)
    """
    parts = []
    in_group = False

    for char in segment:
        if char in ALWAYS_ESCAPED:
            parts.append('\\' + char)
        elif char == '*':
            parts.append('.*')
        elif not extended:
            parts.append(re.escape(char))
        elif char == '?':
            parts.append('.')
        elif char in '[]':
            parts.append(char)
        elif char == '{':
            in_group = True
            parts.append('(?:')
        elif char == '}' and in_group:
            in_group = False
            parts.append(')')
        elif char == ',' and in_group:
            parts.append('|')
        else:
            parts.append(re.escape(char))

    return ''.join(parts)


def _compile_regex(segment: str, extended: bool) -> re.Pattern:
    try:
        return re.compile(translate(segment, extended), re.DOTALL)
    except re.error:
        return re.compile(translate(segment, False), re.DOTALL)


@lru_cache(maxsize=512)
def compile_glob(segment: str, extended: bool = False) -> Pattern:
    """
    Compile one glob segment into a fully anchored Pattern.

    Never raises: extended syntax that does not form a valid expression
    (an unclosed ``[`` or ``{``) is compiled again with every extended
    character taken literally.

    Example:
        >>> compile_glob("file.*").matches("file.txt")
        True
        >>> compile_glob("a?b").matches("axb")
        False
        >>> compile_glob("a?b", extended=True).matches("axb")
        True
    """
    return Pattern(source=segment, extended=extended)


class GlobCompiler:
    """Compiler bound to one glob mode."""

    def __init__(self, extended: bool = False):
        self.extended = extended

    def compile(self, segment: str) -> Pattern:
        return compile_glob(segment, self.extended)
