"""Route pattern matching for dashboard paths.

Three pattern kinds share one matcher:

- literal:        ``/dashboard/rooms`` matches only that path
- parameterized:  ``/dashboard/rooms/:id/edit`` where a ``:name`` segment
                  matches exactly one non-empty path segment
- prefix-style:   ``/dashboard/settings/*`` matches the parent path and
                  anything below it, on segment boundaries

Both patterns and candidate paths are normalized the same way before
comparison, so ``/dashboard/`` and ``/dashboard`` are the same route.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


PARAM_MARKER = ":"
PREFIX_SUFFIX = "/*"


def normalize_path(path: str) -> str:
    """Normalize a URL path for matching.

    Strips the query string and fragment, ensures a leading slash,
    collapses repeated slashes and drops a trailing slash (except for
    the root path). Backslashes count as slashes, and ``.`` and ``..``
    segments (``%2e`` included) are resolved the way a browser resolves
    them without climbing above the root, so ``/dashboard/profile/../users``
    is ``/dashboard/users``.
    """
    for separator in ("?", "#"):
        path = path.split(separator, 1)[0]
    segments: List[str] = []
    for segment in path.strip().replace("\\", "/").split("/"):
        # Browsers treat percent-encoded dots as dots here
        dots = segment.lower().replace("%2e", ".")
        if not segment or dots == ".":
            continue
        if dots == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return "/" + "/".join(segments)


def split_segments(path: str) -> Tuple[str, ...]:
    """Split a normalized path into its segments."""
    return tuple(segment for segment in path.split("/") if segment)


@dataclass(frozen=True)
class RoutePattern:
    """A compiled route pattern."""

    pattern: str
    segments: Tuple[str, ...]
    prefix: bool = False

    @classmethod
    def compile(cls, pattern: str) -> "RoutePattern":
        """Compile a pattern string such as ``/dashboard/rooms/:id/*``."""
        raw = pattern.strip()
        prefix = raw.endswith(PREFIX_SUFFIX)
        if prefix:
            raw = raw[: -len(PREFIX_SUFFIX)]
        segments = split_segments(normalize_path(raw))
        for segment in segments:
            if segment == PARAM_MARKER:
                raise ValueError(f"Unnamed route parameter in pattern: {pattern}")
        return cls(pattern=pattern, segments=segments, prefix=prefix)

    @property
    def is_parameterized(self) -> bool:
        return any(segment.startswith(PARAM_MARKER) for segment in self.segments)

    def matches(self, path: str) -> bool:
        """Check whether a path (normalized or not) matches this pattern."""
        candidate = split_segments(normalize_path(path))

        if self.prefix:
            if len(candidate) < len(self.segments):
                return False
            candidate = candidate[: len(self.segments)]
        elif len(candidate) != len(self.segments):
            return False

        for expected, actual in zip(self.segments, candidate):
            if expected.startswith(PARAM_MARKER):
                # Segments from split_segments are never empty
                continue
            if expected != actual:
                return False
        return True

    def __str__(self) -> str:
        return self.pattern


def compile_patterns(patterns: Iterable[str]) -> Tuple[RoutePattern, ...]:
    """Compile patterns, keeping their authored order."""
    return tuple(RoutePattern.compile(p) for p in patterns)


def first_match(
    patterns: Iterable[RoutePattern], path: str
) -> Optional[RoutePattern]:
    """Return the first pattern matching ``path`` in the given order."""
    normalized = normalize_path(path)
    for pattern in patterns:
        if pattern.matches(normalized):
            return pattern
    return None
