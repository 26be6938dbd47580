"""
clicraft suggestions: Levenshtein distance and "did you mean" candidates.

Scope
- levenshtein(a, b): classic edit distance (insertions, deletions, substitutions).
- suggestions(name, candidates, threshold=3): candidates within the threshold,
  closest first. Ties keep the order in which candidates were given, which for
  command trees is the registration order.

Suggestions are only computed after a lookup failed; resolution itself never
does fuzzy matching.
"""
import functools

THRESHOLD = 3


@functools.lru_cache(maxsize=1024)
def levenshtein(source, target, /):
    """
    Return the edit distance between two strings.

    Uses the two-row dynamic programming formulation, iterating over the
    shorter string on the inner loop.
    """
    if not isinstance(source, str) or not isinstance(target, str):
        raise TypeError("levenshtein() arguments must be strings")
    if len(source) < len(target):
        return levenshtein(target, source)
    if not target:
        return len(source)

    previous = range(len(target) + 1)
    for i, left in enumerate(source):
        current = [i + 1]
        for j, right in enumerate(target):
            insertion = previous[j + 1] + 1
            deletion = current[j] + 1
            substitution = previous[j] + (left != right)
            current.append(min(insertion, deletion, substitution))
        previous = current
    return previous[-1]


def suggestions(name, candidates, /, threshold=THRESHOLD):
    """
    Return the candidates whose distance to `name` is at most `threshold`.

    The result is sorted by ascending distance; sorted() is stable so equal
    distances stay in candidate order. Duplicate candidates are reported once.
    """
    if not isinstance(threshold, int) or isinstance(threshold, bool):
        raise TypeError("suggestions() 'threshold' must be an integer")
    if threshold < 0:
        raise ValueError("suggestions() 'threshold' must be a non-negative integer")
    scored = []
    for candidate in dict.fromkeys(candidates):
        if (distance := levenshtein(name, candidate)) <= threshold:
            scored.append((distance, candidate))
    return [candidate for _, candidate in sorted(scored, key=lambda x: x[0])]


__all__ = (
    "levenshtein",
    "suggestions",
)
