"""Edit distance between two strings."""


def levenshtein_score(s: str, t: str) -> int:
    """Return the Levenshtein distance between ``s`` and ``t``."""
    if s == t:
        return 0
    if not s:
        return len(t)
    if not t:
        return len(s)

    previous = list(range(len(s) + 1))
    for j, t_char in enumerate(t, start=1):
        current = [j]
        for i, s_char in enumerate(s, start=1):
            cost = 0 if s_char == t_char else 1
            current.append(
                min(current[i - 1] + 1, previous[i] + 1, previous[i - 1] + cost)
            )
        previous = current
    return previous[-1]