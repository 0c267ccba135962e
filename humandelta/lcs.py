"""Longest common substring over two strings."""


def longest_common_substring(a: str, b: str) -> str:
    """Return the longest contiguous run shared by ``a`` and ``b``.

    Algorithm: classic dynamic programming where ``row[j]`` holds the length
    of the common suffix of ``a[:i]`` and ``b[:j]``. Only two rows are kept.

    Ties resolve to the first maximal run found while scanning ``a`` then
    ``b``, i.e. the earliest-ending occurrence in ``a``. Returns ``""`` when
    the strings share no character.

    Example:
        >>> longest_common_substring("in 2 days", "2 days ago")
        '2 days'
    """
    best_len = 0
    best_end = 0
    previous = [0] * (len(b) + 1)

    for i in range(1, len(a) + 1):
        current = [0] * (len(b) + 1)
        char = a[i - 1]
        for j in range(1, len(b) + 1):
            if char == b[j - 1]:
                current[j] = previous[j - 1] + 1
                if current[j] > best_len:
                    best_len = current[j]
                    best_end = i
        previous = current

    return a[best_end - best_len : best_end]
