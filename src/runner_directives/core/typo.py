def near_match(a: str, b: str) -> bool:
    """Return True when *a* and *b* differ by exactly one edit.

    A single substitution, insertion or deletion qualifies. Identical strings
    and anything two or more edits apart do not. The scan is linear: after a
    mismatch the cursor of the longer string skips ahead (or both do when the
    lengths are equal), so this is a bounded check rather than a full
    Levenshtein distance.
    """
    if abs(len(a) - len(b)) > 1:
        return False

    differences = 0
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i] == b[j]:
            i += 1
            j += 1
            continue
        differences += 1
        if differences > 1:
            return False
        if len(a) > len(b):
            i += 1
        elif len(b) > len(a):
            j += 1
        else:
            i += 1
            j += 1

    return differences + (len(a) - i) + (len(b) - j) == 1
