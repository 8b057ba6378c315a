"""npm-flavoured semantic version helpers built on semantic_version.

Range matching is delegated to ``semantic_version.NpmSpec``. Bound checks
(``ltr``/``gtr``) need the comparator sets behind a range, so npm range
sugar (caret, tilde, x-ranges, hyphen ranges) is desugared here into plain
comparator pairs.
"""

import re
from typing import Iterable, List, NamedTuple, Optional, Tuple

import semantic_version

_NUMBER = r"x|X|\*|0|[1-9][0-9]*"
_PART = r"[a-zA-Z0-9.-]*"

_BLOCK_RE = re.compile(
    r"""
    ^v?
    (?P<op><=|>=|<|>|=|\^|~|)
    v?
    (?P<major>{nb})(?:\.(?P<minor>{nb})(?:\.(?P<patch>{nb}))?)?
    (?:-(?P<prerel>{part}))?
    (?:\+(?P<build>{part}))?
    $""".format(nb=_NUMBER, part=_PART),
    re.VERBOSE,
)

_JOINER = "||"
_HYPHEN = " - "

# npm drops the space in ">= 1.2.0"; build metadata never narrows a range.
_OPERATOR_SPACE_RE = re.compile(r"(<=|>=|<|>|=|~|\^)\s+")
_RANGE_BUILD_RE = re.compile(r"\+[0-9A-Za-z.-]*")

# npm accepts "v1.2.3" and "=1.2.3" as plain versions.
_LEADING_NOISE_RE = re.compile(r"^[=v]+")


class Comparator(NamedTuple):
    """A single ``<op><version>`` bound; version None matches anything."""
    operator: str
    version: Optional[semantic_version.Version]


_ANY = Comparator("", None)
_ZERO = semantic_version.Version("0.0.0")


def parse_version(raw) -> Optional[semantic_version.Version]:
    """Parse a raw version string, returning None when it is not valid semver."""
    if not isinstance(raw, str):
        return None
    text = _LEADING_NOISE_RE.sub("", raw.strip(), count=1)
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def normalize_range(expression: str) -> str:
    """Rewrite an npm range into the form NpmSpec parses (``>= 1.2.0`` -> ``>=1.2.0``)."""
    text = _OPERATOR_SPACE_RE.sub(r"\1", expression.strip())
    return _RANGE_BUILD_RE.sub("", text)


def parse_range(expression) -> Optional[semantic_version.NpmSpec]:
    """Parse an npm range expression, returning None when it is invalid."""
    if not isinstance(expression, str):
        return None
    try:
        return semantic_version.NpmSpec(normalize_range(expression))
    except ValueError:
        return None


def is_valid_range(expression) -> bool:
    """True when expression is a legal npm range or plain version."""
    return parse_range(expression) is not None


def prerelease_components(raw) -> Optional[Tuple[str, ...]]:
    """Pre-release identifiers of raw, or None for releases and invalid input."""
    version = parse_version(raw)
    if version is None or not version.prerelease:
        return None
    return tuple(version.prerelease)


def strip_prerelease(raw: str) -> str:
    """Drop pre-release and build metadata from raw (``1.2.0-beta.1`` -> ``1.2.0``)."""
    version = parse_version(raw)
    if version is None:
        return raw
    return str(version.truncate("patch"))


def _precedence(version: semantic_version.Version) -> semantic_version.Version:
    # build metadata never takes part in ordering
    return version.truncate("prerelease")


def compare(a: semantic_version.Version, b: semantic_version.Version) -> int:
    """Three-way semver comparison ignoring build metadata."""
    left, right = _precedence(a), _precedence(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def satisfies(raw, expression) -> bool:
    """True when raw is a valid version matched by the npm range expression."""
    version = parse_version(raw)
    spec = parse_range(expression)
    if version is None or spec is None:
        return False
    return bool(spec.match(_precedence(version)))


def max_satisfying(raw_versions: Iterable[str], expression: str) -> Optional[str]:
    """Highest version matching expression, returned as the original raw string.

    Raises:
        ValueError: expression is not a valid npm range.
    """
    spec = parse_range(expression)
    if spec is None:
        raise ValueError(f"Invalid npm range: {expression!r}")

    best_raw = None
    best = None
    for raw in raw_versions:
        version = parse_version(raw)
        if version is None or not spec.match(_precedence(version)):
            continue
        if best is None or compare(version, best) > 0:
            best, best_raw = version, raw
    return best_raw


# ---------------------------------------------------------------------------
# Range desugaring
# ---------------------------------------------------------------------------

def _is_x(part: Optional[str]) -> bool:
    return part is None or part in ("x", "X", "*")


def _v(major: int, minor: int, patch: int, prerelease: str = "") -> semantic_version.Version:
    text = f"{major}.{minor}.{patch}"
    if prerelease:
        text += f"-{prerelease}"
    return semantic_version.Version(text)


def match_block(block: str):
    match = _BLOCK_RE.match(block)
    if not match:
        raise ValueError(f"Invalid npm range block: {block!r}")
    return match


def _caret(major, minor, patch, prerel) -> List[Comparator]:
    if _is_x(major):
        return [_ANY]
    M = int(major)
    if _is_x(minor):
        return [Comparator(">=", _v(M, 0, 0)), Comparator("<", _v(M + 1, 0, 0, "0"))]
    m = int(minor)
    if _is_x(patch):
        if M == 0:
            return [Comparator(">=", _v(M, m, 0)), Comparator("<", _v(M, m + 1, 0, "0"))]
        return [Comparator(">=", _v(M, m, 0)), Comparator("<", _v(M + 1, 0, 0, "0"))]
    p = int(patch)
    low = Comparator(">=", _v(M, m, p, prerel or ""))
    if M == 0:
        if m == 0:
            return [low, Comparator("<", _v(M, m, p + 1, "0"))]
        return [low, Comparator("<", _v(M, m + 1, 0, "0"))]
    return [low, Comparator("<", _v(M + 1, 0, 0, "0"))]


def _tilde(major, minor, patch, prerel) -> List[Comparator]:
    if _is_x(major):
        return [_ANY]
    M = int(major)
    if _is_x(minor):
        return [Comparator(">=", _v(M, 0, 0)), Comparator("<", _v(M + 1, 0, 0, "0"))]
    m = int(minor)
    if _is_x(patch):
        return [Comparator(">=", _v(M, m, 0)), Comparator("<", _v(M, m + 1, 0, "0"))]
    p = int(patch)
    return [Comparator(">=", _v(M, m, p, prerel or "")), Comparator("<", _v(M, m + 1, 0, "0"))]


def _xrange(op, major, minor, patch, prerel) -> List[Comparator]:
    x_major = _is_x(major)
    x_minor = x_major or _is_x(minor)
    x_patch = x_minor or _is_x(patch)
    any_x = x_patch

    if op == "=" and any_x:
        op = ""

    if x_major:
        if op in (">", "<"):
            # nothing can satisfy ">x" or "<x"
            return [Comparator("<", _v(0, 0, 0, "0"))]
        return [_ANY]

    M = int(major)
    m = 0 if x_minor else int(minor)
    p = 0 if x_patch else int(patch)

    if op and any_x:
        p = 0
        if op == ">":
            op = ">="
            if x_minor:
                M, m = M + 1, 0
            else:
                m += 1
        elif op == "<=":
            op = "<"
            if x_minor:
                M += 1
            else:
                m += 1
        return [Comparator(op, _v(M, m, p, "0" if op == "<" else ""))]

    if x_minor:
        return [Comparator(">=", _v(M, 0, 0)), Comparator("<", _v(M + 1, 0, 0, "0"))]
    if x_patch:
        return [Comparator(">=", _v(M, m, 0)), Comparator("<", _v(M, m + 1, 0, "0"))]

    return [Comparator("" if op == "=" else op, _v(M, m, p, prerel or ""))]


def _simple(block: str) -> List[Comparator]:
    match = match_block(block)
    op = match.group("op")
    parts = (match.group("major"), match.group("minor"), match.group("patch"), match.group("prerel"))
    if op == "^":
        return _caret(*parts)
    if op == "~":
        return _tilde(*parts)
    return _xrange(op, *parts)


def _hyphen(low: str, high: str) -> List[Comparator]:
    comparators = []

    lm = match_block(low.strip())
    M, m, p = lm.group("major"), lm.group("minor"), lm.group("patch")
    if not _is_x(M):
        if _is_x(m):
            comparators.append(Comparator(">=", _v(int(M), 0, 0)))
        elif _is_x(p):
            comparators.append(Comparator(">=", _v(int(M), int(m), 0)))
        else:
            comparators.append(Comparator(">=", _v(int(M), int(m), int(p), lm.group("prerel") or "")))

    hm = match_block(high.strip())
    M, m, p = hm.group("major"), hm.group("minor"), hm.group("patch")
    if not _is_x(M):
        if _is_x(m):
            comparators.append(Comparator("<", _v(int(M) + 1, 0, 0, "0")))
        elif _is_x(p):
            comparators.append(Comparator("<", _v(int(M), int(m) + 1, 0, "0")))
        else:
            comparators.append(Comparator("<=", _v(int(M), int(m), int(p), hm.group("prerel") or "")))

    return comparators or [_ANY]


def comparator_sets(expression: str) -> List[List[Comparator]]:
    """Desugar an npm range into a union of comparator intersections.

    Raises:
        ValueError: expression cannot be desugared.
    """
    sets = []
    for group in normalize_range(expression).split(_JOINER):
        group = group.strip()
        if not group:
            sets.append([_ANY])
            continue
        if _HYPHEN in group:
            low, high = group.split(_HYPHEN, 1)
            comparators = _hyphen(low, high)
        else:
            comparators = []
            for block in group.split():
                comparators.extend(_simple(block))
        if len(comparators) > 1:
            comparators = [c for c in comparators if c.version is not None] or [_ANY]
        sets.append(comparators)
    return sets


def _outside(raw: str, expression: str, direction: str) -> bool:
    """npm ``outside``: raw is beyond every version the range admits.

    direction ``>`` asks whether raw is higher than the whole range,
    ``<`` whether it is lower.
    """
    version = parse_version(raw)
    if version is None or parse_range(expression) is None:
        return False
    if satisfies(raw, expression):
        return False

    sign = 1 if direction == ">" else -1
    comp, ecomp = (">", ">=") if direction == ">" else ("<", "<=")

    def beyond(a, b):
        return sign * compare(a, b) > 0

    def behind(a, b):
        return sign * compare(a, b) < 0

    def behind_or_equal(a, b):
        return sign * compare(a, b) <= 0

    try:
        sets = comparator_sets(expression)
    except ValueError:
        return False

    for comparators in sets:
        high = low = None
        for comparator in comparators:
            if comparator.version is None:
                comparator = Comparator(">=", _ZERO)
            high = high or comparator
            low = low or comparator
            if beyond(comparator.version, high.version):
                high = comparator
            elif behind(comparator.version, low.version):
                low = comparator

        if high.operator in (comp, ecomp):
            return False
        if low.operator in ("", comp) and behind_or_equal(version, low.version):
            return False
        if low.operator == ecomp and behind(version, low.version):
            return False
    return True


def gtr(raw: str, expression: str) -> bool:
    """True when raw is greater than every version the range could match."""
    return _outside(raw, expression, ">")


def ltr(raw: str, expression: str) -> bool:
    """True when raw is less than every version the range could match."""
    return _outside(raw, expression, "<")
