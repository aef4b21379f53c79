"""Color expression validation.

A small grammar covering the color values authors actually write in
transcripts: hex colors, ``rgb()``/``rgba()``/``hsl()``/``hsla()``
functions, CSS named colors, ``var()`` references, and gradient
functions.  It is not a full CSS parser.
"""

from __future__ import annotations

import re

_HEX_RE = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$")

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
_PERCENT_OR_NUMBER = rf"{_NUMBER}%?"
_HUE = rf"{_NUMBER}(?:deg|rad|grad|turn)?"

# Legacy comma syntax and modern space syntax with an optional "/ alpha".
_RGB_RE = re.compile(
    rf"^rgba?\(\s*(?:"
    rf"{_PERCENT_OR_NUMBER}\s*,\s*{_PERCENT_OR_NUMBER}\s*,\s*{_PERCENT_OR_NUMBER}"
    rf"(?:\s*,\s*{_PERCENT_OR_NUMBER})?"
    rf"|{_PERCENT_OR_NUMBER}\s+{_PERCENT_OR_NUMBER}\s+{_PERCENT_OR_NUMBER}"
    rf"(?:\s*/\s*{_PERCENT_OR_NUMBER})?"
    rf")\s*\)$"
)
_HSL_RE = re.compile(
    rf"^hsla?\(\s*(?:"
    rf"{_HUE}\s*,\s*{_PERCENT_OR_NUMBER}\s*,\s*{_PERCENT_OR_NUMBER}"
    rf"(?:\s*,\s*{_PERCENT_OR_NUMBER})?"
    rf"|{_HUE}\s+{_PERCENT_OR_NUMBER}\s+{_PERCENT_OR_NUMBER}"
    rf"(?:\s*/\s*{_PERCENT_OR_NUMBER})?"
    rf")\s*\)$"
)
_VAR_RE = re.compile(r"^var\(\s*--[a-z0-9_-]+\s*(?:,[^()]*)?\)$")
_GRADIENT_RE = re.compile(r"^(?:repeating-)?(?:linear|radial|conic)-gradient\((.*)\)$", re.DOTALL)

NAMED_COLORS: frozenset[str] = frozenset(
    {
        "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige",
        "bisque", "black", "blanchedalmond", "blue", "blueviolet", "brown",
        "burlywood", "cadetblue", "chartreuse", "chocolate", "coral",
        "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
        "darkgoldenrod", "darkgray", "darkgreen", "darkgrey", "darkkhaki",
        "darkmagenta", "darkolivegreen", "darkorange", "darkorchid", "darkred",
        "darksalmon", "darkseagreen", "darkslateblue", "darkslategray",
        "darkslategrey", "darkturquoise", "darkviolet", "deeppink",
        "deepskyblue", "dimgray", "dimgrey", "dodgerblue", "firebrick",
        "floralwhite", "forestgreen", "fuchsia", "gainsboro", "ghostwhite",
        "gold", "goldenrod", "gray", "green", "greenyellow", "grey", "honeydew",
        "hotpink", "indianred", "indigo", "ivory", "khaki", "lavender",
        "lavenderblush", "lawngreen", "lemonchiffon", "lightblue", "lightcoral",
        "lightcyan", "lightgoldenrodyellow", "lightgray", "lightgreen",
        "lightgrey", "lightpink", "lightsalmon", "lightseagreen",
        "lightskyblue", "lightslategray", "lightslategrey", "lightsteelblue",
        "lightyellow", "lime", "limegreen", "linen", "magenta", "maroon",
        "mediumaquamarine", "mediumblue", "mediumorchid", "mediumpurple",
        "mediumseagreen", "mediumslateblue", "mediumspringgreen",
        "mediumturquoise", "mediumvioletred", "midnightblue", "mintcream",
        "mistyrose", "moccasin", "navajowhite", "navy", "oldlace", "olive",
        "olivedrab", "orange", "orangered", "orchid", "palegoldenrod",
        "palegreen", "paleturquoise", "palevioletred", "papayawhip",
        "peachpuff", "peru", "pink", "plum", "powderblue", "purple",
        "rebeccapurple", "red", "rosybrown", "royalblue", "saddlebrown",
        "salmon", "sandybrown", "seagreen", "seashell", "sienna", "silver",
        "skyblue", "slateblue", "slategray", "slategrey", "snow", "springgreen",
        "steelblue", "tan", "teal", "thistle", "tomato", "turquoise", "violet",
        "wheat", "white", "whitesmoke", "yellow", "yellowgreen",
        "transparent", "currentcolor",
    }
)


def _balanced(text: str) -> bool:
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def is_valid_color(value: str | None) -> bool:
    """Return ``True`` if *value* is a color expression we accept.

    Matching is case-insensitive and ignores surrounding whitespace.

    Args:
        value: Candidate color, e.g. ``"#ff0000"``, ``"rgba(0, 0, 0, .5)"``,
            ``"tomato"`` or ``"linear-gradient(45deg, red, blue)"``.

    Returns:
        Whether the value is a legal color (or gradient) expression.
    """
    if not value:
        return False
    candidate = value.strip().lower()
    if not candidate:
        return False

    if candidate in NAMED_COLORS:
        return True
    if _HEX_RE.match(candidate):
        return True
    if _RGB_RE.match(candidate) or _HSL_RE.match(candidate):
        return True
    if _VAR_RE.match(candidate):
        return True

    gradient = _GRADIENT_RE.match(candidate)
    if gradient:
        args = gradient.group(1).strip()
        return bool(args) and _balanced(args)

    return False
