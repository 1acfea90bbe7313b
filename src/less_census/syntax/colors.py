"""Color literals: named color keywords, hex parsing and canonical rendering.

``render_color`` is what the classifier uses as a ``colors`` counter key, so
``#FF0000``, ``#ff0000`` and ``#f00`` all count as the same color.
"""

from __future__ import annotations

import re
from typing import Optional

from .nodes import RGBColor, format_number

# CSS Color Module Level 4 named colors. ``transparent`` and ``currentcolor``
# are keywords, not named colors.
NAMED_COLORS = frozenset(
    """
    aliceblue antiquewhite aqua aquamarine azure beige bisque black
    blanchedalmond blue blueviolet brown burlywood cadetblue chartreuse
    chocolate coral cornflowerblue cornsilk crimson cyan darkblue darkcyan
    darkgoldenrod darkgray darkgreen darkgrey darkkhaki darkmagenta
    darkolivegreen darkorange darkorchid darkred darksalmon darkseagreen
    darkslateblue darkslategray darkslategrey darkturquoise darkviolet
    deeppink deepskyblue dimgray dimgrey dodgerblue firebrick floralwhite
    forestgreen fuchsia gainsboro ghostwhite gold goldenrod gray green
    greenyellow grey honeydew hotpink indianred indigo ivory khaki lavender
    lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
    lightgoldenrodyellow lightgray lightgreen lightgrey lightpink
    lightsalmon lightseagreen lightskyblue lightslategray lightslategrey
    lightsteelblue lightyellow lime limegreen linen magenta maroon
    mediumaquamarine mediumblue mediumorchid mediumpurple mediumseagreen
    mediumslateblue mediumspringgreen mediumturquoise mediumvioletred
    midnightblue mintcream mistyrose moccasin navajowhite navy oldlace olive
    olivedrab orange orangered orchid palegoldenrod palegreen paleturquoise
    palevioletred papayawhip peachpuff peru pink plum powderblue purple
    rebeccapurple red rosybrown royalblue saddlebrown salmon sandybrown
    seagreen seashell sienna silver skyblue slateblue slategray slategrey
    snow springgreen steelblue tan teal thistle tomato turquoise violet
    wheat white whitesmoke yellow yellowgreen
    """.split()
)

_HEX_RE = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")


def is_named_color(word: str) -> bool:
    """True if ``word`` is a named color keyword (case-insensitive)."""
    return word.lower() in NAMED_COLORS


def parse_hex_color(text: str) -> Optional[RGBColor]:
    """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa``.

    Returns:
        RGBColor, or None if ``text`` is not a hex color (e.g. an id like ``#main``)
    """
    if not _HEX_RE.fullmatch(text):
        return None

    digits = text[1:]
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)

    red = int(digits[0:2], 16)
    green = int(digits[2:4], 16)
    blue = int(digits[4:6], 16)
    alpha = 1.0
    if len(digits) == 8:
        alpha = round(int(digits[6:8], 16) / 255, 2)

    return RGBColor(red, green, blue, alpha, source=text)


def render_color(color: RGBColor) -> str:
    """Canonical compressed CSS text for a color.

    Examples:
        #FF0000 -> #f00
        #123456 -> #123456
        #ff000080 -> rgba(255,0,0,0.5)
    """
    if color.alpha < 1.0:
        return "rgba({},{},{},{})".format(
            color.red, color.green, color.blue, format_number(color.alpha)
        )

    text = "#{:02x}{:02x}{:02x}".format(color.red, color.green, color.blue)
    if text[1] == text[2] and text[3] == text[4] and text[5] == text[6]:
        return "#" + text[1] + text[3] + text[5]
    return text
