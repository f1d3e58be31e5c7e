"""Parsing of SVG transform attributes into a single affine matrix.

Supports the SVG 1.1 transform list: matrix, translate, scale, rotate,
skewX and skewY. A list applies right to left to points, the same as
composing the matrices left to right.
"""

import math
import re

from fontTools.misc.transform import Identity, Transform

from glyphmesh.exceptions import InvalidTransformError

_COMMAND_RE = re.compile(r"\s*([A-Za-z]+)\s*\(([^)]*)\)\s*,?")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Allowed argument counts per command
_ARITY: dict[str, tuple[int, ...]] = {
    "matrix": (6,),
    "translate": (1, 2),
    "scale": (1, 2),
    "rotate": (1, 3),
    "skewX": (1,),
    "skewY": (1,),
}


def _command_matrix(name: str, args: list[float]) -> Transform:
    """Build the matrix for one transform command."""
    if name == "matrix":
        return Transform(*args)
    if name == "translate":
        tx = args[0]
        ty = args[1] if len(args) > 1 else 0.0
        return Identity.translate(tx, ty)
    if name == "scale":
        sx = args[0]
        sy = args[1] if len(args) > 1 else sx
        return Identity.scale(sx, sy)
    if name == "rotate":
        angle = math.radians(args[0])
        if len(args) == 3:
            cx, cy = args[1], args[2]
            return Identity.translate(cx, cy).rotate(angle).translate(-cx, -cy)
        return Identity.rotate(angle)
    if name == "skewX":
        return Identity.skew(math.radians(args[0]), 0)
    return Identity.skew(0, math.radians(args[0]))


def parse_transform(text: str) -> Transform:
    """Parse an SVG transform attribute.

    Args:
        text: Transform list, e.g. "translate(10 20) scale(2)"

    Returns:
        The composed transform (identity for an empty list)

    Raises:
        InvalidTransformError: If the text is not a valid transform list

    Examples:
        >>> parse_transform("matrix(1 0 0 -1 0 100)")
        <Transform [1 0 0 -1 0 100]>
    """
    result = Identity
    pos = 0
    stripped = text.strip()

    while pos < len(stripped):
        match = _COMMAND_RE.match(stripped, pos)
        if match is None:
            raise InvalidTransformError(text, f"unexpected input at offset {pos}")

        name, raw_args = match.group(1), match.group(2)
        if name not in _ARITY:
            raise InvalidTransformError(text, f"unknown command '{name}'")

        args = [float(n) for n in _NUMBER_RE.findall(raw_args)]
        if len(args) not in _ARITY[name]:
            raise InvalidTransformError(
                text, f"'{name}' takes {' or '.join(map(str, _ARITY[name]))} arguments, got {len(args)}"
            )

        result = result.transform(_command_matrix(name, args))
        pos = match.end()

    return result
