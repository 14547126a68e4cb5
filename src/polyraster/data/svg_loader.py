"""SVG shape document loader.

Reads the small SVG dialect the renderer understands:

- the root element must be ``<svg>`` with a square ``viewBox`` of four
  numbers; ``scene_size / viewBox width`` scales source units into the scene;
- ``<g id="N">`` groups set the integer layer of the shapes inside them;
- ``<path>``, ``<circle>`` and ``<ellipse>`` elements must carry an ``id``
  and a ``style`` with ``stroke`` and ``fill`` declarations.

Other elements are logged and skipped. Any malformed shape aborts the whole
load with :class:`~polyraster.core.errors.MalformedInput` (or
``UnsupportedCommand`` / ``RangeViolation`` from the geometry layer); no
partial scene is returned.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from pydantic import ValidationError

from polyraster.core.curves import REFERENCE_N
from polyraster.core.errors import MalformedInput
from polyraster.core.shapes import (
    ApproximationParams,
    CircleShape,
    EllipseShape,
    PathShape,
    Scene,
    Shape,
)

__all__ = ["SvgDocument", "parse_svg", "read_svg", "load_svg_scene"]

logger = logging.getLogger(__name__)

_SHAPE_MODELS = {"path": PathShape, "circle": CircleShape, "ellipse": EllipseShape}
_SHAPE_FIELDS = {
    "path": ("d",),
    "circle": ("cx", "cy", "r"),
    "ellipse": ("cx", "cy", "rx", "ry"),
}
# Structural or descriptive elements that carry no geometry
_IGNORED = frozenset({"defs", "title", "desc", "metadata", "namedview", "style"})


@dataclass(frozen=True, slots=True)
class SvgDocument:
    view_box: Tuple[float, float, float, float]
    shapes: Tuple[Shape, ...]

    @property
    def size(self) -> float:
        return self.view_box[2]


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_view_box(value: str | None) -> Tuple[float, float, float, float]:
    if value is None:
        raise MalformedInput("svg has no 'viewBox' attribute")
    try:
        nums = [float(s) for s in re.split(r"[\s,]+", value.strip()) if s]
    except ValueError:
        raise MalformedInput(f"viewBox values are not numbers: {value!r}") from None
    if len(nums) != 4 or nums[2] != nums[3] or nums[2] <= 0:
        raise MalformedInput(f"viewBox must be square with 4 values: {value!r}")
    return (nums[0], nums[1], nums[2], nums[3])


def _parse_layer(value: str | None) -> int:
    if value is None:
        raise MalformedInput("group has no id (layer number)")
    try:
        return int(value)
    except ValueError:
        raise MalformedInput(f"group id is not an integer layer: {value!r}") from None


def _walk(elem: ET.Element, layer: int) -> Iterator[Tuple[ET.Element, int]]:
    for child in elem:
        tag = _local(child.tag)
        if tag == "g":
            group_layer = _parse_layer(child.get("id"))
            logger.info("layer %d", group_layer)
            yield from _walk(child, group_layer)
        else:
            yield child, layer


def _shape_from_element(elem: ET.Element, layer: int) -> Shape | None:
    tag = _local(elem.tag)
    model = _SHAPE_MODELS.get(tag)
    if model is None:
        if tag in _IGNORED:
            logger.debug("skipping <%s>", tag)
        else:
            logger.warning("unhandled svg element <%s> skipped", tag)
        return None
    ident = elem.get("id")
    if ident is None:
        raise MalformedInput(f"<{tag}> element has no id")
    data: dict[str, object] = {"id": ident, "layer": layer}
    for key in ("style",) + _SHAPE_FIELDS[tag]:
        if key in elem.attrib:
            data[key] = elem.attrib[key]
    try:
        shape = model.model_validate(data)
    except ValidationError as exc:
        raise MalformedInput(f"invalid <{tag} id={ident!r}>: {exc}") from exc
    logger.debug("%s id: %s", tag, ident)
    return shape


def parse_svg(text: Union[str, bytes]) -> SvgDocument:
    """Parse SVG source into shape descriptors (no approximation yet)."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedInput(f"svg is not well-formed XML: {exc}") from exc
    if _local(root.tag) != "svg":
        raise MalformedInput(
            f"document does not start with <svg> but <{_local(root.tag)}>"
        )
    view_box = _parse_view_box(root.get("viewBox"))
    shapes: List[Shape] = []
    for elem, layer in _walk(root, 0):
        shape = _shape_from_element(elem, layer)
        if shape is not None:
            shapes.append(shape)
    return SvgDocument(view_box=view_box, shapes=tuple(shapes))


def read_svg(path: Union[str, Path]) -> SvgDocument:
    return parse_svg(Path(path).read_bytes())


def load_svg_scene(
    path: Union[str, Path],
    *,
    scene_size: float,
    spacing: float,
    reference_n: int = REFERENCE_N,
) -> Scene:
    """Read *path* and approximate every shape into a scene."""
    doc = read_svg(path)
    params = ApproximationParams(
        scene_size=float(scene_size),
        spacing=float(spacing),
        scale=float(scene_size) / doc.size,
        reference_n=reference_n,
    )
    logger.info(
        "loading %s: %d shapes, viewBox %s, scale %.4f",
        path,
        len(doc.shapes),
        doc.view_box,
        params.scale,
    )
    return Scene(float(scene_size)).with_shapes(doc.shapes, params)
