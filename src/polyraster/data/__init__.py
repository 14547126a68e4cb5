"""Shape document loaders."""

from .svg_loader import SvgDocument, load_svg_scene, parse_svg, read_svg

__all__ = ["SvgDocument", "load_svg_scene", "parse_svg", "read_svg"]
