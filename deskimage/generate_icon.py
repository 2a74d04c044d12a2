#!/usr/bin/env python3
"""Generates the DeskImage window icon."""

import logging
import os

log = logging.getLogger("deskimage.icon")

ICON_SVG = '''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 64 64" width="64" height="64">
  <!-- Monitor -->
  <rect x="6" y="8" width="52" height="36" rx="4" ry="4"
        fill="#263238" stroke="#90A4AE" stroke-width="2"/>
  <!-- Stand -->
  <rect x="26" y="44" width="12" height="6" fill="#607D8B"/>
  <rect x="18" y="50" width="28" height="4" rx="2" fill="#78909C"/>
  <!-- Package -->
  <rect x="22" y="16" width="20" height="18" rx="2"
        fill="#4FC3F7" stroke="#0288D1" stroke-width="1.5"/>
  <path d="M 22 22 L 42 22" stroke="#0288D1" stroke-width="1.5"/>
  <!-- Arrow into the desktop -->
  <path d="M 32 25 L 32 32 M 28 29 L 32 33 L 36 29" fill="none"
        stroke="#FFD54F" stroke-width="2" stroke-linecap="round"/>
</svg>'''


def generate_icon(assets_dir: str | None = None) -> str:
    """Write icon.svg (and icon.png when librsvg is available). Returns the SVG path."""
    assets_dir = assets_dir or os.path.join(os.path.dirname(__file__), "assets")
    os.makedirs(assets_dir, exist_ok=True)

    svg_path = os.path.join(assets_dir, "icon.svg")
    png_path = os.path.join(assets_dir, "icon.png")

    with open(svg_path, "w", encoding="utf-8") as f:
        f.write(ICON_SVG)
    log.info("SVG saved: %s", svg_path)

    try:
        import gi
        gi.require_version("Rsvg", "2.0")
        from gi.repository import Rsvg
        import cairo

        handle = Rsvg.Handle.new_from_file(svg_path)
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 64, 64)
        ctx = cairo.Context(surface)
        viewport = Rsvg.Rectangle()
        viewport.x, viewport.y, viewport.width, viewport.height = 0, 0, 64, 64
        handle.render_document(ctx, viewport)
        surface.write_to_png(png_path)
        log.info("PNG saved: %s", png_path)
    except Exception as exc:
        log.warning("PNG render failed (%s), using SVG.", exc)

    return svg_path


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    generate_icon()
