"""Creates a SVG file showing a circle morphing into a rectangle,
a progressive reveal of a cubic curve and tangent markers along it.
Each animation is sampled at FRAMES equally spaced progress values
and drawn as one row of frames.
"""

import logging
import os

import svgwrite

from motionpath.path import MpPath
from motionpath.path_partial import MpPathReveal
from motionpath.shapes import MpShapes
from motionpath.svgpath import MpSvgPath

OUTPUT_FILE = "data/output/example/svg/motionpath_morph_preview.svg"

FRAMES = 6  # number of frames per row
CELL_SIZE = 3.0  # size of one frame in user units
STROKE_WIDTH = 0.03
TANGENT_LENGTH = 0.4


def _frame_progress(index: int) -> float:
    return index / (FRAMES - 1)


def _add_path(dwg: svgwrite.Drawing, group, path: MpPath, color: str, fill: str = "none") -> None:
    if path.is_empty:
        return
    group.add(
        dwg.path(
            d=MpSvgPath.to_path_string(path, round_func=lambda value: round(value, 4)),
            stroke=color,
            stroke_width=STROKE_WIDTH,
            fill=fill,
        )
    )


def main(output_file: str = OUTPUT_FILE) -> str:
    """Creates the SVG drawing with three rows of frames:
    1. circle morphing into a rectangle
    2. a wave curve revealed from its start
    3. the wave curve with a tangent marker moving along it
    Finally, it saves the drawing to output_file and returns that path.
    """
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    circle = MpShapes.circle_path(1.0)
    rectangle = MpShapes.rectangle_path(2.0, 1.2)
    wave = MpPath().move_to((-1.0, 0.0)).cubic_to((-0.5, -1.2), (0.5, 1.2), (1.0, 0.0))

    width = FRAMES * CELL_SIZE
    height = 3 * CELL_SIZE
    dwg = svgwrite.Drawing(
        output_file,
        size=(f"{width * 10}mm", f"{height * 10}mm"),
        viewBox=f"0 0 {width} {height}",
    )

    for index in range(FRAMES):
        progress = _frame_progress(index)
        center_x = (index + 0.5) * CELL_SIZE

        # Row 1: morph
        group = dwg.g()
        group.translate(center_x, 0.5 * CELL_SIZE)
        _add_path(dwg, group, MpPath.interpolate(circle, rectangle, progress), "black")
        dwg.add(group)

        # Row 2: reveal with fill fading in
        group = dwg.g()
        group.translate(center_x, 1.5 * CELL_SIZE)
        drawn, fill_fraction = MpPathReveal.draw([wave], progress)
        for path in drawn:
            _add_path(dwg, group, path, "navy")
        group.add(dwg.text(f"fill {fill_fraction:.2f}", insert=(-1.0, 1.2), font_size=0.25))
        dwg.add(group)

        # Row 3: tangent marker
        group = dwg.g()
        group.translate(center_x, 2.5 * CELL_SIZE)
        _add_path(dwg, group, wave, "gray")
        point = wave.get_point_at(progress)
        tangent = wave.get_tangent_at(progress)
        tip = point + tangent * TANGENT_LENGTH
        group.add(dwg.circle(center=point.to_tuple(), r=0.06, fill="red"))
        group.add(dwg.line(start=point.to_tuple(), end=tip.to_tuple(), stroke="red", stroke_width=STROKE_WIDTH))
        dwg.add(group)

    output_dir = os.path.dirname(output_file)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    dwg.saveas(output_file, pretty=True, indent=2)
    logger.info("Saved morph preview with %d frames to %s", FRAMES, output_file)
    return output_file


if __name__ == "__main__":
    main()
