"""Central module containing command types and engine constants for path processing."""

from __future__ import annotations

from typing import Literal

###############################################################################
# Types
###############################################################################


MpPathCmds = Literal[  # Type-Definition for path commands used in MpPath
    # MoveTo (1 point) - start a new subpath and move the cursor to end
    "M",
    # LineTo (1 point) - draw a straight line from the cursor to end
    "L",
    # Quadratic Bezier To (2 points) - one control point and an end point
    "Q",
    # Cubic Bezier To (3 points) - two control points and an end point
    "C",
    # ClosePath (1 point) - straight line back to the start point of the current subpath
    "Z",
]


###############################################################################
# Consts
###############################################################################

# Fixed number of polyline steps used to estimate curve lengths.
# Not adaptive: cost per segment stays constant inside an animation loop.
QUADRATIC_LENGTH_STEPS: int = 10
CUBIC_LENGTH_STEPS: int = 20

# Parameter at which cubics are split when equalizing segment counts for morphing
SUBDIVIDE_SPLIT_T: float = 0.5

# Tolerance used by MpPoint.is_close()
POINT_TOLERANCE: float = 1e-6
