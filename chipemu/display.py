"""Text rendering of the framebuffer, for terminals and logs."""
from __future__ import annotations

import numpy as np


def render_text(framebuffer: np.ndarray, on: str = "X", off: str = " ") -> str:
    """Return the framebuffer as bordered lines of *on*/*off* characters."""
    width = framebuffer.shape[1]
    rule = "-" * (width + 2)
    lines = [rule]
    for row in framebuffer:
        lines.append("|" + "".join(on if px else off for px in row) + "|")
    lines.append(rule)
    return "\n".join(lines)
