from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]
SourceRGBA = tuple[float, float, float, float]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def composite_coverage(dst: np.ndarray, coverage: np.ndarray, source: SourceRGBA) -> None:
    """Blend a solid source over `dst` through a [0, 1] coverage mask (straight alpha)."""

    if coverage.shape != dst.shape[:2]:
        raise ValueError(f"coverage shape mismatch: got {coverage.shape} expected {dst.shape[:2]}")
    r, g, b, a = source
    src_alpha = coverage.astype(np.float32) * float(a)
    rows, cols = np.nonzero(src_alpha > 0)
    if rows.size == 0:
        return
    y0, y1 = int(rows.min()), int(rows.max()) + 1
    x0, x1 = int(cols.min()), int(cols.max()) + 1

    patch = dst[y0:y1, x0:x1]
    alpha = src_alpha[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    src_rgb = np.asarray((r * 255.0, g * 255.0, b * 255.0), dtype=np.float32).reshape(1, 1, 3)
    out_alpha = alpha + dst_alpha * (1.0 - alpha)
    out_rgb_num = src_rgb * alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)
