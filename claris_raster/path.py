from __future__ import annotations

import math

import numpy as np


Vec2 = tuple[float, float]

ARC_TOLERANCE_PX = 0.1
MAX_ARC_SEGMENTS = 1024
MIN_CURVE_SEGMENTS = 4
MAX_CURVE_SEGMENTS = 256
CURVE_SEGMENT_PX = 2.0


def identity() -> np.ndarray:
    return np.eye(3, dtype=np.float64)


def translation(tx: float, ty: float) -> np.ndarray:
    m = identity()
    m[0, 2] = tx
    m[1, 2] = ty
    return m


def scaling(sx: float, sy: float) -> np.ndarray:
    m = identity()
    m[0, 0] = sx
    m[1, 1] = sy
    return m


def apply(matrix: np.ndarray, x: float, y: float) -> Vec2:
    out = matrix @ np.array([x, y, 1.0], dtype=np.float64)
    return (float(out[0]), float(out[1]))


def apply_many(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Transform an (N, 2) array of user-space points to device space."""

    if points.size == 0:
        return points.reshape(0, 2)
    homogeneous = np.hstack([points, np.ones((points.shape[0], 1), dtype=np.float64)])
    return (homogeneous @ matrix.T)[:, :2]


def linear_scale(matrix: np.ndarray) -> float:
    """Geometric-mean scale factor of the linear part, used for widths and sizes."""

    det = float(matrix[0, 0] * matrix[1, 1] - matrix[0, 1] * matrix[1, 0])
    return math.sqrt(abs(det))


def normalize_sweep(angle1: float, angle2: float) -> float:
    """Return angle2 advanced by full turns until it is not below angle1."""

    if angle2 < angle1:
        turns = math.ceil((angle1 - angle2) / (2.0 * math.pi))
        angle2 += turns * 2.0 * math.pi
    return angle2


def arc_points(
    xc: float,
    yc: float,
    radius: float,
    angle1: float,
    angle2: float,
    *,
    device_scale: float = 1.0,
) -> np.ndarray:
    """Flatten a positive-direction arc into user-space points, endpoints included."""

    angle2 = normalize_sweep(angle1, angle2)
    sweep = angle2 - angle1
    device_radius = abs(radius) * max(device_scale, 1e-9)
    if device_radius <= ARC_TOLERANCE_PX or sweep <= 0.0:
        segments = 1
    else:
        step = 2.0 * math.acos(max(-1.0, 1.0 - ARC_TOLERANCE_PX / device_radius))
        segments = int(math.ceil(sweep / max(step, 1e-6)))
    segments = max(1, min(MAX_ARC_SEGMENTS, segments))
    t = np.linspace(angle1, angle2, segments + 1, dtype=np.float64)
    return np.column_stack([xc + radius * np.cos(t), yc + radius * np.sin(t)])


def cubic_points(p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2) -> np.ndarray:
    """Flatten a device-space cubic Bezier, endpoints included."""

    ctrl = np.array([p0, p1, p2, p3], dtype=np.float64)
    hull = float(np.sum(np.linalg.norm(np.diff(ctrl, axis=0), axis=1)))
    segments = int(math.ceil(hull / CURVE_SEGMENT_PX))
    segments = max(MIN_CURVE_SEGMENTS, min(MAX_CURVE_SEGMENTS, segments))
    t = np.linspace(0.0, 1.0, segments + 1, dtype=np.float64)[:, None]
    mt = 1.0 - t
    return (
        (mt**3) * ctrl[0]
        + 3.0 * (mt**2) * t * ctrl[1]
        + 3.0 * mt * (t**2) * ctrl[2]
        + (t**3) * ctrl[3]
    )
