"""Vectorized escape-time evaluation with TensorFlow."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

from .plane import HORIZON, Viewport, plane_axes


@tf.function
def _escape_step(
    i: tf.Tensor,
    zx: tf.Tensor,
    zy: tf.Tensor,
    cx: tf.Tensor,
    cy: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Check every active point for escape, then advance the ones still bounded."""

    horizon = tf.constant(HORIZON, dtype=zx.dtype)
    escaped = tf.logical_and(active, zx * zx + zy * zy > horizon)
    counts = tf.where(escaped, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped))

    two = tf.constant(2.0, dtype=zx.dtype)
    zx_new = zx * zx - zy * zy + cx
    zy_new = two * zx * zy + cy
    zx = tf.where(active, zx_new, zx)
    zy = tf.where(active, zy_new, zy)
    return zx, zy, counts, active


@tf.function
def _escape_run(cx: tf.Tensor, cy: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate until every point escaped or ``limit + 1`` checks were made."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    counts = tf.fill(tf.shape(cx), limit)
    active = tf.ones_like(cx, tf.bool)

    def cond(i, zx, zy, counts, active):
        return tf.logical_and(tf.less_equal(i, limit), tf.reduce_any(active))

    def body(i, zx, zy, counts, active):
        zx, zy, counts, active = _escape_step(i, zx, zy, cx, cy, counts, active)
        return i + 1, zx, zy, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, cx, cy, counts, active))
    return counts


def iteration_grid(viewport: Viewport, *, device: Optional[str] = None) -> np.ndarray:
    """Escape counts for every pixel as an ``(height, width)`` int32 array."""

    xs, ys = plane_axes(viewport)
    limit = tf.constant(viewport.limit, dtype=tf.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        x_tf = tf.convert_to_tensor(xs, dtype=tf.float64)
        y_tf = tf.convert_to_tensor(ys, dtype=tf.float64)
        CX, CY = tf.meshgrid(x_tf, y_tf)
        counts = _escape_run(CX, CY, limit)

    return counts.numpy()
