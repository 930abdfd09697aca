"""Pan/zoom transform between device pixels and simulation space.

A simulation point maps to the device as ``(sim + translate) * scale``,
divided by the device pixel ratio. Panning edits ``translate`` in
simulation units, so a drag moves the scene at the same visual speed at
every zoom level.
"""
import logging
import math

logger = logging.getLogger(__name__)

SCALE_KEY = "forcegraph/scale"
DEFAULT_SCALE = 1.0
# Device wheel units per unit of scale
WHEEL_STEP = 1250.0


class ViewTransform:
    def __init__(self, min_scale=0.1, max_scale=20.0, store=None, persist=False, pixel_ratio=1.0):
        # Bounds snap inwards onto the 0.1 grid
        self.min_scale = math.ceil(round(min_scale * 10, 6)) / 10
        self.max_scale = math.floor(round(max_scale * 10, 6)) / 10
        if self.min_scale >= self.max_scale:
            raise ValueError(f"Scale range {min_scale}..{max_scale} holds no 0.1 step")
        self.pixel_ratio = pixel_ratio
        self.store = store
        self.persist = persist and store is not None

        self.translate_x = 0.0
        self.translate_y = 0.0
        self.scale = self._clamp(self._restore_scale()) if self.persist else DEFAULT_SCALE

    def _restore_scale(self):
        raw = self.store.get(SCALE_KEY)
        if raw is None:
            return DEFAULT_SCALE
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring persisted scale %r: not a number", raw)
            return DEFAULT_SCALE
        if not math.isfinite(value):
            logger.warning("Ignoring persisted scale %r: not finite", raw)
            return DEFAULT_SCALE
        return value

    def _clamp(self, scale):
        return round(min(max(scale, self.min_scale), self.max_scale), 1)

    def to_simulation(self, x, y):
        x *= self.pixel_ratio
        y *= self.pixel_ratio
        return x / self.scale - self.translate_x, y / self.scale - self.translate_y

    def to_device(self, x, y):
        return (
            (x + self.translate_x) * self.scale / self.pixel_ratio,
            (y + self.translate_y) * self.scale / self.pixel_ratio,
        )

    def pan(self, dx, dy):
        self.translate_x += dx * self.pixel_ratio / self.scale
        self.translate_y += dy * self.pixel_ratio / self.scale

    def set_scale(self, scale, x=0.0, y=0.0):
        """Zoom to `scale`, keeping the simulation point under device (x, y) in place.

        Returns the committed scale after clamping and rounding.
        """
        anchor_x, anchor_y = self.to_simulation(x, y)
        new_scale = self._clamp(scale)
        if new_scale == self.scale:
            return self.scale

        self.scale = new_scale
        device_x, device_y = x * self.pixel_ratio, y * self.pixel_ratio
        self.translate_x = device_x / new_scale - anchor_x
        self.translate_y = device_y / new_scale - anchor_y

        if self.persist:
            self.store[SCALE_KEY] = str(new_scale)
        return new_scale

    def zoom(self, x, y, delta):
        """Wheel zoom about (x, y). Positive deltas zoom in."""
        return self.set_scale(self.scale + delta / WHEEL_STEP, x, y)

    def center_on(self, x, y, width, height):
        """Scroll so that simulation (x, y) sits in the middle of a width x height viewport."""
        mid_x, mid_y = self.to_simulation(width / 2, height / 2)
        self.translate_x += mid_x - x
        self.translate_y += mid_y - y

    def reset(self):
        self.translate_x = 0.0
        self.translate_y = 0.0
        self.set_scale(DEFAULT_SCALE)
