# reflector_model/skyline.py  天际线遮挡模型（每度一个遮挡高度角）
import logging
import math
from dataclasses import dataclass, field
import numpy as np

from .config import SkylineParams

logger = logging.getLogger(__name__)

_PARAMS = SkylineParams()
ONE_DEGREE = math.radians(1.0)

def round_half_up(x):
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    r = np.floor(np.asarray(x, float) + 0.5).astype(int)
    return int(r) if r.ndim == 0 else r

def azimuth_bucket(az):
    """Integer-degree bucket (0..359) for an azimuth in radians, any winding."""
    az = np.mod(np.asarray(az, float), 2 * np.pi)
    return np.mod(round_half_up(np.degrees(az)), _PARAMS.bucket_count)

@dataclass
class Skyline:
    """
    Per-azimuth blocking altitude: the sun is blocked at azimuth az when it
    is below altitudes[bucket(az)]. Disabling keeps the stored profile.

    中文：按方位角（每度）记录遮挡高度角；太阳低于该高度时被遮挡。禁用时保留数据。
    """
    altitudes: np.ndarray = field(default_factory=lambda: np.zeros(_PARAMS.bucket_count))
    enabled: bool = False

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)

    def blocking_altitude(self, az):
        """Altitude (rad) below which the sun is blocked at az; 0 everywhere when disabled."""
        if not self.enabled:
            z = np.zeros(np.shape(az))
            return float(z) if z.ndim == 0 else z
        alt = self.altitudes[azimuth_bucket(az)]
        return float(alt) if np.ndim(alt) == 0 else alt

    def set_altitude(self, az: float, alt: float) -> int:
        """
        Store a blocking altitude, clamping instead of rejecting.

        az is limited to the editor range [-180, 179.1] deg and then wrapped
        with a half-degree bias, so -180 deg lands in bucket 180 and anything
        that would round to 360 lands in bucket 0. alt is clamped to [0, pi/2].
        Returns the bucket written.
        """
        az = max(az, math.radians(_PARAMS.min_azimuth_deg))
        az = min(az, math.radians(_PARAMS.max_azimuth_deg))
        if az < -ONE_DEGREE / 2:
            az += 2 * math.pi
        if az > 2 * math.pi - ONE_DEGREE / 2:
            az -= 2 * math.pi
        alt = min(max(alt, 0.0), math.pi / 2)
        bucket = round_half_up(math.degrees(az)) % _PARAMS.bucket_count
        self.altitudes[bucket] = alt
        return bucket

    def paint_range(self, az_prev, az: float, alt: float) -> list[int]:
        """
        Drag-paint from az_prev to az. When the gap exceeds one degree every
        integer degree from the smaller azimuth up to and including the
        larger one gets the same (new) altitude, so a fast drag in either
        direction leaves no unset buckets. az_prev=None marks the first point
        of a drag.

        中文：拖动绘制。若与上一点间隔超过 1 度，则从较小方位角起逐度（含两端）写入相同的新高度，不做插值。
        """
        buckets = [self.set_altitude(az, alt)]
        gap = ONE_DEGREE * _PARAMS.paint_gap_deg
        if az_prev is not None and az_prev >= math.radians(_PARAMS.min_azimuth_deg) and abs(az - az_prev) > gap:
            start = min(az, az_prev)
            steps = round_half_up(math.degrees(abs(az - az_prev)))
            for i in range(steps + 1):
                buckets.append(self.set_altitude(start + math.radians(i), alt))
            logger.debug("painted %d skyline buckets at %.1f deg", steps + 1, math.degrees(alt))
        return buckets

    def transmission(self, az, alt):
        """1 where the sun gets through, 0 where the skyline blocks it."""
        blocked = np.asarray(self.blocking_altitude(az)) > np.asarray(alt)
        t = np.where(blocked, 0.0, 1.0)
        return float(t) if t.ndim == 0 else t

    def is_blocked(self, az, alt):
        b = np.asarray(self.blocking_altitude(az)) > np.asarray(alt)
        return bool(b) if b.ndim == 0 else b
