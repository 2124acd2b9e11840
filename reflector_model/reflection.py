# reflector_model/reflection.py  反射方向、日照强度与可见性计算，以及每日日照小时数
import logging
from dataclasses import dataclass
import numpy as np
import pandas as pd

from .config import EngineParams
from .moment import format_date
from .quaternion import angle, conjugate, reflect, to_az_alt, to_direction
from .reflector import Reflector
from .skyline import Skyline
from .sun_data import SunPositionSeries

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ReflectionResult:
    """
    Output of one full reflection pass, parallel to the sun data:
      azimuth, altitude: reflected ray direction (rad), (D, S)
      insolation: Lambert factor cos(incidence) in [0, 1], 0 where not visible
      visible: False where the sun hits the back of the panel or is below the horizon
      version: bumped on every recompute so stale copies can be detected

    The whole result is replaced on recompute; it is never patched in place.

    中文：一次完整反射计算的结果（与太阳数据逐样本对应）。每次重算整体替换，不做增量更新。
    """
    azimuth: np.ndarray
    altitude: np.ndarray
    insolation: np.ndarray
    visible: np.ndarray
    version: int = 0

    @staticmethod
    def empty(version: int = 0) -> "ReflectionResult":
        z = np.zeros((0, 0))
        return ReflectionResult(z, z, z, np.zeros((0, 0), dtype=bool), version)

    @property
    def day_count(self) -> int:
        return int(self.insolation.shape[0])

    def visibility_channel(self) -> np.ndarray:
        """Legacy numeric channel: NaN where not visible, 0 elsewhere."""
        return np.where(self.visible, 0.0, np.nan)

@dataclass(frozen=True)
class ReflectedSample:
    azimuth: float
    altitude: float
    insolation: float
    visible: bool

@dataclass(frozen=True)
class SunHours:
    fixed_panel: float   # hours of direct sun on the panel, cosine weighted  面板实际日照小时
    sun_facing: float    # hours for a surface always facing the sun  始终朝向太阳时的日照小时

def reflect_samples(az, alt, normal, back_face_limit: float = EngineParams().back_face_limit):
    """
    Reflect sun samples off a panel with the given unit normal.

    Returns (reflected_az, reflected_alt, insolation, visible), broadcast
    over the shape of az/alt. A sample is not visible (insolation 0) when
    the sun strikes the back of the panel or is below the horizon; the
    reflected direction is computed either way.

    中文：
    计算太阳光线在面板上的反射方向。太阳照在背面或在地平线以下时不可见（日照为 0），
    但反射方向仍然计算。
    """
    alt = np.asarray(alt, float)
    sun_out = to_direction(az, alt)  # panel -> sun
    incidence = np.asarray(angle(normal, sun_out))
    visible = ~((incidence > back_face_limit) | (alt < 0))
    insolation = np.where(visible, np.clip(np.cos(incidence), 0.0, 1.0), 0.0)
    # incoming ray travels sun -> panel
    reflected = reflect(normal, conjugate(sun_out))
    refl_az, refl_alt = to_az_alt(reflected)
    return refl_az, refl_alt, insolation, visible

def reflect_sample(az: float, alt: float, normal) -> ReflectedSample:
    refl_az, refl_alt, insolation, visible = reflect_samples(az, alt, normal)
    return ReflectedSample(float(refl_az), float(refl_alt), float(insolation), bool(visible))

def compute_reflections(
    sun_data: SunPositionSeries | None,
    reflector: Reflector,
    version: int = 0,
    params: EngineParams = EngineParams(),
) -> ReflectionResult:
    """
    Recompute reflections, insolation and visibility for every day and time.
    Refreshes the reflector axes first. Without sun data the result is empty.
    """
    normal = reflector.refresh_axes()
    if sun_data is None:
        return ReflectionResult.empty(version)

    refl_az, refl_alt, insolation, visible = reflect_samples(
        sun_data.azimuth, sun_data.altitude, normal, params.back_face_limit
    )
    logger.debug(
        "recomputed reflections v%d: %d days x %d samples, %d visible",
        version, sun_data.day_count, sun_data.samples_per_day, int(np.count_nonzero(visible)),
    )
    return ReflectionResult(
        azimuth=np.asarray(refl_az),
        altitude=np.asarray(refl_alt),
        insolation=np.asarray(insolation),
        visible=np.asarray(visible, dtype=bool),
        version=version,
    )

def sun_visibility(az, alt, skyline: Skyline | None = None):
    """True where the sun is above the horizon and not behind the skyline."""
    alt = np.asarray(alt, float)
    vis = alt >= 0
    if skyline is not None and skyline.enabled:
        vis = vis & ~np.asarray(skyline.is_blocked(az, alt))
    return bool(vis) if vis.ndim == 0 else vis

def reflection_visibility(az, alt, visible, skyline: Skyline | None = None):
    """A reflected ray is seen only if its sun ray is seen and the panel faces the sun."""
    vis = np.asarray(sun_visibility(az, alt, skyline)) & np.asarray(visible, dtype=bool)
    return bool(vis) if vis.ndim == 0 else vis

def total_sun_hours(
    day: int,
    sun_data: SunPositionSeries | None,
    result: ReflectionResult | None,
    skyline: Skyline | None = None,
    time_step_hours: float | None = None,
) -> SunHours:
    """
    Sun hours on one day.

      fixed_panel = sum(insolation * transmission) * dt
      sun_facing  = sum(transmission) * dt

    transmission is 0 where the skyline (or, with the skyline off, the
    horizon) is above the sun and 1 otherwise.

    中文：
    单日日照小时数：fixed_panel 为面板按余弦加权的日照小时，sun_facing 为始终朝向太阳时的理论最大值。
    透过率在天际线（禁用时为地平线）高于太阳时为 0，否则为 1。
    """
    if sun_data is None or result is None or result.day_count == 0:
        return SunHours(0.0, 0.0)
    skyline = Skyline() if skyline is None else skyline
    dt = sun_data.time_step_hours if time_step_hours is None else time_step_hours

    az, alt = sun_data.day(day)
    transmission = np.asarray(skyline.transmission(az, alt))
    hrs = float(np.sum(result.insolation[day] * transmission) * dt)
    max_hrs = float(np.sum(transmission) * dt)
    return SunHours(fixed_panel=hrs, sun_facing=max_hrs)

def daily_sun_hours(
    sun_data: SunPositionSeries | None,
    result: ReflectionResult | None,
    skyline: Skyline | None = None,
) -> pd.DataFrame:
    """One row per day: day number, day of year, date string and both sun-hour totals."""
    cols = ["day", "day_of_year", "date", "fixed_panel_hours", "sun_facing_hours"]
    if sun_data is None or result is None or result.day_count == 0:
        return pd.DataFrame(columns=cols)
    rows = []
    for d in range(sun_data.day_count):
        hrs = total_sun_hours(d, sun_data, result, skyline)
        doy = sun_data.start_day + d
        rows.append((d, doy, format_date(doy), hrs.fixed_panel, hrs.sun_facing))
    return pd.DataFrame(rows, columns=cols)
