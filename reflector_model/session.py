# reflector_model/session.py  会话状态：太阳数据 + 面板朝向 + 天际线 + 当前时刻
import logging
import math
from dataclasses import dataclass, field
import pandas as pd

from .moment import SunMoment
from .reflection import (
    ReflectionResult,
    SunHours,
    compute_reflections,
    daily_sun_hours,
    reflection_visibility,
    sun_visibility,
    total_sun_hours,
)
from .reflector import Reflector
from .skyline import Skyline, round_half_up
from .sun_data import SunPositionSeries, parse_sun_text

logger = logging.getLogger(__name__)

@dataclass
class RayData:
    sun_az: float
    sun_alt: float
    reflected_az: float
    reflected_alt: float

@dataclass
class ReflectorSession:
    """
    One reflector tab: owns the panel orientation, the skyline and the
    displayed moment, holds the sun data by reference and keeps the latest
    reflection result. update_reflections() swaps in a complete new result,
    so readers never see a half-updated pair.

    中文：单个会话（标签页）。持有面板朝向、天际线与当前时刻，引用太阳数据，保存最新反射结果。
    update_reflections() 整体替换结果。
    """
    reflector: Reflector = field(default_factory=Reflector)
    skyline: Skyline = field(default_factory=Skyline)
    moment: SunMoment = field(default_factory=SunMoment)
    sun_data: SunPositionSeries | None = None
    result: ReflectionResult = field(default_factory=ReflectionResult.empty)

    @property
    def has_data(self) -> bool:
        return self.sun_data is not None and self.result.day_count > 0

    def load_sun_data(self, sun_data: SunPositionSeries) -> None:
        """Attach new sun data, reset the moment to day 0 / sample 0 and recompute."""
        self.sun_data = sun_data
        self.moment = SunMoment(
            start_day=sun_data.start_day,
            hours=sun_data.hours,
            day_count=sun_data.day_count,
        )
        self.update_reflections()

    def load_sun_data_from_text(self, text: str) -> None:
        self.load_sun_data(parse_sun_text(text))

    def update_reflections(self) -> ReflectionResult:
        self.result = compute_reflections(self.sun_data, self.reflector, version=self.result.version + 1)
        logger.debug("session result now v%d", self.result.version)
        return self.result

    def _index(self, time_index):
        # explicit indices are clamped like SunMoment.set_time_index
        if time_index is None:
            return self.moment.time_index
        return int(min(max(time_index, 0), self.sun_data.samples_per_day - 1))

    def ray_data(self, time_index: int | None = None) -> RayData | None:
        """Sun and reflected (az, alt) at a time index of the current day."""
        if not self.has_data:
            return None
        k = self._index(time_index)
        d = self.moment.day_number
        return RayData(
            sun_az=float(self.sun_data.azimuth[d, k]),
            sun_alt=float(self.sun_data.altitude[d, k]),
            reflected_az=float(self.result.azimuth[d, k]),
            reflected_alt=float(self.result.altitude[d, k]),
        )

    def ray_visibility(self, time_index: int | None = None) -> tuple[bool, bool] | None:
        """(sun ray visible, reflected ray visible) with the skyline applied."""
        if not self.has_data:
            return None
        k = self._index(time_index)
        d = self.moment.day_number
        az = self.sun_data.azimuth[d, k]
        alt = self.sun_data.altitude[d, k]
        sun_vis = sun_visibility(az, alt, self.skyline)
        refl_vis = reflection_visibility(az, alt, self.result.visible[d, k], self.skyline)
        return bool(sun_vis), bool(refl_vis)

    def insolation(self, time_index: int | None = None) -> float:
        if not self.has_data:
            return 0.0
        return float(self.result.insolation[self.moment.day_number, self._index(time_index)])

    def total_sun_hours(self) -> SunHours:
        return total_sun_hours(self.moment.day_number, self.sun_data, self.result, self.skyline)

    def daily_sun_hours(self) -> pd.DataFrame:
        return daily_sun_hours(self.sun_data, self.result, self.skyline)

    def normal_az_alt(self) -> tuple[float, float]:
        return self.reflector.normal_az_alt()

def az_alt_string(az: float, alt: float) -> str:
    """'azimuth 180°, altitude 45°'; azimuth is reported undefined at the zenith."""
    alti = round_half_up(math.degrees(alt))
    if alti == 90:
        return f"azimuth undefined, altitude {alti}°"
    azim = round_half_up(math.degrees(az))
    return f"azimuth {azim}°, altitude {alti}°"
