# reflector_model/sun_data.py  太阳位置时间序列（按天 × 时刻的方位角/高度角）及文本读取
import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path
import numpy as np
import pandas as pd

from .config import EngineParams, SolarModelParams
from .solar_geometry import solar_az_alt, sun_hours_grid

logger = logging.getLogger(__name__)

_HEADER = re.compile(
    r"^startday_(?P<start_day>-?\d+)"
    r"_lat_(?P<lat>[-+0-9.eE]+)"
    r"_long_(?P<long>[-+0-9.eE]+)"
    r"_timezone_(?P<tz>[-+0-9.eE]+)\s*$"
)

@dataclass(frozen=True)
class SunPositionSeries:
    """
    Sun (azimuth, altitude) samples for consecutive days, all days sharing
    the same decimal-hour grid. Angles in radians, arrays shaped (days, samples).

    中文：连续多天的太阳方位角/高度角样本（弧度），各天共享同一组时刻，数组形状为 (天数, 样本数)。
    """
    hours: np.ndarray      # (S,) decimal hours  各样本时刻（小时）
    azimuth: np.ndarray    # (D, S)
    altitude: np.ndarray   # (D, S)
    start_day: int = 1     # day of year of day number 0  第 0 天对应的年内日序
    latitude: float = 0.0
    longitude: float = 0.0
    time_zone: int = 0
    time_step_hours: float = EngineParams().time_step_hours

    @property
    def day_count(self) -> int:
        return int(self.azimuth.shape[0])

    @property
    def samples_per_day(self) -> int:
        return int(self.azimuth.shape[1])

    def day(self, day_number: int) -> tuple[np.ndarray, np.ndarray]:
        return self.azimuth[day_number], self.altitude[day_number]

    def to_frame(self) -> pd.DataFrame:
        """Long table: one row per (day, sample), angles in degrees."""
        D, S = self.azimuth.shape
        return pd.DataFrame({
            "day": np.repeat(np.arange(D), S),
            "day_of_year": np.repeat(np.arange(D) + self.start_day, S),
            "hour": np.tile(self.hours, D),
            "azimuth_deg": np.rad2deg(self.azimuth).ravel(),
            "altitude_deg": np.rad2deg(self.altitude).ravel(),
        })

    @staticmethod
    def from_degrees(
        hours,
        azimuth_deg,
        altitude_deg,
        start_day: int = 1,
        latitude: float = 0.0,
        longitude: float = 0.0,
        time_zone: int = 0,
    ) -> "SunPositionSeries":
        hours = np.asarray(hours, float)
        az = np.deg2rad(np.atleast_2d(np.asarray(azimuth_deg, float)))
        alt = np.deg2rad(np.atleast_2d(np.asarray(altitude_deg, float)))
        if az.shape != alt.shape or az.shape[1] != hours.size:
            raise ValueError(f"Inconsistent sun data shapes: hours {hours.shape}, az {az.shape}, alt {alt.shape}")
        return SunPositionSeries(
            hours=hours,
            azimuth=az,
            altitude=alt,
            start_day=int(start_day),
            latitude=float(latitude),
            longitude=float(longitude),
            time_zone=int(time_zone),
            time_step_hours=_infer_step(hours),
        )

    @staticmethod
    def from_solar_model(p: SolarModelParams = SolarModelParams()) -> "SunPositionSeries":
        """
        Generate sun positions with the simple declination/hour-angle model.
        Hours are local solar time.

        中文：用简化的赤纬/时角模型生成太阳位置（地方太阳时）。
        """
        hours = sun_hours_grid(p.start_hour, p.end_hour, p.step_hours)
        days = p.start_day + np.arange(p.day_count)
        D, H = np.meshgrid(days, hours, indexing="ij")
        az, alt = solar_az_alt(p.lat_deg, D, H)
        return SunPositionSeries(
            hours=hours,
            azimuth=az,
            altitude=alt,
            start_day=p.start_day,
            latitude=p.lat_deg,
            time_step_hours=float(p.step_hours),
        )

def _infer_step(hours: np.ndarray) -> float:
    # infer dt hours from the first interval  根据前两个时刻推断时间步长
    if hours.size >= 2:
        return float(round(hours[1] - hours[0], 6))
    return EngineParams().time_step_hours

def parse_sun_text(text: str) -> SunPositionSeries:
    """
    Parse tab-separated sun angle text:

      startday_196_lat_38.9_long_-120.0_timezone_-8
      t       x0      y0      x1      y1 ...
      4.0     58.1    -3.2    58.5    -3.4 ...

    First column is decimal hour, then (azimuth, altitude) pairs in degrees,
    one pair per day.

    中文：
    解析制表符分隔的太阳角度文本：首行为起始日/经纬度/时区，
    之后第一列为小时，其余每两列为一天的（方位角, 高度角），单位度。
    """
    if text is None or not text.strip():
        raise ValueError("Empty sun data text")
    first, _, body = text.lstrip().partition("\n")
    m = _HEADER.match(first.strip())
    if m is None:
        raise ValueError(f"Unrecognized sun data header: {first.strip()!r}")

    df = pd.read_csv(io.StringIO(body), sep="\t")
    df = df.dropna(how="all")
    if df.shape[1] < 3 or (df.shape[1] - 1) % 2 != 0:
        raise ValueError(f"Expected hour column plus (azimuth, altitude) pairs, got {df.shape[1]} columns")
    if df.isna().any().any():
        raise ValueError("Sun data has missing values")

    values = df.to_numpy(float)
    hours = values[:, 0]
    azimuth_deg = values[:, 1::2].T
    altitude_deg = values[:, 2::2].T
    series = SunPositionSeries.from_degrees(
        hours,
        azimuth_deg,
        altitude_deg,
        start_day=int(m["start_day"]),
        latitude=float(m["lat"]),
        longitude=float(m["long"]),
        time_zone=int(np.floor(float(m["tz"]) + 0.5)),
    )
    logger.info("parsed sun data: %d days x %d samples from day %d",
                series.day_count, series.samples_per_day, series.start_day)
    return series

def load_sun_text(path) -> SunPositionSeries:
    return parse_sun_text(Path(path).read_text(encoding="utf-8"))
