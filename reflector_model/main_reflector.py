# 主程序入口（生成/读取太阳数据 -> 设置面板与天际线 -> 反射与日照小时数）
import math
import pandas as pd

from reflector_model.config import MomentDefaults, SolarModelParams
from reflector_model.session import ReflectorSession, az_alt_string
from reflector_model.skyline import Skyline
from reflector_model.sun_data import SunPositionSeries

def load_skyline_csv(path: str, enabled: bool = True) -> Skyline:
    """
    CSV required columns:
      azimuth_deg, altitude_deg
    Each row is written through Skyline.set_altitude, so out-of-range
    altitudes are clamped and azimuths wrap into integer-degree buckets.

    中文：
    CSV 必需列：azimuth_deg（方位角，度）、altitude_deg（遮挡高度角，度）。
    每行经 Skyline.set_altitude 写入，超范围值会被截断。
    """
    df = pd.read_csv(path)
    missing = {"azimuth_deg", "altitude_deg"} - set(df.columns)
    if missing:
        raise ValueError(f"Skyline CSV missing columns: {sorted(missing)}")
    skyline = Skyline(enabled=enabled)
    for az, alt in df[["azimuth_deg", "altitude_deg"]].to_numpy(float):
        # editor range is [-180, 180)  编辑器方位角范围
        az = (az + 180.0) % 360.0 - 180.0
        skyline.set_altitude(math.radians(az), math.radians(alt))
    return skyline

def ridge_skyline(center_az_deg: float, half_width_deg: float, height_deg: float) -> Skyline:
    """
    A single mountain ridge painted across [center-half, center+half] (compass degrees).
    Editor azimuths run over [-180, 180), so a ridge crossing due south is painted
    as two strokes meeting at the seam.

    中文：在 [中心-半宽, 中心+半宽] 上绘制一道山脊；跨越正南（编辑器 ±180 接缝）时分两段绘制。
    """
    skyline = Skyline(enabled=True)
    alt = math.radians(height_deg)
    a0 = (center_az_deg - half_width_deg + 180.0) % 360.0 - 180.0
    a1 = (center_az_deg + half_width_deg + 180.0) % 360.0 - 180.0
    strokes = [(a0, a1)] if a0 <= a1 else [(a0, 180.0), (-180.0, a1)]
    for lo, hi in strokes:
        skyline.paint_range(None, math.radians(lo), alt)
        skyline.paint_range(math.radians(lo), math.radians(hi), alt)
    return skyline

def main():
    # -------------------------
    # User inputs (edit here)  # 中文：用户输入（在此处修改）
    # -------------------------
    solar = SolarModelParams(lat_deg=38.9, start_day=193, day_count=7)
    tilt_axis_deg, tilt_deg, dip_deg = 90.0, 30.0, 0.0   # east-west axis, panel faces south at 30 deg  东西向转轴，面板朝南倾斜 30 度

    session = ReflectorSession()
    session.reflector.set_tilt_axis(math.radians(tilt_axis_deg))
    session.reflector.set_tilt(math.radians(tilt_deg))
    session.reflector.set_dip(math.radians(dip_deg))
    session.load_sun_data(SunPositionSeries.from_solar_model(solar))

    defaults = MomentDefaults()
    session.moment.set_day_of_year(defaults.default_day_of_year)
    session.moment.set_time(defaults.default_hour)

    az, alt = session.normal_az_alt()
    print("=== Panel ===")
    print("Normal:", az_alt_string(az, alt))

    ray = session.ray_data()
    print("\n=== Midday ray ===", session.moment.date_string(), session.moment.time_string())
    print("Sun:      ", az_alt_string(ray.sun_az, ray.sun_alt))
    print("Reflected:", az_alt_string(ray.reflected_az, ray.reflected_alt))
    print("Visible (sun, reflection):", session.ray_visibility(), "| Insolation:", round(session.insolation(), 3))

    # -------------------------
    # Open sky vs. a ridge to the south-east  # 中文：无遮挡与东南方向山脊的对比
    # -------------------------
    open_sky = session.daily_sun_hours()
    session.skyline = ridge_skyline(center_az_deg=120.0, half_width_deg=30.0, height_deg=25.0)
    blocked = session.daily_sun_hours()

    print("\n=== Sun hours (open sky -> ridge) ===")
    for (_, a), (_, b) in zip(open_sky.iterrows(), blocked.iterrows()):
        print(f"{a['date']}: panel {a['fixed_panel_hours']:.1f} -> {b['fixed_panel_hours']:.1f} h, "
              f"sun-facing {a['sun_facing_hours']:.1f} -> {b['sun_facing_hours']:.1f} h")

if __name__ == "__main__":
    main()
