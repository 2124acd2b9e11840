# reflector_model/solar_geometry.py  简化太阳位置模型（赤纬 + 时角），替代 NOAA 表格数据
import numpy as np

def declination_deg(n):
    # 赤纬角 δ = 23.45 * sin(360*(284+n)/365)
    return 23.45 * np.sin(np.deg2rad(360.0 * (284.0 + np.asarray(n, float)) / 365.0))

def hour_angle_deg(local_solar_hour):
    # 时角 ω = 15*(t-12)
    return 15.0 * (np.asarray(local_solar_hour, float) - 12.0)

def solar_az_alt(lat_deg: float, day_of_year, local_solar_hour):
    """
    Simple solar position (no equation of time, no refraction), vectorised.
    Returns (azimuth, altitude) in radians:
      azimuth: 0=N, pi/2=E, pi=S, 3pi/2=W
    Negative altitude means the sun is below the horizon.

    简化太阳位置计算（不考虑均时差与大气折射），支持数组输入。
    返回（方位角, 高度角），单位弧度。方位角自北顺时针。
    """
    lat = np.deg2rad(lat_deg)
    dec = np.deg2rad(declination_deg(day_of_year))
    ha = np.deg2rad(hour_angle_deg(local_solar_hour))

    sin_alt = np.sin(lat) * np.sin(dec) + np.cos(lat) * np.cos(dec) * np.cos(ha)
    alt = np.arcsin(np.clip(sin_alt, -1.0, 1.0))

    # 用余弦公式求方位角，再依据时角确定象限
    cos_az = (np.sin(alt) * np.sin(lat) - np.sin(dec)) / (np.cos(alt) * np.cos(lat) + 1e-12)
    az = np.arccos(np.clip(cos_az, -1.0, 1.0))  # 0..π, measured from south

    # morning sun is east of south, afternoon west  上午在南偏东，下午在南偏西
    az = np.where(ha > 0, np.pi + az, np.pi - az)
    return np.mod(az, 2 * np.pi), alt

def sun_hours_grid(start_hour: float, end_hour: float, step_hours: float) -> np.ndarray:
    """Decimal hours from start to end inclusive, rounded to 1/100 h like the NOAA sheet rows."""
    count = int(np.floor((end_hour - start_hour) / step_hours + 1e-9)) + 1
    return np.round(start_hour + step_hours * np.arange(count), 2)
