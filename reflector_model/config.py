# reflector_model/config.py  参数配置（引擎/天际线/时间显示/太阳位置模型）
import math
from dataclasses import dataclass

@dataclass(frozen=True)
class EngineParams:
    # Each insolation sample represents one time step of the input series  每个样本代表的时长（小时）
    time_step_hours: float = 0.1
    # Sun hitting the back of the panel is not visible  超过该入射角（弧度）视为照在背面
    back_face_limit: float = math.pi / 2

@dataclass(frozen=True)
class SkylineParams:
    bucket_count: int = 360          # one bucket per integer degree  每度一个格
    min_azimuth_deg: float = -180.0  # drag editor x-range  编辑器方位角下限
    max_azimuth_deg: float = 179.1   # drag editor x-range  编辑器方位角上限
    paint_gap_deg: float = 1.0       # gaps wider than this are filled while painting  拖动时超过该间隔则逐度填充

@dataclass(frozen=True)
class MomentDefaults:
    default_day_of_year: int = 196   # midsummer, July 15  仲夏 7 月 15 日
    default_hour: float = 12.0       # midday  正午
    reference_year: int = 2023       # non-leap year used for date strings  用于日期显示的非闰年

@dataclass(frozen=True)
class SolarModelParams:
    # Defaults roughly match the bundled South Lake Tahoe data  默认值近似 South Lake Tahoe 数据
    lat_deg: float = 38.9
    start_day: int = 196
    day_count: int = 1
    start_hour: float = 4.0
    end_hour: float = 20.0
    step_hours: float = 0.1
