# reflector_model/moment.py  当前显示时刻（天序号 + 时刻索引）及时间/日期字符串
from dataclasses import dataclass, field
import numpy as np
import pandas as pd

from .config import MomentDefaults

_DEFAULTS = MomentDefaults()

@dataclass
class SunMoment:
    """
    Day number and time index of the displayed sample.

      day_number: index into the days of the sun data (0-based)
      time_index: index into the shared decimal-hour grid
      start_day: day of year of day number 0

    All setters clamp into the valid range rather than reject.

    中文：当前显示样本的天序号与时刻索引；所有设置方法均做范围截断而非报错。
    """
    start_day: int = 1
    hours: np.ndarray | None = None
    day_count: int = 1
    time_index: int = 0
    day_number: int = 0
    loaded: bool = field(init=False, default=False)

    def __post_init__(self):
        # no hours means no sun data yet: a single 0.0 sample stands in
        self.loaded = self.hours is not None
        self.hours = np.array([0.0]) if self.hours is None else np.asarray(self.hours, float)
        self.day_count = max(1, int(self.day_count))

    @property
    def is_placeholder(self) -> bool:
        return not self.loaded

    def set_time_index(self, index: int) -> None:
        self.time_index = int(min(max(index, 0), self.hours.size - 1))

    @property
    def time(self) -> float:
        return float(self.hours[self.time_index])

    def set_time(self, t: float) -> None:
        """Select the first sample at or after decimal hour t; unchanged if t is past the last sample."""
        later = np.nonzero(self.hours >= t)[0]
        if later.size:
            self.set_time_index(int(later[0]))

    def set_day_number(self, day_number: int) -> None:
        self.day_number = int(min(max(day_number, 0), self.day_count - 1))

    @property
    def day_of_year(self) -> int:
        return self.day_number + self.start_day

    def set_day_of_year(self, day_of_year: int) -> None:
        if self.is_placeholder:
            return
        self.set_day_number(day_of_year - self.start_day)

    def time_string(self) -> str:
        return format_time(self.time)

    def date_string(self) -> str:
        return format_date(self.day_of_year)

def format_time(time: float) -> str:
    """12-hour clock string for a decimal hour, e.g. 13.5 -> '1:30 pm'."""
    ampm = "pm" if time + 0.01 >= 12 else "am"
    if time + 0.11 >= 13:
        time = time - 12
    hour = int(time)
    minutes = int(60 * (time % 1.0) + 0.1)
    return f"{hour}:{minutes:02d} {ampm}"

def format_date(day_of_year: int) -> str:
    """
    Month/day string for a day of year in a non-leap year, e.g. 196 -> 'Jul 15'.
    Days outside 1..365 are clamped so the date never leaves the reference year.
    """
    day_of_year = min(max(int(day_of_year), 1), 365)
    ts = pd.Timestamp(year=_DEFAULTS.reference_year, month=1, day=1) + pd.Timedelta(days=day_of_year - 1)
    return ts.strftime("%b %d")
