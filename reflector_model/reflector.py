# reflector_model/reflector.py  可转动/倾斜/俯仰的反射面板（法线由三次旋转确定）
from dataclasses import dataclass, field
import numpy as np

from .quaternion import Z_UP, rotate, to_az_alt, to_direction

@dataclass
class Reflector:
    """
    Planar reflecting surface that can be turned, tilted and dipped.

      tilt_axis_azimuth: compass azimuth of the horizontal tilt axis (rad)
      tilt: rotation about the tilt axis (rad)
      dip: rotation about the dip axis, which stays perpendicular to the
           already-tilted tilt axis (rad)

    Setters only store the angle. The axes and the outward normal are
    rebuilt by refresh_axes(), which the reflection pass calls before it
    runs; until then `normal` reflects the last refresh.

    中文：
    可转动、倾斜、俯仰的平面反射面板。
    设置角度只保存数值；轴与外法线仅在 refresh_axes() 时重新计算。
    """
    tilt_axis_azimuth: float = 0.0
    tilt: float = 0.0
    dip: float = 0.0
    tilt_axis: np.ndarray = field(default_factory=lambda: to_direction(0.0, 0.0))
    dip_axis: np.ndarray = field(default_factory=lambda: to_direction(np.pi / 2, 0.0))
    normal: np.ndarray = field(default_factory=lambda: Z_UP.copy())

    def set_tilt_axis(self, theta: float) -> None:
        self.tilt_axis_azimuth = float(theta)

    def set_tilt(self, theta: float) -> None:
        self.tilt = float(theta)

    def set_dip(self, theta: float) -> None:
        self.dip = float(theta)

    def refresh_axes(self) -> np.ndarray:
        """Rebuild tilt axis, dip axis and normal from the three angles; returns the normal."""
        self.tilt_axis = to_direction(self.tilt_axis_azimuth, 0.0)
        # dip axis: a quarter turn clockwise from the tilt axis, then tilted with the panel
        dip_axis = rotate(self.tilt_axis, Z_UP, -np.pi / 2)
        self.dip_axis = rotate(dip_axis, self.tilt_axis, self.tilt)
        self.normal = self.apply_rotations(Z_UP)
        return self.normal

    def apply_rotations(self, q) -> np.ndarray:
        # tilt first, then dip
        q = rotate(q, self.tilt_axis, self.tilt)
        return rotate(q, self.dip_axis, self.dip)

    def normal_az_alt(self) -> tuple[float, float]:
        return to_az_alt(self.normal)
