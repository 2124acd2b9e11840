# reflector_model/quaternion.py  四元数旋转/反射与方位角-高度角换算
"""
Quaternion helpers on numpy arrays.

A quaternion is an array whose last axis holds (w, x, y, z) with
  x = East, y = North, z = Up  (ENU, same convention as the solar model).
Pure-vector quaternions (w = 0) represent directions. Every function
broadcasts over leading axes, so a whole day (or the whole data set) of
sun positions can be pushed through at once.

四元数以 numpy 数组表示，最后一维为 (w, x, y, z)，x=东、y=北、z=上。
w=0 的纯向量四元数表示方向。所有函数都支持前导维度广播。
"""
import numpy as np

X_EAST = np.array([0.0, 1.0, 0.0, 0.0])
Y_NORTH = np.array([0.0, 0.0, 1.0, 0.0])
Z_UP = np.array([0.0, 0.0, 0.0, 1.0])

_ZENITH_EPS = 1e-12

def quat(w: float, x: float, y: float, z: float) -> np.ndarray:
    return np.array([w, x, y, z], float)

def _out(x):
    # 0-d results come back as plain floats
    x = np.asarray(x)
    return float(x) if x.ndim == 0 else x

def multiply(p, q) -> np.ndarray:
    """
    Quaternion product p*q.

    The vector part uses -p x q, so the sandwich conj(R)*v*R used by
    rotate() turns v right-handedly about the rotor axis.

    中文：四元数乘积。向量部分取 -p×q，使 rotate() 中 conj(R)*v*R 按右手定则旋转。
    """
    p = np.asarray(p, float)
    q = np.asarray(q, float)
    pw, pv = p[..., 0], p[..., 1:]
    qw, qv = q[..., 0], q[..., 1:]
    w = pw * qw - np.sum(pv * qv, axis=-1)
    v = pw[..., None] * qv + qw[..., None] * pv - np.cross(pv, qv)
    return np.concatenate([w[..., None], v], axis=-1)

def conjugate(q) -> np.ndarray:
    q = np.asarray(q, float)
    return q * np.array([1.0, -1.0, -1.0, -1.0])

def norm(q):
    return _out(np.linalg.norm(np.asarray(q, float), axis=-1))

def angle(p, q):
    """Angle (radians) between two quaternions viewed as 4-vectors."""
    p = np.asarray(p, float)
    q = np.asarray(q, float)
    dot = np.sum(p * q, axis=-1)
    denom = np.linalg.norm(p, axis=-1) * np.linalg.norm(q, axis=-1)
    return _out(np.arccos(np.clip(dot / denom, -1.0, 1.0)))

def rotate(v, axis, theta) -> np.ndarray:
    """
    Rotate vector quaternion v about a unit axis by theta (radians).

    Rotor R = (cos(theta/2), axis*sin(theta/2)); result = conj(R) * v * R.
    A positive theta about Up turns East toward North; about Down it turns
    North toward East, i.e. increases compass azimuth.

    中文：绕单位轴 axis 旋转 theta（弧度）。绕“下”轴正向旋转会使方位角增大（顺时针）。
    """
    axis = np.asarray(axis, float)
    half = np.asarray(theta, float) / 2.0
    vec = axis[..., 1:] * np.sin(half)[..., None]
    w = np.broadcast_to(np.cos(half), vec.shape[:-1])
    rotor = np.concatenate([w[..., None], vec], axis=-1)
    return multiply(multiply(conjugate(rotor), v), rotor)

def reflect(normal, incoming) -> np.ndarray:
    """
    Mirror a pure-vector quaternion in the plane with the given unit normal:
    result = normal * incoming * normal (the normal is not conjugated).
    """
    return multiply(multiply(normal, incoming), normal)

def to_direction(az, alt) -> np.ndarray:
    """
    Unit vector quaternion pointing at (azimuth, altitude) in radians.
    North at the horizon is rotated by az about Down, then by alt about the
    az-rotated East axis.

    中文：返回指向 (方位角, 高度角) 的单位纯四元数。先绕“下”轴转 az，再绕转动后的东轴转 alt。
    """
    down = conjugate(Z_UP)
    q = rotate(Y_NORTH, down, az)
    alt_axis = rotate(X_EAST, down, az)
    return rotate(q, alt_axis, alt)

def to_az_alt(q):
    """
    Azimuth (clockwise from North, [0, 2pi)) and altitude of a vector quaternion.
    Straight up or down has no azimuth; 0 is returned there.

    中文：由纯四元数求方位角（自北顺时针，[0, 2π)）与高度角。天顶/天底方位角无定义，返回 0。
    """
    q = np.asarray(q, float)
    east, north = q[..., 1], q[..., 2]
    alt = np.pi / 2 - np.asarray(angle(Z_UP, q))
    az = np.pi / 2 - np.arctan2(north, east)
    az = np.where(az < 0, az + 2 * np.pi, az)
    az = np.where(az >= 2 * np.pi, az - 2 * np.pi, az)
    az = np.where(np.hypot(east, north) < _ZENITH_EPS, 0.0, az)
    return _out(az), _out(alt)
