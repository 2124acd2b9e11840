"""
Export per-day sun hours (and optionally every reflected ray) to CSV.

Run from project root:
  python export_sun_hours.py --sun-data "south_tahoe.txt" --tilt-axis 90 --tilt 30 --out "sun_hours.csv"
or, without a sun data file (simple solar model):
  python -m export_sun_hours --lat 38.9 --start-day 172 --days 30 --out "sun_hours.csv"

Input sun data text must start with a header line
  startday_<d>_lat_<lat>_long_<long>_timezone_<tz>
followed by tab-separated columns: decimal hour, then (azimuth, altitude)
degree pairs for each day.

Optional skyline CSV must include columns:
  azimuth_deg, altitude_deg

Notes:
  - Sun hours count direct sun only; each sample stands for one time step.
  - The "sun-facing" column is the maximum for a surface always facing the sun.
"""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import asdict

import numpy as np
import pandas as pd

from reflector_model.config import SolarModelParams
from reflector_model.main_reflector import load_skyline_csv
from reflector_model.session import ReflectorSession
from reflector_model.sun_data import SunPositionSeries, load_sun_text


def compute_ray_table(session: ReflectorSession) -> pd.DataFrame:
    """Long table of every sun sample with its reflection, insolation and visibility."""
    sun = session.sun_data
    res = session.result
    out = sun.to_frame()
    out["reflected_az_deg"] = np.rad2deg(res.azimuth).ravel()
    out["reflected_alt_deg"] = np.rad2deg(res.altitude).ravel()
    out["insolation"] = res.insolation.ravel()
    out["panel_visible"] = res.visible.ravel().astype(int)
    out["sun_blocked"] = np.asarray(session.skyline.is_blocked(sun.azimuth, sun.altitude)).ravel().astype(int)

    # CSV readability: keep 2 decimals for angles, 4 for insolation.
    return out.round(
        {
            "azimuth_deg": 2,
            "altitude_deg": 2,
            "reflected_az_deg": 2,
            "reflected_alt_deg": 2,
            "insolation": 4,
        }
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Export daily sun hours on a reflector panel to CSV.")
    parser.add_argument("--sun-data", type=str, default=None, help="Sun angle text file (omit to use the solar model).")
    parser.add_argument("--out", type=str, default="sun_hours.csv", help="Output CSV path.")
    parser.add_argument("--rays-out", type=str, default=None, help="Optional per-sample ray CSV path.")

    # Solar model defaults follow reflector_model/config.py
    defaults = SolarModelParams()
    parser.add_argument("--lat", type=float, default=defaults.lat_deg, help="Latitude (deg), solar model only.")
    parser.add_argument("--start-day", type=int, default=defaults.start_day, help="First day of year, solar model only.")
    parser.add_argument("--days", type=int, default=defaults.day_count, help="Number of days, solar model only.")
    parser.add_argument("--step", type=float, default=defaults.step_hours, help="Time step (h), solar model only.")

    parser.add_argument("--tilt-axis", type=float, default=0.0, help="Tilt axis azimuth (deg).")
    parser.add_argument("--tilt", type=float, default=0.0, help="Tilt angle (deg).")
    parser.add_argument("--dip", type=float, default=0.0, help="Dip angle (deg).")
    parser.add_argument("--skyline", type=str, default=None, help="Skyline CSV (azimuth_deg, altitude_deg).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.sun_data is not None:
        sun_data = load_sun_text(args.sun_data)
        solar = None
    else:
        solar = SolarModelParams(
            lat_deg=float(args.lat),
            start_day=int(args.start_day),
            day_count=int(args.days),
            step_hours=float(args.step),
        )
        sun_data = SunPositionSeries.from_solar_model(solar)

    session = ReflectorSession()
    if args.skyline is not None:
        session.skyline = load_skyline_csv(args.skyline)
    session.reflector.set_tilt_axis(math.radians(args.tilt_axis))
    session.reflector.set_tilt(math.radians(args.tilt))
    session.reflector.set_dip(math.radians(args.dip))
    session.load_sun_data(sun_data)

    df = session.daily_sun_hours().round({"fixed_panel_hours": 2, "sun_facing_hours": 2})
    df.to_csv(args.out, index=False, encoding="utf-8-sig")
    if args.rays_out is not None:
        compute_ray_table(session).to_csv(args.rays_out, index=False, encoding="utf-8-sig")

    meta = {
        "sun_data": args.sun_data,
        "solar_model": None if solar is None else asdict(solar),
        "out": args.out,
        "rays_out": args.rays_out,
        "days": sun_data.day_count,
        "samples_per_day": sun_data.samples_per_day,
        "dt_hours": float(sun_data.time_step_hours),
        "tilt_axis_deg": float(args.tilt_axis),
        "tilt_deg": float(args.tilt),
        "dip_deg": float(args.dip),
        "skyline": args.skyline,
        "mean_panel_hours": float(df["fixed_panel_hours"].mean()),
    }
    print(f"[OK] wrote: {args.out}")
    print("[Meta]", meta)


if __name__ == "__main__":
    main()
