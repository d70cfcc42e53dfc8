#!/usr/bin/env python3
"""
Airborne Satellite Visibility Example using satvis

This example demonstrates:
1. Reading broadcast ephemerides from a RINEX navigation file
2. Generating a synthetic takeoff / cruise / landing trajectory
3. Computing occlusion, signal strength and C/N0 for BeiDou and GPS satellites
4. Summarizing trackable satellites per epoch with pandas
"""

import argparse
import logging
from datetime import datetime, timezone

from satvis import VisibilityEngine, load_config, VisibilityConfig
from satvis.io import generate_trajectory, read_nav
from satvis.logger import setup_logger_from_config
from satvis.visibility import results_to_dataframe


def usable_satellites(store, first, last):
    """Satellites with a complete ephemeris valid over the whole flight"""
    usable = []
    for sid in store.satellite_ids:
        entry = store.select(sid, first)
        if entry.elements is None or entry.validity is None:
            continue
        if entry.validity.contains(first) and entry.validity.contains(last):
            usable.append(sid)
    return usable


def run_flight(nav_file, start_time, flight_phase, duration, interval,
               satellite_ids=None, config=None):
    """
    Compute visibility along one flight phase

    Parameters
    ----------
    nav_file : str
        Path to RINEX navigation file
    start_time : datetime
        First trajectory epoch (UTC), must lie inside the ephemeris validity
    flight_phase : str
        'takeoff', 'cruise' or 'landing'
    duration, interval : float
        Trajectory length and sample spacing (s)
    satellite_ids : list of str, optional
        Satellites to track; defaults to every satellite valid over the flight
    config : VisibilityConfig, optional

    Returns
    -------
    pandas.DataFrame
        One row per (satellite, epoch)
    """
    config = config or VisibilityConfig()
    logger = setup_logger_from_config(config.logging or {'default_level': 'INFO'})

    logger.info(f"Reading navigation file: {nav_file}")
    store = read_nav(nav_file)
    states = generate_trajectory(flight_phase, duration, interval, start_time)
    if satellite_ids is None:
        satellite_ids = usable_satellites(store, states[0].timestamp, states[-1].timestamp)
    logger.info(f"Tracking {len(satellite_ids)} satellites")

    engine = VisibilityEngine(store, config)
    results = engine.compute_series(states, satellite_ids)

    df = results_to_dataframe(results)
    df['trackable'] = [engine.is_trackable(r) for r in results]
    return df


def print_summary(df):
    """Print trackable satellite count per epoch"""
    per_epoch = df.groupby('timestamp')['trackable'].sum()
    print("\nTrackable satellites per epoch")
    print("=" * 40)
    for timestamp, count in per_epoch.items():
        print(f"{timestamp:%H:%M:%S}  {int(count):3d}")

    visible = df[~df['occluded']]
    if len(visible) > 0:
        print(f"\nMean C/N0 of unoccluded satellites: {visible['cn0_dbhz'].mean():.1f} dB-Hz")
        best = visible.loc[visible['signal_strength_dbm'].idxmax()]
        print(f"Strongest signal: {best['satellite_id']} "
              f"{best['signal_strength_dbm']:.1f} dBm at {best['elevation_deg']:.1f} deg")


def main():
    parser = argparse.ArgumentParser(description='Airborne BeiDou/GPS visibility')
    parser.add_argument('nav', help='RINEX navigation file')
    parser.add_argument('--start', default='2025-01-09T12:00:00',
                        help='trajectory start time, ISO format (UTC)')
    parser.add_argument('--phase', default='cruise', choices=['takeoff', 'cruise', 'landing'])
    parser.add_argument('--duration', type=float, default=600.0)
    parser.add_argument('--interval', type=float, default=10.0)
    parser.add_argument('--sats', nargs='*', help='satellite ids, e.g. C23 G05')
    parser.add_argument('--config', help='YAML or JSON configuration file')
    parser.add_argument('--output', help='CSV file for the result table')
    args = parser.parse_args()

    start = datetime.fromisoformat(args.start)
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    config = load_config(args.config) if args.config else None

    df = run_flight(args.nav, start, args.phase, args.duration, args.interval,
                    args.sats, config)
    print_summary(df)

    if args.output:
        df.to_csv(args.output, index=False)
        logging.getLogger('satvis').info(f"Results saved to {args.output}")


if __name__ == '__main__':
    main()
