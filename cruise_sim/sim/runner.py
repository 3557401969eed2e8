"""
Headless run of the cruise control simulation.

    python -m cruise_sim.sim.runner --duration 60 --cruise-speed 100
"""
import argparse
import logging
import time

from cruise_sim.config import get_disturbance_profile, get_vehicle_profile, load_vehicle_profile
from cruise_sim.sim.simulation import build_simulation
from cruise_sim.utilities.report_generator import ReportGenerator

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Cruise control vehicle simulation")
    parser.add_argument('--duration', type=float, default=60.0, help="simulated seconds")
    parser.add_argument('--cruise-speed', type=float, default=100.0, help="cruise set speed (km/h)")
    parser.add_argument('--profile', default='default', help="named vehicle profile or JSON file")
    parser.add_argument('--disturbances', default='default', help="named disturbance profile")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--realtime', action='store_true', help="tick on wall-clock threads")
    parser.add_argument('--report', default=None, metavar='DIR', help="write an HTML report to DIR")
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


def _vehicle_profile(name):
    if name.endswith('.json'):
        return load_vehicle_profile(name)
    return get_vehicle_profile(name)


def _print_display(console):
    d = console.display()
    print(f"{d['speed']:>12} | {d['distance']:>8} | throttle {d['throttle']:>6} | "
          f"brake {d['brake']:>6} | grade {d['gradient']:>5} | wind {d['wind']:>11} | "
          f"cruise {d['cruise']} @ {d['cruise_speed']}")


def run(args):
    sim = build_simulation(vehicle_profile=_vehicle_profile(args.profile),
                           disturbance_profile=get_disturbance_profile(args.disturbances),
                           seed=args.seed)
    recorder = sim.readouts.subscribe('Recorder') if args.report else None
    console = sim.console

    console.turn_on_ignition()
    console.engage_cruise()
    console.set_cruise_speed(args.cruise_speed)

    ticks = int(round(args.duration / sim.engine.dt))
    ticks_per_print = int(round(1.0 / sim.engine.dt))
    readouts = []

    if args.realtime:
        sim.engine.start()
        try:
            # Dashboard refreshes at twice the tick rate
            deadline = time.monotonic() + args.duration
            last_print = time.monotonic()
            while time.monotonic() < deadline:
                console.refresh()
                if recorder:
                    readouts.extend(recorder.drain())
                if time.monotonic() - last_print >= 1.0:
                    _print_display(console)
                    last_print = time.monotonic()
                time.sleep(sim.engine.dt / 2)
        finally:
            sim.engine.stop()
    else:
        for tick in range(ticks):
            sim.engine.step()
            console.refresh()
            if recorder:
                readouts.extend(recorder.drain())
            if tick % ticks_per_print == 0:
                _print_display(console)

    if recorder:
        readouts.extend(recorder.drain())
        ReportGenerator(args.report).generate("Headless_Run", readouts, every=ticks_per_print)

    return console.readout


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    final = run(args)
    logger.info("Finished at %.1f km/h after %.3f km", final.speed_kph, final.distance_km)


if __name__ == "__main__":
    main()
