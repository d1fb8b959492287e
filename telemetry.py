# telemetry.py
import random

BATTERY_DRAIN_PER_TICK = 0.08
SIGNAL_RANGE = (85.0, 100.0)
SATELLITE_RANGE = (8, 14)


class TelemetrySimulator:
    """
    Drifts the drone's sensor readings once per tick.
    Battery drains linearly; signal and satellite count wander inside fixed bands.
    """
    def __init__(self, rng=None, battery_drain=BATTERY_DRAIN_PER_TICK):
        self.rng = rng or random.Random()
        self.battery_drain = battery_drain

    def advance(self, aircraft):
        """Returns a drifted copy of `aircraft`; the input is left untouched."""
        nxt = aircraft.copy()
        nxt.battery = max(0.0, aircraft.battery - self.battery_drain)

        signal = aircraft.signal + (self.rng.random() - 0.5) * 2
        nxt.signal = min(SIGNAL_RANGE[1], max(SIGNAL_RANGE[0], signal))

        sats = aircraft.satellites + self.rng.randint(-1, 1)
        nxt.satellites = max(SATELLITE_RANGE[0], min(SATELLITE_RANGE[1], sats))
        return nxt
