import logging
import threading
import time

from config import SIMULATION_UPDATE_INTERVAL

logger = logging.getLogger(__name__)


class DroneScheduler:
    """
    Calls `tick_func` every `interval` seconds on a daemon thread.
    The loop ends when `tick_func` returns False or stop() is called.
    Ticks are fixed-rate: a slow tick shortens the following wait instead of drifting.
    """
    def __init__(self, tick_func, interval=SIMULATION_UPDATE_INTERVAL):
        self.tick_func = tick_func
        self.interval = interval

        self.running = False
        self.thread = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

    def start(self):
        """Starts the background update thread."""
        with self._lock:
            if self.running:
                return
            self.running = True
            self._stop_event = threading.Event()
            self.thread = threading.Thread(
                target=self._update_loop, args=(self._stop_event,), daemon=True
            )
            self.thread.start()
        logger.debug("[start] tick loop every %.2fs", self.interval)

    def stop(self, wait=True):
        """
        Ends the loop. With wait=False the loop thread is signalled but not joined,
        so callers holding a lock the tick needs can stop it safely.
        """
        with self._lock:
            self.running = False
            self._stop_event.set()
            thread = self.thread
        if wait and thread and thread is not threading.current_thread():
            thread.join()

    def _update_loop(self, stop_event):
        next_tick = time.monotonic() + self.interval
        while not stop_event.wait(max(0.0, next_tick - time.monotonic())):
            next_tick += self.interval
            try:
                keep_going = self.tick_func()
            except Exception:
                logger.exception("[_update_loop] tick failed, stopping loop")
                keep_going = False
            if not keep_going:
                break
        with self._lock:
            if self._stop_event is stop_event:
                self.running = False
