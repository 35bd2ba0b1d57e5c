# thrustsim/runner.py
import logging
import threading
import time

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Drives a Simulator from a background thread.

    The simulator is only ever ticked from the runner thread, so ticks never
    overlap. Commands may be published from any other thread meanwhile.
    """

    def __init__(self, simulator, realtime_factor=0.0, state_interval=10):
        """
        Initialize the runner

        Args:
            simulator (Simulator): Simulator to drive
            realtime_factor (float): 0 runs as fast as possible, 1.0 paces
                ticks to wall-clock time, 2.0 runs twice as fast, ...
            state_interval (int): Refresh the state cache every N ticks
        """
        self.simulator = simulator
        self.realtime_factor = realtime_factor
        self.state_interval = max(1, int(state_interval))
        self.running = False
        self.thread = None
        self.tick_count = 0
        self.state_cache = {}
        self.last_update_time = 0
        self._state_lock = threading.Lock()

    def start(self):
        """Start the simulation in a background thread"""
        if self.running:
            return False

        self.running = True
        self.thread = threading.Thread(target=self._run_loop, name="thrustsim-runner")
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the simulation and wait for the loop to exit"""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1.0)
            self.thread = None
        return True

    def pause(self):
        self.simulator.pause()

    def resume(self):
        self.simulator.resume()

    def publish_thrust(self, topic, thrust, source=None):
        """Publish a thrust command on ``topic``. Safe from any thread."""
        return self.simulator.transport.publish(topic, thrust, source)

    def get_state(self):
        """Latest cached simulator state"""
        with self._state_lock:
            return dict(self.state_cache)

    def _run_loop(self):
        """Internal method to run the simulation loop"""
        self.simulator.start()

        while self.running:
            tick_start = time.monotonic()
            try:
                self.simulator.tick()
                self.tick_count += 1

                if self.tick_count % self.state_interval == 0:
                    self._update_state_cache()
            except Exception as e:
                logger.error(f"Error in simulation tick: {e}")
                time.sleep(0.1)
                continue

            if self.realtime_factor > 0:
                budget = self.simulator.dt / self.realtime_factor
                time.sleep(max(0.0, budget - (time.monotonic() - tick_start)))
            else:
                # Yield so publishers are not starved
                time.sleep(0)

        self._update_state_cache()
        self.simulator.stop()

    def _update_state_cache(self):
        """Update the internal state cache"""
        state = self.simulator.get_state()
        with self._state_lock:
            self.state_cache = state
            self.last_update_time = time.time()
