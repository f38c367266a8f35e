import time
import logging
import psutil

# setup logging
logger = logging.getLogger("CryptoPrims")

class BenchmarkMetrics:
    def __init__(self, process=None):
        # initialize with optional psutil process object
        self.process = process or psutil.Process()
        self.reset()

    def reset(self):
        # reset all metrics
        self.setup_time_ns = 0
        self.operation_time_ns = 0
        self.inverse_time_ns = 0
        self.cpu_time_ns = 0
        self.cpu_percent = 100
        self.peak_memory_bytes = 0
        self.allocated_memory_bytes = 0
        self.input_size_bytes = 0
        self.correctness_passed = True

        # algorithm metadata
        self.block_size_bytes = None
        self.num_rounds = None
        self.is_custom_implementation = False

    def set_algorithm_metadata(self, implementation):
        # copy what the implementation advertises
        self.block_size_bytes = getattr(implementation, 'block_size_bytes', None)
        self.num_rounds = getattr(implementation, 'num_rounds', None)
        self.is_custom_implementation = getattr(implementation, 'is_custom', False)

    def _snapshot(self):
        # cpu times and memory, or None where the platform refuses
        try:
            cpu_times = self.process.cpu_times()
        except (psutil.AccessDenied, AttributeError, OSError):
            cpu_times = None
            logger.warning("CPU time metrics are not available - CPU metrics will not be collected")

        try:
            memory = self.process.memory_info()
        except (psutil.AccessDenied, AttributeError, OSError):
            memory = None

        return cpu_times, memory

    def measure(self, slot, func, *args, **kwargs):
        """
        Run func once and record its wall time into ``<slot>_time_ns``.

        Args:
            slot: One of "setup", "operation", "inverse"
            func: Callable to time

        Returns:
            Whatever func returns
        """
        initial_cpu_times, initial_memory = self._snapshot()

        # measure wall time with nanosecond precision
        start_time = time.perf_counter_ns()
        result = func(*args, **kwargs)
        end_time = time.perf_counter_ns()

        elapsed_ns = end_time - start_time
        setattr(self, f"{slot}_time_ns", elapsed_ns)

        final_cpu_times, final_memory = self._snapshot()

        # update CPU time metrics if available
        if initial_cpu_times is not None and final_cpu_times is not None:
            cpu_user_diff = final_cpu_times.user - initial_cpu_times.user
            cpu_system_diff = final_cpu_times.system - initial_cpu_times.system
            total_cpu_time = cpu_user_diff + cpu_system_diff

            # convert to nanoseconds
            self.cpu_time_ns += int(total_cpu_time * 1_000_000_000)

            wall_time_s = elapsed_ns / 1_000_000_000
            if wall_time_s > 0:
                self.cpu_percent = (total_cpu_time / wall_time_s) * 100

        # record peak memory usage
        if final_memory is not None:
            self.peak_memory_bytes = max(self.peak_memory_bytes, final_memory.rss)
            if initial_memory is not None:
                self.allocated_memory_bytes += max(0, final_memory.rss - initial_memory.rss)

        return result

    def to_dict(self):
        # plain dict for aggregation
        return {
            "setup_time_ns": self.setup_time_ns,
            "operation_time_ns": self.operation_time_ns,
            "inverse_time_ns": self.inverse_time_ns,
            "cpu_time_ns": self.cpu_time_ns,
            "cpu_percent": self.cpu_percent,
            "peak_memory_bytes": self.peak_memory_bytes,
            "allocated_memory_bytes": self.allocated_memory_bytes,
            "input_size_bytes": self.input_size_bytes,
            "correctness_passed": self.correctness_passed,
            "block_size_bytes": self.block_size_bytes,
            "num_rounds": self.num_rounds,
            "is_custom_implementation": self.is_custom_implementation,
        }
