"""Readers for the process and system statistics exposed under /proc and /etc."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Iterator, Sequence

from workbench.sysmon.util import CPUState, open_stream

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")

_ACTIVE_STATES = (
    CPUState.USER,
    CPUState.NICE,
    CPUState.SYSTEM,
    CPUState.IRQ,
    CPUState.SOFTIRQ,
    CPUState.STEAL,
    CPUState.GUEST,
    CPUState.GUEST_NICE,
)
_IDLE_STATES = (CPUState.IDLE, CPUState.IOWAIT)


def _stof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group())


def _stoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if not match:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group())


def _divide(numerator: float, denominator: float) -> float:
    """Divide the way IEEE floats do, giving inf or nan instead of raising."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _to_string(value: float) -> str:
    return f"{value:f}"


def _clock_ticks() -> int:
    try:
        return int(os.sysconf("SC_CLK_TCK"))
    except (AttributeError, ValueError, OSError):
        return 100


def active_cpu_time(values: Sequence[str]) -> float:
    """Sum of the busy fields of a ``cpu`` line from /proc/stat."""
    return sum(_stof(values[state]) for state in _ACTIVE_STATES)


def idle_cpu_time(values: Sequence[str]) -> float:
    """Sum of the idle and iowait fields of a ``cpu`` line from /proc/stat."""
    return sum(_stof(values[state]) for state in _IDLE_STATES)


def memory_value(line: str) -> float:
    """The number in a /proc/meminfo line such as ``MemFree:  55556048 kB``."""
    return _stof(line.split()[1])


class ProcessParser:
    """Reads process and system figures from a proc tree and an etc tree."""

    def __init__(self, proc_root: str = "/proc", etc_root: str = "/etc") -> None:
        self.proc_root = proc_root
        self.etc_root = etc_root
        self.clock_ticks = _clock_ticks()

    def _proc_path(self, *parts: str) -> str:
        return os.path.join(self.proc_root, *parts)

    def _lines(self, path: str) -> Iterator[str]:
        with open_stream(path) as stream:
            for line in stream:
                yield line.rstrip("\n")

    def _first_line(self, path: str) -> str:
        return next(self._lines(path), "")

    def _fields_of(self, path: str, prefix: str) -> list[str] | None:
        for line in self._lines(path):
            if line.startswith(prefix):
                return line.split()
        return None

    def cmd(self, pid: str) -> str:
        """The command line that started the process, as stored by the kernel."""
        return self._first_line(self._proc_path(pid, "cmdline"))

    def pid_list(self) -> list[str]:
        """Names of the numeric directories in the proc tree."""
        with os.scandir(self.proc_root) as entries:
            return [
                entry.name
                for entry in entries
                if entry.is_dir() and entry.name.isascii() and entry.name.isdigit()
            ]

    def vm_size(self, pid: str) -> str:
        """Data memory of a process in GB, from its ``VmData`` line."""
        fields = self._fields_of(self._proc_path(pid, "status"), "VmData")
        result = _stof(fields[1]) / float(1024 * 1024) if fields else 0.0
        return _to_string(result)

    def cpu_percent(self, pid: str) -> str:
        """Share of CPU time the process has used since it started."""
        values = self._first_line(self._proc_path(pid, "stat")).split()
        utime = _stof(self.proc_uptime(pid))
        stime = _stof(values[14])
        cutime = _stof(values[15])
        cstime = _stof(values[16])
        starttime = _stof(values[21])
        uptime = float(self.sys_uptime())
        freq = float(self.clock_ticks)

        total_time = utime + stime + cutime + cstime
        seconds = uptime - starttime / freq
        return _to_string(100.0 * _divide(total_time / freq, seconds))

    def sys_uptime(self) -> int:
        """Seconds since boot, whole part only."""
        values = self._first_line(self._proc_path("uptime")).split()
        return _stoi(values[0])

    def proc_uptime(self, pid: str) -> str:
        """User time of the process in seconds."""
        values = self._first_line(self._proc_path(pid, "stat")).split()
        return _to_string(_stof(values[13]) / self.clock_ticks)

    def proc_user(self, pid: str) -> str:
        """Name of the user owning the process, or an empty string."""
        fields = self._fields_of(self._proc_path(pid, "status"), "Uid")
        uid = fields[1] if fields else ""
        needle = "x:" + uid
        for line in self._lines(os.path.join(self.etc_root, "passwd")):
            if needle in line:
                return line.split(":", 1)[0]
        return ""

    def sys_cpu_values(self, core: str = "") -> list[str]:
        """Fields of the ``cpu`` line, or of ``cpuN`` when a core is given."""
        fields = self._fields_of(self._proc_path("stat"), "cpu" + core)
        return fields if fields is not None else []

    def sys_ram_percent(self) -> float:
        """Memory usage in percent, from /proc/meminfo."""
        total_mem = 0.0
        free_mem = 0.0
        buffers = 0.0
        for line in self._lines(self._proc_path("meminfo")):
            if total_mem != 0 and free_mem != 0:
                break
            if line.startswith("MemAvailable:"):
                total_mem = memory_value(line)
            if line.startswith("MemFree:"):
                free_mem = memory_value(line)
            if line.startswith("Buffers:"):
                buffers = memory_value(line)
        return 100 * (1 - _divide(free_mem, total_mem - buffers))

    def kernel_version(self) -> str:
        """Kernel release from /proc/version, or an empty string."""
        fields = self._fields_of(self._proc_path("version"), "Linux version")
        return fields[2] if fields else ""

    def number_of_cores(self) -> int:
        """The ``cpu cores`` figure from /proc/cpuinfo, 0 when it is absent."""
        fields = self._fields_of(self._proc_path("cpuinfo"), "cpu cores")
        return _stoi(fields[3]) if fields else 0

    def total_threads(self) -> int:
        """Sum of the thread counts of all processes."""
        result = 0
        for pid in self.pid_list():
            fields = self._fields_of(self._proc_path(pid, "status"), "Threads")
            if fields:
                result += _stoi(fields[1])
        return result

    def _stat_counter(self, name: str) -> int:
        fields = self._fields_of(self._proc_path("stat"), name)
        return _stoi(fields[1]) if fields else 0

    def total_processes(self) -> int:
        """Number of processes created since boot."""
        return self._stat_counter("processes")

    def running_processes(self) -> int:
        """Number of processes currently running."""
        return self._stat_counter("procs_running")

    def os_name(self) -> str:
        """The ``PRETTY_NAME`` of the operating system, without quotes."""
        for line in self._lines(os.path.join(self.etc_root, "os-release")):
            if line.startswith("PRETTY_NAME"):
                return line[line.find("=") + 1:].replace('"', "")
        return ""

    def cpu_stats(self, values1: Sequence[str], values2: Sequence[str]) -> str:
        """CPU usage in percent between two ``cpu`` line samples."""
        active = active_cpu_time(values2) - active_cpu_time(values1)
        idle = idle_cpu_time(values2) - idle_cpu_time(values1)
        return _to_string(100.0 * _divide(active, active + idle))

    def pid_exists(self, pid: str) -> bool:
        """Whether the pid is among the current processes."""
        return pid in self.pid_list()