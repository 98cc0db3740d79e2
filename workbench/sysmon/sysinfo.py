"""System-wide figures for the monitor, sampled between refreshes."""

from __future__ import annotations

import math

from workbench.sysmon.parser import ProcessParser
from workbench.sysmon.util import progress_bar


class SysInfo:
    """Holds the latest system figures and the previous CPU samples."""

    def __init__(self, parser: ProcessParser | None = None) -> None:
        self.parser = parser if parser is not None else ProcessParser()
        self.cpu_percent = ""
        self.mem_percent = 0.0
        self.up_time = 0
        self.total_proc = 0
        self.running_proc = 0
        self.threads = 0

        cores = self.parser.number_of_cores()
        self.core_percents: list[str] = [""] * cores
        self.last_core_values: list[list[str]] = [
            self.parser.sys_cpu_values(str(core)) for core in range(cores)
        ]
        self.last_cpu_values: list[str] = self.parser.sys_cpu_values()
        self.update()
        self.os_name = self.parser.os_name()
        self.kernel_version = self.parser.kernel_version()

    def update(self) -> None:
        """Read fresh figures and compute CPU usage since the last sample."""
        parser = self.parser
        self.mem_percent = parser.sys_ram_percent()
        self.up_time = parser.sys_uptime()
        self.total_proc = parser.total_processes()
        self.running_proc = parser.running_processes()
        self.threads = parser.total_threads()
        current = parser.sys_cpu_values()
        self.cpu_percent = parser.cpu_stats(self.last_cpu_values, current)
        self.last_cpu_values = current
        self.update_cores()

    def update_cores(self) -> None:
        """Compute every core's usage since its last sample."""
        current = [self.parser.sys_cpu_values(str(core)) for core in range(len(self.core_percents))]
        self.core_percents = [
            self.parser.cpu_stats(last, now) for last, now in zip(self.last_core_values, current)
        ]
        self.last_core_values = current

    def cores_stats(self) -> list[str]:
        """One bar line per core, or no lines if any core has no usable figure."""
        result = []
        for core, percent in enumerate(self.core_percents):
            try:
                value = float(percent)
            except ValueError:
                value = 0.0
            if value == 0 or math.isnan(value):
                return []
            result.append(f"cpu{core}: " + progress_bar(percent))
        return result