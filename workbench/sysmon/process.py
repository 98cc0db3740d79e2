"""Processes shown by the system monitor and the paged list that holds them."""

from __future__ import annotations

from collections.abc import Iterator

from workbench.sysmon.parser import ProcessParser

_SEPARATOR = "   "
_PAGE_SIZE = 10


class Process:
    """One process with the figures the monitor displays for it."""

    def __init__(self, pid: str, parser: ProcessParser | None = None) -> None:
        self.parser = parser if parser is not None else ProcessParser()
        self.pid = str(pid)
        self.user = self.parser.proc_user(self.pid)
        self.mem = self.parser.vm_size(self.pid)
        self.cmd = self.parser.cmd(self.pid)
        self.cpu = self.parser.cpu_percent(self.pid)
        self.up_time = self.parser.proc_uptime(self.pid)

    def describe(self) -> str:
        """Refresh the changing figures and return one display row, or "" if gone."""
        if not self.parser.pid_exists(self.pid):
            return ""
        self.mem = self.parser.vm_size(self.pid)
        self.up_time = self.parser.proc_uptime(self.pid)
        self.cpu = self.parser.cpu_percent(self.pid)
        fields = (
            self.pid,
            self.user,
            self.mem[:5],
            self.cpu[:5],
            self.up_time[:5],
            self.cmd[:30],
        )
        return _SEPARATOR.join(fields) + "..."


class ProcessContainer:
    """All current processes, rendered as rows and split into pages of ten."""

    def __init__(self, parser: ProcessParser | None = None) -> None:
        self.parser = parser if parser is not None else ProcessParser()
        self.processes: list[Process] = []
        self.refresh()

    def _load(self) -> Iterator[Process]:
        for pid in self.parser.pid_list():
            try:
                yield Process(pid, self.parser)
            except ProcessLookupError:
                continue

    def refresh(self) -> None:
        """Reload the list of processes."""
        self.processes = list(self._load())

    def _descriptions(self) -> list[str]:
        rows = []
        for process in self.processes:
            try:
                rows.append(process.describe())
            except ProcessLookupError:
                rows.append("")
        return rows

    def render(self) -> str:
        """All rows joined together."""
        return "".join(self._descriptions())

    def pages(self) -> list[list[str]]:
        """The rows in consecutive pages of at most ten."""
        rows = self._descriptions()
        return [rows[start:start + _PAGE_SIZE] for start in range(0, len(rows), _PAGE_SIZE)]