"""Terminal system monitor: system figures on top, a paged process list below."""

from __future__ import annotations

import argparse
import curses
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass

from workbench.sysmon.parser import ProcessParser
from workbench.sysmon.process import ProcessContainer
from workbench.sysmon.sysinfo import SysInfo
from workbench.sysmon.util import convert_to_time, progress_bar


@dataclass(frozen=True)
class Line:
    """A display line: plain text followed by a highlighted part."""

    text: str
    highlight: str = ""

    def __str__(self) -> str:
        return self.text + self.highlight


def system_lines(sysinfo: SysInfo) -> list[Line]:
    """The lines of the system window, top to bottom."""
    return [
        Line("OS: " + sysinfo.os_name),
        Line("Kernel version: " + sysinfo.kernel_version),
        Line("CPU: ", progress_bar(sysinfo.cpu_percent)),
        Line("Other cores:"),
        *(Line("", core) for core in sysinfo.cores_stats()),
        Line("Memory: ", progress_bar(f"{sysinfo.mem_percent:f}")),
        Line(f"Total Processes:{sysinfo.total_proc}"),
        Line(f"Running Processes:{sysinfo.running_proc}"),
        Line("Up Time: " + convert_to_time(sysinfo.up_time)),
    ]


def process_lines(processes: Sequence[str]) -> list[str]:
    """A column header followed by the given process rows."""
    header = f"{'PID:':<7}{'User:':<7}{'CPU[%]:':<10}{'RAM[MB]:':<9}{'Uptime:':<9}CMD:"
    return [header, *processes]


def _clean(text: str) -> str:
    return text.replace("\0", " ")


def _put(window, row: int, col: int, text: str, attr: int = 0) -> None:
    try:
        window.addstr(row, col, _clean(text), attr)
    except curses.error:
        pass


def _run(screen, sysinfo: SysInfo, container: ProcessContainer, interval: float) -> None:
    colors = curses.has_colors()
    if colors:
        curses.init_pair(1, curses.COLOR_BLUE, curses.COLOR_BLACK)
        curses.init_pair(2, curses.COLOR_GREEN, curses.COLOR_BLACK)
    bar_attr = curses.color_pair(1) if colors else 0
    head_attr = curses.color_pair(2) if colors else 0

    _, xmax = screen.getmaxyx()
    width = max(xmax - 1, 2)
    sys_win = curses.newwin(17, width, 0, 0)
    proc_win = curses.newwin(15, width, 18, 0)
    counter = 0
    while True:
        container.refresh()
        pages = container.pages() or [[]]
        sysinfo.update()
        counter %= len(pages)

        sys_win.erase()
        sys_win.box()
        for row, line in enumerate(system_lines(sysinfo), start=2):
            _put(sys_win, row, 2, line.text)
            if line.highlight:
                _put(sys_win, row, 2 + len(line.text), line.highlight, bar_attr)

        proc_win.erase()
        proc_win.box()
        header, *rows = process_lines(pages[counter])
        _put(proc_win, 1, 2, header, head_attr)
        for row, text in enumerate(rows, start=2):
            _put(proc_win, row, 2, text)

        sys_win.refresh()
        proc_win.refresh()
        screen.refresh()
        time.sleep(interval)
        counter = 0 if counter >= len(pages) - 1 else counter + 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sysmon", description="Show system and process statistics.")
    parser.add_argument("--proc-root", default="/proc", help="proc file system to read")
    parser.add_argument("--etc-root", default="/etc", help="etc directory to read")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between refreshes")
    parser.add_argument("--once", action="store_true", help="print one snapshot and exit")
    args = parser.parse_args(argv)

    proc_parser = ProcessParser(args.proc_root, args.etc_root)
    try:
        container = ProcessContainer(proc_parser)
        sysinfo = SysInfo(proc_parser)
        if args.once:
            sysinfo.update()
            for line in system_lines(sysinfo):
                print(_clean(str(line)))
            for text in process_lines([row for page in container.pages() for row in page]):
                print(_clean(text))
            return 0
        curses.wrapper(_run, sysinfo, container, args.interval)
    except OSError as err:
        print(f"sysmon: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())