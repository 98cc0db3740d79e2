import pytest

from workbench.sysmon.main import main, process_lines, system_lines
from workbench.sysmon.parser import ProcessParser
from workbench.sysmon.sysinfo import SysInfo
from workbench.sysmon.util import convert_to_time, progress_bar

CMD = "/usr/bin/example --flag"


def _write_pid(proc, pid):
    directory = proc / pid
    directory.mkdir(parents=True)
    (directory / "status").write_text(
        "Name:\texample\nUid:\t1000\t1000\t1000\t1000\nVmData:\t 2097152 kB\nThreads:\t3\n"
    )
    (directory / "cmdline").write_text(CMD)
    fields = [pid, "(example)", "S"] + ["0"] * 10
    fields += ["200", "100", "10", "10", "20", "0", "3", "0", "5000"] + ["0"] * 5
    (directory / "stat").write_text(" ".join(fields) + "\n")


@pytest.fixture
def tree(tmp_path):
    proc = tmp_path / "proc"
    etc = tmp_path / "etc"
    proc.mkdir()
    etc.mkdir()
    (proc / "uptime").write_text("1000.50 500.00\n")
    (proc / "meminfo").write_text("MemFree:  250 kB\nMemAvailable:  1000 kB\n")
    (proc / "version").write_text("Linux version 5.15.0-test (builder@example.com) #1 SMP\n")
    (proc / "cpuinfo").write_text("processor\t: 0\ncpu cores\t: 1\n")
    (proc / "stat").write_text(
        "cpu  100 0 100 800 0 0 0 0 0 0\ncpu0 100 0 100 800 0 0 0 0 0 0\n"
        "processes 4242\nprocs_running 2\n"
    )
    _write_pid(proc, "1")
    (etc / "passwd").write_text("alice:x:1000:1000::/home/alice:/bin/sh\n")
    (etc / "os-release").write_text('PRETTY_NAME="Example OS 1.0"\n')
    return proc, etc


def test_process_lines_header_columns():
    rows = ["row one", "row two"]
    lines = process_lines(rows)
    header = lines[0]
    assert lines[1:] == rows
    assert header.startswith("PID:")
    assert header.index("User:") == 9 - 2
    assert header.index("CPU[%]:") == 16 - 2
    assert header.index("RAM[MB]:") == 26 - 2
    assert header.index("Uptime:") == 35 - 2
    assert header.index("CMD:") == 44 - 2


def test_system_lines(tree):
    proc, etc = tree
    info = SysInfo(ProcessParser(str(proc), str(etc)))
    lines = system_lines(info)
    text = [str(line) for line in lines]
    assert text[0] == "OS: Example OS 1.0"
    assert text[1] == "Kernel version: 5.15.0-test"
    assert lines[2].text == "CPU: "
    assert lines[2].highlight == progress_bar(info.cpu_percent)
    assert text[3] == "Other cores:"
    assert text[-3] == "Total Processes:4242"
    assert text[-2] == "Running Processes:2"
    assert text[-1] == "Up Time: " + convert_to_time(1000)
    assert text[-4].startswith("Memory: 0% ")


def test_main_once_prints_snapshot(tree, capsys):
    proc, etc = tree
    code = main(["--proc-root", str(proc), "--etc-root", str(etc), "--once"])
    out = capsys.readouterr().out
    assert code == 0
    assert "OS: Example OS 1.0" in out
    assert "PID:" in out
    assert CMD + "..." in out


def test_main_missing_tree_fails(tmp_path, capsys):
    missing = tmp_path / "missing"
    code = main(["--proc-root", str(missing), "--etc-root", str(missing), "--once"])
    assert code == 1
    assert "sysmon:" in capsys.readouterr().err