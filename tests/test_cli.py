"""Tests for the command-line entry points."""

import io
import sys
from datetime import datetime, timezone

import matplotlib

matplotlib.use("Agg")

import pytest

from rpcbench import __main__ as entry
from rpcbench.cli import compare as compare_cli
from rpcbench.cli import run as run_cli
from rpcbench.core.aggregation import aggregate, build_report
from rpcbench.core.methods import method_names
from rpcbench.core.models import AttemptResult, EndpointConfig, ExecutionMode
from rpcbench.results.progress import ProgressDisplay


def fake_report(config, slot_fails=False):
    slot = aggregate(
        "getSlot",
        [AttemptResult("getSlot", 20.0, not slot_fails, "boom" if slot_fails else None)],
    )
    health = aggregate("getHealth", [AttemptResult("getHealth", 30.0, True)])
    return build_report(
        [health, slot],
        endpoint=config.display_url,
        iterations=config.iterations,
        mode=config.mode,
        timestamp=datetime(2026, 10, 19, tzinfo=timezone.utc),
    )


@pytest.fixture
def captured_configs(monkeypatch):
    configs = []

    async def fake_run_benchmark(config, verbose=False):
        configs.append(config)
        return fake_report(config, slot_fails="failing" in config.url)

    monkeypatch.setattr(run_cli, "run_benchmark", fake_run_benchmark)
    monkeypatch.setattr(compare_cli, "run_benchmark", fake_run_benchmark)
    return configs


def test_run_flags_build_config(captured_configs, capsys):
    run_cli.main(["-u", "https://rpc.example", "-i", "5", "-p", "--no-progress", "--delay-ms", "0"])

    config = captured_configs[0]
    assert config.url == "https://rpc.example"
    assert config.iterations == 5
    assert config.mode is ExecutionMode.PARALLEL
    assert config.show_progress is False
    assert config.delay_seconds == 0

    out = capsys.readouterr().out
    assert "TEST CONFIGURATION" in out
    assert "RPC PERFORMANCE REPORT" in out


def test_defaults_are_sequential_with_progress(captured_configs):
    run_cli.main(["-u", "https://rpc.example"])

    config = captured_configs[0]
    assert config.iterations == 3
    assert config.mode is ExecutionMode.SEQUENTIAL
    assert config.show_progress is True


@pytest.mark.parametrize("iterations", ["0", "-2"])
def test_non_positive_iterations_exit_before_running(captured_configs, capsys, iterations):
    with pytest.raises(SystemExit) as exc_info:
        run_cli.main(["-u", "https://rpc.example", "-i", iterations])

    assert exc_info.value.code == 1
    assert captured_configs == []
    assert "Error: Iteration count must be positive" in capsys.readouterr().out


@pytest.mark.parametrize("timeout", ["nan", "inf", "0"])
def test_unbounded_timeout_exits_before_running(captured_configs, capsys, timeout):
    with pytest.raises(SystemExit) as exc_info:
        run_cli.main(["-u", "https://rpc.example", "--timeout", timeout])

    assert exc_info.value.code == 1
    assert captured_configs == []
    assert "Error: Request timeout must be a positive number of seconds" in capsys.readouterr().out


def test_non_numeric_iterations_rejected_by_parser(captured_configs):
    with pytest.raises(SystemExit) as exc_info:
        run_cli.main(["-i", "many"])
    assert exc_info.value.code == 2
    assert captured_configs == []


def test_invalid_url_exits(captured_configs):
    with pytest.raises(SystemExit) as exc_info:
        run_cli.main(["-u", "localhost"])
    assert exc_info.value.code == 1
    assert captured_configs == []


def test_partial_failure_exits_zero(captured_configs):
    # Returns normally: method failures are a reportable outcome
    run_cli.main(["-u", "https://failing.example"])


def test_fail_on_error(captured_configs):
    with pytest.raises(SystemExit) as exc_info:
        run_cli.main(["-u", "https://failing.example", "--fail-on-error"])
    assert exc_info.value.code == 1


def test_run_exports_results(captured_configs, tmp_path):
    output = tmp_path / "run.tsv"
    chart = tmp_path / "run.png"

    run_cli.main(["-u", "https://rpc.example", "--output", str(output), "--chart", str(chart)])

    assert output.read_text().startswith("Endpoint\tMethod")
    assert chart.exists()


def test_keyboard_interrupt_exits_130(monkeypatch, capsys):
    async def interrupted(config, verbose=False):
        raise KeyboardInterrupt

    monkeypatch.setattr(run_cli, "run_benchmark", interrupted)

    with pytest.raises(SystemExit) as exc_info:
        run_cli.main(["-u", "https://rpc.example"])

    assert exc_info.value.code == 130
    assert "interrupted" in capsys.readouterr().out


def test_compare_runs_each_endpoint_once(captured_configs, capsys):
    compare_cli.main([
        "--urls", "https://rpc-a.example, https://failing.example,https://rpc-a.example",
        "--no-chart",
    ])

    assert [c.url for c in captured_configs] == ["https://rpc-a.example", "https://failing.example"]
    out = capsys.readouterr().out
    assert "RPC ENDPOINT COMPARISON" in out
    assert "Unavailable methods: getSlot" in out


def test_compare_interrupt_prints_partial_summary(monkeypatch, capsys):
    async def interrupt_second(config, verbose=False):
        if "rpc-b" in config.url:
            raise KeyboardInterrupt
        return fake_report(config)

    monkeypatch.setattr(compare_cli, "run_benchmark", interrupt_second)

    with pytest.raises(SystemExit) as exc_info:
        compare_cli.main(["--urls", "https://rpc-a.example,https://rpc-b.example", "--no-chart"])

    assert exc_info.value.code == 130
    out = capsys.readouterr().out
    assert "PARTIAL COMPARISON RESULTS (interrupted)" in out
    assert "https://rpc-a.example" in out


def test_compare_json_export(captured_configs, tmp_path):
    output = tmp_path / "compare.json"

    compare_cli.main([
        "--urls", "https://rpc-a.example,https://failing.example",
        "--output", str(output),
        "--no-chart",
    ])

    text = output.read_text()
    assert '"endpoint": "https://failing.example"' in text
    assert '"attempts"' in text
    assert '"error": "boom"' in text


@pytest.fixture
def recorded_progress(monkeypatch):
    displays = []

    def make_display(total, enabled=True):
        display = ProgressDisplay(total, enabled=enabled, stream=io.StringIO())
        displays.append(display)
        return display

    monkeypatch.setattr(run_cli, "ProgressDisplay", make_display)
    return displays


@pytest.mark.asyncio
@pytest.mark.parametrize("mode", [ExecutionMode.SEQUENTIAL, ExecutionMode.PARALLEL])
async def test_run_benchmark_drives_progress_bar(fake_node, recorded_progress, capsys, mode):
    fake_node.errors["getBalance"] = {"code": -32602, "message": "Invalid param"}
    config = EndpointConfig(
        url=fake_node.url, iterations=2, mode=mode, timeout_seconds=5, delay_seconds=0
    )

    report = await run_cli.run_benchmark(config)

    display = recorded_progress[0]
    total = len(method_names()) * 2
    assert display.total == total
    assert display.completed == total
    assert display.failed == 2
    assert sum(m.total_count for m in report.methods) == total

    text = display.stream.getvalue()
    assert "Running getHealth" in text
    assert "Running getBlock" in text
    final_line = text.split("\r")[-1]
    assert final_line.startswith(f"[{'█' * ProgressDisplay.BAR_WIDTH}] {total}/{total} (2 failed)")
    assert final_line.rstrip().endswith("Testing completed!")

    out = capsys.readouterr().out
    assert "Running tests..." not in out


@pytest.mark.asyncio
async def test_run_benchmark_without_progress_prints_plain_lines(fake_node, recorded_progress, capsys):
    config = EndpointConfig(
        url=fake_node.url, iterations=1, show_progress=False, timeout_seconds=5, delay_seconds=0
    )

    report = await run_cli.run_benchmark(config)

    display = recorded_progress[0]
    assert display.enabled is False
    assert display.completed == display.total == len(method_names())
    assert display.stream.getvalue() == ""
    assert report.overall_success_rate == 100.0

    out = capsys.readouterr().out
    assert out.index("Running tests...") < out.index("Testing completed!")


def test_compare_rejects_bad_url(captured_configs):
    with pytest.raises(SystemExit) as exc_info:
        compare_cli.main(["--urls", "https://rpc-a.example,nope", "--no-chart"])
    assert exc_info.value.code == 1
    assert captured_configs == []


def test_compare_requires_an_endpoint(captured_configs):
    with pytest.raises(SystemExit) as exc_info:
        compare_cli.main(["--urls", " , "])
    assert exc_info.value.code == 1


def test_parse_urls():
    assert compare_cli.parse_urls("a, b,,a") == ["a", "b"]


def test_dispatcher_defaults_to_run(monkeypatch):
    calls = []
    monkeypatch.setattr(run_cli, "main", lambda argv: calls.append(argv))
    monkeypatch.setattr(sys, "argv", ["rpcbench", "-i", "2"])

    entry.main()

    assert calls == [["-i", "2"]]


def test_dispatcher_compare(monkeypatch):
    calls = []
    monkeypatch.setattr(compare_cli, "main", lambda argv: calls.append(argv))
    monkeypatch.setattr(sys, "argv", ["rpcbench", "compare", "--urls", "https://a.example"])

    entry.main()

    assert calls == [["--urls", "https://a.example"]]


def test_dispatcher_unknown_command(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["rpcbench", "bogus"])

    with pytest.raises(SystemExit) as exc_info:
        entry.main()

    assert exc_info.value.code == 1
    assert "Unknown command: bogus" in capsys.readouterr().out
