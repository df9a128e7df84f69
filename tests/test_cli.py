from __future__ import annotations

import json

import pytest

from trieReservoir.cli import format_report, main_hello_demo


def test_format_report_matches_console_layout() -> None:
    line = format_report("hello", [0.1, 0.2, 0.3, 0.4])
    assert line == "Input: 'hello' -> Output Probs: 0.100 0.200 0.300 0.400 "


def test_hello_demo_end_to_end(tmp_path, capsys) -> None:
    json_path = tmp_path / "history.json"
    plot_path = tmp_path / "history.png"
    main_hello_demo(
        [
            "--seed",
            "0",
            "--reproducible_noise",
            "--save_json",
            str(json_path),
            "--plot",
            str(plot_path),
        ]
    )
    out = capsys.readouterr().out.splitlines()
    prefix = "Input: 'hello' -> Output Probs: "
    assert out[0].startswith(prefix)
    probs = [float(v) for v in out[0][len(prefix):].split()]
    assert len(probs) == 4
    assert abs(sum(probs) - 1.0) < 0.01
    assert probs[0] == max(probs)
    assert json.loads(json_path.read_text(encoding="utf-8"))["seed"] == 0
    assert plot_path.exists()


def test_reproducible_noise_requires_seed() -> None:
    with pytest.raises(SystemExit):
        main_hello_demo(["--reproducible_noise"])


def test_scaling_alias_is_accepted(capsys) -> None:
    main_hello_demo(["--seed", "0", "--epochs", "2", "--scaling", "eig", "--reservoir_size", "8"])
    assert capsys.readouterr().out.startswith("Input: 'hello' -> Output Probs: ")


def test_unknown_scaling_is_a_usage_error() -> None:
    with pytest.raises(SystemExit):
        main_hello_demo(["--scaling", "frobenius"])
