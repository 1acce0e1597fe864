# tests/test_main.py
# Headless runner end to end.

import json
import logging

import pytest

from xyhd.__main__ import main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("xyhd")
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()


def test_run_writes_log_metrics_and_world(tmp_path):
    run_dir = tmp_path / "runs"
    world_out = tmp_path / "world.tsv"
    rc = main([
        "--config", str(tmp_path / "missing.yaml"),
        "--trials", "20", "--epochs", "2", "--seed", "5",
        "--metrics-every", "10",
        "--run-dir", str(run_dir),
        "--save-world", str(world_out),
    ])
    assert rc == 0
    assert (run_dir / "latest.log").exists()
    lines = (run_dir / "latest_metrics.jsonl").read_text().splitlines()
    ticks = [json.loads(line)["tick"] for line in lines]
    assert ticks == [0, 10, 20, 30]
    assert world_out.read_text().splitlines()[0] == "\t".join(["Wall"] * 5)
    assert "epoch 2 done" in (run_dir / "latest.log").read_text()


def test_run_loads_world(tmp_path):
    world_in = tmp_path / "in.tsv"
    rows = ["Wall\tWall\tWall\tWall\tWall"] + ["Wall\tEmpty\tEmpty\tEmpty\tWall"] * 3 \
        + ["Wall\tWall\tWall\tWall\tWall"]
    world_in.write_text("\n".join(rows) + "\n")
    rc = main(["--config", str(tmp_path / "missing.yaml"), "--trials", "5",
               "--world", str(world_in), "--run-dir", str(tmp_path / "runs"),
               "--save-pats", str(tmp_path / "pats.json"), "--trace"])
    assert rc == 0
    pats = json.loads((tmp_path / "pats.json").read_text())
    assert set(pats) == {"Empty", "Wall", "Left", "Right", "Forward"}


def test_rejects_zero_trials(tmp_path):
    with pytest.raises(SystemExit):
        main(["--config", str(tmp_path / "missing.yaml"), "--trials", "0",
              "--run-dir", str(tmp_path / "runs")])
