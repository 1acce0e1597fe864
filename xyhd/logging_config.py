"""Logging configuration for XYHD environment runs.

Creates two output files per run:
- <run_dir>/latest.log: Human-readable log, including policy traces
- <run_dir>/latest_metrics.jsonl: Structured metrics every N ticks
"""

import json
import logging
from datetime import datetime
from pathlib import Path

DEFAULT_RUN_DIR = Path("runs")

LOG_NAME = "latest.log"
METRICS_NAME = "latest_metrics.jsonl"


def setup_logging(run_dir=DEFAULT_RUN_DIR, console_level=logging.INFO) -> logging.Logger:
    """Configure logging for a new run. Clears previous log files."""
    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    log_file = run_dir / LOG_NAME
    metrics_file = run_dir / METRICS_NAME

    # Clear previous log files
    if log_file.exists():
        log_file.unlink()
    if metrics_file.exists():
        metrics_file.unlink()

    logger = logging.getLogger("xyhd")
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()

    # File handler for the run log (overwrites each run)
    file_handler = logging.FileHandler(log_file, mode='w')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(name)s] %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('[%(name)s] %(message)s'))
    logger.addHandler(console_handler)

    # Action-generation traces and metrics (children of xyhd)
    logging.getLogger("xyhd.policy").setLevel(logging.DEBUG)
    logging.getLogger("xyhd.metrics").setLevel(logging.DEBUG)

    logger.info(f"=== XYHD Run Started: {datetime.now().isoformat()} ===")
    return logger


def metrics_path(run_dir=DEFAULT_RUN_DIR) -> Path:
    return Path(run_dir) / METRICS_NAME


def log_metrics(tick: int, env_state: dict, path):
    """
    Append one JSON line of environment metrics.

    Called every N ticks to capture the agent's trajectory for analysis.
    """
    metrics = {
        "tick": tick,
        "timestamp": datetime.now().isoformat(),
        "run": env_state.get("run", 0),
        "epoch": env_state.get("epoch", 0),
        "trial": env_state.get("trial", 0),
        "pos": env_state.get("pos", (0, 0)),
        "angle": env_state.get("angle", 0),
        "rot_ang": env_state.get("rot_ang", 0),
        "action": env_state.get("action", ""),
        "prox": env_state.get("prox", []),
        "cells_visited": env_state.get("cells_visited", 0),
        "bumps": env_state.get("bumps", 0),
    }
    with open(path, 'a') as f:
        f.write(json.dumps(metrics) + '\n')
    logging.getLogger("xyhd.metrics").debug(
        f"t={tick} | pos={metrics['pos']} ang={metrics['angle']} act={metrics['action']}"
    )
