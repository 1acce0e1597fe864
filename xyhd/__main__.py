"""Headless runner: python -m xyhd [--config CFG] [--size N] [--seed S] [--epochs E] ..."""

import argparse

from .config import load_config
from .counters import TimeScale
from .env import XYHDEnv
from .logging_config import log_metrics, metrics_path, setup_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="xyhd", description="Run the XYHD grid world with its heuristic policy.")
    p.add_argument("--config", default="config.yaml", help="YAML config file (optional)")
    p.add_argument("--size", type=int, help="square world size, overrides config")
    p.add_argument("--seed", type=int, help="random seed, overrides config")
    p.add_argument("--trials", type=int, help="trials per epoch, overrides config")
    p.add_argument("--epochs", type=int, default=1, help="epochs to run")
    p.add_argument("--world", help="load world map from TSV")
    p.add_argument("--save-world", help="save world map to TSV")
    p.add_argument("--pats", help="load patterns from JSON")
    p.add_argument("--save-pats", help="save patterns to JSON")
    p.add_argument("--metrics-every", type=int, default=50, help="ticks between metric lines")
    p.add_argument("--run-dir", default="runs", help="directory for log and metrics files")
    p.add_argument("--trace", action="store_true", help="log action-generation trace")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    if args.size is not None:
        cfg.WORLD_SIZE = (args.size, args.size)
    if args.seed is not None:
        cfg.SEED = args.seed
    if args.trials is not None:
        cfg.TRIAL_MAX = args.trials
    if args.trace:
        cfg.TRACE_ACT_GEN = True
    if cfg.TRIAL_MAX <= 0:
        parser.error("trials per epoch must be positive")

    logger = setup_logging(args.run_dir)
    mpath = metrics_path(args.run_dir)

    env = XYHDEnv(cfg)
    logger.info(f"World: {env.world.size[0]}x{env.world.size[1]}  Trials/epoch: {cfg.TRIAL_MAX}  "
                f"Epochs: {args.epochs}  Seed: {cfg.SEED}")

    if args.world:
        env.open_world(args.world)
    if args.pats:
        env.open_pats(args.pats)
    env.init(0)

    while True:
        act = env.tick()
        tick = env.counters[TimeScale.TICK].cur
        if args.metrics_every > 0 and tick % args.metrics_every == 0:
            log_metrics(tick, env.get_state(), mpath)
        logger.debug(f"{env} act={act}")
        epc, _, chg = env.counter(TimeScale.EPOCH)
        if chg:
            logger.info(f"epoch {epc} done | visited={len(env.cells_visited)} bumps={env.bumps}")
            if epc >= args.epochs:
                break

    if args.save_world:
        env.save_world(args.save_world)
    if args.save_pats:
        env.save_pats(args.save_pats)

    logger.info("XYHD run ended.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
