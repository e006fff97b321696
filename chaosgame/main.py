"""Command-line entry point for the chaos-game viewer.

Usage:
    chaosgame                          # default Sierpinski triangle
    chaosgame --vertices 5 --jump-ratio 3
    chaosgame --preset square-no-neighbor
    chaosgame --headless 5000 --seed 7  # no window; log a summary
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from chaosgame import config
from chaosgame.patterns.chaos import ChaosGameEngine, chaos_config_for
from chaosgame.patterns.presets import load_presets
from chaosgame.patterns.selection import RULES
from chaosgame.rng import new_rng
from chaosgame.validation import DEFAULT_SETTINGS, ConfigError, Settings, validate_settings

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chaosgame",
        description="Animate a polygon chaos game: current <- (current + vertex) / jump_ratio.",
    )
    parser.add_argument(
        "--vertices", type=str, default=None,
        help=f"Polygon vertex count ({config.MIN_VERTICES}-{config.MAX_VERTICES}, default {config.DEFAULT_VERTICES})",
    )
    parser.add_argument(
        "--jump-ratio", type=str, default=None,
        help=f"Divisor applied each step ({config.MIN_JUMP_RATIO}-{config.MAX_JUMP_RATIO}, default {config.DEFAULT_JUMP_RATIO})",
    )
    parser.add_argument(
        "--rule", choices=sorted(RULES), default=None,
        help=f"Vertex selection rule (default {config.DEFAULT_RULE})",
    )
    parser.add_argument("--preset", default=None, help="Start from a named preset")
    parser.add_argument("--list-presets", action="store_true", help="List presets and exit")
    parser.add_argument(
        "--capacity", type=int, default=config.DEFAULT_CAPACITY,
        help="Maximum number of recorded points",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument(
        "--fade-window", type=int, default=config.AppConfig.fade_window,
        help="Ticks for a point to fade out",
    )
    parser.add_argument(
        "--min-alpha", type=float, default=config.AppConfig.min_alpha,
        help="Opacity floor for old points (0-1); above 0 keeps the whole fractal visible",
    )
    parser.add_argument(
        "--steps-per-frame", type=int, default=config.AppConfig.steps_per_frame,
        help="Engine steps per rendered frame",
    )
    parser.add_argument(
        "--headless", type=int, default=None, metavar="STEPS",
        help="Run STEPS iterations without a window and print a summary",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace, presets) -> Settings:
    """
    Merge preset and explicit flags, then validate. Out-of-range fields are
    reported and replaced by their defaults (or the preset's values).
    """
    base = presets[args.preset].settings if args.preset else DEFAULT_SETTINGS
    vertices = args.vertices if args.vertices is not None else base.vertices
    jump_ratio = args.jump_ratio if args.jump_ratio is not None else base.jump_ratio
    rule = args.rule if args.rule is not None else base.rule
    try:
        return validate_settings(vertices, jump_ratio, rule, fallback=base)
    except ConfigError as e:
        log.warning("%s", e.user_message())
        for field in e.errors:
            log.warning("using %s=%s", field, getattr(e.corrected, field))
        return e.corrected


def run_headless(settings: Settings, cfg: config.AppConfig, steps: int) -> ChaosGameEngine:
    engine = ChaosGameEngine(chaos_config_for(settings, cfg), rng=new_rng(cfg.seed))
    added = engine.run(steps)
    xs, ys = engine.xs, engine.ys
    print(f"vertices={settings.vertices} jump_ratio={settings.jump_ratio} rule={settings.rule}")
    print(f"points={added} capacity={cfg.capacity} state={engine.state} tick={engine.tick}")
    if xs:
        print(f"x range {min(xs):+.4f} .. {max(xs):+.4f}")
        print(f"y range {min(ys):+.4f} .. {max(ys):+.4f}")
        print(f"last point ({xs[-1]:+.6f}, {ys[-1]:+.6f})")
    return engine


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    presets = load_presets()
    if args.list_presets:
        for pid, preset in presets.items():
            s = preset.settings
            print(f"{pid:20s} n={s.vertices:<2d} r={s.jump_ratio:<2d} {s.rule:12s} {preset.description}")
        return 0
    if args.preset is not None and args.preset not in presets:
        parser.error(f"unknown preset {args.preset!r} (known: {', '.join(presets)})")
    if args.capacity < 1:
        parser.error("--capacity must be at least 1")
    if args.fade_window < 1:
        parser.error("--fade-window must be at least 1")
    if not 0.0 <= args.min_alpha <= 1.0:
        parser.error("--min-alpha must be between 0 and 1")
    if args.steps_per_frame < 1:
        parser.error("--steps-per-frame must be at least 1")

    settings = resolve_settings(args, presets)
    cfg = config.AppConfig(
        seed=args.seed,
        capacity=args.capacity,
        steps_per_frame=args.steps_per_frame,
        fade_window=args.fade_window,
        min_alpha=args.min_alpha,
    )
    log.debug("config: %s", cfg)

    if args.headless is not None:
        run_headless(settings, cfg, max(0, args.headless))
        return 0

    # Lazy import so headless runs never touch the display.
    from chaosgame.engine import Engine

    Engine(cfg, settings, presets=presets, preset_id=args.preset).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
