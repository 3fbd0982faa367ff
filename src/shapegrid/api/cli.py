"""
どこで: `src/shapegrid/api/cli.py`。
何を: `python -m shapegrid` のコマンドライン引数を解釈し、ウィンドウ実行またはヘッドレス書き出しを行う。
なぜ: スクリプトを書かずに起動・スナップショット保存できるようにするため。
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapegrid",
        description="Procedural grid of animated 2-D shapes.",
    )
    parser.add_argument("--config", default=None, help="config.yaml のパス")
    parser.add_argument("--seed", type=int, default=None, help="合成グリッドの乱数 seed")
    parser.add_argument(
        "--no-gui",
        action="store_true",
        help="Parameter GUI ウィンドウを開かない",
    )
    parser.add_argument(
        "--export-svg",
        metavar="PATH",
        default=None,
        help="ウィンドウを開かずに SVG スナップショットを保存して終了する",
    )
    parser.add_argument(
        "--elapsed",
        type=float,
        default=0.0,
        help="--export-svg 時に書き出し前に進める秒数",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=_LOG_LEVELS,
        type=str.upper,
        help="ログレベル",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI エントリポイント。終了コードを返す。"""

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.export_svg is not None:
        from shapegrid.api.export import export_snapshot

        path = export_snapshot(
            args.export_svg,
            config_path=args.config,
            seed=args.seed,
            elapsed=float(args.elapsed),
        )
        print(f"Saved SVG: {path}")
        return 0

    from shapegrid.api import run

    run(config_path=args.config, parameter_gui=not args.no_gui, seed=args.seed)
    return 0


__all__ = ["build_parser", "main"]
