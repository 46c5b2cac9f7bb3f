"""
Entrada de linha de comando do irisrap.

    irisrap --config config/config.defaults.yaml --run-dir outputs/run-001
    python -m irisrap --config config/config.defaults.yaml --categories setosa versicolor

Códigos de saída:
    0 → run concluída
    1 → erro de configuração ou de análise (mensagem em stderr)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from irisrap.core.config import ConfigError, deep_merge, load_config
from irisrap.core.errors import IrisRapError
from irisrap.pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="irisrap",
        description="Clean, summarize and plot the iris dataset, then render report.md",
    )
    ap.add_argument("--config", dest="config_path", type=Path, default=Path("config/config.defaults.yaml"),
                    help="defaults config file (YAML/JSON)")
    ap.add_argument("--local", dest="local_path", type=Path, default=None,
                    help="optional local overrides merged over --config")
    ap.add_argument("--run-dir", dest="run_dir", type=Path, default=Path("outputs/run"),
                    help="output directory for artifacts and manifest.json")
    ap.add_argument("--run-id", dest="run_id", default=None)
    ap.add_argument("--categories", nargs="+", default=None,
                    help="categories to keep (overrides analysis.categories)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            defaults_path=str(args.config_path),
            local_path=str(args.local_path) if args.local_path else None,
        )
        if args.categories:
            config = deep_merge(config, {"analysis": {"categories": list(args.categories)}})

        ctx = run_pipeline(config, run_dir=args.run_dir, run_id=args.run_id)
    except (ConfigError, IrisRapError, ValueError, FileNotFoundError) as e:
        print(f"irisrap: error: {e}", file=sys.stderr)
        return 1

    report = ctx.results["export.report"].artifacts["report_md"]
    print(f"Done: wrote {args.run_dir / report} (run_id={ctx.run_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
