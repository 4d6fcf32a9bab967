"""
Command-Line Interface.

Subcommands:
    train  Train a classifier and write both checkpoint encodings
    eval   Evaluate the trained checkpoint on the test split
    infer  Classify an image file or every image in a directory
    embed  Copy the trained blob into the package assets

Exit code is 0 on success and 1 when a LabVisionError propagates.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, get_args

from .config.types import DeviceName
from .exceptions import LabVisionError
from .logger import Logger
from .paths import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def _add_common_arguments(parser: argparse.ArgumentParser, with_device: bool = True) -> None:
    parser.add_argument(
        "--dataset",
        type=str,
        required=True,
        help="Dataset name (mnist, cifar10); selects configs/<name>.json",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Explicit config JSON path (overrides the packaged config)",
    )
    if with_device:
        parser.add_argument(
            "--device",
            type=str,
            default="auto",
            choices=list(get_args(DeviceName)),
            help="Compute device",
        )
        parser.add_argument(
            "--dataset-dir",
            type=Path,
            default=None,
            help="Dataset directory (defaults to the source's location under DATASET_DIR)",
        )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )


# ARGUMENT PARSING
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lab-vision",
        description="Config-driven CNN image classifiers: train, evaluate and infer.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ===== train =====
    train_p = subparsers.add_parser("train", help="Train a classifier")
    _add_common_arguments(train_p)
    train_p.add_argument("--epochs", type=int, default=None, help="Override training.epochs")
    train_p.add_argument(
        "--batch-size", type=int, default=None, help="Override training.batch_size"
    )
    train_p.add_argument(
        "--max-samples", type=int, default=None, help="Cap samples per split (quick runs)"
    )
    train_p.add_argument(
        "--no-synthetic",
        action="store_false",
        dest="allow_synthetic",
        help="Fail instead of falling back to synthetic data",
    )
    train_p.add_argument("--log-dir", type=Path, default=None, help="Also log to files here")
    train_p.add_argument(
        "--no-progress", action="store_false", dest="use_tqdm", help="Hide progress bars"
    )

    # ===== eval =====
    eval_p = subparsers.add_parser("eval", help="Evaluate the trained checkpoint")
    _add_common_arguments(eval_p)

    # ===== infer =====
    infer_p = subparsers.add_parser("infer", help="Classify an image file or directory")
    _add_common_arguments(infer_p)
    infer_p.add_argument("--path", type=Path, required=True, help="Image file or directory")

    # ===== embed =====
    embed_p = subparsers.add_parser("embed", help="Embed the trained blob into the package")
    _add_common_arguments(embed_p, with_device=False)

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)
    """
    return build_parser().parse_args(argv)


def _dispatch(args: argparse.Namespace) -> None:
    # Imported here so `--help` stays fast and torch loads only when needed
    from .config import load_dataset_config
    from .environment import DeviceManager
    from ..pipeline import (
        run_embed_phase,
        run_evaluation_phase,
        run_inference_phase,
        run_training_phase,
    )

    cfg = load_dataset_config(args.dataset, args.config)

    if args.command == "embed":
        run_embed_phase(cfg)
        return

    device = DeviceManager(args.device).acquire()

    if args.command == "train":
        cfg = cfg.with_overrides(epochs=args.epochs, batch_size=args.batch_size)
        run_training_phase(
            cfg,
            device,
            dataset_root=args.dataset_dir,
            allow_synthetic=args.allow_synthetic,
            max_samples=args.max_samples,
            use_tqdm=args.use_tqdm,
        )
    elif args.command == "eval":
        run_evaluation_phase(cfg, device, dataset_root=args.dataset_dir)
    elif args.command == "infer":
        run_inference_phase(cfg, device, args.path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console entry point; returns the process exit code."""
    args = parse_args(argv)
    Logger.setup(
        name=LOGGER_NAME,
        log_dir=getattr(args, "log_dir", None),
        level=args.log_level,
    )
    log_file = Logger.get_log_file(LOGGER_NAME)
    if log_file is not None:
        logger.info(f"Logging to {log_file}")

    try:
        _dispatch(args)
    except LabVisionError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
