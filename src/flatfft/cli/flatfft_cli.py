from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from flatfft import __version__
from flatfft.cli.settings import (
    add_settings_args,
    split_settings_args,
    load_settings,
    select_settings,
    apply_settings_to_parser,
    serialize_args,
    save_settings,
    find_subparser,
    subcommand_names,
)
from flatfft.conv1d import convolve
from flatfft.conv2d import Transform2D, convolve_2d
from flatfft.core import apply_normalize
from flatfft.diagnostics import run_selftest
from flatfft.io import read_audio, write_audio, to_mono, read_image, write_image, rgb_to_luma
from flatfft.log import setup_logging

logger = logging.getLogger(__name__)

MODES = ["full", "same-first", "same-center", "circular"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _path(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_selftest(args: argparse.Namespace) -> int:
    try:
        report = run_selftest(sizes=args.sizes, seed=args.seed)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    for line in report.lines():
        print(line)
    return 0 if report.ok(args.tolerance) else 1


def _cmd_audio_conv(args: argparse.Namespace) -> int:
    in_path = _path(args.in_path)
    kernel_path = _path(args.kernel_path)
    out_path = _path(args.out_path)

    x, sr = read_audio(in_path)
    h, sr_h = read_audio(kernel_path)
    if sr != sr_h:
        raise SystemExit(f"Sample rates must match (got {sr} vs {sr_h}).")

    x = to_mono(x)
    h = to_mono(h)
    logger.info("audio-conv: %s (%d) * %s (%d), mode=%s", in_path.name, x.size, kernel_path.name, h.size, args.mode)

    try:
        y = convolve(x, h, mode=args.mode)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    y = apply_normalize(y, args.normalize)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    write_audio(out_path, y, sr, subtype=args.subtype)
    logger.info("wrote %s", out_path)
    return 0


def _cmd_image_conv(args: argparse.Namespace) -> int:
    in_path = _path(args.in_path)
    kernel_path = _path(args.kernel_path)
    out_path = _path(args.out_path)

    img = rgb_to_luma(read_image(in_path, mode="RGB"))
    ker = rgb_to_luma(read_image(kernel_path, mode="RGB"))
    logger.info("image-conv: %s %s * %s %s, mode=%s", in_path.name, img.shape, kernel_path.name, ker.shape, args.mode)

    try:
        out = convolve_2d(img, ker, mode=args.mode, normalize="rescale", plan=Transform2D())
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    out_path.parent.mkdir(parents=True, exist_ok=True)
    write_image(out_path, out)
    logger.info("wrote %s", out_path)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_io_args(p: argparse.ArgumentParser, what: str) -> None:
    p.add_argument("--in", dest="in_path", required=True, help=f"Input {what} file.")
    p.add_argument("--kernel", dest="kernel_path", required=True, help=f"Kernel {what} file.")
    p.add_argument("--out", dest="out_path", required=True, help=f"Output {what} file.")
    p.add_argument(
        "--mode",
        choices=MODES,
        default="same-center",
        help="Convolution size policy ('circular' needs power-of-two sizes).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flatfft",
        description="In-place FFT engine: self test and FFT convolution of audio/images.",
    )
    add_settings_args(parser)
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- selftest ----
    p_test = subparsers.add_parser(
        "selftest",
        help="Round-trip and convolution checks against direct evaluation.",
    )
    p_test.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[4, 8, 16, 64],
        help="Transform sizes to check (powers of two).",
    )
    p_test.add_argument("--seed", type=int, default=0, help="Random seed.")
    p_test.add_argument(
        "--tolerance",
        type=float,
        default=1e-9,
        help="Maximum accepted absolute error.",
    )
    p_test.set_defaults(func=_cmd_selftest)

    # ---- audio-conv ----
    p_audio = subparsers.add_parser(
        "audio-conv",
        help="Convolve an audio file with a kernel audio file (mono).",
    )
    _add_io_args(p_audio, "audio")
    p_audio.add_argument(
        "--normalize",
        choices=["rms", "peak", "none"],
        default="peak",
        help="Output normalization.",
    )
    p_audio.add_argument(
        "--subtype",
        default="PCM_16",
        help="libsndfile subtype for the output (PCM_16, PCM_24, FLOAT, ...).",
    )
    p_audio.set_defaults(func=_cmd_audio_conv)

    # ---- image-conv ----
    p_img = subparsers.add_parser(
        "image-conv",
        help="Convolve the luma of an image with the luma of a kernel image; output rescaled to [0, 255].",
    )
    _add_io_args(p_img, "image")
    p_img.set_defaults(func=_cmd_image_conv)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    commands = subcommand_names(parser)
    cleaned_argv, settings_path, save_path, command = split_settings_args(raw_argv, commands)

    if settings_path:
        settings = select_settings(load_settings(Path(settings_path)), command)
        apply_settings_to_parser(parser, settings)
        target = find_subparser(parser, command)
        if target is not None:
            apply_settings_to_parser(target, settings)

    args = parser.parse_args(cleaned_argv)
    setup_logging(args.log_level, log_file=args.log_file)
    logger.debug("argv: %s", cleaned_argv)

    if save_path:
        target = find_subparser(parser, args.command) or parser
        exclude = {"command", "func", "log_level", "log_file"}
        save_settings(Path(save_path), serialize_args(args, target, exclude=exclude), command=args.command)

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
