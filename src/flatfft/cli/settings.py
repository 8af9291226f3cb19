# src/flatfft/cli/settings.py
"""
Option defaults from settings files.

A settings file is JSON (an object) or a two-column CSV (``key,value`` with
JSON-encoded values). JSON files may hold one section per subcommand plus a
``default`` section; a flat object applies to every command.
"""
from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable

__all__ = [
    "SETTINGS_DESTS",
    "add_settings_args",
    "split_settings_args",
    "load_settings",
    "save_settings",
    "select_settings",
    "apply_settings_to_parser",
    "serialize_args",
    "find_subparser",
    "subcommand_names",
]

logger = logging.getLogger(__name__)

SETTINGS_DESTS = {"settings_path", "save_settings_path"}


def add_settings_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--settings",
        dest="settings_path",
        default=None,
        help="Load option defaults from a settings file (json or csv).",
    )
    parser.add_argument(
        "--save-settings",
        dest="save_settings_path",
        default=None,
        help="Save the effective options to a settings file (json or csv).",
    )


def split_settings_args(
    argv: Iterable[str],
    commands: Iterable[str],
) -> tuple[list[str], str | None, str | None, str | None]:
    """
    Pull ``--settings`` / ``--save-settings`` out of ``argv`` wherever they
    appear, and find the first token naming one of ``commands``.

    Returns ``(remaining_argv, settings_path, save_path, command)``.
    """
    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    add_settings_args(pre)
    known, rest = pre.parse_known_args(list(argv))
    names = set(commands)
    command = next((arg for arg in rest if arg in names), None)
    return rest, known.settings_path, known.save_settings_path, command


def _csv_value(raw: str) -> Any:
    text = raw.strip()
    try:
        return json.loads(text) if text else ""
    except json.JSONDecodeError:
        return text


def load_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SystemExit(f"Settings file not found: {path}")

    if path.suffix.lower() == ".csv":
        data: dict[str, Any] = {}
        with path.open("r", newline="", encoding="utf-8") as handle:
            for row in csv.reader(handle):
                if not row or not row[0].strip():
                    continue
                key = row[0].strip()
                if key.lower() == "key":
                    continue
                data[key] = _csv_value(row[1]) if len(row) > 1 else ""
        return data

    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise SystemExit(f"Settings file must be a JSON object: {path}")
    return data


def save_settings(
    path: Path,
    settings: dict[str, Any],
    *,
    command: str | None = None,
) -> None:
    """
    Write ``settings``. For JSON with a ``command``, the values are stored
    under that command's section and other sections already in the file are
    kept.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() == ".csv":
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(["key", "value"])
            for key in sorted(settings):
                writer.writerow([key, json.dumps(settings[key])])
        return

    data: dict[str, Any] = {}
    if command:
        if path.exists():
            data = load_settings(path)
            if data and not any(isinstance(v, dict) for v in data.values()):
                data = {"default": data}
        data[command] = settings
    else:
        data = settings

    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, sort_keys=True)
        handle.write("\n")
    logger.info("saved settings to %s", path)


def select_settings(data: dict[str, Any], command: str | None) -> dict[str, Any]:
    """Section for ``command``, else ``default``, else the flat object."""
    if command and isinstance(data.get(command), dict):
        return dict(data[command])
    if isinstance(data.get("default"), dict):
        return dict(data["default"])
    if not any(isinstance(v, dict) for v in data.values()):
        return dict(data)
    return {}


def _options(parser: argparse.ArgumentParser) -> list[argparse.Action]:
    return [a for a in parser._actions if a.option_strings and a.dest != "help"]


def apply_settings_to_parser(
    parser: argparse.ArgumentParser,
    settings: dict[str, Any],
) -> None:
    """Use ``settings`` as option defaults; satisfied options stop being required."""
    for action in _options(parser):
        if action.dest in settings:
            action.default = settings[action.dest]
            action.required = False


def serialize_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    *,
    exclude: set[str] | None = None,
) -> dict[str, Any]:
    skip = SETTINGS_DESTS | (exclude or set())
    out: dict[str, Any] = {}
    for action in _options(parser):
        if action.dest in skip or action.dest == "version":
            continue
        value = getattr(args, action.dest, None)
        out[action.dest] = str(value) if isinstance(value, Path) else value
    return out


def find_subparser(
    parser: argparse.ArgumentParser,
    command: str | None,
) -> argparse.ArgumentParser | None:
    if not command:
        return None
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices.get(command)
    return None


def subcommand_names(parser: argparse.ArgumentParser) -> list[str]:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return list(action.choices)
    return []
