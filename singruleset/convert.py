"""Turning downloaded lists into sing-box rule sets."""

from __future__ import annotations

import ipaddress
import json
import logging
import os
import subprocess
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

RULE_SET_VERSION = 1


class ConversionError(Exception):
    """A list could not be turned into a rule set."""


def rule_set_from_ip_list(ip_list) -> dict:
    """Build a source rule set holding one ``ip_cidr`` rule."""
    rule = {"ip_cidr": list(ip_list)} if ip_list else {}
    return {"version": RULE_SET_VERSION, "rules": [rule]}


def _is_ip(text: str) -> bool:
    if "%" in text:
        return False
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def _is_cidr(text: str) -> bool:
    address, sep, prefix = text.partition("/")
    if not sep or not prefix.isdigit() or not prefix.isascii():
        return False
    if not _is_ip(address):
        return False
    try:
        ipaddress.ip_network(text, strict=False)
    except ValueError:
        return False
    return True


def valid_ip_entries(lines: Iterable[str]) -> list[str]:
    """Return the stripped, non-empty lines that are IP addresses or CIDR blocks."""
    stripped = (line.strip() for line in lines)
    return [line for line in stripped if line and (_is_ip(line) or _is_cidr(line))]


def _sing_box_command(source_file, target_file, kind: str) -> list[str]:
    if kind == "adguard-srs":
        return [
            "sing-box", "rule-set", "convert", "--type", "adguard",
            "--output", str(target_file), str(source_file),
        ]
    return ["sing-box", "rule-set", "compile", "--output", str(target_file), str(source_file)]


def convert_with_sing_box(source_file, target_file, kind: str) -> None:
    """Run sing-box to convert an AdGuard list or compile a source rule set.

    ``kind`` "adguard-srs" converts AdGuard filters; anything else compiles.
    """
    command = _sing_box_command(source_file, target_file, kind)
    try:
        result = subprocess.run(
            command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, check=False
        )
    except OSError as exc:
        logger.error("error executing sing-box command: %s", command)
        raise ConversionError(
            f"error converting file {source_file} to {target_file}: {exc}"
        ) from exc
    if result.returncode != 0:
        output = (result.stdout or b"").decode(errors="replace")
        logger.error("error executing sing-box command: %s", command)
        logger.error("output: %s", output)
        raise ConversionError(
            f"error converting file {source_file} to {target_file}: "
            f"exit status {result.returncode}"
        )


def convert_from_adguard(source_file, target_file) -> None:
    """Convert an AdGuard filter list into a binary rule set."""
    convert_with_sing_box(source_file, target_file, "adguard-srs")


def convert_from_ip_list(source_file, target_file) -> Path:
    """Write the valid addresses of an IP list as a JSON rule set and compile it.

    The compiled rule set sits next to ``target_file`` with a ``.srs``
    extension in place of ``.json``; its path is returned.
    """
    try:
        with open(source_file, encoding="utf-8", errors="replace") as handle:
            entries = valid_ip_entries(handle)
    except OSError as exc:
        raise ConversionError(f"failed to open source file {source_file}: {exc}") from exc
    if not entries:
        raise ConversionError(f"no valid IPs found in the source file {source_file}")

    document = json.dumps(rule_set_from_ip_list(entries), indent=2)
    try:
        Path(target_file).write_text(document, encoding="utf-8")
    except OSError as exc:
        raise ConversionError(f"failed to create target file {target_file}: {exc}") from exc

    target = os.fspath(target_file)
    compiled = Path(target.removesuffix(".json") + ".srs")
    try:
        convert_with_sing_box(target_file, compiled, "iplist")
    except ConversionError as exc:
        raise ConversionError(f"failed to convert file {target_file}: {exc}") from exc
    return compiled