"""Command that downloads the configured lists and builds sing-box rule sets."""

from __future__ import annotations

import argparse
import logging
import subprocess
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .config import Workspace, read_config
from .convert import ConversionError, convert_from_adguard, convert_from_ip_list
from .download import DownloadError, download_file

logger = logging.getLogger(__name__)

ADGUARD_DIR = "Adguard_Blocklists"
IP_LISTS_DIR = "IP_Lists"


def _fetch(name: str, url: str, directory: Path) -> None:
    logger.info("Downloading file: %s", name)
    try:
        download_file(url, directory / f"{name}.txt")
    except (DownloadError, OSError) as exc:
        logger.error("Error downloading file: %s", exc)


def _convert(name: str, directory: Path, converter: Callable, suffix: str) -> None:
    try:
        converter(directory / f"{name}.txt", directory / f"{name}{suffix}")
    except ConversionError as exc:
        logger.error("Error converting file: %s", exc)
        return
    logger.info("File converted successfully: %s", name)


def _convert_all(names: Iterable[str], directory: Path, converter: Callable, suffix: str) -> None:
    with ThreadPoolExecutor() as pool:
        for name in names:
            pool.submit(_convert, name, directory, converter, suffix)


def _sing_box_available() -> bool:
    try:
        subprocess.run(["sing-box", "version"], capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError):
        return False
    return True


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="singruleset",
        description="Download block lists and IP lists and compile them into sing-box rule sets.",
    )
    parser.add_argument(
        "--workdir",
        help="directory holding config.json and receiving output/ (default: current directory)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the download and conversion pipeline; return the exit status."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    workspace = Workspace()
    if args.workdir is not None:
        try:
            workspace.use_work_path(args.workdir)
        except FileNotFoundError as exc:
            logger.critical("%s", exc)
            return 1
    work_path = workspace.work_path
    logger.info("Current working directory: %s", work_path)

    config_path = workspace.config_path
    if not config_path.exists():
        logger.critical("config file does not exist")
        return 1
    logger.info("Config file path: %s", config_path)

    try:
        config = read_config(config_path)
    except (OSError, ValueError) as exc:
        logger.critical("Error reading config file: %s", exc)
        return 1
    print("Config file read successfully.")
    config.log_summary()

    adguard_lists, ip_lists = config.mappings()
    adguard_dir = work_path / "output" / ADGUARD_DIR
    ip_dir = work_path / "output" / IP_LISTS_DIR
    try:
        adguard_dir.mkdir(parents=True, exist_ok=True)
        ip_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.critical("%s", exc)
        return 1

    logger.info("Start downloading files...")
    logger.info("Total files to download: %d", len(adguard_lists) + len(ip_lists))
    with ThreadPoolExecutor() as pool:
        logger.info("Start downloading Adguard Blocklists...")
        for name, url in adguard_lists.items():
            pool.submit(_fetch, name, url, adguard_dir)
        logger.info("Start downloading IP Lists...")
        for name, url in ip_lists.items():
            pool.submit(_fetch, name, url, ip_dir)
    logger.info("All downloads completed successfully.")

    if not _sing_box_available():
        logger.critical("sing-box binary not found. Please install it first.")
        return 1

    logger.info("Start converting files (Adguard Blocklists)...")
    _convert_all(adguard_lists, adguard_dir, convert_from_adguard, ".srs")
    logger.info("Start converting files (IP Lists)...")
    _convert_all(ip_lists, ip_dir, convert_from_ip_list, ".json")
    logger.info("All files converted successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())