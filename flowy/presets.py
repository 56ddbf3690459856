"""
flowy Presets

Ready-made wallpaper sets distributed as gzipped tarballs. Installing a preset downloads
the tarball into the presets directory, unpacks it next to the archive and removes the
archive. The tarball must contain a single top-level folder named after the preset.
"""

import logging
import tarfile
from pathlib import Path

import requests

from flowy.config import config

logger = logging.getLogger(__name__)

PRESETS = {
    "lake": "https://bucket-more.s3.ap-south-1.amazonaws.com/uploads/lake.tar.gz",
}

# (connect, read) timeouts in seconds
REQUEST_TIMEOUT = (10, 60)
CHUNK_SIZE = 64 * 1024


class PresetError(Exception):
    """Raise when a preset cannot be downloaded or installed."""

    pass


def download_archive(url: str, dest: Path) -> Path:
    """
    Stream the file at url to dest, creating parent directories as needed. Returns dest.
    """

    dest = Path(dest).expanduser()
    dest.parent.mkdir(parents=True, exist_ok=True)

    try:
        with requests.get(url, stream=True, timeout=REQUEST_TIMEOUT) as response:
            response.raise_for_status()

            with dest.open("wb") as file:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    file.write(chunk)

    except requests.exceptions.HTTPError as error:
        raise PresetError(
            f"Download error: something went wrong trying to access {url} ({error})"
        )

    except requests.exceptions.RequestException as error:
        raise PresetError(f"Download error: could not reach {url} ({error})")

    logger.info("downloaded %s to %s", url, dest)
    return dest


def unpack_archive(src: Path, dest: Path) -> Path:
    """
    Unpack the gzipped tarball src into dest. Members that would land outside dest,
    links to absolute paths and device files are rejected by the tarfile data filter.
    """

    dest = Path(dest).expanduser()
    dest.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(src, "r:gz") as archive:
            archive.extractall(dest, filter="data")

    except (tarfile.TarError, OSError) as error:
        raise PresetError(f"Could not unpack {Path(src).name}: {error}")

    logger.info("unpacked %s into %s", src, dest)
    return dest


def install_preset(name: str, presets_dir: Path = None) -> Path:
    """
    Download and unpack the preset called name. Returns the folder holding its wallpapers.
    """

    try:
        url = PRESETS[name]
    except KeyError:
        raise PresetError(
            f"Unknown preset '{name}'. Available presets: {', '.join(sorted(PRESETS))}."
        )

    presets_dir = Path(presets_dir or config.FLOWY_PRESETS_DIR).expanduser()
    archive_path = presets_dir / f"{name}.tar.gz"

    download_archive(url, archive_path)

    try:
        unpack_archive(archive_path, presets_dir)
    finally:
        archive_path.unlink(missing_ok=True)

    preset_dir = presets_dir / name
    if not preset_dir.is_dir():
        raise PresetError(f"Preset archive for '{name}' did not contain a '{name}' folder.")

    return preset_dir
