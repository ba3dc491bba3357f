"""
Payload installer — fills a staging area with everything the app needs.

    Contents/Info.plist               rendered manifest
    Contents/MacOS/<Name>             shim executable
    Contents/Resources/AppIcon.icns   custom or default icon
    Contents/Resources/config.json    serialized Config

Icon handling (requires Pillow):
    .icns / .png  → copied byte for byte
    anything else → decoded and re-encoded as ICNS
    no icon       → default terminal-prompt icon drawn at 1024×1024
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from termdrop.core.config.bundle_config import write_config
from termdrop.core.errors import BundleIOError
from termdrop.core.models.config import Config
from termdrop.core.models.doc_types import DocumentTypeSpec
from termdrop.core.services.manifest import ICON_FILE_NAME, render_manifest
from termdrop.core.services.packaging import BundlePackager
from termdrop.core.services.staging import BundleStagingArea

logger = logging.getLogger(__name__)

_COPY_AS_IS = {".icns", ".png"}
_ICON_SIZE = 1024


def write_manifest(
    contents: Path,
    app_name: str,
    doc_types: DocumentTypeSpec,
    bundle_identifier: str,
) -> Path:
    """Render and write ``Contents/Info.plist``."""
    rendered = render_manifest(app_name, doc_types, bundle_identifier)
    path = contents / "Info.plist"
    try:
        path.write_text(rendered, encoding="utf-8")
    except OSError as e:
        raise BundleIOError(
            f"Error writing Info.plist to temporary directory '{path}': {e}", path,
        ) from e
    return path


def write_icon(resources: Path, icon_path: Path | None = None) -> Path:
    """Place the app icon at ``Resources/AppIcon.icns``."""
    dest = resources / ICON_FILE_NAME

    if icon_path is None:
        try:
            _default_icon().save(dest, format="ICNS")
        except OSError as e:
            raise BundleIOError(f"Error writing default icon to temporary '{dest}': {e}", dest) from e
        return dest

    if icon_path.suffix.lower() in _COPY_AS_IS:
        try:
            shutil.copyfile(icon_path, dest)
        except OSError as e:
            raise BundleIOError(
                f"Error copying custom icon from '{icon_path}' to temporary '{dest}': {e}",
                icon_path,
            ) from e
        return dest

    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(icon_path) as img:
            img.load()
            converted = img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as e:
        raise BundleIOError(f"Error loading icon from '{icon_path}': {e}", icon_path) from e

    try:
        converted.save(dest, format="ICNS")
    except OSError as e:
        raise BundleIOError(f"Error writing icon to temporary '{dest}': {e}", dest) from e

    logger.debug("Re-encoded icon %s (%dx%d) as ICNS", icon_path, *converted.size)
    return dest


def _default_icon():
    """A dark rounded square with a ``>_`` prompt."""
    from PIL import Image, ImageDraw

    s = _ICON_SIZE
    img = Image.new("RGBA", (s, s), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle((64, 64, s - 64, s - 64), radius=180, fill=(40, 44, 52, 255))

    green = (120, 220, 120, 255)
    draw.line([(280, 380), (460, 512), (280, 644)], fill=green, width=64, joint="curve")
    draw.rectangle((520, 620, 760, 680), fill=green)
    return img


class PayloadInstaller:
    """Writes manifest, shim, icon and config into a staging area."""

    def __init__(self, packager: BundlePackager):
        self._packager = packager

    def install(
        self,
        staging: BundleStagingArea,
        *,
        app_name: str,
        config: Config,
        doc_types: DocumentTypeSpec,
        bundle_identifier: str,
        shim_binary: Path,
        icon_path: Path | None = None,
    ) -> None:
        write_manifest(staging.contents, app_name, doc_types, bundle_identifier)
        self._packager.install_shim(shim_binary, staging.mac_os, app_name)
        write_config(config, staging.resources)
        write_icon(staging.resources, icon_path)
        logger.info("Staged '%s' (%s) in %s", app_name, bundle_identifier, staging.app_root)
