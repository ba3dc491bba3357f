"""
Generation session — generate a bundle, then save it.

    with GenerationSession.generate(config, doc_types, shim, app_path=out) as session:
        try:
            session.save()
        except AlreadyExistsError:
            if confirm():
                session.save(overwrite=True)

``generate`` builds the complete bundle in a staging area; nothing is
visible at the destination until ``save`` succeeds. ``save`` may be
retried after a failure, never after a success.
"""

from __future__ import annotations

import logging
import random
import socket
from pathlib import Path

from termdrop.core.errors import GenerationError
from termdrop.core.models.config import Config
from termdrop.core.models.doc_types import DocumentTypeSpec
from termdrop.core.services.installer import BundleInstaller
from termdrop.core.services.packaging import BundlePackager, get_packager
from termdrop.core.services.payload import PayloadInstaller
from termdrop.core.services.staging import BundleStagingArea

logger = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".app"


def bundle_names(app_path: Path) -> tuple[str, str, Path]:
    """Split *app_path* into ``(app_name, bundle_file_name, destination)``.

    ``Out/Cat.app`` and ``Out/Cat`` both give ``("Cat", "Cat.app", Out/Cat.app)``;
    ``Out/cat.sh`` keeps its suffix: ``("cat.sh", "cat.sh.app", Out/cat.sh.app)``.
    """
    if not app_path.name:
        raise GenerationError(f"Couldn't get file name from {app_path}")

    app_name = app_path.stem if app_path.suffix == BUNDLE_SUFFIX else app_path.name
    if not app_name:
        raise GenerationError(f"Couldn't get app name from path '{app_path}'")

    bundle_file_name = app_name + BUNDLE_SUFFIX
    return app_name, bundle_file_name, app_path.with_name(bundle_file_name)


def default_bundle_identifier(app_name: str) -> str:
    """``local.<hostname>.<app_name><n>``; unique in practice, not guaranteed."""
    return f"local.{socket.gethostname()}.{app_name}{random.randint(0, 999999)}"


class GenerationSession:
    """A staged bundle waiting to be saved to its destination."""

    def __init__(
        self,
        staging: BundleStagingArea,
        final_bundle_path: Path,
        installer: BundleInstaller | None = None,
    ):
        self._staging = staging
        self._final_bundle_path = final_bundle_path
        self._installer = installer or BundleInstaller()
        self._saved = False

    @classmethod
    def generate(
        cls,
        config: Config,
        doc_types: DocumentTypeSpec,
        shim_binary: Path,
        bundle_identifier: str | None = None,
        icon_path: Path | None = None,
        *,
        app_path: Path,
        packager: BundlePackager | None = None,
        installer: BundleInstaller | None = None,
    ) -> GenerationSession:
        """Stage a complete bundle for *app_path*.

        Raises:
            GenerationError: On any failure; the staging area is removed.
        """
        app_name, bundle_file_name, final_bundle_path = bundle_names(Path(app_path))
        packager = packager or get_packager()
        identifier = bundle_identifier or default_bundle_identifier(app_name)

        staging = BundleStagingArea(bundle_file_name)
        try:
            PayloadInstaller(packager).install(
                staging,
                app_name=app_name,
                config=config,
                doc_types=doc_types,
                bundle_identifier=identifier,
                shim_binary=Path(shim_binary),
                icon_path=Path(icon_path) if icon_path is not None else None,
            )
        except BaseException:
            staging.close()
            raise

        logger.debug("Generated %s (id=%s) for %s", bundle_file_name, identifier, final_bundle_path)
        return cls(staging, final_bundle_path, installer)

    @property
    def final_bundle_path(self) -> Path:
        return self._final_bundle_path

    @property
    def staging(self) -> BundleStagingArea:
        return self._staging

    @property
    def saved(self) -> bool:
        return self._saved

    def save(self, overwrite: bool = False) -> Path:
        """Install the staged bundle; see BundleInstaller for the saga.

        Raises:
            AlreadyExistsError: Destination exists and overwrite is False.
            BundleIOError: The move failed for any other reason.
            RuntimeError: The bundle was already saved.
        """
        if self._saved:
            raise RuntimeError("save() called again after a successful save")
        self._installer.install(self._staging.app_root, self._final_bundle_path, overwrite)
        self._saved = True
        return self._final_bundle_path

    def close(self) -> None:
        self._staging.close()

    def __enter__(self) -> GenerationSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
