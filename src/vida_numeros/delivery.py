"""Entrega do arquivo exportado ao usuário, conforme a plataforma."""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from vida_numeros.storage import AppConfig, JsonEntryStore

logger = logging.getLogger(__name__)

EXPORT_FILE_NAME = "dados.json"

DESKTOP_PLATFORMS: frozenset[str] = frozenset(
    {"linux", "win", "win32", "macosx", "darwin"}
)


class DeliveryUnavailableError(RuntimeError):
    """No way to hand the document to the user on this platform."""


class DocumentMissingError(LookupError):
    """The persisted document to hand over does not exist yet."""


class DocumentDelivery(ABC):
    """Capability: make an exported document available to the user."""

    def is_available(self) -> bool:
        return True

    @abstractmethod
    def deliver(self, name: str, text: str) -> str:
        """Deliver a document.

        Args:
            name: File name offered to the user.
            text: Freshly serialized document contents.

        Returns:
            Human-readable location of the delivered document.

        Raises:
            DeliveryUnavailableError: If delivery is not possible here.
            DocumentMissingError: If the persisted document does not exist.
            OSError: If writing the document fails.
        """


class DirectoryDelivery(DocumentDelivery):
    """Grava o snapshot numa pasta local (equivalente a um download)."""

    def __init__(self, out_dir: Path) -> None:
        self._out_dir = out_dir

    def deliver(self, name: str, text: str) -> str:
        self._out_dir.mkdir(parents=True, exist_ok=True)
        out_path = self._out_dir / name
        out_path.write_text(text, encoding="utf-8")
        logger.info("Exported %s", out_path)
        return str(out_path)


class StoreFileDelivery(DocumentDelivery):
    """Hands over the persisted document itself instead of a snapshot."""

    def __init__(self, store: JsonEntryStore, out_dir: Path) -> None:
        self._store = store
        self._out_dir = out_dir

    def deliver(self, name: str, text: str) -> str:
        if not self._store.exists():
            raise DocumentMissingError(str(self._store.path))
        self._out_dir.mkdir(parents=True, exist_ok=True)
        out_path = self._out_dir / name
        shutil.copyfile(self._store.path, out_path)
        logger.info("Copied %s to %s", self._store.path, out_path)
        return str(out_path)


class UnavailableDelivery(DocumentDelivery):
    def is_available(self) -> bool:
        return False

    def deliver(self, name: str, text: str) -> str:
        raise DeliveryUnavailableError(name)


def select_delivery(
    platform: str, config: AppConfig, store: JsonEntryStore
) -> DocumentDelivery:
    """Pick the delivery implementation once, at startup.

    ``config.delivery`` overrides platform detection unless it is ``auto``.
    """
    out_dir = config.resolved_export_dir()
    mode = config.delivery
    if mode == "auto":
        if platform in DESKTOP_PLATFORMS:
            mode = "directory"
        elif platform == "android":
            mode = "store-file"
        else:
            mode = "none"
    logger.debug("Delivery mode %s for platform %s", mode, platform)
    if mode == "directory":
        return DirectoryDelivery(out_dir)
    if mode == "store-file":
        return StoreFileDelivery(store, out_dir)
    return UnavailableDelivery()
