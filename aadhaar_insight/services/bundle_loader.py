"""
Analytics bundle loading and caching.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from aadhaar_insight.config import settings
from aadhaar_insight.schemas.bundle import AnalyticsBundle

logger = logging.getLogger(__name__)


class BundleUnavailable(RuntimeError):
    """The analytics bundle on disk could not be read or validated."""


def parse_bundle(raw: Any) -> AnalyticsBundle:
    """
    Validate a decoded bundle document.

    Missing collections become empty lists and missing numeric fields
    become 0. A document that is not an object, or a collection that is
    not a list, is rejected.

    Raises:
        TypeError: if raw is not a JSON object
        pydantic.ValidationError: on structurally invalid collections
    """
    if not isinstance(raw, dict):
        raise TypeError(f"Analytics bundle must be a JSON object, got {type(raw).__name__}")
    return AnalyticsBundle.model_validate(raw)


class BundleRepository:
    """
    Holds the analytics bundle for the process.
    Loads it from disk on first use and serves the cached copy afterwards.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else None
        self._bundle: Optional[AnalyticsBundle] = None
        self._from_file = False
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path or settings.bundle_file

    @property
    def is_loaded(self) -> bool:
        return self._bundle is not None

    def load(self, force_reload: bool = False) -> AnalyticsBundle:
        """
        Get the bundle, reading it from disk if not cached.

        A missing file yields an empty bundle (every view shows its empty
        state). Unreadable or invalid files raise.

        Args:
            force_reload: If True, re-read the file even if cached
        """
        with self._lock:
            if not force_reload and self._bundle is not None:
                return self._bundle

            path = self.path
            if not path.exists():
                logger.warning(f"Analytics bundle not found: {path}, serving empty bundle")
                bundle = AnalyticsBundle()
                self._from_file = False
            else:
                with open(path, 'r', encoding='utf-8') as f:
                    raw = json.load(f)
                bundle = parse_bundle(raw)
                self._from_file = True
                logger.info(f"Loaded analytics bundle from {path}: {bundle.record_counts}")

            self._bundle = bundle
            return bundle

    def reload(self) -> AnalyticsBundle:
        return self.load(force_reload=True)

    def set_bundle(self, bundle: AnalyticsBundle):
        """Replace the cached bundle (e.g. one pushed by the batch job)."""
        with self._lock:
            self._bundle = bundle
            self._from_file = False

    def status(self) -> Dict[str, Any]:
        bundle = self._bundle
        return {
            "path": str(self.path),
            "loaded": bundle is not None and self._from_file,
            "record_counts": bundle.record_counts if bundle is not None else {},
        }

    def clear_cache(self):
        """Drop the cached bundle; the next load re-reads the file."""
        with self._lock:
            self._bundle = None
            self._from_file = False


# Global repository instance
repository = BundleRepository()


def get_bundle() -> AnalyticsBundle:
    """
    Dependency for getting the analytics bundle.
    Use with FastAPI's Depends().
    """
    try:
        return repository.load()
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Could not load analytics bundle: {e}")
        raise BundleUnavailable(str(e)) from e
