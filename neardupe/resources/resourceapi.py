"""Resource lifecycle API.

The linguistic resources are process-wide state. Every public entry point
holds one re-entrant lock for the whole call, so hashing and language
detection requests are serialized against each other and against
initialize()/shutdown().

    >>> initialize()
    True
    >>> with locked_resources() as res:
    ...     res.language("en").code
    'en'
    >>> shutdown()
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from neardupe.errors import ResourcesReleasedError
from neardupe.resources.resourcestore import LinguisticResources, load_resources


logger = logging.getLogger(__name__)

_LOCK = threading.RLock()

# Directory passed to the last initialize(); None means the bundled data.
_data_dir: Optional[Path] = None
_released = False


def initialize(data_dir: Optional[Union[str, Path]] = None) -> bool:
    """Load the linguistic resources eagerly.

    Calling this is optional: the first hashing call loads the bundled
    resources lazily. It is required after shutdown().

    Args:
        data_dir: Optional directory with replacement resource YAML files

    Returns:
        True once the resources are loaded

    Raises:
        ResourceLoadError: A resource file is missing or corrupt
    """
    global _data_dir, _released
    with _LOCK:
        new_dir = Path(data_dir) if data_dir is not None else None
        if new_dir != _data_dir:
            load_resources.cache_clear()
        load_resources(new_dir)
        _data_dir = new_dir
        _released = False
        logger.info("Linguistic resources initialized (data_dir=%s)", new_dir or "bundled")
        return True


def shutdown() -> None:
    """Release the linguistic resources.

    Later calls raise ResourcesReleasedError until initialize() is called again.
    """
    global _released
    with _LOCK:
        load_resources.cache_clear()
        _released = True
        logger.info("Linguistic resources released")


def is_initialized() -> bool:
    with _LOCK:
        return not _released and load_resources.cache_info().currsize > 0


def get_resources() -> LinguisticResources:
    """Return the loaded bundle, loading it on first use.

    Raises:
        ResourcesReleasedError: shutdown() was called and initialize() was not
        ResourceLoadError: Lazy loading failed
    """
    with _LOCK:
        if _released:
            raise ResourcesReleasedError(
                "Linguistic resources were released by shutdown(); call initialize() first"
            )
        return load_resources(_data_dir)


@contextmanager
def locked_resources() -> Iterator[LinguisticResources]:
    """Hold the process-wide lock and yield the resources for one call."""
    with _LOCK:
        yield get_resources()


__all__ = [
    "initialize",
    "shutdown",
    "is_initialized",
    "get_resources",
    "locked_resources",
]
