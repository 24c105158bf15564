import logging
import os
import stat
from typing import Dict, FrozenSet, Iterator, Tuple

logger = logging.getLogger(__name__)


def _log_walk_error(error: OSError) -> None:
    logger.warning("Cannot read %s: %s", error.filename, error.strerror or error)


def walk_files(root: str) -> Iterator[str]:
    """
    Yield paths of regular files reachable from root.

    Symlinks are followed. Directories on a different device than root are
    not entered, and a directory that is one of its own ancestors (a symlink
    loop) is skipped. Errors on individual entries are logged and the entry skipped.
    """
    try:
        root_stat = os.stat(root)
    except OSError as e:
        logger.warning("Cannot read %s: %s", root, e.strerror or e)
        return

    if not stat.S_ISDIR(root_stat.st_mode):
        if stat.S_ISREG(root_stat.st_mode):
            yield root
        else:
            logger.debug("Skipping %s: not a regular file", root)
        return

    root_dev = root_stat.st_dev
    # (st_dev, st_ino) of every directory from root down to each walked directory
    ancestry: Dict[str, FrozenSet[Tuple[int, int]]] = {
        root: frozenset([(root_stat.st_dev, root_stat.st_ino)])
    }

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_log_walk_error):
        ancestors = ancestry.pop(dirpath, frozenset())
        kept = []
        for name in dirnames:
            path = os.path.join(dirpath, name)
            try:
                st = os.stat(path)
            except OSError as e:
                logger.warning("Cannot read %s: %s", path, e.strerror or e)
                continue
            if st.st_dev != root_dev:
                logger.debug("Skipping %s: on a different file system", path)
                continue
            key = (st.st_dev, st.st_ino)
            if key in ancestors:
                logger.warning("Skipping %s: file system loop detected", path)
                continue
            ancestry[path] = ancestors | {key}
            kept.append(name)
        # Prune in place so os.walk only descends into kept directories
        dirnames[:] = kept

        for name in filenames:
            path = os.path.join(dirpath, name)
            try:
                st = os.stat(path)
            except OSError as e:
                # Typically a dangling symlink
                logger.warning("Cannot read %s: %s", path, e.strerror or e)
                continue
            if stat.S_ISREG(st.st_mode):
                yield path
            else:
                logger.debug("Skipping %s: not a regular file", path)
