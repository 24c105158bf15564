import os

import psutil


def physical_core_count() -> int:
    """
    Number of physical processing units, used as the default thread count.

    Falls back to the logical count when the platform cannot report
    physical cores, and to 1 when neither is known.
    """
    count = psutil.cpu_count(logical=False)
    if not count:
        count = os.cpu_count()
    return count or 1
