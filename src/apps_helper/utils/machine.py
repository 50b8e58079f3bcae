import logging
import os
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

HOSTNAME_ENV_VARS = ("HOSTNAME", "HOST")


def get_machine_name() -> Optional[str]:
    """
    best-effort name of the current machine.

    checks HOSTNAME, then HOST, then asks the `hostname` command.
    returns None if none of them produce a value.
    """
    for var in HOSTNAME_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value

    try:
        result = subprocess.run(["hostname"], capture_output=True, text=True)
    except OSError as e:
        logger.debug(f"hostname command unavailable: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"hostname exited with {result.returncode}")
        return None

    name = result.stdout.strip()
    return name or None
