"""
Termination of bundler process trees.

webpack is usually started through npx or a package-manager shim, so the
process we launched is rarely the one doing the work. Stopping a run means
stopping every descendant too.
"""

import logging
from typing import List

import psutil

logger = logging.getLogger(__name__)

TERMINATION_GRACEFUL_TIMEOUT = 3.0
TERMINATION_FORCE_TIMEOUT = 2.0


def _collect_tree(pid: int) -> List[psutil.Process]:
    parent = psutil.Process(pid)
    try:
        children = parent.children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        children = []
    return [parent] + children


def terminate_process_tree(
    pid: int,
    name: str,
    graceful_timeout: float = TERMINATION_GRACEFUL_TIMEOUT,
    force_timeout: float = TERMINATION_FORCE_TIMEOUT,
) -> List[int]:
    """
    Terminate a process and all its descendants.

    Sends SIGTERM to the whole tree, waits up to ``graceful_timeout`` and
    sends SIGKILL to whatever is still alive.

    Args:
        pid: Root of the process tree
        name: Description used in log messages
        graceful_timeout: Seconds to wait after SIGTERM
        force_timeout: Seconds to wait after SIGKILL

    Returns:
        PIDs that were still alive after SIGKILL
    """
    if pid <= 0:
        logger.warning(f"Invalid PID {pid} for {name}, skipping termination")
        return []

    try:
        processes = _collect_tree(pid)
    except psutil.NoSuchProcess:
        logger.info(f"Process {name} (PID: {pid}) already terminated")
        return []
    except psutil.AccessDenied:
        logger.warning(f"Access denied to process {name} (PID: {pid})")
        return [pid]

    logger.info(f"Terminating {name} (PID: {pid}) and {len(processes) - 1} children")
    for process in processes:
        try:
            process.terminate()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending SIGTERM to PID {process.pid}")

    _, alive = psutil.wait_procs(processes, timeout=graceful_timeout)
    if not alive:
        return []

    logger.warning(f"{len(alive)} processes of {name} ignored SIGTERM, killing")
    for process in alive:
        try:
            process.kill()
        except psutil.NoSuchProcess:
            continue
        except psutil.AccessDenied:
            logger.warning(f"Access denied sending SIGKILL to PID {process.pid}")

    _, alive = psutil.wait_procs(alive, timeout=force_timeout)
    if alive:
        logger.error(f"Could not terminate {[p.pid for p in alive]} of {name}")
    return [p.pid for p in alive]
