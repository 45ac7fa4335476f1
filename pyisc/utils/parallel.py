"""
Chunking and thread pool sizing for batch deposit computation.

- :func:`chunk_bounds`:
  Splits a number of deposits into contiguous ``(start, stop)`` ranges.
- :func:`optimal_worker_count`:
  Number of threads for a chunked batch, keeping one core free.
"""

import math
import os
import warnings


def chunk_bounds(n_deposits: int, chunk_size: int) -> list:
    """
    Contiguous index ranges covering ``n_deposits`` rows.

    The last range may be shorter than ``chunk_size``.

    :param n_deposits: Number of deposits in the batch.
    :type n_deposits: int
    :param chunk_size: Maximum number of deposits per chunk.
    :type chunk_size: int

    :returns: List of ``(start, stop)`` pairs, empty for an empty batch.
    :rtype: list[tuple[int, int]]

    :raises ValueError: If ``chunk_size`` is not positive.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive.")
    return [(start, min(start + chunk_size, n_deposits)) for start in range(0, n_deposits, chunk_size)]


def optimal_worker_count(n_deposits: int, chunk_size: int, user_requested: int = None) -> int:
    """
    Number of threads for a batch of ``n_deposits`` split into chunks.

    There is never more than one thread per chunk. Without a request the
    count is also capped at CPU - 1; a request above that cap is lowered
    with a warning.

    :param n_deposits: Number of deposits in the batch.
    :type n_deposits: int
    :param chunk_size: Maximum number of deposits per chunk.
    :type chunk_size: int
    :param user_requested: Optional number of threads requested by the caller.
    :type user_requested: int or None

    :returns: Number of threads, at least 1.
    :rtype: int
    """
    n_chunks = math.ceil(n_deposits / chunk_size) if n_deposits > 0 else 0
    cpu_limit = max(1, (os.cpu_count() or 1) - 1)

    if user_requested is not None and user_requested > cpu_limit:
        warnings.warn(
            f"Requested {user_requested} workers, only {cpu_limit} available; "
            f"using {min(cpu_limit, max(1, n_chunks))}."
        )
    limit = cpu_limit if user_requested is None else min(user_requested, cpu_limit)
    return max(1, min(n_chunks, limit))
