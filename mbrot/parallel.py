# -*- coding: utf-8 -*-
"""
Provides selection of the worker and queue classes for the band dispatcher.
"""

__all__ = ['FORK_AVAILABLE', 'select']

import multiprocessing
import queue
import sys
import threading

# The kernels release the GIL, so threads are the default everywhere.
# Forked processes remain available on platforms that support fork.

FORK_AVAILABLE = sys.platform != 'win32'


def select(use_fork=False):
    """
    Return the (Queue, Thread) pair for threads or forked processes.
    """
    if use_fork:
        if not FORK_AVAILABLE:
            raise ValueError(f"fork is not available on {sys.platform}")
        ctx = multiprocessing.get_context('fork')
        return ctx.SimpleQueue, ctx.Process

    return queue.SimpleQueue, threading.Thread


if __name__ == '__main__':
    print("fork_available: {}".format(FORK_AVAILABLE))
