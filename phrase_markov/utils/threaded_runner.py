# threaded_runner.py - run callables in a thread pool and collect their results.

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List


def run_parallel(tasks: Iterable[Callable], max_workers: int = 4) -> List:
    """
    Run zero-argument callables in a thread pool, results in order of completion.
    The exception of the first failing task, in completion order, is re-raised;
    the pool still waits for the remaining tasks before returning.
    """
    out = []
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        futs = [ex.submit(t) for t in tasks]
        for f in as_completed(futs):
            out.append(f.result())
    return out
