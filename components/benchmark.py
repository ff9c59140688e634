"""
Latency benchmark for `ForwardTable`.

For every table size in `BenchConfig.sizes` a fresh table is filled with
generated rules and each public operation is timed call by call:

- `add`     - one call per rule
- `get`     - random numbers, most of which do not hit any rule
- `reverse` - numbers built from rule targets, so the reverse trie is walked
- `remove`  - one call per rule prefix, until the table is empty

Results come back as a pandas DataFrame with one row per (size, operation).
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from components.logging_utils import configure_logger
from components.workload import WorkLoad
from forwarding.forward_table import ForwardTable

logger = logging.getLogger(__name__)

COLUMNS = ["size", "operation", "count", "total_s", "mean_us", "p95_us",
           "forward_nodes", "reverse_nodes"]


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        sizes: number of rules per run
        queries: number of get/reverse calls per run
        seed: seed for the workload
        special_share: per-symbol chance of '*' or '#'
        shared_target_share: chance a rule reuses an earlier target
    """
    sizes: Tuple[int, ...] = (1_000, 5_000, 20_000)
    queries: int = 2_000
    seed: Optional[int] = 42
    special_share: float = 0.0
    shared_target_share: float = 0.2

    def __post_init__(self):
        self.sizes = tuple(self.sizes)
        if not self.sizes or any(s <= 0 for s in self.sizes):
            raise ValueError("sizes must be a non-empty sequence of positive ints")
        if self.queries <= 0:
            raise ValueError("queries must be positive")


def _time_calls(fn, args_list):
    samples = np.empty(len(args_list), dtype=np.float64)
    for i, args in enumerate(args_list):
        t0 = time.perf_counter()
        fn(*args)
        samples[i] = time.perf_counter() - t0
    return samples


def _row(size, operation, samples, forward_nodes, reverse_nodes):
    return {
        "size": size,
        "operation": operation,
        "count": int(samples.size),
        "total_s": float(samples.sum()),
        "mean_us": float(samples.mean() * 1e6) if samples.size else 0.0,
        "p95_us": float(np.percentile(samples, 95) * 1e6) if samples.size else 0.0,
        "forward_nodes": forward_nodes,
        "reverse_nodes": reverse_nodes,
    }


def run_benchmark(config=None):
    """Run the benchmark and return a DataFrame with `COLUMNS`."""
    config = config or BenchConfig()
    workload = WorkLoad(config.seed)
    rng = random.Random(config.seed)
    rows = []

    for size in config.sizes:
        rules = workload.rules(size, special_share=config.special_share,
                               shared_target_share=config.shared_target_share)
        queries = workload.numbers(config.queries, special_share=config.special_share)
        reverse_queries = [rng.choice(rules)[1] + q for q in queries]

        table = ForwardTable()
        add_t = _time_calls(table.add, rules)
        forward_nodes, reverse_nodes = table.count_nodes()
        get_t = _time_calls(table.get, [(q,) for q in queries])
        rev_t = _time_calls(table.reverse, [(q,) for q in reverse_queries])
        remove_t = _time_calls(table.remove, [(src,) for src, _ in rules])

        for operation, samples in (("add", add_t), ("get", get_t),
                                   ("reverse", rev_t), ("remove", remove_t)):
            rows.append(_row(size, operation, samples, forward_nodes, reverse_nodes))
        logger.info("size=%d forward_nodes=%d reverse_nodes=%d empty_after_remove=%s",
                    size, forward_nodes, reverse_nodes, table.is_empty())

    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(df):
    """Mean latency (us) pivoted to one row per size, one column per operation."""
    return df.pivot_table(index="size", columns="operation", values="mean_us")


def main():
    configure_logger()
    df = run_benchmark()
    print(df.to_string(index=False))
    print()
    print(summarize(df).to_string())


if __name__ == "__main__":
    main()
