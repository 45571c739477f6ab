#!/usr/bin/env python3
"""Quick timing for outline generation and hover queries on synthetic series."""
from __future__ import annotations

import argparse
import json
import time

import numpy as np

from core.geometry import chart_width, generate_path
from core.hover import query_nearest
from core.samples import Sample
from core.tooltip import layout_tooltip

FIVE_MINUTES_MS = 5 * 60 * 1000


def synthetic_samples(count: int, capacity: int, *, seed: int = 0) -> tuple[Sample, ...]:
    rng = np.random.default_rng(seed)
    t = np.arange(count, dtype=np.float64)
    wave = 0.5 + 0.4 * np.sin(2.0 * np.pi * t / max(count, 1))
    noise = rng.normal(0.0, 0.05, size=count)
    counts = np.clip(np.rint((wave + noise) * capacity), 0, capacity).astype(np.int64)
    start = 1_700_000_000_000
    return tuple(Sample(int(c), start + i * FIVE_MINUTES_MS) for i, c in enumerate(counts))


def run_profile(sizes: list[int], capacity: int, moves: int) -> list[tuple[int, float, float]]:
    results = []
    for n in sizes:
        samples = synthetic_samples(n, capacity)
        t0 = time.perf_counter()
        for _ in range(20):
            generate_path(samples, capacity)
        path_ms = (time.perf_counter() - t0) / 20 * 1000.0

        width = chart_width(n, capacity)
        xs = np.linspace(-10.0, width + 10.0, moves)
        t0 = time.perf_counter()
        for x in xs:
            result = query_nearest(float(x), samples, capacity)
            if result is not None:
                layout_tooltip(result.pointer_x, "Demo Server", 640.0)
        hover_us = (time.perf_counter() - t0) / moves * 1e6
        results.append((n, path_ms, hover_us))
    return results


def write_snapshot(path: str, count: int, capacity: int) -> None:
    samples = synthetic_samples(count, capacity)
    counts = [s.count for s in samples]
    payload = {
        "name": "Demo Server",
        "address": "play.example.net:25565",
        "image": None,
        "current_players": counts[-1] if counts else 0,
        "capacity": capacity,
        "peak_24h": max(counts) if counts else 0,
        "all_time_peak": capacity,
        "samples": [{"count": s.count, "timestamp": s.timestamp_ms} for s in samples],
    }
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)


def main():
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--sizes", type=int, nargs="+", default=[12, 288, 2016])
    p.add_argument("--capacity", type=int, default=64)
    p.add_argument("--moves", type=int, default=5000)
    p.add_argument("--write-snapshot", metavar="PATH")
    args = p.parse_args()

    if args.write_snapshot:
        write_snapshot(args.write_snapshot, args.sizes[0], args.capacity)
        print(f"wrote {args.write_snapshot}")
        return

    for n, path_ms, hover_us in run_profile(args.sizes, args.capacity, args.moves):
        print(f"n={n:6d}  outline {path_ms:8.3f} ms  hover+layout {hover_us:8.2f} us/move")


if __name__ == "__main__":
    main()
