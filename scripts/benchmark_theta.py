#!/usr/bin/env python3
"""
Benchmark Barnes-Hut speed and accuracy against the opening angle.

For each theta, times force evaluation over a random system and compares
the result with exact pairwise summation.

Usage:
    uv run python scripts/benchmark_theta.py [--count N] [--thetas T,...] [--output FILE]

Examples:
    uv run python scripts/benchmark_theta.py
    uv run python scripts/benchmark_theta.py --count 500 --thetas 0,0.3,0.5,1.0
    uv run python scripts/benchmark_theta.py --output build/theta.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from pathlib import Path
from typing import Any

import numpy as np

from gravity_sim import QuadTree, direct_forces, random_system
from gravity_sim.physics.gravity import accumulate_forces
from gravity_sim.scenarios import G


def benchmark_theta(count: int, theta: float, seed: int = 42) -> dict[str, Any]:
    """
    Time one force evaluation and measure its error.

    Returns:
        Dict with timing, tree size and relative error info
    """
    particles = random_system((400.0, 300.0), count, random.Random(seed))
    exact = direct_forces(particles, G)

    start = time.perf_counter()
    tree = QuadTree.from_particles(particles)
    approx = accumulate_forces(tree, particles, G, theta)
    elapsed = time.perf_counter() - start

    scale = np.linalg.norm(exact, axis=1)
    error = np.linalg.norm(approx - exact, axis=1) / np.where(scale > 0, scale, 1.0)

    return {
        "theta": theta,
        "num_particles": len(particles),
        "num_nodes": tree.node_count,
        "time_seconds": elapsed,
        "mean_relative_error": float(error.mean()),
        "max_relative_error": float(error.max()),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.split("\n")[1])
    parser.add_argument("--count", type=int, default=300, help="Orbiting bodies")
    parser.add_argument(
        "--thetas",
        default="0,0.1,0.3,0.5,0.8,1.2",
        help="Comma-separated opening angles",
    )
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output", type=Path, help="Write results as JSON")
    args = parser.parse_args()

    thetas = [float(t) for t in args.thetas.split(",")]
    results = [benchmark_theta(args.count, theta, args.seed) for theta in thetas]

    print(f"{'theta':>6} {'nodes':>6} {'time (ms)':>10} {'mean err':>10} {'max err':>10}")
    for r in results:
        print(
            f"{r['theta']:>6.2f} {r['num_nodes']:>6} {r['time_seconds'] * 1000:>10.2f} "
            f"{r['mean_relative_error']:>10.2e} {r['max_relative_error']:>10.2e}"
        )

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"Saved: {args.output}")


if __name__ == "__main__":
    main()
