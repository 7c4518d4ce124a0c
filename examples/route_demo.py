#!/usr/bin/env python3
"""
Route finding on the example graph with every search mode.

This example demonstrates:
- Existence and shortest-route queries from sync and async code
- Identical answers from sequential, threaded, suspending and fan-out search
- Fan-out search over a simulated slow graph store
"""

import asyncio
import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlegraph import example_graph
from dazzlegraph.sync import SearchConfig, SearchMode, path_exists, shortest_route
from dazzlegraph.aio import parallel_search, path_exists_async, shortest_route_async

QUERIES = [('A', 'K'), ('A', 'H'), ('B', 'A')]


def sync_demo(graph) -> None:
    print("\nSync search")
    print("-" * 40)
    for config in (SearchConfig.sequential(), SearchConfig.threaded(max_workers=4)):
        for start, goal in QUERIES:
            print(f"  [{config.mode.value:>10}] {start} -> {goal}: "
                  f"exists={path_exists(graph, start, goal, config)}, "
                  f"route={shortest_route(graph, start, goal, config)}")


async def async_demo(graph) -> None:
    print("\nAsync search")
    print("-" * 40)
    for config in (SearchConfig.suspending(), SearchConfig.fan_out()):
        for start, goal in QUERIES:
            exists = await path_exists_async(graph, start, goal, config)
            route = await shortest_route_async(graph, start, goal, config)
            print(f"  [{config.mode.value:>10}] {start} -> {goal}: exists={exists}, route={route}")


async def latency_demo(graph) -> None:
    print("\nSimulated 20ms lookups")
    print("-" * 40)
    for config in (SearchConfig(mode=SearchMode.SUSPENDING, latency=0.02),
                   SearchConfig(latency=0.02)):
        start_time = time.perf_counter()
        route = await shortest_route_async(graph, 'A', 'K', config)
        elapsed = time.perf_counter() - start_time
        print(f"  [{config.mode.value:>10}] A -> K: {route} in {elapsed:.3f}s")

    results = await parallel_search(graph, QUERIES, 'shortest_route', SearchConfig(latency=0.02))
    for (start, goal), outcome in results.items():
        print(f"  [  parallel] {start} -> {goal}: {outcome}")


def main():
    graph = example_graph()
    print("=" * 60)
    print(f"Example graph: {graph}")
    print("=" * 60)

    sync_demo(graph)
    asyncio.run(async_demo(graph))
    asyncio.run(latency_demo(graph))


if __name__ == "__main__":
    main()
