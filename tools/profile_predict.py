# tools/profile_predict.py
# Latency check for rebuilds and queries on a synthetic buffer.
#   python tools/profile_predict.py --repeat 200 --iters 500

import argparse
import json
import random
import statistics
import time
from pathlib import Path

from word_predictor.autocompleter import WordPredictor
from word_predictor.context.cursor import cursor_context

SAMPLE_LINES = [
    "The quick brown fox jumps over the lazy dog.",
    "The fox was very quick and clever.",
    "Testing word prediction with frequency analysis.",
    "This is a test document for testing purposes.",
    "Word prediction uses statistical language models.",
    "Machine learning and natural language processing.",
    "Natural language understanding requires context.",
    "Information retrieval and search engines.",
]

QUERIES = ["the qu", "natural lang", "word pre", "te", "machine lea", "fox w", "sta"]


def summarize(times):
    if not times:
        return {"count": 0, "mean_ms": None, "median_ms": None, "p90_ms": None, "max_ms": None}
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "mean_ms": round(statistics.mean(times_sorted), 4),
        "median_ms": round(statistics.median(times_sorted), 4),
        "p90_ms": round(times_sorted[max(0, int(0.9 * len(times_sorted)) - 1)], 4),
        "max_ms": round(max(times_sorted), 4),
    }


def bench_updates(wp: WordPredictor, lines, iterations: int):
    times = []
    for marker in range(1, iterations + 1):
        t0 = time.perf_counter()
        wp.update("bench", lines, marker)
        times.append((time.perf_counter() - t0) * 1000.0)
    return times


def bench_queries(wp: WordPredictor, iterations: int):
    times = []
    for _ in range(iterations):
        q = random.choice(QUERIES)
        prefix, prev = cursor_context(q, len(q))
        t0 = time.perf_counter()
        wp.candidates("bench", prefix, prev)
        times.append((time.perf_counter() - t0) * 1000.0)
    return times


def positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected a count of at least 1, got {value}")
    return n


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--repeat", type=positive_int, default=100, help="copies of the sample text in the buffer")
    parser.add_argument("--updates", type=positive_int, default=20, help="measured rebuilds")
    parser.add_argument("--iters", type=positive_int, default=500, help="measured queries")
    parser.add_argument("--out", type=str, default="", help="write the summary as JSON here")
    args = parser.parse_args(argv)

    lines = SAMPLE_LINES * args.repeat
    wp = WordPredictor()

    print(f"Buffer: {len(lines)} lines")
    update_stats = summarize(bench_updates(wp, lines, args.updates))
    print("update (ms):", update_stats)
    query_stats = summarize(bench_queries(wp, args.iters))
    print("candidates (ms):", query_stats)
    print("model:", wp.stats("bench"))

    if args.out:
        Path(args.out).write_text(json.dumps({"update": update_stats, "candidates": query_stats}, indent=2))
        print("Saved profile summary to", args.out)


if __name__ == "__main__":
    main()
