#!/usr/bin/env python3
"""
Benchmark suite for debug-json transcoding.

Measures fragment throughput of the value path and the text path on
datasets of increasing size, and compares the output size with json.dumps.
"""

import json
import statistics
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from debug_json import JSONDebugTranscoder, PrettyDebugRenderer


@dataclass
class Item:
    item_id: int
    label: str
    score: float
    enabled: bool
    tags: List[str]


@dataclass
class Section:
    name: str
    items: List[Item]


@dataclass
class Dataset:
    version: str
    sections: List[Section]


class BenchmarkSuite:
    """Benchmark suite for JSONDebugTranscoder."""

    def __init__(self, rounds: int = 5):
        """Initialize the benchmark suite."""
        self.rounds = rounds
        self.results: Dict[str, Any] = {}

    def create_test_dataset(self, size_category: str) -> Dataset:
        """Create test datasets of different sizes."""
        if size_category == "small":
            section_count, item_count = 5, 10
        elif size_category == "medium":
            section_count, item_count = 20, 100
        elif size_category == "large":
            section_count, item_count = 50, 400
        else:
            raise ValueError(f"Unknown size category: {size_category}")

        return Dataset(
            version="1.0.0",
            sections=[
                Section(
                    name=f"section_{i}",
                    items=[
                        Item(
                            item_id=j,
                            label=f"Item {j} of section {i}",
                            score=j / 7,
                            enabled=j % 2 == 0,
                            tags=[f"tag_{k}" for k in range(j % 4)],
                        )
                        for j in range(item_count)
                    ],
                )
                for i in range(section_count)
            ],
        )

    def benchmark_value_path(self, size_category: str) -> Dict[str, Any]:
        """Benchmark serialize() on a dataset."""
        print(f"🔬 Value path ({size_category})...")
        dataset = self.create_test_dataset(size_category)
        transcoder = JSONDebugTranscoder(enable_profiling=True)

        output = ""
        for _ in range(self.rounds):
            output = transcoder.serialize(dataset)

        history = transcoder.profiler.metrics_history
        reference = json.dumps(asdict(dataset), separators=(",", ":"))
        return {
            "median_duration_ms": statistics.median(m.duration for m in history) * 1000,
            "median_throughput_fps": statistics.median(m.throughput_fps for m in history),
            "fragments": history[-1].fragment_count,
            "output_size": len(output),
            "json_dumps_size": len(reference),
            "matches_json_dumps": json.loads(output) == json.loads(reference),
        }

    def benchmark_text_path(self, size_category: str) -> Dict[str, Any]:
        """Benchmark serialize_text() on the rendered dump of a dataset."""
        print(f"🔬 Text path ({size_category})...")
        dump = PrettyDebugRenderer().render_to_string(self.create_test_dataset(size_category))
        transcoder = JSONDebugTranscoder(enable_profiling=True)

        for _ in range(self.rounds):
            transcoder.serialize_text(dump)

        history = transcoder.profiler.metrics_history
        return {
            "input_size": len(dump),
            "median_duration_ms": statistics.median(m.duration for m in history) * 1000,
            "median_throughput_fps": statistics.median(m.throughput_fps for m in history),
            "memory_peak_mb": max(m.memory_peak_mb for m in history),
        }

    def run(self) -> Dict[str, Any]:
        """Run every benchmark and print a report."""
        for size_category in ("small", "medium", "large"):
            self.results[size_category] = {
                "value": self.benchmark_value_path(size_category),
                "text": self.benchmark_text_path(size_category),
            }

        print("\n📊 Results")
        print("=" * 60)
        for size_category, result in self.results.items():
            value, text = result["value"], result["text"]
            print(f"{size_category}:")
            print(f"   fragments: {value['fragments']}, output: {value['output_size']} bytes "
                  f"(json.dumps: {value['json_dumps_size']}, equal: {value['matches_json_dumps']})")
            print(f"   value path: {value['median_duration_ms']:.1f}ms, "
                  f"{value['median_throughput_fps']:.0f} fragments/s")
            print(f"   text path:  {text['median_duration_ms']:.1f}ms, "
                  f"{text['median_throughput_fps']:.0f} fragments/s, "
                  f"peak {text['memory_peak_mb']:.1f} MB")
        return self.results


if __name__ == "__main__":
    BenchmarkSuite().run()
