"""
Benchmark suite for jsontree parsing and serialization.

Compares jsontree against:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures speed with pytest-benchmark and peak allocation with tracemalloc.
"""
