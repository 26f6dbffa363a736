"""
Benchmark suite for lzon decoding performance.

Compares lzon against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)
"""
