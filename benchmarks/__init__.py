"""Performance benchmarks for eqqp.

Microbenchmarks comparing the KKT solve strategies.
"""
