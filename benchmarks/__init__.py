"""Performance benchmarks for steepest.

Microbenchmarks for the hot paths of a minimization run: gradient
evaluation (analytic vs. finite differences) and the line search.
"""
