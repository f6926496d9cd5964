#!/usr/bin/env python3
"""
Python Benchmark - Normal equations vs QR on a large random problem

Usage: python benchmark_python.py [M] [N]   (default 50 columns, 500,000 rows)
"""

import sys
import time

import numpy as np

from pyols import ols
from pyols._backends import detect_gpu_capabilities, list_available_backends
from pyols.synthetic import random_problem

m = int(sys.argv[1]) if len(sys.argv) > 1 else 50
n = int(sys.argv[2]) if len(sys.argv) > 2 else 500_000

print()
print("="*80)
print("PYTHON BENCHMARK - Random Least Squares Problem")
print("="*80)
print()

start = time.time()
X, y = random_problem(m, n, seed=42)
init_time = time.time() - start

print(f"✓ Data generated in {init_time:.2f} seconds")
print(f"  Observations: {n:,}")
print(f"  Coefficients: {m}")
print(f"  Memory: {X.nbytes / 1e9:.2f} GB")
print()

backends = ['cpu']
if 'pytorch' in list_available_backends():
    caps = detect_gpu_capabilities()
    print(f"GPU detected: {caps.gpu_name} (FP64: {caps.fp64_support.value})")
    print()
    backends.append('gpu')
else:
    print("⚠ No FP64-capable GPU detected. Skipping GPU benchmark.")
    print()

results = {}
for backend in backends:
    for strategy in ('normal', 'qr'):
        # Warm-up on a subset
        _ = ols(X[:10_000], y[:10_000], strategy=strategy, backend=backend)

        start = time.time()
        model = ols(X, y, strategy=strategy, backend=backend)
        elapsed = time.time() - start
        results[(backend, strategy)] = (elapsed, model.coef)

print("="*80)
print("PERFORMANCE")
print("="*80)
print(f"{'Backend':<10} {'Strategy':<10} {'Time (s)':>12} {'Obs/second':>20}")
print("-"*80)
for (backend, strategy), (elapsed, _) in results.items():
    print(f"{backend:<10} {strategy:<10} {elapsed:>12.4f} {n/elapsed:>20.1f}")
print()

print("="*80)
print("AGREEMENT WITH CPU QR")
print("="*80)
reference = results[('cpu', 'qr')][1]
for (backend, strategy), (_, coef) in results.items():
    max_diff = np.max(np.abs(coef - reference))
    status = "✓" if max_diff < 1e-6 else "⚠"
    print(f"{status} {backend:<10} {strategy:<10} max |diff| = {max_diff:.2e}")
print()
