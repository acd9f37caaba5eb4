import argparse
import logging
import os
import time

import numpy as np

from .gauss_jordan import inv as numpy_inv
from .naive import invert_matrix as naive_inv

try:
    import torch
except ImportError:  # torch is an optional extra
    torch = None


def well_conditioned(n, seed=0):
    rng = np.random.default_rng(seed)
    A = rng.random((n, n))
    A += n * np.eye(n)  # improve conditioning
    return A


def _time(fn, A, trials):
    t0 = time.perf_counter()
    for _ in range(trials):
        out = fn(A)
    return (time.perf_counter() - t0) / trials, out


def benchmark(n=100, trials=3, seed=0, include_naive=True):
    """Mean seconds per inversion for each implementation, plus max abs error vs numpy.linalg.inv."""
    A = well_conditioned(n, seed)
    ref = np.linalg.inv(A)
    result = {"n": n}

    # Naive Python
    if include_naive:
        t, out = _time(lambda M: naive_inv(M)[0], A.tolist(), trials)
        result["naive"] = t
        result["naive_err"] = float(np.max(np.abs(np.array(out) - ref)))

    # NumPy Gauss-Jordan
    t, out = _time(numpy_inv, A, trials)
    result["numpy_gj"] = t
    result["numpy_gj_err"] = float(np.max(np.abs(out - ref)))

    # NumPy built-in
    result["numpy_inv"], _ = _time(np.linalg.inv, A, trials)

    # PyTorch Gauss-Jordan
    if torch is not None:
        from .torch_backend import GaussJordanTorch

        gj = GaussJordanTorch(device="cuda")
        A_t = torch.from_numpy(A).to(gj.device)
        gj.invert(A_t)  # warmup
        t, out = _time(lambda M: gj.invert(M).inverse, A_t, trials)
        result["torch_gj"] = t
        result["torch_gj_err"] = float(np.max(np.abs(out.cpu().numpy() - ref)))

    return result


COLUMNS = ["naive", "numpy_gj", "numpy_inv", "torch_gj"]


def format_header():
    return f"{'N':>6} | " + " | ".join(f"{c:>10}" for c in COLUMNS)


def format_row(result):
    cells = []
    for c in COLUMNS:
        cells.append(f"{result[c]:10.6f}" if c in result else f"{'-':>10}")
    return f"{result['n']:6d} | " + " | ".join(cells)


def plot_results(results, path="plots/benchmark.png"):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    sizes = [r["n"] for r in results]
    plt.figure()
    for c in COLUMNS:
        if all(c in r for r in results):
            plt.plot(sizes, [r[c] for r in results], marker="o", label=c)
    plt.xlabel("Matrix size (N x N)")
    plt.ylabel("Time per inversion (s)")
    plt.yscale("log")
    plt.title("Gauss-Jordan Inversion Benchmark")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark Gauss-Jordan matrix inversion")
    parser.add_argument("--sizes", type=int, nargs="+", default=[50, 100, 200])
    parser.add_argument("--trials", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--no-naive", action="store_true", help="skip the pure Python baseline")
    parser.add_argument("--plot", metavar="PATH", help="save a timing plot to PATH")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    print("Time per inversion (s):")
    print(format_header())
    print("-" * len(format_header()))

    results = []
    for n in args.sizes:
        r = benchmark(n, args.trials, args.seed, include_naive=not args.no_naive)
        results.append(r)
        print(format_row(r))

    print("\nMax abs error vs numpy.linalg.inv:")
    for r in results:
        errs = ", ".join(f"{k[:-4]}={v:.2e}" for k, v in r.items() if k.endswith("_err"))
        print(f"{r['n']:6d} | {errs}")

    if args.plot:
        print(f"\nBenchmark plot saved to {plot_results(results, args.plot)}")
    return results


if __name__ == "__main__":
    main()
