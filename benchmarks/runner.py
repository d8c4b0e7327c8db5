"""Core benchmark runner for staged tree and subtree measurements."""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from tqdm import tqdm

from authtrees import (
    DeepSparseMerkleSubTree,
    MemoryStore,
    SparseMerkleTree,
    SparseMerkleProof,
    StandardTree,
    new_tree,
    sha256_hasher,
)

from .config import BenchmarkConfig, BenchmarkMetadata, get_git_commit_hash
from .utils import generate_key_values, generate_leaves, summarize
from .verify import verify_staged_tree, verify_subtree


@dataclass
class BenchmarkResult:
    """Timings in seconds from a single repetition, by operation."""
    timings: Dict[str, float] = field(default_factory=dict)
    verified: bool = True


class BenchmarkRunner:
    """
    Manages the benchmark lifecycle with proper phase separation.

    Phases:
    1. Setup (not timed): Data generation
    2. Warmup (not timed): Optional warmup iteration
    3. Run (timed): Actual measurement
    4. Verify (not timed): Invariant checks
    """

    def __init__(self, config: BenchmarkConfig):
        self.config = config
        self._check_logging_level()

    def _check_logging_level(self) -> None:
        """Warn if verbose logging is enabled during measurement."""
        current_level = logging.getLogger("authtrees").getEffectiveLevel()
        if current_level < logging.INFO:
            logging.warning(
                "Verbose logging (%s) is enabled. This may affect benchmark timing! "
                "Set log level to INFO or higher for accurate measurements.",
                logging.getLevelName(current_level),
            )

    # Staged tree

    def run_staged_single(self, leaves: List[int], depth: int, repetition: int) -> BenchmarkResult:
        result = BenchmarkResult()
        store = MemoryStore()
        tree = new_tree(StandardTree, store, sha256_hasher, f"bench{repetition}", depth)

        if self.config.verify_only:
            tree.append_leaves(leaves)
            tree.commit()
        else:
            t0 = time.perf_counter()
            tree.append_leaves(leaves)
            result.timings["append"] = time.perf_counter() - t0

            t0 = time.perf_counter()
            tree.get_sibling_path(len(leaves) - 1, True)
            result.timings["sibling_path_uncommitted"] = time.perf_counter() - t0

            t0 = time.perf_counter()
            tree.commit()
            result.timings["commit"] = time.perf_counter() - t0

            t0 = time.perf_counter()
            tree.get_sibling_path(len(leaves) // 2, False)
            result.timings["sibling_path_committed"] = time.perf_counter() - t0

        result.verified = verify_staged_tree(tree)
        return result

    def run_staged(self, size: int, depth: int) -> Tuple[List[BenchmarkResult], BenchmarkMetadata]:
        metadata = BenchmarkMetadata(
            commit_hash=get_git_commit_hash(),
            config=self.config,
            tree_kind="StandardTree",
            size=size,
            depth=depth,
            repetitions=self.config.repetitions,
        )
        if size > (1 << depth):
            logging.info("Skipping n=%d: exceeds capacity of depth %d", size, depth)
            return [], metadata

        datasets = [generate_leaves(size, self.config.seed + i) for i in range(self.config.repetitions)]
        if not self.config.skip_warmup and datasets:
            self.run_staged_single(datasets[0], depth, -1)

        results = [
            self.run_staged_single(leaves, depth, i)
            for i, leaves in enumerate(tqdm(datasets, desc=f"StandardTree n={size} d={depth}", leave=False))
        ]
        return results, metadata

    # Deep subtree

    def _subtree_setup(self, size: int, seed: int) -> Tuple[int, List[Tuple[int, int, SparseMerkleProof]]]:
        full = SparseMerkleTree(depth=self.config.smt_depth)
        pairs = generate_key_values(size, seed)
        for key, value in pairs:
            full.update(key, value)
        return full.get_root(), [(key, value, full.prove(key)) for key, value in pairs]

    def run_subtree_single(self, root: int, branches, repetition: int) -> BenchmarkResult:
        result = BenchmarkResult()
        subtree = DeepSparseMerkleSubTree(root, depth=self.config.smt_depth)

        t0 = time.perf_counter()
        for key, value, proof in branches:
            subtree.add_branch(proof, key, value)
        result.timings["add_branch"] = time.perf_counter() - t0

        t0 = time.perf_counter()
        for key, _, _ in branches:
            subtree.prove(key)
        result.timings["prove"] = time.perf_counter() - t0

        t0 = time.perf_counter()
        for key, value, _ in branches:
            subtree.update(key, value + 1)
        result.timings["update"] = time.perf_counter() - t0

        result.verified = verify_subtree(subtree)
        return result

    def run_subtree(self, size: int) -> Tuple[List[BenchmarkResult], BenchmarkMetadata]:
        metadata = BenchmarkMetadata(
            commit_hash=get_git_commit_hash(),
            config=self.config,
            tree_kind="DeepSparseMerkleSubTree",
            size=size,
            depth=self.config.smt_depth,
            repetitions=self.config.repetitions,
        )
        setups = [
            self._subtree_setup(size, self.config.seed + i)
            for i in tqdm(range(self.config.repetitions), desc=f"Building proofs n={size}", leave=False)
        ]
        results = [
            self.run_subtree_single(root, branches, i)
            for i, (root, branches) in enumerate(tqdm(setups, desc=f"Subtree n={size}", leave=False))
        ]
        return results, metadata

    def aggregate_and_report(self, results: List[BenchmarkResult], metadata: BenchmarkMetadata) -> bool:
        """Log timing statistics; return whether every repetition verified."""
        logging.info(str(metadata))
        all_verified = all(r.verified for r in results)
        if not all_verified:
            logging.error("Invariant checks failed for %d repetitions", sum(not r.verified for r in results))

        ops = sorted({op for r in results for op in r.timings})
        for op in ops:
            stats = summarize([r.timings[op] for r in results if op in r.timings])
            logging.info(
                "%-26s mean=%.6fs median=%.6fs p95=%.6fs std=%.6fs",
                op, stats["mean"], stats["median"], stats["p95"], stats["std"],
            )
        return all_verified
