"""Integration tests for the policy comparison example."""

import sys
from pathlib import Path

import pytest

# Add examples to path for imports
examples_path = Path(__file__).parent.parent.parent / "examples"
sys.path.insert(0, str(examples_path))


class TestPolicyComparisonExample:
    def test_every_policy_finishes_the_batch(self):
        from policy_comparison import run_comparison

        comparison = run_comparison(num_jobs=10, seed=3)
        assert set(comparison.results) == {"fcfs", "sjf", "prio", "rr"}
        for result in comparison.results.values():
            assert result.stats.finished == 10

    def test_sjf_has_lowest_mean_completion(self):
        from policy_comparison import run_comparison

        comparison = run_comparison(num_jobs=12, seed=42)
        means = {name: r.mean_completion for name, r in comparison.results.items()}
        assert means["sjf"] == min(means.values())

    def test_round_robin_responds_first(self):
        from policy_comparison import run_comparison

        comparison = run_comparison(num_jobs=12, seed=42)
        rr = comparison.results["rr"]
        assert rr.mean_response <= comparison.results["fcfs"].mean_response
        assert rr.stats.preemptions > 0

    def test_summary_and_timelines(self, capsys, test_output_dir):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        from policy_comparison import print_summary, run_comparison, save_timelines

        comparison = run_comparison(num_jobs=6, seed=1)
        print_summary(comparison)
        save_timelines(comparison, test_output_dir)

        out = capsys.readouterr().out
        assert "Mean completion" in out
        assert (test_output_dir / "rr_timeline.png").exists()
