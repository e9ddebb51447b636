#!/usr/bin/env python3
"""
Run every aggregation demo against a live Elasticsearch cluster.

Usage:
    python debug/run_aggregation_demos.py [bucket|metric|all] [--index NAME]

Demo results are logged; this script reports which demos succeeded.
"""
import argparse
import os
import sys
from dataclasses import asdict, is_dataclass

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from config import configure_logging, get_demo_index  # noqa: E402
from tools.bucket import BUCKET_AGGREGATIONS  # noqa: E402
from tools.metric import METRIC_AGGREGATIONS  # noqa: E402
from tools.primitives import check_index_exists, count_documents  # noqa: E402
from utils.connection import test_connection  # noqa: E402
from debug.utils.test_helpers import (  # noqa: E402
    print_header, print_test, print_success, print_error, print_info, print_json,
    safe_call, exit_with_summary
)


class AggregationDemoRunner:
    def __init__(self, index: str, verbose: bool = False):
        self.index = index
        self.verbose = verbose
        self.passed = 0
        self.failed = 0

    def check_cluster(self) -> bool:
        """Check connectivity and that the demo index exists."""
        print_test("Elasticsearch Connectivity")

        if not test_connection():
            print_error("Elasticsearch connection failed")
            self.failed += 1
            return False
        print_success("Elasticsearch connection successful")

        success, exists = safe_call(check_index_exists, self.index)
        if not success or not exists:
            print_error(f"Demo index {self.index} not found")
            self.failed += 1
            return False

        success, count = safe_call(count_documents, self.index)
        if success:
            print_info(f"{self.index} holds {count} documents")
        self.passed += 1
        return True

    def run_demo(self, kind: str, name: str, demo) -> bool:
        print_test(f"{kind.title()} aggregation: {name}")

        success, result = safe_call(demo, index=self.index)
        if not success:
            print_error(f"{name} failed: {result}")
            self.failed += 1
            return False

        print_success(f"{name} completed")
        if self.verbose:
            if isinstance(result, list):
                print_json([asdict(item) for item in result], title="Results")
            elif is_dataclass(result):
                print_json(asdict(result), title="Result")
        self.passed += 1
        return True

    def run(self, which: str) -> None:
        print_header(f"AGGREGATION DEMOS ({which}) on {self.index}")

        if not self.check_cluster():
            exit_with_summary(self.passed, self.failed)

        if which in ("bucket", "all"):
            for name, demo in BUCKET_AGGREGATIONS.items():
                self.run_demo("bucket", name, demo)
        if which in ("metric", "all"):
            for name, demo in METRIC_AGGREGATIONS.items():
                self.run_demo("metric", name, demo)

        exit_with_summary(self.passed, self.failed)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("which", nargs="?", default="all", choices=["bucket", "metric", "all"])
    parser.add_argument("--index", default=None, help="Index to aggregate (default: ELASTIC_DEMO_INDEX)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every typed result")
    args = parser.parse_args()

    configure_logging()
    runner = AggregationDemoRunner(index=args.index or get_demo_index(), verbose=args.verbose)
    runner.run(args.which)


if __name__ == "__main__":
    main()
