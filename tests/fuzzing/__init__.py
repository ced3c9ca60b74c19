"""Fuzz testing suite for infinits."""

from .fuzz import Fuzzer, FuzzRunner, LeakCheckConfig, random_value, run_suite

__all__ = ["Fuzzer", "FuzzRunner", "LeakCheckConfig", "random_value", "run_suite"]
