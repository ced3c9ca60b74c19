"""Test suite for infinits."""
