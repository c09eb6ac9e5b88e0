"""Tests for the subkit subtitle interchange library."""
