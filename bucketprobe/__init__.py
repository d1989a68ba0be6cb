"""Thin object-storage facade with existence-check semantics."""
