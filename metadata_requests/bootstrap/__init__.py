"""Composition root: wires ports to their implementations."""
