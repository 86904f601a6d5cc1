"""Conversion stages: indexing, hierarchy merge, summary, CG remap, master CGs, cleanup.

Each stage exposes a small function API and runs in the fixed order driven by
`staf2ovs.converter.staf_to_ovs`.
"""
