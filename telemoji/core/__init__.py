"""
Core application engine for orchestrating pack exports.

The `PackExporter` drives each pack through its stages, delegating every single
asset to the `AssetDownloader`. References come from `resolve_pack_references`.
"""
