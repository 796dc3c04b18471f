"""Batch orchestration.

Manages the end-to-end run over a photo directory:
1. Read GPS + existing identifiers per file
2. Resolve against the location database → decide tags → write
3. Fold per-file outcomes into the run summary
"""
