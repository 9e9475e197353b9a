"""Import engine for TAC adventure exports.

This module contains:
- upsert: Delete-by-name and create primitives
- scene_reconciler: Replaces a page's contents with an imported scene
- batch_importer: Runs a whole batch and reports counts
- diagnostics: Read-only character attribute dump
"""
