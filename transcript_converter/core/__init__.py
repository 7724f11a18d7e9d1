"""Core ingest, reconstruction and intermediate representation modules.

WHY: The core package contains the stable heart of the converter:
the IR dataclasses and the two passes that build them. These are
consumed by all formatters and must remain backward-compatible.

HOW: ir.py defines the data structures, ingest.py parses and validates
the raw JSON documents, reconstruct.py folds items into speaker lines.

RULES:
- IR dataclasses are the contract: change with care
- Reconstruction is format-agnostic: no formatter-specific logic here
- The speaker index is complete before any item is reconstructed
"""
