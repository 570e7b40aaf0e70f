"""Resource Pack CLI - Modular tool for editing Minecraft resource packs.

This package provides a type-safe CLI and library for editing resource packs
held in memory, with clear architectural boundaries:

- **models/**: Domain models (Package, both item override generations, fonts)
- **persistence/**: Path-addressed store, JSON/JSON5 documents, zip containers
- **editing/**: Editors that return a new Package (custom model data,
  migration, glyphs, sounds, merging, templates)
- **analysis/**: Read-only statistics, duplicates and unused assets
- **validation/**: Structural pack checks
- **commands/**: CLI command handlers orchestrating operations
- **errors**: Typed error hierarchy with explicit failure states
"""

__version__ = "1.0.0"
