"""Game systems built on the core: stat derivation, combat, AI, logging and matchups."""
