"""Administrator-managed species catalogs.

This package contains the creature (Anima) and adversary (Enemy) definition
tables. Definitions never reference player-owned state.
"""
