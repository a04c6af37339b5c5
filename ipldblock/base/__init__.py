"""Module __init__: foundational pieces shared by the block and codec layers."""
#
# WHAT'S IN THIS MODULE:
# - config.py: defaults for new blocks, codec policies, logging setup
#
