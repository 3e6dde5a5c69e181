"""
lice – Automate source code license headers.

Supports:
  • Adding a license header to files that have none
  • Replacing an outdated header block with the current text
  • Leaving already-compliant files untouched (safe to re-run)
  • Preserving interpreter shebang lines in scripts
  • Processing large trees with a pool of worker threads
"""

__version__ = "0.1.0"
