"""Helpers for CMSIS software packs: pack names and versions, PDSC/PIDX files and guarded transfers."""

__version__ = "0.1.0"