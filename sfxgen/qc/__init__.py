"""
Quality Control module for evaluating rendered assets.
"""
from sfxgen.qc.qc import analyze, verify_file
from sfxgen.qc.thresholds import QC_THRESHOLDS

__all__ = ["analyze", "verify_file", "QC_THRESHOLDS"]
