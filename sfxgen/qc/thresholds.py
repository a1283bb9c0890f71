"""
Default QC thresholds applied to every rendered asset.
"""
QC_THRESHOLDS = {
    "peak_tolerance": 1e-6,      # mastered peak may exceed target by at most this
    "peak_min_ratio": 0.5,       # peak below target * ratio means mastering was skipped
    "duration_tolerance_samples": 0,
    "subtype": "PCM_16",
    "channels": 1,
}
