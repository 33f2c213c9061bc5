"""Formal pipeline invariants.

This file documents what each stage MUST produce. Use it as a reviewer
anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "ingestion": [
        "Adjusted table has the 7 input columns plus G0h_Wm2, G0h_mean_Wm2, correction_C, temp_adj_C",
        "G0h_Wm2 and G0h_mean_Wm2 are >= 0",
        "|correction_C| <= max_abs_correction_c",
        "temp_adj_C == temp_raw_C - correction_C",
        "total_lines == bad_lines + rejected_records + produced_records",
    ],

    "normalization": [
        "Pass 1 (day-of-year min/max/count) completes before pass 2 starts",
        "normalized in [0, 1] for every kept row",
        "Degenerate day-of-year range (max == min) maps to 0.5",
        "Rows with day_of_year outside configured bounds are dropped",
    ],

    "aggregation": [
        "One MonthlyMean row per observed (year, month), count > 0",
        "Timeline sorted by fractional_year = year + (month - 1) / 12",
        "No synthetic rows for missing months",
    ],

    "periodicity": [
        "Grid length == 12 * (year_max - year_min + 1); gaps hold 0.0 before detrending",
        "Detrending subtracts the full-grid mean",
        "One-sided spectrum has N / 2 bins, f_i = 12 i / N cycles/year",
        "Periodogram has n_period_bins buckets over [period_min, period_max]",
    ],
}

# Which stages are optional vs required
STAGE_REQUIREMENTS = {
    "ingestion": "REQUIRED",
    "normalization": "REQUIRED",
    "aggregation": "REQUIRED",
    "periodicity": "REQUIRED",
    "persistence": "OPTIONAL",   # Only when output directories are given
}
