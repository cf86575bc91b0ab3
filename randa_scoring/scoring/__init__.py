"""
scoring/ — 70:30 Educator Effectiveness Scoring Engine

Modules:
    utils.py               - Decimal rounding and lenient input parsing
    rubric.py              - Standards, breakpoints, rating bands, MSL values
    form.py                - Input snapshot + mutable input record
    validation.py          - Weight-sum and completeness gates
    pp_calculator.py       - Professional Practices (0-700)
    msl_calculator.py      - Measures of Student Learning (0-300)
    final_calculator.py    - Final effectiveness rating (0-1000)
    evaluation_service.py  - One-pass validation + scoring
"""
