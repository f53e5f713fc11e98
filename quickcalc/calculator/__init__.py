"""
Everyday Calculator Engine — Deterministic Conversions, Dates and Arithmetic.

Pure Python computations behind the QuickCalc web service. No code generation
and no dynamic evaluation: every calculator is a small, explicit function.

Modules:
    calc_types.py            — Closed str enums for units, calculator types, percentage operations
    calc_exceptions.py       — CalcError hierarchy mapped to HTTP status codes
    conversion_tables.py     — Unit conversion factors (dict-based, base-unit pivot)
    calc_operations.py       — Pure Python: convert(), convert_to_all(), weight/length/time, percentage
    age_arithmetic.py        — calculate_age(), parse_date_string()
    expression_evaluator.py  — Tokenizer + recursive-descent arithmetic evaluator
    describer.py             — Human-readable history descriptions for each calculator
"""
