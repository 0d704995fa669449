"""
models/ — enumerations, scoring-call input record, rollup output contract.
"""
